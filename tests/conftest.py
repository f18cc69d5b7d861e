import curses

import pytest


class FakeWindow:
    """Character grid standing in for a curses window"""

    def __init__(self, h, w):
        self.h = h
        self.w = w
        self.erase()

    def getmaxyx(self):
        return self.h, self.w

    def addstr(self, y, x, text, attr=0):
        for i, ch in enumerate(text):
            if x + i < self.w:
                self.cells[y][x + i] = ch

    def erase(self):
        self.cells = [[' '] * self.w for _ in range(self.h)]

    def refresh(self):
        pass

    def row(self, y):
        return ''.join(self.cells[y])

    def text(self):
        return '\n'.join(self.row(y) for y in range(self.h))


@pytest.fixture
def screen(monkeypatch):
    """Factory for fake windows; color pairs work without initscr"""
    monkeypatch.setattr(curses, 'color_pair', lambda n: 0)
    return FakeWindow
