#!/usr/bin/env python3
"""
dockview - Render Surface Module
-----------
Curses widgets for the dashboard: a selectable table, scrollable text panes
and a status line, plus the inline style markup they understand.

Markup is a small tview-like subset embedded directly in strings:
  [::b]     bold
  [red]     red text (also [green], [yellow])
  [-]       reset to the default style (also [::-])
A tag meant literally is escaped by adding "[" before its "]": [red[] is drawn
as [red], and [red[[] as [red[].
"""
import curses
import re

from dockview.utils.utils import safe_addstr

TAGS = ("red", "green", "yellow", "-", "::b", "::-")
_TAG_ALT = "|".join(re.escape(t) for t in TAGS)
TAG_RE = re.compile(r"\[(" + _TAG_ALT + r")(\[*)\]")

# Color pair numbers
PAIR_RED = 1
PAIR_GREEN = 2
PAIR_YELLOW = 3
PAIR_SELECTED = 4
PAIR_HEADER = 5
PAIR_TITLE = 6

COLOR_PAIRS = {"red": PAIR_RED, "green": PAIR_GREEN, "yellow": PAIR_YELLOW}

DEFAULT_STYLE = (None, False)


def escape(text):
    """Make every markup tag in text render literally"""
    return TAG_RE.sub(lambda m: f"[{m.group(1)}{m.group(2)}[]", text)


def parse_markup(text):
    """
    Split markup text into lines of (segment, style) pairs.

    style is a (color, bold) tuple; color is None for the default color.
    Styles carry over line breaks until reset.
    """
    lines = []
    current = []
    color, bold = DEFAULT_STYLE

    def emit(chunk):
        parts = chunk.split("\n")
        for i, part in enumerate(parts):
            if i > 0:
                lines.append(current[:])
                current.clear()
            if part:
                current.append((part, (color, bold)))

    pos = 0
    for match in TAG_RE.finditer(text):
        emit(text[pos:match.start()])
        tag, escaped = match.groups()
        if escaped:
            emit(f"[{tag}{escaped[:-1]}]")
        elif tag in ("-", "::-"):
            color, bold = DEFAULT_STYLE
        elif tag == "::b":
            bold = True
        else:
            color = tag
        pos = match.end()
    emit(text[pos:])
    lines.append(current)
    return lines


def strip_markup(text):
    """Plain text with all markup removed"""
    return "\n".join("".join(seg for seg, _ in line) for line in parse_markup(text))


def wrap_line(segments, width):
    """Hard-wrap one parsed line into display lines no wider than width"""
    if width <= 0:
        return []
    out = [[]]
    used = 0
    for seg, style in segments:
        while seg:
            room = width - used
            if room <= 0:
                out.append([])
                used = 0
                room = width
            piece, seg = seg[:room], seg[room:]
            out[-1].append((piece, style))
            used += len(piece)
    return out


def init_colors():
    """Set up the color pairs used by style_attr"""
    curses.start_color()
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        background = curses.COLOR_BLACK
    curses.init_pair(PAIR_RED, curses.COLOR_RED, background)
    curses.init_pair(PAIR_GREEN, curses.COLOR_GREEN, background)
    curses.init_pair(PAIR_YELLOW, curses.COLOR_YELLOW, background)
    curses.init_pair(PAIR_SELECTED, curses.COLOR_BLACK, curses.COLOR_CYAN)  # selected row
    curses.init_pair(PAIR_HEADER, curses.COLOR_YELLOW, background)  # table header
    curses.init_pair(PAIR_TITLE, curses.COLOR_CYAN, background)  # box titles


def style_attr(style):
    color, bold = style
    attr = curses.color_pair(COLOR_PAIRS[color]) if color else curses.A_NORMAL
    if bold:
        attr |= curses.A_BOLD
    return attr


def draw_segments(win, y, x, segments, max_width):
    """Draw styled segments on one row, clipped to max_width columns"""
    for seg, style in segments:
        if max_width <= 0:
            break
        seg = seg[:max_width]
        safe_addstr(win, y, x, seg, style_attr(style))
        x += len(seg)
        max_width -= len(seg)


def draw_box(win, y, x, h, w, title=""):
    """Draw a border with a title in the top edge"""
    if h < 2 or w < 2:
        return
    safe_addstr(win, y, x, "┌" + "─" * (w - 2) + "┐")
    for row in range(y + 1, y + h - 1):
        safe_addstr(win, row, x, "│")
        safe_addstr(win, row, x + w - 1, "│")
    safe_addstr(win, y + h - 1, x, "└" + "─" * (w - 2) + "┘")
    if title and w > 4:
        label = f" {title} "[:w - 4]
        safe_addstr(win, y, x + (w - len(label)) // 2, label, curses.color_pair(PAIR_TITLE) | curses.A_BOLD)


class Rect:
    """Screen area last occupied by a widget, for mouse hit-testing"""

    def __init__(self, y, x, h, w):
        self.y, self.x, self.h, self.w = y, x, h, w

    def contains(self, my, mx):
        return self.y <= my < self.y + self.h and self.x <= mx < self.x + self.w


class Table:
    """
    Selectable table with a fixed header row.

    Rows are numbered like the screen: row 0 is the header, data rows start
    at 1. selected is 0 when there is nothing to select.

    Cells are never shortened; columns that do not fit are reached by
    scrolling sideways a whole column at a time (col_offset is the first
    column drawn).
    """

    def __init__(self, title, headers):
        self.title = title
        self.headers = list(headers)
        self.rows = []
        self.selected = 0
        self.offset = 0
        self.col_offset = 0
        self.rect = None

    def clear(self):
        self.rows = []
        self.selected = 0
        self.offset = 0

    def add_row(self, cells):
        self.rows.append([str(c) for c in cells])

    def row_count(self):
        return len(self.rows)

    def select(self, row):
        """Select a data row; out-of-range rows are ignored"""
        if 1 <= row <= len(self.rows):
            self.selected = row
            return True
        return False

    def move(self, delta):
        if self.rows:
            self.select(min(max(self.selected + delta, 1), len(self.rows)))

    def scroll_columns(self, delta):
        self.col_offset = min(max(self.col_offset + delta, 0), len(self.headers) - 1)

    def column_widths(self, inner_width, start=0):
        """Widest cell per column from start on, extra space shared out evenly"""
        widths = [len(h) for h in self.headers[start:]]
        for row in self.rows:
            for i, cell in enumerate(row[start:start + len(widths)]):
                widths[i] = max(widths[i], len(cell))
        # One space between columns
        spare = inner_width - sum(widths) - (len(widths) - 1)
        if spare > 0:
            share, rest = divmod(spare, len(widths))
            widths = [w + share + (1 if i < rest else 0) for i, w in enumerate(widths)]
        return widths

    def row_at(self, my, mx):
        """Data row under a screen position, or 0"""
        if self.rect is None or not self.rect.contains(my, mx):
            return 0
        row = my - self.rect.y - 2 + self.offset + 1
        if 1 <= row <= len(self.rows) and self.rect.y + 1 < my < self.rect.y + self.rect.h - 1:
            return row
        return 0

    def draw(self, win, y, x, h, w):
        self.rect = Rect(y, x, h, w)
        inner_w = w - 2
        start = self.col_offset
        widths = self.column_widths(inner_w, start)

        # Arrows in the title when columns are off screen
        title = self.title
        if start > 0:
            title = "◀ " + title
        if sum(widths) + len(widths) - 1 > inner_w:
            title = title + " ▶"
        draw_box(win, y, x, h, w, title)

        visible = h - 3  # Borders and header
        if inner_w <= 0 or visible < 0:
            return
        right = x + 1 + inner_w

        # Header is always drawn, centered and bold
        cx = x + 1
        for header, width in zip(self.headers[start:], widths):
            safe_addstr(win, y + 1, cx, header.center(width)[:max(0, right - cx)],
                        curses.color_pair(PAIR_HEADER) | curses.A_BOLD)
            cx += width + 1

        # Keep the selection on screen
        if self.selected and self.selected - 1 < self.offset:
            self.offset = self.selected - 1
        elif self.selected and self.selected - 1 >= self.offset + visible:
            self.offset = self.selected - visible
        self.offset = max(0, min(self.offset, max(0, len(self.rows) - visible)))

        for i, row in enumerate(self.rows[self.offset:self.offset + visible]):
            ry = y + 2 + i
            is_selected = self.offset + i + 1 == self.selected
            attr = curses.color_pair(PAIR_SELECTED) if is_selected else curses.A_NORMAL
            if is_selected:
                safe_addstr(win, ry, x + 1, " " * inner_w, attr)
            cx = x + 1
            for cell, width in zip(row[start:], widths):
                safe_addstr(win, ry, cx, cell.ljust(width)[:max(0, right - cx)], attr)
                cx += width + 1


class TextPane:
    """Bordered, wrapping, scrollable text view with markup"""

    def __init__(self, title):
        self.title = title
        self.text = ""
        self.scroll = 0
        self.rect = None

    def set_text(self, text):
        self.text = text
        self.scroll = 0

    def clear(self):
        self.set_text("")

    def scroll_by(self, delta):
        self.scroll = max(0, self.scroll + delta)

    def contains(self, my, mx):
        return self.rect is not None and self.rect.contains(my, mx)

    def draw(self, win, y, x, h, w):
        self.rect = Rect(y, x, h, w)
        draw_box(win, y, x, h, w, self.title)
        inner_w, inner_h = w - 2, h - 2
        if inner_w <= 0 or inner_h <= 0:
            return

        lines = []
        for line in parse_markup(self.text):
            lines.extend(wrap_line(line, inner_w) or [[]])
        self.scroll = min(self.scroll, max(0, len(lines) - inner_h))

        for i, segments in enumerate(lines[self.scroll:self.scroll + inner_h]):
            draw_segments(win, y + 1 + i, x + 1, segments, inner_w)


class StatusLine(TextPane):
    """Single-line pane; only the first line of text is shown"""

    def draw(self, win, y, x, h, w):
        self.rect = Rect(y, x, h, w)
        draw_box(win, y, x, h, w, self.title)
        lines = parse_markup(self.text)
        if lines and h > 2:
            draw_segments(win, y + 1, x + 1, lines[0], w - 2)
