import curses
import re

import pytest

from dockview.core.client import DockerClientError
from dockview.core.docker_tui import DockerTUI, HEADERS
from dockview.views.surface import Rect


class DummyClient:
    def __init__(self, records=None, logs='line one', started='2024-01-01T00:00:00Z'):
        self.records = records or []
        self.logs = logs
        self.started = started
        self.list_error = None
        self.inspect_error = None
        self.logs_error = None
        self.calls = []

    def list_containers(self):
        self.calls.append(('list',))
        if self.list_error:
            raise self.list_error
        return self.records

    def inspect_container(self, container_id):
        self.calls.append(('inspect', container_id))
        if self.inspect_error:
            raise self.inspect_error
        return {'Id': container_id, 'State': {'Status': 'running', 'StartedAt': self.started}}

    def fetch_logs(self, container_id, tail=5):
        self.calls.append(('logs', container_id, tail))
        if self.logs_error:
            raise self.logs_error
        return self.logs


def record(id, name, state):
    return {'Id': id, 'Names': [f'/{name}'], 'Image': 'img', 'State': state, 'Status': state, 'Ports': []}


@pytest.fixture
def client():
    return DummyClient([record('id-a', 'a', 'exited'), record('id-b', 'b', 'running')])


@pytest.fixture
def tui(client):
    return DockerTUI(client)


def fetches(client):
    return [c for c in client.calls if c[0] != 'list']


def test_refresh_orders_and_selects_first(tui, client):
    tui.refresh()
    assert [s.name for s in tui.containers] == ['b', 'a']
    assert [row[0] for row in tui.table.rows] == ['b', 'a']
    assert tui.table.headers == HEADERS
    assert tui.table.selected == 1
    assert fetches(client) == [('inspect', 'id-b'), ('logs', 'id-b', 5)]
    assert 'Name:[-] b' in tui.details.text
    assert tui.logs.text == 'line one'


def test_refresh_status_line(tui):
    tui.refresh()
    assert re.match(r'^\d{2}:\d{2}:\d{2} \[green\]Refreshed\. 2 containers\.$', tui.status.text)


def test_refresh_empty_list(client):
    client.records = []
    tui = DockerTUI(client)
    tui.logs.set_text('stale')
    tui.refresh()
    assert tui.table.rows == []
    assert tui.table.headers == HEADERS
    assert tui.details.text == 'No containers found.'
    assert tui.logs.text == ''
    assert fetches(client) == []


def test_refresh_failure_keeps_previous_rows(tui, client):
    tui.refresh()
    rows = [list(r) for r in tui.table.rows]
    client.list_error = DockerClientError('daemon went away')
    tui.reload()
    assert tui.table.rows == rows
    assert len(tui.containers) == 2
    assert re.match(r'^\d{2}:\d{2}:\d{2} \[red\]Refresh error: daemon went away$', tui.status.text)


def test_reload_replaces_list(tui, client):
    tui.refresh()
    client.records = [record('id-c', 'c', 'running')]
    tui.reload()
    assert [s.id for s in tui.containers] == ['id-c']
    assert tui.table.rows == [['c', 'img', 'running', 'running', '-']]


def test_logs_whitespace_only(tui, client):
    client.logs = '  \r\n \n'
    tui.refresh()
    assert tui.logs.text == '(no logs)'


def test_inspect_failure_does_not_block_logs(tui, client):
    client.inspect_error = DockerClientError('no such container')
    client.logs = '2024-01-01T00:00:00Z hello'
    tui.refresh()
    assert tui.details.text == '[red]Inspect error: no such container'
    assert tui.logs.text == '2024-01-01T00:00:00Z hello'


def test_show_for_row_ignores_stale_rows(tui, client):
    tui.refresh()
    client.calls.clear()
    tui.show_for_row(0)
    tui.show_for_row(3)
    assert client.calls == []


def test_keys_navigate_and_select(tui, client):
    tui.refresh()
    client.calls.clear()
    tui.handle_key(curses.KEY_DOWN)
    assert tui.table.selected == 2
    # Navigation alone does not fetch
    assert client.calls == []
    tui.handle_key(10)
    assert fetches(client) == [('inspect', 'id-a'), ('logs', 'id-a', 5)]
    tui.handle_key(curses.KEY_DOWN)
    assert tui.table.selected == 2
    tui.handle_key(curses.KEY_UP)
    tui.handle_key(curses.KEY_UP)
    assert tui.table.selected == 1


def test_enter_with_empty_table(client):
    client.records = []
    tui = DockerTUI(client)
    tui.refresh()
    tui.handle_key(10)
    assert fetches(client) == []


@pytest.mark.parametrize('key', [ord('r'), ord('R')])
def test_refresh_key(tui, client, key):
    tui.handle_key(key)
    assert client.calls[0] == ('list',)
    assert tui.table.row_count() == 2


@pytest.mark.parametrize('key', [ord('q'), ord('Q'), 27])
def test_quit_keys(tui, key):
    tui.handle_key(key)
    assert tui.running is False


def test_click_selects_then_activates(tui, client):
    tui.refresh()
    tui.table.rect = Rect(0, 0, 10, 40)
    client.calls.clear()
    # Border, header, then data rows from y=2
    tui.click(3, 5)
    assert tui.table.selected == 2
    assert client.calls == []
    tui.click(3, 5)
    assert fetches(client) == [('inspect', 'id-a'), ('logs', 'id-a', 5)]
    tui.click(9, 5)
    assert tui.table.selected == 2


def test_scroll_at(tui):
    tui.logs.rect = Rect(5, 10, 5, 20)
    tui.details.rect = Rect(0, 10, 5, 20)
    tui.scroll_at(6, 12, 3)
    assert tui.logs.scroll == 3
    assert tui.details.scroll == 0
    tui.scroll_at(6, 12, -5)
    assert tui.logs.scroll == 0


def test_log_tail_from_config(client):
    tui = DockerTUI(client, {'timeout': 10, 'log_tail': 20, 'log_level': 'WARNING', 'log_file': None})
    tui.refresh()
    assert ('logs', 'id-b', 20) in client.calls
    assert tui.logs.title == 'Last 20 Logs'


def test_left_right_scroll_table_columns(tui, client):
    tui.refresh()
    tui.handle_key(curses.KEY_RIGHT)
    tui.handle_key(curses.KEY_RIGHT)
    assert tui.table.col_offset == 2
    tui.handle_key(curses.KEY_LEFT)
    tui.handle_key(curses.KEY_LEFT)
    tui.handle_key(curses.KEY_LEFT)
    assert tui.table.col_offset == 0
    # Sideways scrolling never fetches
    assert fetches(client) == [('inspect', 'id-b'), ('logs', 'id-b', 5)]


@pytest.fixture
def drawn_tui(tui, screen):
    tui.stdscr = screen(24, 80)
    tui.refresh()
    tui.render()
    return tui


def area(rect):
    return (rect.y, rect.x, rect.h, rect.w)


def test_render_layout(drawn_tui):
    tui = drawn_tui
    # Left 3/7 of the width, details take 2/3 of the height
    assert area(tui.table.rect) == (0, 0, 21, 34)
    assert area(tui.status.rect) == (21, 0, 3, 34)
    assert area(tui.details.rect) == (0, 34, 16, 46)
    assert area(tui.logs.rect) == (16, 34, 8, 46)

    win = tui.stdscr
    assert 'Docker Containers' in win.row(0)
    assert 'Container Details' in win.row(0)
    assert 'Last 5 Logs' in win.row(16)
    assert 'Status' in win.row(21)
    # Clipped to the 32-column status pane
    assert 'Refreshed. 2 containers' in win.row(22)
    assert 'Name' in win.row(1)
    assert 'Name: b' in win.row(1)
    assert 'line one' in win.row(17)


def fake_mouse(monkeypatch, my, mx, button_state):
    monkeypatch.setattr(curses, 'getmouse', lambda: (0, mx, my, 0, button_state))


def test_mouse_wheel_up_scrolls_pane_under_pointer(drawn_tui, monkeypatch):
    drawn_tui.logs.scroll = 5
    drawn_tui.details.scroll = 5
    fake_mouse(monkeypatch, 18, 40, curses.BUTTON4_PRESSED)
    drawn_tui.handle_key(curses.KEY_MOUSE)
    assert drawn_tui.logs.scroll == 2
    assert drawn_tui.details.scroll == 5


@pytest.mark.skipif(not hasattr(curses, 'BUTTON5_PRESSED'), reason='curses without wheel-down events')
def test_mouse_wheel_down_scrolls_pane_under_pointer(drawn_tui, monkeypatch):
    fake_mouse(monkeypatch, 2, 40, curses.BUTTON5_PRESSED)
    drawn_tui.handle_key(curses.KEY_MOUSE)
    assert drawn_tui.details.scroll == 3
    assert drawn_tui.logs.scroll == 0


@pytest.mark.parametrize('button', ['BUTTON1_CLICKED', 'BUTTON1_PRESSED'])
def test_mouse_click_selects_row(drawn_tui, client, monkeypatch, button):
    client.calls.clear()
    fake_mouse(monkeypatch, 3, 5, getattr(curses, button))
    drawn_tui.handle_key(curses.KEY_MOUSE)
    assert drawn_tui.table.selected == 2
    assert client.calls == []
    drawn_tui.handle_key(curses.KEY_MOUSE)
    assert fetches(client) == [('inspect', 'id-a'), ('logs', 'id-a', 5)]


def test_mouse_error_is_ignored(drawn_tui, client, monkeypatch):
    def broken():
        raise curses.error('getmouse() returned ERR')

    monkeypatch.setattr(curses, 'getmouse', broken)
    client.calls.clear()
    drawn_tui.handle_key(curses.KEY_MOUSE)
    assert drawn_tui.table.selected == 1
    assert client.calls == []


def test_other_mouse_buttons_do_nothing(drawn_tui, client, monkeypatch):
    client.calls.clear()
    fake_mouse(monkeypatch, 3, 5, curses.BUTTON3_PRESSED)
    drawn_tui.handle_key(curses.KEY_MOUSE)
    assert drawn_tui.table.selected == 1
    assert client.calls == []
