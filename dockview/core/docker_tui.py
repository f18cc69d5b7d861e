#!/usr/bin/env python3
"""
dockview - Core Module
-----------
DockerTUI: owns the Docker client handle and the current container list,
and wires keys and mouse events to refresh and selection.

Every remote call runs on the UI loop and blocks it for at most the client
timeout; there is no background polling.
"""
import curses
import logging
import time

from dockview.core.client import DockerClientError
from dockview.core.selection import SelectionController
from dockview.core.view_model import build_summaries
from dockview.utils.config import DEFAULT_CONFIG
from dockview.views.surface import Table, TextPane, StatusLine, escape, init_colors

logger = logging.getLogger(__name__)

HEADERS = ["Name", "Image", "State", "Status", "Ports"]

# Keys
QUIT_KEYS = (ord('q'), ord('Q'), 27)
REFRESH_KEYS = (ord('r'), ord('R'))
ENTER_KEYS = (10, 13, curses.KEY_ENTER)

WHEEL_STEP = 3


class DockerTUI:
    def __init__(self, client, config=None):
        self.config = config or DEFAULT_CONFIG.copy()
        self.client = client
        self.containers = []
        self.running = True
        self.stdscr = None

        tail = self.config["log_tail"]
        self.selection = SelectionController(client, tail)

        # Widgets
        self.table = Table("Docker Containers", HEADERS)
        self.details = TextPane("Container Details")
        self.logs = TextPane(f"Last {tail} Logs")
        self.status = StatusLine("Status")

    def set_status(self, message):
        """Status line text, prefixed with the local wall-clock time"""
        self.status.set_text(time.strftime("%H:%M:%S ") + message)

    def refresh(self):
        """
        Reload the container list and rebuild the table.

        Raises DockerClientError before touching the table, so a failed
        refresh leaves the previous rows on screen.
        """
        records = self.client.list_containers()
        self.containers = build_summaries(records)

        self.table.clear()
        for s in self.containers:
            self.table.add_row([s.name, s.image, s.state, s.status, s.ports])
        logger.info("Refreshed %d containers", len(self.containers))

        self.set_status(f"[green]Refreshed. {len(self.containers)} containers.")
        if self.containers:
            self.table.select(1)
            self.show_for_row(1)
        else:
            self.details.set_text("No containers found.")
            self.logs.clear()

    def reload(self, error_prefix="Refresh error"):
        """refresh() with failures reported on the status line"""
        self.set_status("[yellow]Loading containers...")
        self.render()
        try:
            self.refresh()
        except DockerClientError as e:
            self.set_status(f"[red]{error_prefix}: {escape(str(e))}")

    def show_for_row(self, row):
        """Populate Details and Logs for a table row (1 = first container)"""
        idx = row - 1
        if idx < 0 or idx >= len(self.containers):
            return
        summary = self.containers[idx]

        self.details.set_text(f"Loading {escape(summary.name)}...")
        self.render()

        detail_text, log_text = self.selection.show(summary)
        self.details.set_text(detail_text)
        self.logs.set_text(log_text)

    def click(self, my, mx):
        """Click selects a row; clicking the selected row activates it"""
        row = self.table.row_at(my, mx)
        if not row:
            return
        if row == self.table.selected:
            self.show_for_row(row)
        else:
            self.table.select(row)

    def scroll_at(self, my, mx, delta):
        for pane in (self.details, self.logs):
            if pane.contains(my, mx):
                pane.scroll_by(delta)
                return

    def handle_mouse(self):
        try:
            _, mx, my, _, button_state = curses.getmouse()
        except curses.error:
            return
        if button_state & curses.BUTTON4_PRESSED:  # Wheel up
            self.scroll_at(my, mx, -WHEEL_STEP)
        elif button_state & getattr(curses, "BUTTON5_PRESSED", 0):  # Wheel down
            self.scroll_at(my, mx, WHEEL_STEP)
        elif button_state & (curses.BUTTON1_CLICKED | curses.BUTTON1_PRESSED):
            self.click(my, mx)

    def handle_key(self, key):
        if key in QUIT_KEYS:
            self.running = False
        elif key in REFRESH_KEYS:
            self.reload()
        elif key == curses.KEY_UP:
            self.table.move(-1)
        elif key == curses.KEY_DOWN:
            self.table.move(1)
        elif key == curses.KEY_LEFT:
            self.table.scroll_columns(-1)
        elif key == curses.KEY_RIGHT:
            self.table.scroll_columns(1)
        elif key in ENTER_KEYS:
            self.show_for_row(self.table.selected)
        elif key == curses.KEY_MOUSE:
            self.handle_mouse()

    def render(self):
        """Lay out and draw every widget; a no-op until run() has a screen"""
        stdscr = self.stdscr
        if stdscr is None:
            return
        stdscr.erase()
        h, w = stdscr.getmaxyx()

        # Left column: table over status line. Right column: details over logs.
        left_w = w * 3 // 7
        status_h = 3
        self.table.draw(stdscr, 0, 0, h - status_h, left_w)
        self.status.draw(stdscr, h - status_h, 0, status_h, left_w)

        details_h = h * 2 // 3
        self.details.draw(stdscr, 0, left_w, details_h, w - left_w)
        self.logs.draw(stdscr, details_h, left_w, h - details_h, w - left_w)

        stdscr.refresh()

    def run(self, stdscr):
        """Main loop, meant to be called through curses.wrapper"""
        self.stdscr = stdscr
        try:
            curses.curs_set(0)  # Hide cursor
        except curses.error:
            pass
        stdscr.keypad(True)
        init_colors()
        curses.mousemask(curses.ALL_MOUSE_EVENTS)

        self.reload("Error loading containers")

        while self.running:
            self.render()
            self.handle_key(stdscr.getch())
