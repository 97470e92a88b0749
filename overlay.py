import curses
from typing import List


class OverlayView:
    """Full-screen help popup drawn over the table."""

    def __init__(self, layout):
        self.layout = layout
        self.visible = False
        self.lines: List[str] = []
        self.win = None

    def open(self, message: str):
        self.lines = message.splitlines()
        overlay_h = max(3, self.layout.H - self.layout.status_h)
        self.win = curses.newwin(overlay_h, self.layout.W, 0, 0)
        self.win.leaveok(True)
        self.visible = True

    def close(self):
        self.visible = False
        self.lines = []
        self.win = None

    def sync(self, model, layout):
        """Open, reopen after a resize, or close to match ``model.show_popup``."""
        if not model.show_popup:
            self.close()
            return
        if not self.visible or layout is not self.layout:
            self.layout = layout
            self.open(model.popup_message)

    def draw(self):
        if not self.visible or not self.win:
            return

        win = self.win
        win.erase()
        h, w = win.getmaxyx()
        win.box()

        max_visible = max(0, h - 2)
        for i, line in enumerate(self.lines[:max_visible]):
            try:
                win.addnstr(1 + i, 2, line, max(0, w - 4))
            except curses.error:
                pass

        win.noutrefresh()
