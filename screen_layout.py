import curses

from layout_calculator import INDEX_COLUMN_BORDER, STATUSLINE_HEIGHT, Layout


class ScreenLayout:
    """Curses windows for one Layout: index, table (with scrollbar) and status line."""

    def __init__(self, stdscr, layout: Layout):
        self.stdscr = stdscr
        self.layout = layout
        self.H, self.W = stdscr.getmaxyx()

        self.status_h = STATUSLINE_HEIGHT
        self.table_h = max(1, self.H - self.status_h)

        index_area = layout.index_width + INDEX_COLUMN_BORDER if layout.index_width else 0
        self.index_w = min(index_area, max(0, self.W - 1))
        self.table_w = max(1, self.W - self.index_w)

        self.index_win = None
        if self.index_w > 0:
            self.index_win = curses.newwin(self.table_h, self.index_w, 0, 0)
            self.index_win.leaveok(True)

        self.table_win = curses.newwin(self.table_h, self.table_w, 0, self.index_w)
        # table never owns the cursor
        self.table_win.leaveok(True)

        self.status_win = curses.newwin(self.status_h, self.W, self.table_h, 0)

    def matches(self, layout: Layout) -> bool:
        return layout == self.layout and (self.H, self.W) == self.stdscr.getmaxyx()
