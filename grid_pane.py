import curses


def fit_cell(text, width):
    """Cut or pad ``text`` to exactly ``width`` characters."""
    if width <= 0:
        return ""
    if len(text) > width:
        return text[:width]
    return text.ljust(width)


def scrollbar_thumb(height, nrows, abs_row):
    """Row of the scrollbar thumb inside a track of ``height`` rows."""
    if height <= 0 or nrows <= 1:
        return 0
    return min(height - 1, abs_row * height // nrows)


class GridPane:
    PAIR_CELL_TEXT = 6
    PAIR_HEADER = 7
    PAIR_INDEX = 8

    def __init__(self):
        self.header_attr = curses.A_BOLD
        self.index_attr = curses.A_DIM
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_CELL_TEXT, curses.COLOR_WHITE, -1)
            curses.init_pair(self.PAIR_HEADER, curses.COLOR_CYAN, -1)
            curses.init_pair(self.PAIR_INDEX, curses.COLOR_YELLOW, -1)
            self.header_attr = curses.color_pair(self.PAIR_HEADER) | curses.A_BOLD
            self.index_attr = curses.color_pair(self.PAIR_INDEX)
        except curses.error:
            pass

    # ---------- rendering ----------
    def draw(self, table_win, model, index_win=None):
        self._draw_table(table_win, model)
        if index_win is not None and model.index is not None:
            self._draw_index(index_win, model)

    def _draw_table(self, win, model):
        win.erase()
        h, w = win.getmaxyx()
        # last screen column is the scrollbar
        avail_w = max(0, w - 1)

        x = 0
        for cidx, column in enumerate(model.columns):
            if x >= avail_w:
                break
            cw = min(column.width, avail_w - x)
            self._put(win, 0, x, fit_cell(column.name, cw), self.header_attr)
            for ridx, value in enumerate(column.data):
                y = ridx + 1
                if y >= h:
                    break
                attr = 0
                if ridx == model.selected_row and cidx == model.selected_column:
                    attr = curses.A_REVERSE
                self._put(win, y, x, fit_cell(value, cw), attr)
            x += cw + 1

        track_h = max(0, h - 1)
        if track_h and w > 0:
            thumb = scrollbar_thumb(track_h, model.nrows, model.abs_selected_row)
            for y in range(track_h):
                glyph = "█" if y == thumb else "│"
                self._put(win, y + 1, w - 1, glyph, curses.A_DIM)

        win.noutrefresh()

    def _draw_index(self, win, model):
        win.erase()
        h, w = win.getmaxyx()
        index = model.index
        iw = max(0, min(index.width, w - 2))
        for ridx, label in enumerate(index.data):
            y = ridx + 1
            if y >= h:
                break
            attr = self.index_attr
            if ridx == model.selected_row:
                attr |= curses.A_BOLD
            self._put(win, y, 0, label.rjust(iw)[:iw], attr)
            self._put(win, y, iw, " │", curses.A_DIM)
        win.noutrefresh()

    @staticmethod
    def _put(win, y, x, text, attr=0):
        try:
            win.addstr(y, x, text, attr)
        except curses.error:
            # writing the bottom-right cell raises after a successful write
            pass
