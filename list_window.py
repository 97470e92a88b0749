class ListWindow:
    """Cursor and scroll offset over a list of known length.

    ``offset + cursor`` is the absolute selected position. The cursor always
    stays inside the visible window of ``height`` entries.
    """

    def __init__(self, total: int = 0, height: int = 1):
        self.total = max(0, total)
        self.height = max(1, height)
        self.offset = 0
        self.cursor = 0

    def _clamp(self):
        if self.total == 0:
            self.offset = 0
            self.cursor = 0
            return
        self.offset = max(0, min(self.offset, self.total - 1))
        self.cursor = max(0, min(self.cursor, self.height - 1, self.total - self.offset - 1))

    def resize(self, height: int):
        selected = self.selected
        self.height = max(1, height)
        if self.cursor >= self.height:
            # keep the same entry selected
            self.offset = selected - (self.height - 1)
            self.cursor = self.height - 1
        self._clamp()

    def update_total(self, total: int):
        self.total = max(0, total)
        self._clamp()

    def reset(self):
        self.offset = 0
        self.cursor = 0

    @property
    def selected(self) -> int:
        return self.offset + self.cursor

    @property
    def window_len(self) -> int:
        return max(0, min(self.height, self.total - self.offset))

    @property
    def start(self) -> int:
        return self.offset

    @property
    def end(self) -> int:
        return min(self.total, self.offset + self.height)

    def move_up(self, size: int = 1):
        if self.cursor > 0:
            self.cursor = max(0, self.cursor - size)
        elif self.offset > 0:
            self.offset = max(0, self.offset - size)
        self._clamp()

    def move_down(self, size: int = 1):
        if self.total == 0 or self.selected >= self.total - 1:
            return
        if self.cursor < self.height - 1:
            self.cursor = min(self.cursor + size, self.window_len - 1)
        else:
            # at the bottom of the window, scroll
            self.offset = min(self.offset + size, self.total - 1)
            self.cursor = min(self.height - 1, self.total - self.offset - 1)
        self._clamp()

    def move_beginning(self):
        self.reset()

    def move_end(self):
        if self.total <= self.height:
            self.offset = 0
            self.cursor = max(0, self.total - 1)
        else:
            self.offset = self.total - self.height
            self.cursor = self.height - 1

    def select(self, pos: int):
        if self.total == 0:
            self.reset()
            return
        pos = max(0, min(pos, self.total - 1))
        if self.offset <= pos < self.offset + self.height:
            self.cursor = pos - self.offset
        else:
            self.offset = pos
            self.cursor = 0
        self._clamp()
