from dataclasses import dataclass

# curses key codes; the core never imports curses itself
KEY_LEFT = 260
KEY_RIGHT = 261
KEY_HOME = 262
KEY_BACKSPACE = 263
KEY_DC = 330
KEY_END = 360

ENTER_KEYS = (10, 13, 343)
ESCAPE = 27


@dataclass(frozen=True)
class InputState:
    text: str = ""
    cursor: int = 0
    finished: bool = False
    canceled: bool = False


class InputBuffer:
    """Single line editor driven by raw key codes."""

    def __init__(self):
        self.text = ""
        self.cursor = 0
        self.finished = False
        self.canceled = False

    # ---------- state helpers ----------
    def clear(self):
        self.text = ""
        self.cursor = 0
        self.finished = False
        self.canceled = False

    def get(self) -> InputState:
        return InputState(self.text, self.cursor, self.finished, self.canceled)

    # ---------- input handling ----------
    def read(self, ch) -> InputState:
        if isinstance(ch, str):
            if len(ch) == 1 and ch.isprintable():
                self._insert(ch)
                return self.get()
            ch = ord(ch) if len(ch) == 1 else -1

        if ch in ENTER_KEYS:
            self.finished = True
            return self.get()

        if ch == ESCAPE:
            self.clear()
            self.canceled = True
            self.finished = True
            return self.get()

        if ch in (KEY_BACKSPACE, 127, 8):
            if self.cursor > 0:
                self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
                self.cursor -= 1
            return self.get()

        if ch == KEY_DC:
            self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
            return self.get()

        if ch == 21:  # Ctrl+U, kill to line start
            self.text = self.text[self.cursor :]
            self.cursor = 0
            return self.get()

        if ch == KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
        elif ch == KEY_RIGHT:
            self.cursor = min(len(self.text), self.cursor + 1)
        elif ch in (KEY_HOME, 1):  # Home or Ctrl+A
            self.cursor = 0
        elif ch in (KEY_END, 5):  # End or Ctrl+E
            self.cursor = len(self.text)
        elif 32 <= ch <= 126:
            self._insert(chr(ch))
        return self.get()

    def _insert(self, char):
        self.text = self.text[: self.cursor] + char + self.text[self.cursor :]
        self.cursor += 1
