import curses
import logging
import threading
import time

from viewer_errors import LoadingFailed, TvError

logger = logging.getLogger(__name__)


class LoadState:
    def __init__(self):
        self.loaded = False
        self.aborted = False
        self.dataset = None
        self.error = None
        self.elapsed = 0.0


class LoadingScreen:
    """Spinner shown while the dataset loads in a background thread.

    The thread only fills in ``LoadState``; Ctrl+X marks the load aborted and
    returns immediately, leaving the daemon thread to finish on its own.
    """

    SPINNER = "|/-\\"

    def __init__(self, stdscr, loader_fn, load_state: LoadState, label=""):
        self.stdscr = stdscr
        self.loader_fn = loader_fn
        self.state = load_state
        self.label = label
        self.started = time.monotonic()
        self.frame = 0

    def start_loader(self):
        t = threading.Thread(target=self._load, daemon=True)
        t.start()

    def _load(self):
        if self.state.aborted:
            return
        try:
            dataset = self.loader_fn()
        except TvError as exc:
            self.state.error = exc
        except Exception as exc:
            logger.exception("Unexpected failure while loading")
            self.state.error = LoadingFailed(str(exc))
        else:
            if not self.state.aborted:
                self.state.dataset = dataset
        self.state.elapsed = time.monotonic() - self.started
        self.state.loaded = True

    def run(self):
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        self.stdscr.nodelay(True)
        self.start_loader()
        while not self.state.loaded:
            self.draw()
            ch = self.stdscr.getch()
            if ch == 24:  # Ctrl+X
                logger.info("Loading aborted by user")
                self.state.aborted = True
                break
            time.sleep(0.05)
        self.stdscr.nodelay(False)

    def draw(self):
        self.stdscr.erase()
        h, w = self.stdscr.getmaxyx()
        elapsed = time.monotonic() - self.started
        spinner = self.SPINNER[self.frame % len(self.SPINNER)]
        self.frame += 1
        lines = [
            f"{spinner} Loading {self.label} ({elapsed:.1f}s)",
            "Ctrl+X to abort",
        ]
        top = max(0, h // 2 - len(lines) // 2)
        for i, line in enumerate(lines):
            left = max(0, (w - len(line)) // 2)
            try:
                self.stdscr.addnstr(top + i, left, line, max(0, w - left - 1))
            except curses.error:
                pass
        self.stdscr.refresh()
