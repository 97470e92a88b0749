import curses
import logging
import time

from grid_pane import GridPane
from key_bindings import map_key, read_key
from messages import Resize
from overlay import OverlayView
from screen_layout import ScreenLayout
from status_bar import STATUS_MESSAGE_SECONDS, render_command_line, render_status

logger = logging.getLogger(__name__)


class Orchestrator:
    """Curses event loop: keys in, messages to the engine, render model out."""

    def __init__(self, stdscr, engine, config):
        self.stdscr = stdscr
        curses.raw()
        self.stdscr.keypad(True)
        self.stdscr.nodelay(False)
        self.stdscr.timeout(config["EVENT_POLL_TIME"])

        self.engine = engine
        self.grid = GridPane()
        self.layout = None
        self.overlay = None
        self.last_render = 0.0
        self.status_visible = False

        h, w = self.stdscr.getmaxyx()
        self.engine.apply(Resize(w, h))

    # ---------------- UI ----------------
    def _ensure_layout(self, model):
        if self.layout is not None and self.layout.matches(model.layout):
            return
        self.stdscr.erase()
        self.stdscr.noutrefresh()
        self.layout = ScreenLayout(self.stdscr, model.layout)
        if self.overlay is None:
            self.overlay = OverlayView(self.layout)
        logger.debug("Screen layout rebuilt for %s", model.layout)

    def _status_message_visible(self, model, now):
        return bool(model.status_message) and model.status_age(now) < STATUS_MESSAGE_SECONDS

    def redraw(self, model):
        now = time.monotonic()
        self._ensure_layout(model)
        self.overlay.sync(model, self.layout)

        if self.overlay.visible:
            self.overlay.draw()
        else:
            self.grid.draw(self.layout.table_win, model, self.layout.index_win)
        self._draw_status(model, now)

        try:
            curses.curs_set(1 if model.active_cmdinput else 0)
        except curses.error:
            pass
        curses.doupdate()

        self.last_render = now
        self.status_visible = self._status_message_visible(model, now)

    def _draw_status(self, model, now):
        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        if model.active_cmdinput:
            text, cursor_x = render_command_line(model, w)
        else:
            text, cursor_x = render_status(model, w, now), None
        try:
            sw.addnstr(0, 0, text, max(0, w - 1), curses.A_REVERSE)
        except curses.error:
            pass
        if cursor_x is not None:
            try:
                sw.move(0, cursor_x)
            except curses.error:
                pass
        sw.noutrefresh()

    # ---------------- main loop ----------------
    def run(self):
        while not self.engine.quitting:
            model = self.engine.render_model
            now = time.monotonic()
            status_expired = self.status_visible and not self._status_message_visible(model, now)
            if model.last_update > self.last_render or status_expired:
                self.redraw(model)

            raw = self.engine.raw_keyevents()
            ch = read_key(self.stdscr, raw)
            if ch == -1:
                continue

            if ch == curses.KEY_RESIZE:
                h, w = self.stdscr.getmaxyx()
                self.engine.apply(Resize(w, h))
                continue

            message = map_key(ch, raw=raw)
            if message is not None:
                self.engine.apply(message)

        logger.info("Event loop finished")
