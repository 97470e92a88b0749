import curses

import messages as msg
from messages import RawKey

CTRL_C = 3

KEYMAP = {
    ord("q"): msg.QUIT,
    ord("h"): msg.MOVE_LEFT,
    curses.KEY_LEFT: msg.MOVE_LEFT,
    ord("j"): msg.MOVE_DOWN,
    curses.KEY_DOWN: msg.MOVE_DOWN,
    ord("k"): msg.MOVE_UP,
    curses.KEY_UP: msg.MOVE_UP,
    ord("l"): msg.MOVE_RIGHT,
    curses.KEY_RIGHT: msg.MOVE_RIGHT,
    ord("J"): msg.MOVE_PAGE_DOWN,
    curses.KEY_NPAGE: msg.MOVE_PAGE_DOWN,
    ord("K"): msg.MOVE_PAGE_UP,
    curses.KEY_PPAGE: msg.MOVE_PAGE_UP,
    ord("g"): msg.MOVE_BEGINNING,
    curses.KEY_HOME: msg.MOVE_BEGINNING,
    ord("G"): msg.MOVE_END,
    curses.KEY_END: msg.MOVE_END,
    ord("0"): msg.MOVE_TO_FIRST_COLUMN,
    ord("$"): msg.MOVE_TO_LAST_COLUMN,
    ord("c"): msg.TOGGLE_COLUMN_STATE,
    ord("e"): msg.TOGGLE_EXPAND_COLUMN_STATE,
    ord("i"): msg.TOGGLE_INDEX,
    ord("y"): msg.COPY_CELL,
    ord("Y"): msg.COPY_ROW,
    ord("?"): msg.HELP,
    ord(":"): msg.ENTER_COMMAND,
    ord("/"): msg.SEARCH,
    ord("\\"): msg.SEARCH_IN_COLUMN,
    ord("f"): msg.FILTER,
    ord("n"): msg.SEARCH_NEXT,
    ord("N"): msg.SEARCH_PREV,
    ord("s"): msg.SORT_ASCENDING,
    ord("S"): msg.SORT_DESCENDING,
    ord("v"): msg.HISTOGRAM,
    10: msg.ENTER,
    13: msg.ENTER,
    curses.KEY_ENTER: msg.ENTER,
    27: msg.EXIT,
}


def read_key(stdscr, raw=False):
    """Next key from the terminal, or -1 when the poll timed out.

    Raw mode reads whole characters, so multi-byte UTF-8 input arrives as a
    single ``str`` instead of one byte per call.
    """
    if not raw:
        return stdscr.getch()
    try:
        return stdscr.get_wch()
    except curses.error:
        # get_wch raises instead of returning -1 on timeout
        return -1


def map_key(ch, raw=False):
    """Translate one key (an int code or a ``get_wch`` character) into a message.

    In raw mode every key is passed through untranslated except Ctrl+C.
    Control characters are handed on as their codes.
    """
    if isinstance(ch, str) and len(ch) == 1 and not ch.isprintable():
        ch = ord(ch)
    if ch == -1:
        return None
    if ch == CTRL_C:
        return msg.QUIT
    if raw:
        return RawKey(ch)
    return KEYMAP.get(ch)
