from dataclasses import dataclass
from typing import Any

# ---------- navigation / action messages ----------
QUIT = "quit"
MOVE_UP = "move_up"
MOVE_DOWN = "move_down"
MOVE_PAGE_UP = "move_page_up"
MOVE_PAGE_DOWN = "move_page_down"
MOVE_LEFT = "move_left"
MOVE_RIGHT = "move_right"
MOVE_BEGINNING = "move_beginning"
MOVE_END = "move_end"
MOVE_TO_FIRST_COLUMN = "move_to_first_column"
MOVE_TO_LAST_COLUMN = "move_to_last_column"
TOGGLE_COLUMN_STATE = "toggle_column_state"
TOGGLE_EXPAND_COLUMN_STATE = "toggle_expand_column_state"
TOGGLE_INDEX = "toggle_index"
COPY_CELL = "copy_cell"
COPY_ROW = "copy_row"
ENTER = "enter"
EXIT = "exit"
HELP = "help"
HISTOGRAM = "histogram"
ENTER_COMMAND = "enter_command"
SEARCH = "search"
SEARCH_IN_COLUMN = "search_in_column"
FILTER = "filter"
SEARCH_NEXT = "search_next"
SEARCH_PREV = "search_prev"
SORT_ASCENDING = "sort_ascending"
SORT_DESCENDING = "sort_descending"

# ---------- command input sub-modes ----------
CMD_RAW = "raw"
CMD_SEARCH_TABLE = "search_table"
CMD_SEARCH_IN_COLUMN = "search_in_column"
CMD_FILTER_BY_COLUMN = "filter_by_column"

CMD_PROMPTS = {
    CMD_RAW: ":",
    CMD_SEARCH_TABLE: "/",
    CMD_SEARCH_IN_COLUMN: "\\",
    CMD_FILTER_BY_COLUMN: "filter: ",
}


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class RawKey:
    # int key code, or a whole character read in raw mode
    ch: Any


# ---------- interaction modes ----------
# Each mode carries exactly the state it owns. Popup and command input keep a
# single reference to the mode they return to.


@dataclass
class TableMode:
    name = "table"


@dataclass
class RecordMode:
    record: Any
    name = "record"


@dataclass
class HistogramMode:
    histogram: Any
    name = "histogram"


@dataclass
class PopupMode:
    previous: Any
    message: str = ""
    name = "popup"


@dataclass
class CommandInputMode:
    previous: Any
    command_mode: str = CMD_RAW
    name = "command_input"


def describe(message) -> str:
    if isinstance(message, Resize):
        return f"resize({message.width}x{message.height})"
    if isinstance(message, RawKey):
        return f"raw_key({message.ch})"
    return str(message)
