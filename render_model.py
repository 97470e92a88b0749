import time
from dataclasses import dataclass, field
from typing import Optional

from layout_calculator import Layout


@dataclass(frozen=True)
class ColumnView:
    name: str = ""
    width: int = 0
    data: tuple = ()


EMPTY_COLUMN = ColumnView()


@dataclass(frozen=True)
class RenderModel:
    """Read-only snapshot handed to the presentation layer.

    ``last_update`` is a monotonic timestamp; a renderer only redraws when its
    own last render is older.
    """

    name: str = ""
    mode: str = "table"
    columns: tuple = ()
    index: Optional[ColumnView] = None
    nrows: int = 0
    selected_row: int = 0
    selected_column: int = 0
    abs_selected_row: int = 0
    abs_selected_column: int = 0
    show_popup: bool = False
    popup_message: str = ""
    status_message: str = ""
    status_updated: float = 0.0
    active_cmdinput: bool = False
    cmd_mode: Optional[str] = None
    cmd_text: str = ""
    cmd_cursor: int = 0
    layout: Layout = field(default_factory=Layout)
    last_update: float = field(default_factory=time.monotonic)

    def status_age(self, now: Optional[float] = None) -> float:
        now = time.monotonic() if now is None else now
        return now - self.status_updated
