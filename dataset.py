import logging
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from viewer_errors import DataIndexingError

logger = logging.getLogger(__name__)

NULL_PLACEHOLDER = "∅"
NEWLINE_MARKER = " ↵ "
COLLAPSED_PLACEHOLDER = "⋮"
COLLAPSED_COLUMN_NAME = "..."
COLLAPSED_COLUMN_WIDTH = 3

STATUS_NORMAL = "normal"
STATUS_EXPANDED = "expanded"
STATUS_COLLAPSED = "collapsed"


def to_display(value) -> str:
    if value is None:
        return NULL_PLACEHOLDER
    # list-valued cells (e.g. parquet arrays) are not scalars
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return NULL_PLACEHOLDER
    text = str(value)
    return text.replace("\r\n", NEWLINE_MARKER).replace("\n", NEWLINE_MARKER)


def is_numeric_dtype(dtype) -> bool:
    if pd.api.types.is_bool_dtype(dtype):
        return False
    return pd.api.types.is_integer_dtype(dtype) or pd.api.types.is_float_dtype(dtype)


def frozen_array(values, dtype=object) -> np.ndarray:
    arr = np.asarray(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


@dataclass
class Column:
    name: str
    data: np.ndarray
    numeric: bool = False
    max_width: int = 0
    status: str = STATUS_NORMAL
    render_width: int = 0

    def __len__(self):
        return len(self.data)

    def natural_width(self, margin: int) -> int:
        return max(len(self.name), self.max_width) + margin

    def compute_render_width(self, max_column_width: int, margin: int) -> int:
        if self.status == STATUS_COLLAPSED:
            return COLLAPSED_COLUMN_WIDTH
        width = self.natural_width(margin)
        if self.status == STATUS_EXPANDED:
            return width
        return min(width, max_column_width)

    def describe(self) -> str:
        return (
            f'"{self.name}", {self.status}, width_max: {self.max_width}, '
            f"render_width: {self.render_width}, # rows {len(self.data)}"
        )


def next_status(status: str, expand: bool) -> str:
    """Status a column moves to when collapse (expand=False) or expand is toggled."""
    if expand:
        return STATUS_NORMAL if status == STATUS_EXPANDED else STATUS_EXPANDED
    return STATUS_NORMAL if status == STATUS_COLLAPSED else STATUS_COLLAPSED


@dataclass
class Dataset:
    """Immutable column-oriented table of display strings."""

    name: str
    columns: list = field(default_factory=list)

    def __post_init__(self):
        lengths = {len(c.data) for c in self.columns}
        if len(lengths) > 1:
            raise DataIndexingError(
                f"Columns of {self.name} have different lengths: {sorted(lengths)}"
            )

    @property
    def nrows(self) -> int:
        return len(self.columns[0].data) if self.columns else 0

    @property
    def ncols(self) -> int:
        return len(self.columns)

    def __len__(self):
        return self.nrows

    def column(self, idx: int) -> Column:
        if idx < 0 or idx >= len(self.columns):
            raise DataIndexingError(f"Unknown column index {idx}")
        return self.columns[idx]

    def cell(self, row: int, col: int) -> str:
        column = self.column(col)
        if row < 0 or row >= len(column.data):
            raise DataIndexingError(f"Unknown row index {row}")
        return column.data[row]

    def row_values(self, row: int) -> list:
        return [self.cell(row, c) for c in range(self.ncols)]

    def identity_rows(self) -> np.ndarray:
        return frozen_array(np.arange(self.nrows, dtype=np.intp), dtype=np.intp)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, name: str) -> "Dataset":
        columns = []
        for col_name in df.columns:
            series = df[col_name]
            values = [to_display(v) for v in series.tolist()]
            max_width = max((len(v) for v in values), default=0)
            column = Column(
                name=str(col_name),
                data=frozen_array(values),
                numeric=is_numeric_dtype(series.dtype),
                max_width=max_width,
            )
            logger.debug("Column: %s", column.describe())
            columns.append(column)
        return cls(name=name, columns=columns)

    @classmethod
    def from_columns(cls, name: str, columns: dict, numeric=()) -> "Dataset":
        """Build a dataset directly from already-rendered string columns."""
        built = []
        for col_name, values in columns.items():
            values = [str(v) for v in values]
            built.append(
                Column(
                    name=str(col_name),
                    data=frozen_array(values),
                    numeric=col_name in numeric,
                    max_width=max((len(v) for v in values), default=0),
                )
            )
        return cls(name=name, columns=built)
