import logging

import pandas as pd

from list_window import ListWindow
from render_model import ColumnView

logger = logging.getLogger(__name__)


def compute_histogram(column, rows):
    """Value counts of ``column`` over ``rows``.

    Returns ``(counts, values)`` ordered by count descending, ties broken by
    value descending.
    """
    if len(rows) == 0:
        return [], []
    counts = pd.Series(column.data[rows], dtype=object).value_counts(sort=False)
    pairs = sorted(
        ((int(count), str(value)) for value, count in counts.items()),
        reverse=True,
    )
    return [c for c, _ in pairs], [v for _, v in pairs]


def format_count(count: int, total: int) -> str:
    pct = count * 100.0 / total if total else 0.0
    return f"{pct:.0f}% {count}"


class HistogramView:
    """Scrollable ``count | value`` listing for one column of the active view."""

    def __init__(self, column_idx, table_name, counts, values, nrecords):
        self.column_idx = column_idx
        self.name = f"H[{table_name}]"
        self.count_data = [format_count(c, nrecords) for c in counts]
        self.value_data = list(values)
        self.window = ListWindow(total=len(self.value_data), height=1)
        self.width = 1
        self.count_width = max((len(c) for c in self.count_data), default=0)
        self.value_width = 1
        self.count_view = ColumnView(name="Counts")
        self.value_view = ColumnView(name="Values")

    def __len__(self):
        return len(self.value_data)

    @property
    def selected_value(self):
        if not self.value_data:
            return None
        return self.value_data[self.window.selected]

    def refresh(self, layout):
        self.width = layout.table_width
        self.window.resize(layout.table_height)
        begin, end = self.window.start, self.window.end

        self.value_width = max(1, self.width - self.count_width)
        self.count_view = ColumnView(
            name="Counts",
            width=self.count_width,
            data=tuple(self.count_data[begin:end]),
        )
        self.value_view = ColumnView(
            name="Values",
            width=self.value_width,
            data=tuple(self.value_data[begin:end]),
        )
        logger.debug("Histogram %s: rows %d..%d of %d", self.name, begin, end, len(self))

    def move_up(self, size=1):
        self.window.move_up(size)

    def move_down(self, size=1):
        self.window.move_down(size)

    def columns(self):
        return (self.count_view, self.value_view)
