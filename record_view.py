import logging

from list_window import ListWindow
from render_model import ColumnView

logger = logging.getLogger(__name__)


class RecordView:
    """One row of the active view shown as ``header | value`` pairs."""

    def __init__(self, dataset, table, record_idx, max_column_width):
        self.dataset = dataset
        self.table = table
        self.record_idx = record_idx
        self.name = f"R[{table.name}]"

        self.header_data = [c.name[:max_column_width] for c in dataset.columns]
        self.header_width = max((len(h) for h in self.header_data), default=0)
        self.row_data = []
        self.window = ListWindow(total=len(self.header_data), height=1)
        self.width = 1
        self.row_width = 1
        self.header_view = ColumnView(name="Headers")
        self.row_view = ColumnView(name="Values")
        self._load_row()

    def __len__(self):
        return len(self.header_data)

    def _load_row(self):
        self.row_data = self.dataset.row_values(int(self.table.rows[self.record_idx]))

    @property
    def selected_value(self):
        if not self.row_data:
            return None
        return self.row_data[self.window.selected]

    def refresh(self, layout):
        self.width = layout.table_width
        self.window.resize(layout.table_height)
        begin, end = self.window.start, self.window.end
        logger.debug(
            "Record: rIdx %d, rb %d, re %d, rows %d",
            self.record_idx,
            begin,
            end,
            len(self.row_data),
        )

        self.row_width = max(1, self.width - self.header_width)
        self.header_view = ColumnView(
            name="Headers",
            width=self.header_width,
            data=tuple(self.header_data[begin:end]),
        )
        self.row_view = ColumnView(
            name="Values",
            width=self.row_width,
            data=tuple(self.row_data[begin:end]),
        )

    def move_up(self, size=1):
        self.window.move_up(size)

    def move_down(self, size=1):
        self.window.move_down(size)

    def previous_record(self):
        if self.record_idx > 0:
            self.record_idx -= 1
            self._load_row()

    def next_record(self):
        if self.record_idx < self.table.nrows - 1:
            self.record_idx += 1
            self._load_row()

    def columns(self):
        return (self.header_view, self.row_view)
