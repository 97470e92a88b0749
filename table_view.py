import logging

import numpy as np

from dataset import (
    COLLAPSED_COLUMN_NAME,
    COLLAPSED_PLACEHOLDER,
    STATUS_COLLAPSED,
    frozen_array,
)
from histogram_view import compute_histogram
from list_window import ListWindow
from render_model import EMPTY_COLUMN, ColumnView
from viewer_errors import DataIndexingError

logger = logging.getLogger(__name__)

MIN_INDEX_WIDTH = 3


def visible_name(name: str, width: int) -> str:
    if width < 3:
        return ""
    if len(name) > width:
        return name[: width - 3] + "..."
    return name


class TableView:
    """Windowed projection over a row mapping into the dataset.

    ``rows`` maps view rows to dataset rows. It is a read-only array shared by
    reference; sorting or filtering builds a new one instead of editing it.
    """

    def __init__(self, name, rows):
        self.name = name
        self.rows = frozen_array(rows, dtype=np.intp)
        self.window = ListWindow(total=len(self.rows), height=1)

        self.offset_column = 0
        self.curser_column = 0
        self.visible_columns: list[int] = []
        self.visible_width = 0
        self.width = 1
        self.height = 1

        self.show_index = False
        self.index = EMPTY_COLUMN
        self.data: list[ColumnView] = []

        self.search_results: list[tuple[int, int]] = []
        self.search_idx = 0
        self.column_histograms: dict[int, tuple[list, list]] = {}

    # ---------- row window ----------
    @property
    def offset_row(self) -> int:
        return self.window.offset

    @offset_row.setter
    def offset_row(self, value: int):
        self.window.offset = max(0, value)

    @property
    def curser_row(self) -> int:
        return self.window.cursor

    @curser_row.setter
    def curser_row(self, value: int):
        self.window.cursor = max(0, value)

    @property
    def nrows(self) -> int:
        return len(self.rows)

    @property
    def abs_row(self) -> int:
        return self.window.selected

    @property
    def abs_column(self) -> int:
        return self.offset_column + self.curser_column

    def selected_data_row(self) -> int:
        if self.nrows == 0:
            raise DataIndexingError(f"View {self.name} has no rows")
        return int(self.rows[self.abs_row])

    def replace_rows(self, rows):
        """Swap in a new row mapping; caches keyed to the old order are dropped."""
        self.rows = rows
        self.window.update_total(len(rows))
        self.search_results = []
        self.search_idx = 0
        self.column_histograms = {}

    # ---------- histogram cache ----------
    def histogram(self, column_idx, dataset):
        if column_idx not in self.column_histograms:
            logger.debug("Calculate histogram for column %d of %s", column_idx, self.name)
            self.column_histograms[column_idx] = compute_histogram(
                dataset.column(column_idx), self.rows
            )
        return self.column_histograms[column_idx]

    # ---------- index ----------
    def _row_slice(self, height):
        total = self.nrows
        if total == 0:
            return self.rows[0:0]
        start = min(self.window.offset, total - 1)
        return self.rows[start : min(start + height, total)]

    def index_width_for(self, height: int) -> int:
        rows = self._row_slice(height)
        if len(rows) == 0:
            return MIN_INDEX_WIDTH
        return max(MIN_INDEX_WIDTH, len(str(int(rows.max()) + 1)))

    def build_index(self):
        rows = self.rows[self.window.start : self.window.end]
        data = tuple(str(int(r) + 1) for r in rows)
        width = max([MIN_INDEX_WIDTH] + [len(s) for s in data])
        self.index = ColumnView(name="", width=width, data=data)

    # ---------- refresh ----------
    def refresh(self, dataset, layout, max_column_width, column_margin):
        self.width = layout.table_width
        self.height = layout.table_height

        self.window.update_total(self.nrows)
        self.window.resize(self.height)
        rbegin, rend = self.window.start, self.window.end

        logger.debug(
            "Table %s: I:%s Cr %d Cc %d Or %d Oc %d Rb %d Re %d tw %d th %d",
            self.name,
            self.show_index,
            self.curser_row,
            self.curser_column,
            self.offset_row,
            self.offset_column,
            rbegin,
            rend,
            self.width,
            self.height,
        )

        # render width can change when a column was expanded or collapsed
        for column in dataset.columns:
            column.render_width = column.compute_render_width(max_column_width, column_margin)

        self.offset_column = max(0, min(self.offset_column, dataset.ncols - 1))

        self.visible_columns = []
        visible_width = 0
        for cidx in range(self.offset_column, dataset.ncols):
            column = dataset.columns[cidx]
            if visible_width + column.render_width + 1 <= self.width:
                self.visible_columns.append(cidx)
                visible_width += column.render_width + 1
            else:
                # last column is only partially visible
                if visible_width < self.width:
                    self.visible_columns.append(cidx)
                    visible_width += column.render_width + 1
                    column.render_width = self.width - (visible_width - column.render_width - 1)
                break
        # unclamped, so it exceeds the table width when the last column is cut
        self.visible_width = visible_width

        self.curser_column = max(0, min(self.curser_column, len(self.visible_columns) - 1))

        row_slice = self.rows[rbegin:rend]
        self.data = []
        for idx in self.visible_columns:
            try:
                column = dataset.column(idx)
            except DataIndexingError:
                logger.error("Trying to access column with unknown idx %d!", idx)
                continue
            if column.status == STATUS_COLLAPSED:
                self.data.append(
                    ColumnView(
                        name=COLLAPSED_COLUMN_NAME,
                        width=column.render_width,
                        data=(COLLAPSED_PLACEHOLDER,) * len(row_slice),
                    )
                )
                continue
            self.data.append(
                ColumnView(
                    name=visible_name(column.name, column.render_width),
                    width=column.render_width,
                    data=tuple(column.data[row_slice]),
                )
            )

        self.build_index()

    # ---------- navigation ----------
    def move_up(self, size: int = 1):
        self.window.move_up(size)

    def move_down(self, size: int = 1):
        self.window.move_down(size)

    def move_beginning(self):
        self.window.move_beginning()

    def move_end(self):
        self.window.move_end()

    def move_left(self):
        if self.curser_column > 0:
            self.curser_column -= 1
        elif self.offset_column > 0:
            self.offset_column -= 1

    def move_right(self, ncols: int):
        if self.abs_column < ncols - 1:
            if self.curser_column < len(self.visible_columns) - 1:
                self.curser_column += 1
            else:
                # at the right edge of the screen
                self.offset_column += 1
            return True
        # last column selected but cut off: scroll it into view
        if self.visible_width > self.width and self.offset_column < ncols - 1:
            self.offset_column += 1
            return True
        return False

    def select_cell(self, row: int, column: int):
        logger.debug("Select cell %d:%d in %s", row, column, self.name)
        if column in self.visible_columns:
            self.curser_column = self.visible_columns.index(column)
        else:
            self.offset_column = column
            self.curser_column = 0
        self.window.select(row)
