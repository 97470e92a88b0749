import logging
import time

import messages as msg
from clipboard import copy_to_clipboard, format_row
from config_paths import default_config
from dataset import next_status
from histogram_view import HistogramView
from input_buffer import InputBuffer
from layout_calculator import compute_layout
from messages import (
    CommandInputMode,
    HistogramMode,
    PopupMode,
    RawKey,
    RecordMode,
    Resize,
    TableMode,
)
from record_view import RecordView
from render_model import RenderModel
from search_engine import (
    equal_rows,
    first_match_at_or_after,
    resolve_rows,
    search_column,
    search_table,
    sort_rows,
    step_search_index,
)
from shortcut_help_handler import ShortcutHelpHandler
from table_stack import TableViewStack
from table_view import TableView
from viewer_errors import DataIndexingError

logger = logging.getLogger(__name__)

STATUS_READY = "ready"
STATUS_QUITTING = "quitting"

SUBVIEW_PAGE_SIZE = 10


class Engine:
    """Mode state machine over one loaded dataset.

    ``apply`` takes one message at a time, mutates the active view and
    publishes a fresh ``RenderModel``. Nothing here draws or reads keys.
    """

    def __init__(
        self,
        dataset,
        config=None,
        width=80,
        height=24,
        clipboard=copy_to_clipboard,
        status_message="",
    ):
        self.config = config or default_config()
        self.dataset = dataset
        self.max_column_width = self.config["MAX_COLUMN_WIDTH"]
        self.column_margin = self.config["COLUMN_MARGIN"]
        self.clipboard = clipboard

        self.stack = TableViewStack(TableView(dataset.name, dataset.identity_rows()))
        self.mode = TableMode()
        self.status = STATUS_READY
        self.input = InputBuffer()

        self.width = width
        self.height = height
        self.layout = compute_layout(width, height)

        self.status_message = ""
        self.status_updated = 0.0
        if status_message:
            self.set_status_message(status_message)
        self.model = RenderModel()

        self._table_handlers = {
            msg.MOVE_UP: lambda: self.table.move_up(1),
            msg.MOVE_DOWN: lambda: self.table.move_down(1),
            msg.MOVE_PAGE_UP: lambda: self.table.move_up(self.layout.table_height),
            msg.MOVE_PAGE_DOWN: lambda: self.table.move_down(self.layout.table_height),
            msg.MOVE_LEFT: lambda: self.table.move_left(),
            msg.MOVE_RIGHT: lambda: self.table.move_right(self.dataset.ncols),
            msg.MOVE_BEGINNING: lambda: self.table.move_beginning(),
            msg.MOVE_END: lambda: self.table.move_end(),
            msg.MOVE_TO_FIRST_COLUMN: lambda: self.table.select_cell(self.table.abs_row, 0),
            msg.MOVE_TO_LAST_COLUMN: lambda: self.table.select_cell(
                self.table.abs_row, self.dataset.ncols - 1
            ),
            msg.TOGGLE_COLUMN_STATE: lambda: self._toggle_column_status(expand=False),
            msg.TOGGLE_EXPAND_COLUMN_STATE: lambda: self._toggle_column_status(expand=True),
            msg.TOGGLE_INDEX: self._toggle_index,
            msg.COPY_CELL: self._copy_table_cell,
            msg.COPY_ROW: self._copy_table_row,
            msg.ENTER: self._show_record,
            msg.EXIT: self._close_table,
            msg.HISTOGRAM: self._show_histogram,
            msg.ENTER_COMMAND: lambda: self._enter_cmd_mode(msg.CMD_RAW),
            msg.SEARCH: lambda: self._enter_cmd_mode(msg.CMD_SEARCH_TABLE),
            msg.SEARCH_IN_COLUMN: lambda: self._enter_cmd_mode(msg.CMD_SEARCH_IN_COLUMN),
            msg.FILTER: lambda: self._enter_cmd_mode(msg.CMD_FILTER_BY_COLUMN),
            msg.SEARCH_NEXT: lambda: self._search_next(1),
            msg.SEARCH_PREV: lambda: self._search_next(-1),
            msg.SORT_ASCENDING: lambda: self._sort_current_column(True),
            msg.SORT_DESCENDING: lambda: self._sort_current_column(False),
        }
        self._record_handlers = {
            msg.MOVE_UP: lambda rec: rec.move_up(1),
            msg.MOVE_DOWN: lambda rec: rec.move_down(1),
            msg.MOVE_PAGE_UP: lambda rec: rec.move_up(SUBVIEW_PAGE_SIZE),
            msg.MOVE_PAGE_DOWN: lambda rec: rec.move_down(SUBVIEW_PAGE_SIZE),
            msg.MOVE_LEFT: lambda rec: rec.previous_record(),
            msg.MOVE_RIGHT: lambda rec: rec.next_record(),
            msg.COPY_CELL: self._copy_record_cell,
            msg.EXIT: lambda rec: self._back_to_table(),
        }
        self._histogram_handlers = {
            msg.MOVE_UP: lambda hist: hist.move_up(1),
            msg.MOVE_DOWN: lambda hist: hist.move_down(1),
            msg.MOVE_PAGE_UP: lambda hist: hist.move_up(SUBVIEW_PAGE_SIZE),
            msg.MOVE_PAGE_DOWN: lambda hist: hist.move_down(SUBVIEW_PAGE_SIZE),
            msg.ENTER: self._filter_by_histogram_value,
            msg.EXIT: lambda hist: self._back_to_table(),
        }

        self._refresh()
        self._publish()

    # ---------- public surface ----------
    @property
    def table(self) -> TableView:
        return self.stack.active

    @property
    def render_model(self) -> RenderModel:
        return self.model

    @property
    def quitting(self) -> bool:
        return self.status == STATUS_QUITTING

    def raw_keyevents(self) -> bool:
        return isinstance(self.mode, CommandInputMode)

    def set_status_message(self, message: str):
        self.status_message = message
        self.status_updated = time.monotonic()

    def quit(self):
        logger.info("Quit requested")
        self.status = STATUS_QUITTING

    def apply(self, message):
        if self.quitting or message is None:
            return
        logger.debug("Apply %s in %s mode", msg.describe(message), self.mode.name)
        try:
            self._dispatch(message)
        except (DataIndexingError, IndexError) as exc:
            logger.exception("Failed to apply %s", msg.describe(message))
            self.set_status_message(f"Error: {exc}")
        self._publish()

    # ---------- routing ----------
    def _dispatch(self, message):
        if message == msg.QUIT:
            self.quit()
            return
        if isinstance(message, Resize):
            self._resize(message.width, message.height)
            return

        mode = self.mode
        if isinstance(mode, CommandInputMode):
            if isinstance(message, RawKey):
                self._raw_input(message.ch)
            return
        if isinstance(message, RawKey):
            return

        if isinstance(mode, PopupMode):
            if message in (msg.EXIT, msg.HELP):
                self._close_popup()
            return

        if message == msg.HELP:
            self._show_help()
            return

        if isinstance(mode, TableMode):
            handler = self._table_handlers.get(message)
            if handler is not None:
                handler()
                self._refresh()
        elif isinstance(mode, RecordMode):
            handler = self._record_handlers.get(message)
            if handler is not None:
                handler(mode.record)
                self._refresh()
        elif isinstance(mode, HistogramMode):
            handler = self._histogram_handlers.get(message)
            if handler is not None:
                handler(mode.histogram)
                self._refresh()

    def _resize(self, width, height):
        logger.debug(
            "UI was resized! w:%d->%d, h:%d->%d", self.width, width, self.height, height
        )
        self.width = width
        self.height = height
        self._refresh()

    # ---------- refresh / publish ----------
    def _base_mode(self):
        mode = self.mode
        while isinstance(mode, (PopupMode, CommandInputMode)):
            mode = mode.previous
        return mode

    def _refresh(self):
        mode = self._base_mode()
        if isinstance(mode, RecordMode):
            self.layout = compute_layout(self.width, self.height)
            mode.record.refresh(self.layout)
        elif isinstance(mode, HistogramMode):
            self.layout = compute_layout(self.width, self.height)
            mode.histogram.refresh(self.layout)
        else:
            self._refresh_table()

    def _refresh_table(self):
        table = self.table
        table_height = compute_layout(self.width, self.height).table_height
        self.layout = compute_layout(
            self.width, self.height, table.show_index, table.index_width_for(table_height)
        )
        table.refresh(self.dataset, self.layout, self.max_column_width, self.column_margin)
        # the index grows while scrolling into longer row numbers
        if table.show_index and table.index.width != self.layout.index_width:
            self.layout = compute_layout(
                self.width, self.height, table.show_index, table.index.width
            )
            table.refresh(self.dataset, self.layout, self.max_column_width, self.column_margin)

    def _publish(self):
        mode = self.mode
        base = self._base_mode()
        table = self.table
        fields = dict(
            mode=mode.name,
            status_message=self.status_message,
            status_updated=self.status_updated,
            layout=self.layout,
        )

        if isinstance(base, RecordMode):
            record = base.record
            fields.update(
                name=record.name,
                columns=record.columns(),
                nrows=table.nrows,
                selected_row=record.window.cursor,
                selected_column=1,
                abs_selected_row=record.record_idx,
            )
        elif isinstance(base, HistogramMode):
            hist = base.histogram
            fields.update(
                name=hist.name,
                columns=hist.columns(),
                nrows=len(hist),
                selected_row=hist.window.cursor,
                selected_column=1,
                abs_selected_row=hist.window.selected,
            )
        else:
            fields.update(
                name=table.name,
                columns=tuple(table.data),
                index=table.index if table.show_index else None,
                nrows=table.nrows,
                selected_row=table.curser_row,
                selected_column=table.curser_column,
                abs_selected_row=table.abs_row,
                abs_selected_column=table.abs_column,
            )

        if isinstance(mode, PopupMode):
            fields.update(show_popup=True, popup_message=mode.message)
        if isinstance(mode, CommandInputMode):
            state = self.input.get()
            fields.update(
                active_cmdinput=True,
                cmd_mode=mode.command_mode,
                cmd_text=state.text,
                cmd_cursor=state.cursor,
            )

        self.model = RenderModel(**fields)

    # ---------- mode transitions ----------
    def _show_help(self):
        self.mode = PopupMode(previous=self.mode, message=ShortcutHelpHandler.get_text())

    def _close_popup(self):
        logger.debug("Close popup ...")
        self.mode = self.mode.previous
        self._refresh()

    def _back_to_table(self):
        self.mode = TableMode()

    def _close_table(self):
        if self.stack.pop() is not None:
            self.set_status_message(f"Back to {self.table.name}")

    def _show_record(self):
        table = self.table
        if table.nrows == 0:
            self.set_status_message("No rows to show")
            return
        logger.debug("Building record view ...")
        # the record view takes the whole table width
        table.show_index = False
        self.mode = RecordMode(
            record=RecordView(self.dataset, table, table.abs_row, self.max_column_width)
        )

    def _show_histogram(self):
        table = self.table
        column_idx = table.abs_column
        counts, values = table.histogram(column_idx, self.dataset)
        table.show_index = False
        self.mode = HistogramMode(
            histogram=HistogramView(column_idx, table.name, counts, values, table.nrows)
        )

    def _filter_by_histogram_value(self, hist):
        value = hist.selected_value
        if value is None:
            return
        table = self.table
        matches = equal_rows(value, self.dataset.column(hist.column_idx), table.rows)
        self.mode = TableMode()
        self._push_filter(table, matches)

    def _enter_cmd_mode(self, command_mode):
        logger.debug("Entering command mode %s ...", command_mode)
        self.input.clear()
        self.mode = CommandInputMode(previous=self.mode, command_mode=command_mode)

    def _raw_input(self, ch):
        state = self.input.read(ch)
        if not state.finished:
            return
        mode = self.mode
        self.mode = mode.previous
        if state.canceled:
            logger.debug("Command input canceled")
        else:
            self._handle_cmd_input(mode.command_mode, state.text)
        self._refresh()

    def _handle_cmd_input(self, command_mode, text):
        logger.info("Handle %s command %r", command_mode, text)
        if command_mode == msg.CMD_SEARCH_TABLE:
            self._search(text, current_column_only=False)
        elif command_mode == msg.CMD_SEARCH_IN_COLUMN:
            self._search(text, current_column_only=True)
        elif command_mode == msg.CMD_FILTER_BY_COLUMN:
            self._filter(text)
        else:
            self._run_raw_command(text)

    def _run_raw_command(self, text):
        command = text.strip()
        if command in ("q", "quit"):
            self.quit()
        elif command == "index":
            self._toggle_index()
        elif command.isdigit():
            table = self.table
            row = max(0, min(int(command) - 1, table.nrows - 1))
            table.select_cell(row, table.abs_column)
        elif command:
            self.set_status_message(f"Unknown command: {command}")

    # ---------- table actions ----------
    def _toggle_index(self):
        table = self.table
        table.show_index = not table.show_index

    def _toggle_column_status(self, expand):
        column = self.dataset.column(self.table.abs_column)
        column.status = next_status(column.status, expand)
        logger.debug("Column %s is now %s", column.name, column.status)

    def _copy(self, text, label):
        if self.clipboard(text, self.config.get("CLIPBOARD_INTERFACE_COMMAND")):
            self.set_status_message(f"{label} copied")
        else:
            self.set_status_message("Copy failed")

    def _copy_table_cell(self):
        table = self.table
        cell = self.dataset.cell(table.selected_data_row(), table.abs_column)
        self._copy(cell, "Cell")

    def _copy_table_row(self):
        row = self.table.selected_data_row()
        self._copy(format_row(self.dataset.row_values(row)), "Row")

    def _copy_record_cell(self, record):
        value = record.selected_value
        if value is not None:
            self._copy(value, "Cell")

    def _search(self, term, current_column_only):
        logger.debug("Starting search for %r ...", term)
        table = self.table
        start = time.monotonic()
        column_idx = table.abs_column if current_column_only else None
        results = search_table(term, self.dataset, table.rows, column_idx)
        duration = (time.monotonic() - start) * 1000
        logger.debug("Search found %d matches in %.0fms", len(results), duration)

        if not results:
            table.search_results = []
            table.search_idx = 0
            self.set_status_message("Found no matches!")
            return

        table.search_results = results
        # first match at or after the cursor
        table.search_idx = first_match_at_or_after(results, table.abs_row)
        self._search_next(0)
        self.set_status_message(f"Found {len(results)} results")

    def _search_next(self, step):
        table = self.table
        total = len(table.search_results)
        if total == 0:
            return
        table.search_idx = step_search_index(table.search_idx, total, step)
        row, column = table.search_results[table.search_idx]
        table.select_cell(row, column)
        self.set_status_message(f"Search result {table.search_idx + 1}/{total}")
        logger.debug(
            "Selecting search result %d/%d, pos %d:%d", table.search_idx + 1, total, row, column
        )

    def _filter(self, term):
        logger.debug("Starting filter for %r ...", term)
        table = self.table
        column = self.dataset.column(table.abs_column)
        self._push_filter(table, search_column(term, column, table.rows))

    def _push_filter(self, parent, matches):
        if not matches:
            self.set_status_message("Filter matched no rows")
            return
        self.stack.push_filtered(parent, resolve_rows(parent.rows, matches))
        self.set_status_message(f"Filtered {len(matches)} of {parent.nrows} rows")

    def _sort_current_column(self, ascending):
        table = self.table
        column = self.dataset.column(table.abs_column)
        table.replace_rows(sort_rows(column, table.rows, ascending))
        direction = "ascending" if ascending else "descending"
        self.set_status_message(f"Sorted by {column.name} {direction}")
