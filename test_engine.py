import curses
import unittest

import messages as msg
from dataset import Dataset
from engine import Engine
from key_bindings import map_key, read_key
from messages import RawKey, Resize
from shortcut_help_handler import HELP_TEXT
from viewer_errors import DataIndexingError


class FakeClipboard:
    def __init__(self, ok=True):
        self.ok = ok
        self.calls = []

    def __call__(self, text, command=None):
        self.calls.append((text, command))
        return self.ok


class FakeScreen:
    """Stands in for stdscr: get_wch raises on timeout like curses does."""

    def __init__(self, keys=(), codes=()):
        self.keys = list(keys)
        self.codes = list(codes)

    def get_wch(self):
        if not self.keys:
            raise curses.error("no input")
        return self.keys.pop(0)

    def getch(self):
        return self.codes.pop(0) if self.codes else -1


def type_command(engine, text, submit=True):
    for ch in text:
        engine.apply(RawKey(ord(ch)))
    if submit:
        engine.apply(RawKey(10))


def make_engine(columns, numeric=(), clipboard=None, width=80, height=24):
    ds = Dataset.from_columns("t", columns, numeric=numeric)
    return Engine(ds, width=width, height=height, clipboard=clipboard or FakeClipboard())


class EngineTableTests(unittest.TestCase):
    def test_initial_model(self):
        engine = make_engine({"a": ["1", "2"], "b": ["x", "y"]})
        model = engine.render_model
        self.assertEqual(model.name, "t")
        self.assertEqual(model.mode, "table")
        self.assertEqual(model.nrows, 2)
        self.assertEqual([c.name for c in model.columns], ["a", "b"])
        self.assertIsNone(model.index)
        self.assertEqual(model.layout.table_width, 79)

    def test_moves_update_model(self):
        engine = make_engine({"a": [str(i) for i in range(50)], "b": ["x"] * 50})
        engine.apply(msg.MOVE_DOWN)
        engine.apply(msg.MOVE_RIGHT)
        model = engine.render_model
        self.assertEqual(model.abs_selected_row, 1)
        self.assertEqual(model.selected_column, 1)

        engine.apply(msg.MOVE_PAGE_DOWN)
        self.assertEqual(engine.render_model.abs_selected_row, 21)

        engine.apply(msg.MOVE_END)
        self.assertEqual(engine.render_model.abs_selected_row, 49)
        engine.apply(msg.MOVE_BEGINNING)
        self.assertEqual(engine.render_model.abs_selected_row, 0)

    def test_first_and_last_column(self):
        engine = make_engine({f"c{i}": ["v"] for i in range(30)})
        engine.apply(msg.MOVE_TO_LAST_COLUMN)
        self.assertEqual(engine.render_model.abs_selected_column, 29)
        engine.apply(msg.MOVE_TO_FIRST_COLUMN)
        self.assertEqual(engine.render_model.abs_selected_column, 0)

    def test_toggle_index_changes_layout(self):
        engine = make_engine({"a": ["1", "2"]})
        engine.apply(msg.TOGGLE_INDEX)
        model = engine.render_model
        self.assertIsNotNone(model.index)
        self.assertEqual(model.index.data, ("1", "2"))
        self.assertEqual(model.layout.index_width, 3)
        self.assertEqual(model.layout.table_width, 80 - 1 - 5)

        engine.apply(msg.TOGGLE_INDEX)
        self.assertIsNone(engine.render_model.index)

    def test_column_toggles_twice_restore_width(self):
        engine = make_engine({"long": ["x" * 60]})
        original = engine.render_model.columns[0].width
        self.assertEqual(original, 40)

        engine.apply(msg.TOGGLE_COLUMN_STATE)
        self.assertEqual(engine.render_model.columns[0].width, 3)
        engine.apply(msg.TOGGLE_COLUMN_STATE)
        self.assertEqual(engine.render_model.columns[0].width, original)

        engine.apply(msg.TOGGLE_EXPAND_COLUMN_STATE)
        self.assertEqual(engine.render_model.columns[0].width, 62)
        engine.apply(msg.TOGGLE_EXPAND_COLUMN_STATE)
        self.assertEqual(engine.render_model.columns[0].width, original)

    def test_resize_updates_layout(self):
        engine = make_engine({"a": ["1"]})
        engine.apply(Resize(100, 30))
        layout = engine.render_model.layout
        self.assertEqual(layout.width, 100)
        self.assertEqual(layout.table_height, 28)


class EngineSearchTests(unittest.TestCase):
    def _engine(self):
        values = ["x"] * 12
        for row in (2, 5, 9):
            values[row] = "hit"
        return make_engine({"k": values})

    def test_search_starts_at_cursor_and_wraps(self):
        engine = self._engine()
        for _ in range(6):
            engine.apply(msg.MOVE_DOWN)

        engine.apply(msg.SEARCH)
        self.assertTrue(engine.raw_keyevents())
        self.assertEqual(engine.render_model.mode, "command_input")
        type_command(engine, "hit")

        model = engine.render_model
        self.assertFalse(engine.raw_keyevents())
        self.assertEqual(model.mode, "table")
        self.assertEqual(model.abs_selected_row, 9)
        self.assertEqual(model.status_message, "Found 3 results")

        engine.apply(msg.SEARCH_NEXT)
        self.assertEqual(engine.render_model.abs_selected_row, 2)
        self.assertEqual(engine.render_model.status_message, "Search result 1/3")

        engine.apply(msg.SEARCH_PREV)
        self.assertEqual(engine.render_model.abs_selected_row, 9)

    def test_search_without_matches(self):
        engine = self._engine()
        engine.apply(msg.MOVE_DOWN)
        engine.apply(msg.SEARCH)
        type_command(engine, "nothing")
        self.assertEqual(engine.render_model.status_message, "Found no matches!")
        self.assertEqual(engine.render_model.abs_selected_row, 1)
        self.assertEqual(engine.table.search_results, [])

    def test_search_in_column_only_scans_current_column(self):
        engine = make_engine({"a": ["hit", "x"], "b": ["x", "hit"]})
        engine.apply(msg.SEARCH_IN_COLUMN)
        type_command(engine, "hit")
        self.assertEqual(engine.table.search_results, [(0, 0)])

    def test_escape_cancels_command(self):
        engine = self._engine()
        engine.apply(msg.SEARCH)
        type_command(engine, "hit", submit=False)
        self.assertEqual(engine.render_model.cmd_text, "hit")
        engine.apply(RawKey(27))
        self.assertEqual(engine.render_model.mode, "table")
        self.assertEqual(engine.table.search_results, [])

    def test_navigation_messages_ignored_during_command_input(self):
        engine = self._engine()
        engine.apply(msg.SEARCH)
        engine.apply(msg.MOVE_DOWN)
        self.assertEqual(engine.table.abs_row, 0)
        self.assertTrue(engine.raw_keyevents())


class EngineFilterTests(unittest.TestCase):
    def test_filter_pushes_child_and_exit_restores_parent(self):
        engine = make_engine({"city": ["berlin", "paris", "bern", "rome"]})
        root_rows = engine.table.rows.copy()

        engine.apply(msg.FILTER)
        type_command(engine, "ber")
        self.assertEqual(len(engine.stack), 2)
        self.assertEqual(engine.table.rows.tolist(), [0, 2])
        self.assertEqual(engine.render_model.name, "F[t]")
        self.assertEqual(engine.render_model.columns[0].data, ("berlin", "bern"))

        engine.apply(msg.EXIT)
        self.assertEqual(len(engine.stack), 1)
        self.assertEqual(engine.table.rows.tolist(), root_rows.tolist())

        # the root view is never popped
        engine.apply(msg.EXIT)
        self.assertEqual(len(engine.stack), 1)

    def test_filter_without_matches_pushes_nothing(self):
        engine = make_engine({"city": ["berlin", "paris"]})
        engine.apply(msg.FILTER)
        type_command(engine, "zzz")
        self.assertEqual(len(engine.stack), 1)
        self.assertEqual(engine.render_model.status_message, "Filter matched no rows")

    def test_filter_of_filter_composes(self):
        engine = make_engine({"city": ["berlin", "paris", "bern", "rome", "bergen"]})
        engine.apply(msg.FILTER)
        type_command(engine, "ber")
        engine.apply(msg.FILTER)
        type_command(engine, "n")
        self.assertEqual(engine.table.name, "F[F[t]]")
        self.assertEqual(engine.table.rows.tolist(), [0, 2, 4])


class EngineSortTests(unittest.TestCase):
    def test_sort_reorders_active_view_only(self):
        engine = make_engine({"n": ["10", "abc", "2"]}, numeric=("n",))
        engine.apply(msg.SORT_ASCENDING)
        self.assertEqual(engine.render_model.columns[0].data, ("2", "10", "abc"))

        engine.apply(msg.SORT_DESCENDING)
        self.assertEqual(engine.render_model.columns[0].data, ("10", "2", "abc"))

    def test_sort_clears_search_results(self):
        engine = make_engine({"a": ["b", "a", "b"]})
        engine.apply(msg.SEARCH)
        type_command(engine, "b")
        self.assertTrue(engine.table.search_results)
        engine.apply(msg.SORT_ASCENDING)
        self.assertEqual(engine.table.search_results, [])

    def test_sort_leaves_parent_view_untouched(self):
        engine = make_engine({"a": ["c", "a", "b", "a"]})
        engine.apply(msg.FILTER)
        type_command(engine, "a")
        engine.apply(msg.SORT_DESCENDING)
        engine.apply(msg.EXIT)
        self.assertEqual(engine.table.rows.tolist(), [0, 1, 2, 3])


class EngineSubviewTests(unittest.TestCase):
    def test_enter_shows_record_and_exit_returns(self):
        engine = make_engine({"id": ["1", "2", "3"], "name": ["a", "b", "c"]})
        engine.apply(msg.TOGGLE_INDEX)
        engine.apply(msg.MOVE_DOWN)
        engine.apply(msg.ENTER)

        model = engine.render_model
        self.assertEqual(model.mode, "record")
        self.assertEqual(model.name, "R[t]")
        self.assertIsNone(model.index)
        self.assertFalse(engine.table.show_index)
        self.assertEqual(model.columns[1].data, ("2", "b"))
        self.assertEqual(model.abs_selected_row, 1)
        self.assertEqual(model.selected_column, 1)

        engine.apply(msg.MOVE_RIGHT)
        self.assertEqual(engine.render_model.columns[1].data, ("3", "c"))
        engine.apply(msg.MOVE_RIGHT)
        self.assertEqual(engine.render_model.abs_selected_row, 2)

        engine.apply(msg.EXIT)
        self.assertEqual(engine.render_model.mode, "table")

    def test_record_copy_cell_copies_selected_value(self):
        clip = FakeClipboard()
        engine = make_engine({"id": ["1"], "name": ["a b"]}, clipboard=clip)
        engine.apply(msg.ENTER)
        engine.apply(msg.MOVE_DOWN)
        engine.apply(msg.COPY_CELL)
        self.assertEqual(clip.calls[-1][0], "a b")

    def test_histogram_enter_filters_by_equal_value(self):
        engine = make_engine({"v": ["a", "b", "aa", "a"]})
        engine.apply(msg.HISTOGRAM)

        model = engine.render_model
        self.assertEqual(model.mode, "histogram")
        self.assertEqual(model.name, "H[t]")
        self.assertEqual(model.columns[1].data, ("a", "b", "aa"))
        self.assertEqual(model.columns[0].data[0], "50% 2")

        engine.apply(msg.ENTER)
        self.assertEqual(engine.render_model.mode, "table")
        self.assertEqual(engine.table.name, "F[t]")
        self.assertEqual(engine.table.rows.tolist(), [0, 3])

    def test_histogram_total_matches_view_rows(self):
        engine = make_engine({"v": ["a", "b", "a", "c", "a"]})
        engine.apply(msg.HISTOGRAM)
        counts, _ = engine.table.column_histograms[0]
        self.assertEqual(sum(counts), engine.table.nrows)
        engine.apply(msg.EXIT)
        self.assertEqual(engine.render_model.mode, "table")

    def test_help_popup_restores_previous_mode(self):
        engine = make_engine({"a": ["1", "2"]})
        engine.apply(msg.ENTER)
        engine.apply(msg.HELP)

        model = engine.render_model
        self.assertEqual(model.mode, "popup")
        self.assertTrue(model.show_popup)
        self.assertEqual(model.popup_message, HELP_TEXT)

        engine.apply(msg.MOVE_DOWN)
        self.assertEqual(engine.render_model.mode, "popup")

        engine.apply(msg.EXIT)
        self.assertEqual(engine.render_model.mode, "record")
        self.assertFalse(engine.render_model.show_popup)


class EngineCommandTests(unittest.TestCase):
    def _engine(self):
        return make_engine({"a": [str(i) for i in range(10)]})

    def test_row_number_jumps(self):
        engine = self._engine()
        engine.apply(msg.ENTER_COMMAND)
        type_command(engine, "4")
        self.assertEqual(engine.render_model.abs_selected_row, 3)

    def test_index_command_toggles_index(self):
        engine = self._engine()
        engine.apply(msg.ENTER_COMMAND)
        type_command(engine, "index")
        self.assertIsNotNone(engine.render_model.index)

    def test_unknown_command(self):
        engine = self._engine()
        engine.apply(msg.ENTER_COMMAND)
        type_command(engine, "bogus")
        self.assertEqual(engine.render_model.status_message, "Unknown command: bogus")

    def test_quit_command(self):
        engine = self._engine()
        engine.apply(msg.ENTER_COMMAND)
        type_command(engine, "q")
        self.assertTrue(engine.quitting)


class EngineLifecycleTests(unittest.TestCase):
    def test_quit_stops_processing(self):
        engine = make_engine({"a": ["1", "2"]})
        engine.apply(msg.QUIT)
        self.assertTrue(engine.quitting)
        model = engine.render_model
        engine.apply(msg.MOVE_DOWN)
        self.assertIs(engine.render_model, model)

    def test_quit_works_during_command_input(self):
        engine = make_engine({"a": ["1"]})
        engine.apply(msg.SEARCH)
        engine.apply(msg.QUIT)
        self.assertTrue(engine.quitting)

    def test_copy_cell_and_row(self):
        clip = FakeClipboard()
        engine = make_engine({"a": ["1"], "b": ["two words"]}, clipboard=clip)
        engine.apply(msg.COPY_CELL)
        engine.apply(msg.COPY_ROW)
        self.assertEqual([c[0] for c in clip.calls], ["1", '1,"two words"'])
        self.assertEqual(engine.render_model.status_message, "Row copied")

    def test_copy_failure_sets_status(self):
        engine = make_engine({"a": ["1"]}, clipboard=FakeClipboard(ok=False))
        engine.apply(msg.COPY_CELL)
        self.assertEqual(engine.render_model.status_message, "Copy failed")

    def test_indexing_error_keeps_session_alive(self):
        engine = make_engine({"a": ["1"]})

        def broken_cell(row, col):
            raise DataIndexingError("Unknown row index 7")

        engine.dataset.cell = broken_cell
        engine.apply(msg.COPY_CELL)
        self.assertFalse(engine.quitting)
        self.assertTrue(engine.render_model.status_message.startswith("Error:"))

    def test_model_timestamp_advances(self):
        engine = make_engine({"a": ["1", "2"]})
        before = engine.render_model.last_update
        engine.apply(msg.MOVE_DOWN)
        self.assertGreaterEqual(engine.render_model.last_update, before)


class KeyBindingTests(unittest.TestCase):
    def test_ctrl_c_always_quits(self):
        self.assertEqual(map_key(3), msg.QUIT)
        self.assertEqual(map_key(3, raw=True), msg.QUIT)

    def test_raw_mode_passes_keys_through(self):
        self.assertEqual(map_key(ord("j"), raw=True), RawKey(ord("j")))
        self.assertEqual(map_key(ord("j")), msg.MOVE_DOWN)

    def test_no_key(self):
        self.assertIsNone(map_key(-1))
        self.assertIsNone(map_key(ord("Z")))

    def test_control_characters_from_get_wch_become_codes(self):
        self.assertEqual(map_key("\x03", raw=True), msg.QUIT)
        self.assertEqual(map_key("\n", raw=True), RawKey(10))
        self.assertEqual(map_key("\x1b", raw=True), RawKey(27))
        self.assertEqual(map_key("ü", raw=True), RawKey("ü"))

    def test_read_key_uses_whole_characters_in_raw_mode(self):
        screen = FakeScreen(keys=["ü"], codes=[ord("j")])
        self.assertEqual(read_key(screen, raw=True), "ü")
        self.assertEqual(read_key(screen, raw=False), ord("j"))

    def test_read_key_timeout_in_raw_mode(self):
        self.assertEqual(read_key(FakeScreen(), raw=True), -1)


class UnicodeInputTests(unittest.TestCase):
    def _type(self, engine, text):
        for ch in text:
            engine.apply(map_key(ch, raw=True))

    def test_non_ascii_character_reaches_command_text(self):
        engine = make_engine({"a": ["x"]})
        engine.apply(msg.SEARCH)
        self._type(engine, "ü")
        self.assertEqual(engine.render_model.cmd_text, "ü")
        self.assertEqual(engine.render_model.cmd_cursor, 1)

    def test_search_for_non_ascii_text(self):
        engine = make_engine({"city": ["Bern", "Zürich", "Basel"]})
        engine.apply(msg.SEARCH)
        self._type(engine, "Zürich\n")
        self.assertEqual(engine.render_model.abs_selected_row, 1)
        self.assertEqual(engine.render_model.status_message, "Found 1 results")

    def test_filter_on_null_placeholder(self):
        engine = make_engine({"v": ["1", "∅", "2"]})
        engine.apply(msg.FILTER)
        self._type(engine, "∅\n")
        self.assertEqual(engine.table.rows.tolist(), [1])


if __name__ == "__main__":
    unittest.main()
