import sys
import os
import curses
import logging

from config_paths import LOG_PATH, ensure_config_dirs, load_config
from engine import Engine
from file_type_handler import FileTypeHandler
from viewer_errors import TvError

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")
from orchestrator import Orchestrator
from loading_screen import LoadingScreen, LoadState

from _version import __version__

logger = logging.getLogger(__name__)

USAGE = (
    "tview - terminal viewer for csv, parquet, arrow and xlsx files\n\n"
    "Usage:\n  tview <path>\n  tview -v\n  tview -h\n"
)


def _configure_logging(level_name):
    level_name = os.environ.get("TVIEW_LOG_LEVEL", level_name).upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    try:
        ensure_config_dirs()
        logging.basicConfig(
            filename=LOG_PATH,
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    except OSError:
        # no writable config dir; never log to the terminal curses owns
        logging.basicConfig(level=level, handlers=[logging.NullHandler()])


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    if "-v" in args or "-V" in args:
        print(__version__)
        return 0

    if "-h" in args or "--help" in args:
        print(USAGE)
        return 0

    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 1

    config = load_config()
    _configure_logging(config["LOG_LEVEL"])

    path = args[0]
    try:
        handler = FileTypeHandler(path)
    except TvError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    load_state = LoadState()

    def curses_main(stdscr):
        loader = LoadingScreen(stdscr, handler.load, load_state, label=handler.name)
        loader.run()
        if load_state.aborted or load_state.error is not None:
            return
        h, w = stdscr.getmaxyx()
        engine = Engine(
            load_state.dataset,
            config=config,
            width=w,
            height=h,
            status_message=f"Loaded data in {load_state.elapsed * 1000:.0f}ms ...",
        )
        Orchestrator(stdscr, engine, config).run()

    curses.wrapper(curses_main)

    if load_state.error is not None:
        logger.error("Loading %s failed: %s", path, load_state.error)
        print(f"Error: {load_state.error.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
