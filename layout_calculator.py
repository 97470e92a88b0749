import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

INDEX_COLUMN_BORDER = 2
SCROLLBAR_WIDTH = 1
TABLE_HEADER_HEIGHT = 1
STATUSLINE_HEIGHT = 1


@dataclass(frozen=True)
class Layout:
    width: int = 0
    height: int = 0
    table_width: int = 1
    table_height: int = 1
    index_width: int = 0
    index_height: int = 0
    statusline_width: int = 0
    statusline_height: int = STATUSLINE_HEIGHT


def compute_layout(width, height, show_index=False, index_width=0) -> Layout:
    """Split the terminal into table, index and status line regions.

    Table width loses the scrollbar column and, when the index is shown, the
    index column plus its border. Table height loses the header row and the
    status line. Both are kept at least 1 so tiny terminals still have a
    valid window.
    """
    width = max(0, int(width))
    height = max(0, int(height))
    index_width = index_width if show_index else 0
    index_area = index_width + INDEX_COLUMN_BORDER if show_index else 0

    table_width = max(1, width - SCROLLBAR_WIDTH - index_area)
    table_height = max(1, height - TABLE_HEADER_HEIGHT - STATUSLINE_HEIGHT)

    layout = Layout(
        width=width,
        height=height,
        table_width=table_width,
        table_height=table_height,
        index_width=index_width,
        index_height=table_height,
        statusline_width=width,
        statusline_height=STATUSLINE_HEIGHT,
    )
    logger.debug("Build layout: %s", layout)
    return layout
