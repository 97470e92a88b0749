"""Search, filter and sort over view row mappings.

Every function takes the view's ``rows`` array (view row -> dataset row) and
returns either view-row positions or a fresh read-only row array. Nothing here
touches a TableView; the engine applies the results.
"""

import logging
import math

import numpy as np
import pandas as pd

from dataset import frozen_array

logger = logging.getLogger(__name__)


def _view_values(column, rows) -> pd.Series:
    return pd.Series(column.data[rows], dtype=object)


def search_column(term: str, column, rows) -> list[int]:
    """View-row positions whose display string contains ``term`` (case sensitive)."""
    if len(rows) == 0:
        return []
    mask = _view_values(column, rows).str.contains(term, regex=False)
    return np.flatnonzero(mask.to_numpy(dtype=bool)).tolist()


def search_table(term: str, dataset, rows, column_idx=None) -> list[tuple[int, int]]:
    """All ``(view_row, column)`` hits, sorted by row then column."""
    columns = [column_idx] if column_idx is not None else range(dataset.ncols)
    results = []
    for cidx in columns:
        hits = search_column(term, dataset.column(cidx), rows)
        results.extend((row, cidx) for row in hits)
    results.sort()
    logger.debug("Search for %r found %d matches", term, len(results))
    return results


def first_match_at_or_after(results, row: int) -> int:
    for idx, (match_row, _col) in enumerate(results):
        if match_row >= row:
            return idx
    return 0


def step_search_index(idx: int, total: int, step: int) -> int:
    """Move through ``total`` results by ``step``, wrapping at either end."""
    if total <= 0:
        return 0
    if step >= 0:
        return 0 if idx + step >= total else idx + step
    if idx + step < 0:
        return total - 1
    return idx + step


def resolve_rows(rows, view_matches) -> np.ndarray:
    """Translate view-row matches into dataset rows, keeping their order."""
    matches = np.asarray(view_matches, dtype=np.intp)
    return frozen_array(rows[matches], dtype=np.intp)


def equal_rows(value: str, column, rows) -> list[int]:
    """View-row positions whose display string is exactly ``value``."""
    if len(rows) == 0:
        return []
    mask = _view_values(column, rows) == value
    return np.flatnonzero(mask.to_numpy(dtype=bool)).tolist()


def parse_float(text):
    # underscores and padding are not part of a plain number
    if not isinstance(text, str) or "_" in text or text != text.strip():
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    # NaN has no place in an ordering
    if math.isnan(value):
        return None
    return value


def sort_rows(column, rows, ascending: bool = True) -> np.ndarray:
    """Rows reordered by the column's values.

    Numeric columns put every value that parses as a float first, in numeric
    order, followed by the rest in string order. The parsed group stays first
    for descending sorts too. Ties keep their current order.
    """
    pairs = [(int(r), column.data[r]) for r in rows]

    if column.numeric:
        parsed = []
        unparsed = []
        for row, text in pairs:
            value = parse_float(text)
            if value is None:
                unparsed.append((row, text))
            else:
                parsed.append((row, value))
        parsed.sort(key=lambda p: p[1], reverse=not ascending)
        unparsed.sort(key=lambda p: p[1], reverse=not ascending)
        ordered = [r for r, _ in parsed] + [r for r, _ in unparsed]
    else:
        pairs.sort(key=lambda p: p[1], reverse=not ascending)
        ordered = [r for r, _ in pairs]

    return frozen_array(ordered, dtype=np.intp)
