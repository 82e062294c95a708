"""Header row detection for sheets with title rows or logos above the table."""

import logging
from collections.abc import Sequence

from .constants import HEADER_SCAN_ROWS
from .mapping import map_column
from .pricing import parse_leading_float

logger = logging.getLogger(__name__)


def score_header_candidate(row: Sequence[str]) -> float:
    """Score how much a row looks like a header row.

    Each cell that maps to a canonical field is worth 1 point and each
    non-empty, non-numeric cell a further 0.1.
    """
    score = 0.0
    for cell in row:
        if map_column(cell):
            score += 1
        if cell.strip() and parse_leading_float(cell) is None:
            score += 0.1
    return score


def find_header_row(table: Sequence[Sequence[str]], max_scan_rows: int = HEADER_SCAN_ROWS) -> int:
    """Find the index of the header row in a raw table.

    Only the first ``max_scan_rows`` rows are considered. The highest
    scoring row wins and ties keep the earlier row. When no row scores
    above zero the first row is assumed to be the header.

    Args:
        table: Raw rows of string cells.
        max_scan_rows: How many leading rows to consider.

    Returns:
        Zero-based index of the header row.
    """
    best_index = 0
    best_score = 0.0

    for index, row in enumerate(table[:max_scan_rows]):
        if not row:
            continue
        score = score_header_candidate(row)
        if score > best_score:
            best_index = index
            best_score = score

    logger.debug("Header row detected at index %d (score %.1f)", best_index, best_score)
    return best_index
