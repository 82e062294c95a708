"""Column mapping functions for vendor order sheets."""

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from functools import lru_cache
from typing import Literal

from .constants import CANONICAL_FIELDS, COLUMN_ALIASES, CURRENCY_SYMBOLS, FUZZY_MATCH_THRESHOLD
from .pricing import parse_leading_float

logger = logging.getLogger(__name__)

ColumnRole = Literal["qty", "cost", "text"]

_SEPARATORS = re.compile(r"[_\-./\\]")
_QUOTES_AND_BRACKETS = re.compile(r"[\'\"()\[\]{}]")
_WHITESPACE = re.compile(r"\s+")
_CURRENCY_NOISE = re.compile(rf"[,{re.escape(CURRENCY_SYMBOLS)}]")


def normalize_header(header: str) -> str:
    """Normalize header text for comparison.

    Lowercases, turns ``_ - . / \\`` into spaces, drops quotes and brackets
    and collapses whitespace.
    """
    text = header.lower().strip()
    text = _SEPARATORS.sub(" ", text)
    text = _QUOTES_AND_BRACKETS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


# Normalized once at import; field order follows CANONICAL_FIELDS
_NORMALIZED_ALIASES: tuple[tuple[str, tuple[str, ...]], ...] = tuple(
    (field, tuple(normalize_header(alias) for alias in COLUMN_ALIASES[field]))
    for field in CANONICAL_FIELDS
)


def _normalized_similarity(s1: str, s2: str) -> float:
    if s1 == s2:
        return 1.0
    if s1 in s2 or s2 in s1:
        return 0.9
    words1 = s1.split(" ")
    words2 = s2.split(" ")
    common = sum(1 for word in words1 if word in words2)
    if common > 0:
        return 0.5 + (common / max(len(words1), len(words2))) * 0.4
    return 0.0


def similarity(first: str, second: str) -> float:
    """Score how alike two header strings are, from 0 to 1.

    Args:
        first: Header or alias text.
        second: Header or alias text.

    Returns:
        1.0 for equal text, 0.9 when one contains the other, a word-overlap
        score between 0.5 and 0.9 when they share words, otherwise 0.
    """
    return _normalized_similarity(normalize_header(first), normalize_header(second))


@lru_cache(maxsize=4096)
def map_column(header: str) -> str | None:
    """Map a spreadsheet header onto a canonical line item field.

    Exact alias matches win outright. Otherwise every alias is scored with
    ``similarity`` and the best field is accepted at 0.8 or above. Equal
    scores keep the field that comes first in CANONICAL_FIELDS.

    Args:
        header: Raw header cell text.

    Returns:
        The canonical field name, or None when nothing matches.
    """
    normalized = normalize_header(header)
    if not normalized:
        return None

    for field, aliases in _NORMALIZED_ALIASES:
        if normalized in aliases:
            return field

    best_field: str | None = None
    best_score = 0.0
    for field, aliases in _NORMALIZED_ALIASES:
        for alias in aliases:
            score = _normalized_similarity(alias, normalized)
            if score >= FUZZY_MATCH_THRESHOLD and score > best_score:
                best_field = field
                best_score = score

    if best_field is not None:
        logger.debug("Fuzzy matched header '%s' -> %s (%.2f)", header, best_field, best_score)
    return best_field


def suggest_column_mapping(headers: Iterable[str]) -> dict[str, str | None]:
    """Suggest a canonical field for each header.

    Args:
        headers: Column header names from the spreadsheet.

    Returns:
        Dict mapping header name -> canonical field, or None when unmapped.
    """
    return {header: map_column(header) for header in headers}


def infer_column_type(values: Sequence[str]) -> ColumnRole | None:
    """Guess whether an unmapped column holds quantities or costs.

    Args:
        values: The column's non-empty cell values.

    Returns:
        "text" when fewer than half the values are positive numbers,
        "qty" for whole numbers averaging between 0.5 and 10000,
        "cost" for decimals or values averaging between 1 and 100000,
        otherwise None.
    """
    numbers: list[float] = []
    for value in values:
        parsed = parse_leading_float(_CURRENCY_NOISE.sub("", str(value)))
        if parsed is not None and parsed > 0:
            numbers.append(parsed)

    if len(numbers) < len(values) * 0.5:
        return "text"
    if not numbers:
        return None

    average = sum(numbers) / len(numbers)
    has_decimals = any(n % 1 != 0 for n in numbers)

    if not has_decimals and 0.5 < average < 10000:
        return "qty"
    if has_decimals or 1 < average < 100000:
        return "cost"
    return None


def infer_numeric_columns(
    headers: Sequence[str],
    rows: Sequence[Mapping[str, str]],
) -> list[tuple[str, Literal["qty", "cost"]]]:
    """Find unmapped columns that look like quantities or costs.

    Args:
        headers: Row keys in column order.
        rows: Raw rows keyed by header.

    Returns:
        (header, role) pairs in column order, role being "qty" or "cost".
    """
    inferred: list[tuple[str, Literal["qty", "cost"]]] = []
    for header in headers:
        if map_column(header):
            continue
        values = [row[header] for row in rows if row.get(header)]
        role = infer_column_type(values)
        if role == "qty" or role == "cost":
            inferred.append((header, role))

    if inferred:
        logger.debug("Inferred numeric columns: %s", inferred)
    return inferred
