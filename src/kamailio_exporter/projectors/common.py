"""
Shared helpers for projectors.
"""

from __future__ import annotations

import logging
from typing import Iterator, Tuple

from kamailio_exporter.domain.exceptions import FieldDecodeError
from kamailio_exporter.domain.value_objects import DecodedField

logger = logging.getLogger(__name__)


def numeric_fields(root: DecodedField) -> Iterator[Tuple[str, float]]:
    """
    Yield (key, value) for each top-level field that coerces to a number.

    Best-effort: a field that does not coerce is skipped, not fatal.
    """
    for child in root.children():
        try:
            value = child.as_number()
        except FieldDecodeError as e:
            logger.debug(f"Skipping field: {e}")
            continue
        yield child.key, value


def optional_text(group: DecodedField, key: str) -> str:
    """Text of a child field, or "" when missing or not text."""
    child = group.find(key)
    if child is None:
        return ""
    try:
        return child.as_text()
    except FieldDecodeError as e:
        logger.debug(f"Skipping field: {e}")
        return ""
