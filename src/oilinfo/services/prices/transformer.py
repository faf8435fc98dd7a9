"""Normalize the provider price list into CurrentPrices.

The provider returns one record per product::

    {"Data": [{"NameEN": "...", "NameTH": "...", "Today": "38.42", "Diff": "-0.20"}],
     "LastUpdate": "..."}

Each grade is looked up through its alias list in GRADE_ALIASES. For every
alias in order, records are scanned in order and the first record whose
English or Thai name contains the alias (case-insensitive) wins.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from oilinfo.clients.exceptions import SchemaError
from oilinfo.observability.logging import get_logger
from oilinfo.schemas.prices import CurrentPrices, PriceQuote
from oilinfo.services.prices.constants import GRADE_ALIASES


logger = get_logger(__name__)


# Leading decimal number of a string, e.g. "38.42 THB"
_NUMBER_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _to_float(value: Any) -> float:
    """Parse a provider number. Anything unparseable becomes 0.

    Strings are read up to the first character that cannot continue a
    number, so ``"38.42฿"`` is 38.42 and ``"1,000.5"`` is 1.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if match is None:
            return 0.0
        number = float(match.group())
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _matches(record: Mapping[str, Any], alias: str) -> bool:
    needle = alias.casefold()
    for field in ("NameEN", "NameTH"):
        name = record.get(field)
        if isinstance(name, str) and needle in name.casefold():
            return True
    return False


def find_record(
    records: list[Mapping[str, Any]],
    aliases: tuple[str, ...],
) -> Mapping[str, Any] | None:
    """Return the first record matching the first alias that matches anything."""
    for alias in aliases:
        for record in records:
            if _matches(record, alias):
                return record
    return None


def transform_provider_payload(
    payload: Any,
    now: datetime | None = None,
) -> CurrentPrices:
    """Map a provider payload onto every tracked grade.

    Args:
        payload: Decoded provider JSON.
        now: Used for ``updated_at`` when the payload has no LastUpdate.

    Returns:
        CurrentPrices with unmatched grades set to zero.

    Raises:
        SchemaError: If the payload is not a mapping with a ``Data`` list.
    """
    if not isinstance(payload, Mapping):
        msg = f"Expected a JSON object, got {type(payload).__name__}"
        raise SchemaError(msg)

    data = payload.get("Data")
    if not isinstance(data, list):
        msg = "Provider payload has no 'Data' list"
        raise SchemaError(msg)

    records = [record for record in data if isinstance(record, Mapping)]
    if len(records) != len(data):
        logger.debug("Skipped non-object records", skipped=len(data) - len(records))

    quotes: dict[str, PriceQuote] = {}
    unmatched: list[str] = []
    for grade, aliases in GRADE_ALIASES:
        record = find_record(records, aliases)
        if record is None:
            unmatched.append(grade)
            quotes[grade] = PriceQuote(price=0.0, change=0.0)
            continue
        quotes[grade] = PriceQuote(
            price=_to_float(record.get("Today")),
            change=_to_float(record.get("Diff")),
        )

    if unmatched:
        logger.warning("Grades missing from provider payload", grades=unmatched)

    last_update = payload.get("LastUpdate")
    if last_update:
        updated_at = str(last_update)
    else:
        updated_at = (now or datetime.now(UTC)).isoformat()

    return CurrentPrices(**quotes, updated_at=updated_at)
