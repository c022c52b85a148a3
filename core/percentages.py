from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Iterable, List

from core.data import JudgeRecord, RawRate


logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def normalize_percentage(raw: RawRate) -> float:
    """Coerce a stored rate (``43``, ``"43%"``, ``" 12.5 % "``) to a number.

    Anything that cannot be read degrades to ``0``; nothing is raised.
    """
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return raw
    if not raw:
        return 0
    cleaned = _NON_NUMERIC.sub("", str(raw))
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        logger.debug("Unparseable rate %r treated as 0", raw)
        return 0
    return float(match.group(0))


def _as_decisions(value: object) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0


def normalize_record(record: JudgeRecord) -> JudgeRecord:
    return replace(
        record,
        denied_rate=normalize_percentage(record.denied_rate),
        granted_asylum_rate=normalize_percentage(record.granted_asylum_rate),
        granted_other_relief_rate=normalize_percentage(record.granted_other_relief_rate),
        total_decisions=_as_decisions(record.total_decisions),
    )


def normalize_records(records: Iterable[JudgeRecord]) -> List[JudgeRecord]:
    return [normalize_record(r) for r in records]
