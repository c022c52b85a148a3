from __future__ import annotations

import unicodedata
from typing import Callable, Dict, List, Literal, Sequence, Tuple

from core.data import JudgeRecord

SortPolicy = Literal["approvalHigh", "approvalLow", "casesHigh", "casesLow", "alpha"]

DEFAULT_SORT: SortPolicy = "approvalHigh"


def collation_key(name: str) -> str:
    """Accent- and case-insensitive ordering key; equal keys keep input order."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold()


# policy -> (key, descending)
SORT_POLICIES: Dict[str, Tuple[Callable[[JudgeRecord], object], bool]] = {
    "approvalHigh": (lambda r: r.granted_asylum_rate, True),
    "approvalLow": (lambda r: r.granted_asylum_rate, False),
    "casesHigh": (lambda r: r.total_decisions, True),
    "casesLow": (lambda r: r.total_decisions, False),
    "alpha": (lambda r: collation_key(r.judge_name), False),
}


def sort_judges(records: Sequence[JudgeRecord], policy: str) -> List[JudgeRecord]:
    """Return ``records`` ordered by ``policy`` as a new list.

    Ties keep their input order. Unknown policies leave the order untouched.
    """
    entry = SORT_POLICIES.get(policy)
    if entry is None:
        return list(records)
    key, descending = entry
    return sorted(records, key=key, reverse=descending)
