from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import unquote

import pandas as pd


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
DATA_FILE = DATA_DIR / "judge_grant_rates.json"

DEFAULT_CITY = "San Francisco"

RawRate = Union[float, int, str, None]

RECORD_COLUMNS = {
    "city": "city_name",
    "judge_name": "judge_name",
    "denied_percentage": "denied_rate",
    "granted_asylum_percentage": "granted_asylum_rate",
    "granted_other_relief_percentage": "granted_other_relief_rate",
    "total_decisions": "total_decisions",
}


@dataclass(frozen=True)
class JudgeRecord:
    """One adjudicator as stored in the lookup table.

    Rates are kept exactly as they arrive (numbers or strings like ``"43%"``);
    see ``core.percentages.normalize_record`` for the numeric form.
    """

    city_name: str
    judge_name: str
    denied_rate: RawRate
    granted_asylum_rate: RawRate
    granted_other_relief_rate: RawRate
    total_decisions: int


@dataclass(frozen=True)
class CityLookup:
    city_name: str
    records: Tuple[JudgeRecord, ...] = ()
    found: bool = True


@dataclass(frozen=True)
class JudgeLookup:
    query: str
    record: Optional[JudgeRecord] = None

    @property
    def found(self) -> bool:
        return self.record is not None


JudgeTable = Dict[str, Dict[str, JudgeRecord]]


def file_signature(path: Path) -> Tuple[str, float]:
    return (str(path), path.stat().st_mtime)


def _record_from_raw(city: str, key: str, raw: Dict[str, Any]) -> JudgeRecord:
    values = {RECORD_COLUMNS[k]: v for k, v in raw.items() if k in RECORD_COLUMNS}
    total = values.get("total_decisions", 0)
    try:
        total = int(total)
    except (TypeError, ValueError):
        total = 0
    return JudgeRecord(
        city_name=str(values.get("city_name") or city),
        judge_name=str(values.get("judge_name") or key),
        denied_rate=values.get("denied_rate"),
        granted_asylum_rate=values.get("granted_asylum_rate"),
        granted_other_relief_rate=values.get("granted_other_relief_rate"),
        total_decisions=total,
    )


def table_from_mapping(raw: Dict[str, Dict[str, Dict[str, Any]]]) -> JudgeTable:
    table: JudgeTable = {}
    for city, judges in raw.items():
        table[str(city)] = {str(key): _record_from_raw(str(city), str(key), rec) for key, rec in (judges or {}).items()}
    return table


@lru_cache(maxsize=4)
def _load_table_cached(signature: Tuple[str, float]) -> JudgeTable:
    path = Path(signature[0])
    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    table = table_from_mapping(raw)
    logger.info("Loaded %d judges across %d cities from %s", sum(len(j) for j in table.values()), len(table), path.name)
    return table


def load_judge_table(path: Optional[Path] = None) -> JudgeTable:
    """Load the city -> judge -> record table, cached per file signature."""
    return _load_table_cached(file_signature(Path(path) if path else DATA_FILE))


def list_cities(table: JudgeTable) -> List[str]:
    return sorted(table.keys())


def clean_name(value: Optional[str]) -> str:
    """URL-decode and trim a routed city/judge name."""
    if value is None:
        return ""
    return unquote(str(value)).strip()


def lookup_city(table: JudgeTable, city: Optional[str]) -> CityLookup:
    name = clean_name(city) or DEFAULT_CITY
    judges = table.get(name)
    if judges is None:
        folded = {k.casefold(): k for k in table}
        match = folded.get(name.casefold())
        if match is None:
            return CityLookup(city_name=name, found=False)
        name, judges = match, table[match]
    return CityLookup(city_name=name, records=tuple(judges.values()))


def find_judge(table: JudgeTable, judge_name: Optional[str]) -> JudgeLookup:
    query = clean_name(judge_name)
    if not query:
        return JudgeLookup(query=query)
    target = query.casefold()
    for judges in table.values():
        for record in judges.values():
            if record.judge_name.casefold() == target:
                return JudgeLookup(query=query, record=record)
    return JudgeLookup(query=query)


def all_records(table: JudgeTable) -> List[JudgeRecord]:
    return [record for judges in table.values() for record in judges.values()]


def records_frame(records) -> pd.DataFrame:
    """Records (raw or normalized) as a DataFrame with one row per judge."""
    columns = list(RECORD_COLUMNS.values())
    rows = [{c: getattr(r, c) for c in columns} for r in records]
    return pd.DataFrame(rows, columns=columns)


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    if isinstance(value, float) and math.isinf(value):
        return value
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))
