from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from core.data import JudgeRecord, records_frame, round_half_up


RATE_COLUMNS = {
    "asylum": "granted_asylum_rate",
    "other_relief": "granted_other_relief_rate",
    "denied": "denied_rate",
}


@dataclass(frozen=True)
class CityAggregate:
    total_cases: int = 0
    avg_asylum_rate: float = 0.0
    avg_other_relief_rate: float = 0.0
    avg_denied_rate: float = 0.0
    asylum_granted_amount: int = 0
    other_relief_granted_amount: int = 0
    denied_amount: int = 0


@dataclass(frozen=True)
class JudgeBreakdown:
    total_decisions: int = 0
    asylum_granted_amount: int = 0
    other_relief_granted_amount: int = 0
    denied_amount: int = 0

    @property
    def granted_total(self) -> int:
        return self.asylum_granted_amount + self.other_relief_granted_amount


def cases_from_rate(total: float, rate: float) -> int:
    """Absolute count for ``rate`` percent of ``total``, ties rounded up."""
    value = round_half_up(total * rate / 100)
    if value is None or math.isinf(value):
        return 0
    return int(value)


def _mean(df: pd.DataFrame, col: str) -> float:
    if df.empty:
        return 0.0
    return float(pd.to_numeric(df[col], errors="coerce").fillna(0).mean())


def aggregate(records: Iterable[JudgeRecord]) -> CityAggregate:
    """City-level summary from normalized judge records.

    Averages are unweighted means of the per-judge rates; each absolute count
    is rounded on its own, so the three counts need not add up to
    ``total_cases``.
    """
    df = records_frame(records)
    if df.empty:
        return CityAggregate()

    total_cases = int(pd.to_numeric(df["total_decisions"], errors="coerce").fillna(0).sum())
    avg_asylum = _mean(df, RATE_COLUMNS["asylum"])
    avg_other = _mean(df, RATE_COLUMNS["other_relief"])
    avg_denied = _mean(df, RATE_COLUMNS["denied"])
    return CityAggregate(
        total_cases=total_cases,
        avg_asylum_rate=avg_asylum,
        avg_other_relief_rate=avg_other,
        avg_denied_rate=avg_denied,
        asylum_granted_amount=cases_from_rate(total_cases, avg_asylum),
        other_relief_granted_amount=cases_from_rate(total_cases, avg_other),
        denied_amount=cases_from_rate(total_cases, avg_denied),
    )


def judge_breakdown(record: JudgeRecord) -> JudgeBreakdown:
    total = int(record.total_decisions)
    return JudgeBreakdown(
        total_decisions=total,
        asylum_granted_amount=cases_from_rate(total, float(record.granted_asylum_rate)),
        other_relief_granted_amount=cases_from_rate(total, float(record.granted_other_relief_rate)),
        denied_amount=cases_from_rate(total, float(record.denied_rate)),
    )
