from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

from core.aggregate import aggregate, judge_breakdown
from core.charts import ring_chart, to_vega_spec
from core.data import JudgeTable, find_judge, lookup_city
from core.filters import ViewFilters
from core.i18n import messages_for, pluralize_cases
from core.percentages import normalize_record, normalize_records
from core.ring import DEFAULT_SIZE, DEFAULT_STROKE_WIDTH, compute_geometry

JUDGE_RING_COLORS = {
    "asylum": "#6CAF5C",
    "other_relief": "#C5FBA3",
    "denied": "#FF7A7A",
}


def compute_judge_page(judge_name: Optional[str], filters: ViewFilters, table: JudgeTable) -> Dict[str, Any]:
    """Payload for one judge; rings carry the judge's city average as reference mark."""
    msgs = messages_for(filters.language)
    lookup = find_judge(table, judge_name)
    if lookup.record is None:
        return {"filters": asdict(filters), "found": False, "judge": lookup.query, "message": msgs.judge_not_found}

    judge = normalize_record(lookup.record)
    counts = judge_breakdown(judge)
    city_avg = aggregate(normalize_records(lookup_city(table, judge.city_name).records))
    total = counts.total_decisions
    name = judge.judge_name

    dimensions = {
        "asylum": (
            judge.granted_asylum_rate, city_avg.avg_asylum_rate, counts.asylum_granted_amount,
            msgs.asylum_granted, msgs.asylum_granted_info_judge, msgs.judge_asylum_line,
        ),
        "other_relief": (
            judge.granted_other_relief_rate, city_avg.avg_other_relief_rate, counts.other_relief_granted_amount,
            msgs.other_relief_granted, msgs.other_relief_info_judge, msgs.judge_other_relief_line,
        ),
        "denied": (
            judge.denied_rate, city_avg.avg_denied_rate, counts.denied_amount,
            msgs.denied, msgs.denied_info_judge, msgs.judge_denied_line,
        ),
    }
    rings: Dict[str, Any] = {}
    charts: Dict[str, Any] = {}
    for key, (rate, reference, count, title, info, line) in dimensions.items():
        geometry = compute_geometry(
            percentage=rate,
            size=DEFAULT_SIZE,
            stroke_width=DEFAULT_STROKE_WIDTH,
            reference_mark_percentage=reference,
            color=JUDGE_RING_COLORS[key],
            thresholds=filters.thresholds,
        )
        rings[key] = {
            "title": title,
            "info": info,
            "count": count,
            "text": line.format(
                count=count,
                cases=pluralize_cases(msgs, count),
                total=total,
                total_cases=pluralize_cases(msgs, total),
                judge=name,
            ),
            "animate": filters.animate,
            "geometry": asdict(geometry),
        }
        charts[f"{key}_ring"] = to_vega_spec(ring_chart(geometry, title=title))

    granted = counts.granted_total
    return {
        "filters": asdict(filters),
        "found": True,
        "judge": name,
        "city": judge.city_name,
        "labels": {"judge": msgs.judge, "average_rates": msgs.average_rates, "judge_stats": msgs.judge_stats},
        "record": asdict(judge),
        "breakdown": {**asdict(counts), "granted_total": granted},
        "summary": msgs.judge_summary.format(
            total=total,
            cases=pluralize_cases(msgs, total),
            judge=name,
            granted=granted,
            verb=msgs.was if granted == 1 else msgs.were,
        ),
        "city_aggregate": asdict(city_avg),
        "rings": rings,
        "charts": charts,
    }
