from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from core.aggregate import aggregate, judge_breakdown
from core.charts import judge_rates_chart, ring_chart, to_vega_spec
from core.data import JudgeTable, lookup_city, records_frame
from core.filters import ViewFilters
from core.i18n import messages_for, sort_options
from core.percentages import normalize_records
from core.ring import compute_geometry
from core.sorting import sort_judges

CITY_RING_SIZE = 110
CITY_RING_STROKE = 13
JUDGE_CARD_RING_SIZE = 60
JUDGE_CARD_RING_STROKE = 8

CITY_RING_COLORS = {
    "asylum": "#C5FBA3",
    "other_relief": "#C5FBA3",
    "denied": "#FF7A7A",
}


def compute_city_page(filters: ViewFilters, table: JudgeTable) -> Dict[str, Any]:
    msgs = messages_for(filters.language)
    lookup = lookup_city(table, filters.city)
    if not lookup.found:
        return {
            "filters": asdict(filters),
            "found": False,
            "city": lookup.city_name,
            "message": msgs.city_not_found,
        }

    records = normalize_records(lookup.records)
    summary = aggregate(records)
    ordered = sort_judges(records, filters.sort)

    averages = {
        "asylum": (summary.avg_asylum_rate, msgs.asylum_granted, msgs.asylum_granted_info_city),
        "other_relief": (summary.avg_other_relief_rate, msgs.other_relief_granted, msgs.other_relief_info_city),
        "denied": (summary.avg_denied_rate, msgs.denied, msgs.denied_info_city),
    }
    rings: Dict[str, Any] = {}
    charts: Dict[str, Any] = {}
    for key, (rate, title, info) in averages.items():
        geometry = compute_geometry(
            percentage=rate,
            size=CITY_RING_SIZE,
            stroke_width=CITY_RING_STROKE,
            color=CITY_RING_COLORS[key],
            thresholds=filters.thresholds,
        )
        rings[key] = {"title": title, "info": info, "animate": filters.animate, "geometry": asdict(geometry)}
        charts[f"{key}_ring"] = to_vega_spec(ring_chart(geometry, title=title))

    judges_df = records_frame(ordered)
    judges = judges_df.to_dict(orient="records")
    for row, record in zip(judges, ordered):
        card_ring = compute_geometry(
            percentage=record.granted_asylum_rate,
            size=JUDGE_CARD_RING_SIZE,
            stroke_width=JUDGE_CARD_RING_STROKE,
            thresholds=filters.thresholds,
        )
        row["breakdown"] = asdict(judge_breakdown(record))
        row["ring"] = asdict(card_ring)
    charts["judge_rates"] = to_vega_spec(
        judge_rates_chart(judges_df, reference=summary.avg_asylum_rate if records else None, title=msgs.asylum_granted)
    )

    return {
        "filters": asdict(filters),
        "found": True,
        "city": lookup.city_name,
        "labels": {
            "city": msgs.city,
            "judges": msgs.judges,
            "sort_by": msgs.sort_by,
            "average_rates": msgs.average_rates,
            "city_stats": msgs.city_stats,
        },
        "judge_count": len(records),
        "aggregate": asdict(summary),
        "summary": msgs.city_summary.format(
            total=summary.total_cases,
            city=lookup.city_name,
            asylum=summary.asylum_granted_amount,
            other=summary.other_relief_granted_amount,
            denied=summary.denied_amount,
        ),
        "rings": rings,
        "sort": filters.sort,
        "sort_options": sort_options(filters.language),
        "judges": judges,
        "charts": charts,
    }
