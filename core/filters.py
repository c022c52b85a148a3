from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from core.i18n import resolve_locale
from core.sorting import DEFAULT_SORT

HIGH_COLOR = "#9DE580"
MID_COLOR = "#FFBD7A"
LOW_COLOR = "#FF7A7A"


@dataclass(frozen=True)
class ColorTier:
    floor: float
    color: str
    inclusive: bool = True

    def matches(self, percentage: float) -> bool:
        return percentage > self.floor or (self.inclusive and percentage == self.floor)


@dataclass(frozen=True)
class ColorThresholds:
    """Ordered fill-color tiers, highest floor first; the last tier catches the rest."""

    version: str
    tiers: Tuple[ColorTier, ...]
    fallback: str = LOW_COLOR

    def color_for(self, percentage: float) -> str:
        for tier in self.tiers:
            if tier.matches(percentage):
                return tier.color
        return self.fallback


THREE_TIER = ColorThresholds(
    version="v1",
    tiers=(ColorTier(67.0, HIGH_COLOR, inclusive=False), ColorTier(33.0, MID_COLOR)),
)
TWO_TIER = ColorThresholds(version="v2", tiers=(ColorTier(50.0, HIGH_COLOR),))

THRESHOLD_TABLES: Dict[str, ColorThresholds] = {t.version: t for t in (THREE_TIER, TWO_TIER)}
DEFAULT_THRESHOLDS_VERSION = THREE_TIER.version


def thresholds_for(version: Optional[str]) -> ColorThresholds:
    return THRESHOLD_TABLES.get(version or "", THRESHOLD_TABLES[DEFAULT_THRESHOLDS_VERSION])


@dataclass(frozen=True)
class ViewFilters:
    city: str = ""
    sort: str = DEFAULT_SORT
    language: str = "en"
    thresholds: ColorThresholds = field(default_factory=lambda: THREE_TIER)
    animate: bool = True


def normalize_filters(raw: dict) -> ViewFilters:
    city = str(raw.get("city") or "").strip()

    # Unknown policies are kept; sort_judges leaves the order untouched for them.
    sort = str(raw.get("sort") or DEFAULT_SORT).strip()

    language = resolve_locale(raw.get("language")).value
    thresholds = thresholds_for(raw.get("thresholds_version"))
    animate = bool(raw.get("animate", True))
    return ViewFilters(city=city, sort=sort, language=language, thresholds=thresholds, animate=animate)
