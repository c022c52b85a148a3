"""Ring (donut) chart geometry and fill animation.

Geometry is plain data meant to be bound to SVG primitives: a circle of
``radius`` around ``center`` stroked with ``dash_array = circumference`` and
``dash_offset`` controlling how much of the ring is drawn. The ring is drawn
inside a ``rotate(-90 c c)`` group so that 0% sits at 12 o'clock and the fill
runs clockwise.

``RingAnimation`` owns the per-ring state. It starts empty, commits the
target offset after a short deferred callback, and cancels that callback when
the ring is torn down or its inputs change.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Callable, Dict, Optional, Protocol

from core.filters import THREE_TIER, ColorThresholds


logger = logging.getLogger(__name__)

DEFAULT_SIZE = 180
DEFAULT_STROKE_WIDTH = 20

TRACK_COLOR = "#2a2d2a"
TICK_COLOR = "white"
TICK_WIDTH = 2.2
TICK_DASH = "4 4"
TICK_OPACITY = 0.9

START_DELAY_S = 0.05
DURATION_S = 1.2
EASING = (0.65, 0.0, 0.35, 1.0)


@dataclass(frozen=True)
class TickMark:
    percentage: float
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class RingGeometry:
    size: float
    stroke_width: float
    percentage: float
    radius: float
    circumference: float
    center: float
    dash_array: float
    dash_offset: float
    color: str
    label: str
    font_size: str
    line_cap: str
    transform: str
    tick: Optional[TickMark] = None

    @property
    def empty_offset(self) -> float:
        return self.circumference


def geometry_from_dict(data: Dict[str, Any]) -> RingGeometry:
    """Rebuild a ``RingGeometry`` from its ``asdict`` form (page payloads)."""
    tick = data.get("tick")
    return RingGeometry(**{**data, "tick": TickMark(**tick) if tick else None})


def dash_offset_for(circumference: float, percentage: float) -> float:
    # Not clamped: values outside 0-100 give offsets outside the visible range.
    return circumference * (1 - percentage / 100)


def percentage_label(percentage: float) -> str:
    # Halves round toward +inf, so -2.5 reads "-2%" like 2.5 reads "3%".
    if percentage is None or math.isnan(percentage) or math.isinf(percentage):
        return "0%"
    rounded = (Decimal(str(percentage)) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR)
    return f"{int(rounded)}%"


def reference_tick(center: float, radius: float, stroke_width: float, percentage: float) -> TickMark:
    angle = math.radians((percentage / 100) * 360)
    inner = radius - stroke_width / 2
    outer = radius + stroke_width / 2
    return TickMark(
        percentage=percentage,
        x1=center + math.cos(angle) * inner,
        y1=center + math.sin(angle) * inner,
        x2=center + math.cos(angle) * outer,
        y2=center + math.sin(angle) * outer,
    )


def compute_geometry(
    *,
    percentage: float,
    size: float = DEFAULT_SIZE,
    stroke_width: float = DEFAULT_STROKE_WIDTH,
    reference_mark_percentage: Optional[float] = None,
    color: Optional[str] = None,
    thresholds: ColorThresholds = THREE_TIER,
    font_size: Optional[str] = None,
) -> RingGeometry:
    radius = (size - stroke_width) / 2
    circumference = 2 * math.pi * radius
    center = size / 2

    tick = None
    if reference_mark_percentage is not None:
        tick = reference_tick(center, radius, stroke_width, reference_mark_percentage)

    return RingGeometry(
        size=size,
        stroke_width=stroke_width,
        percentage=percentage,
        radius=radius,
        circumference=circumference,
        center=center,
        dash_array=circumference,
        dash_offset=dash_offset_for(circumference, percentage),
        color=color or thresholds.color_for(percentage),
        label=percentage_label(percentage),
        font_size=font_size or (f"{size * 0.45:g}px" if size < 60 else f"{size * 0.22:g}px"),
        line_cap="butt" if size < 50 else "round",
        transform=f"rotate(-90 {center:g} {center:g})",
        tick=tick,
    )


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> Callable[[float], float]:
    """CSS ``cubic-bezier()`` timing function as a callable on [0, 1]."""

    def _coord(t: float, p1: float, p2: float) -> float:
        u = 1 - t
        return 3 * u * u * t * p1 + 3 * u * t * t * p2 + t ** 3

    def _solve_t(x: float) -> float:
        lo, hi = 0.0, 1.0
        for _ in range(40):
            mid = (lo + hi) / 2
            if _coord(mid, x1, x2) < x:
                lo = mid
            else:
                hi = mid
        return (lo + hi) / 2

    def ease(progress: float) -> float:
        if progress <= 0:
            return 0.0
        if progress >= 1:
            return 1.0
        return _coord(_solve_t(progress), y1, y2)

    return ease


ease_in_out = cubic_bezier(*EASING)


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Any:
        ...


class RingAnimation:
    """Fill animation state for a single ring.

    ``scheduler`` is anything with asyncio's ``call_later`` signature whose
    handles have ``cancel()``; an ``asyncio`` event loop works as is.
    """

    def __init__(
        self,
        geometry: RingGeometry,
        scheduler: Optional[Scheduler] = None,
        *,
        animate: bool = True,
        delay: float = START_DELAY_S,
        duration: float = DURATION_S,
        on_change: Optional[Callable[[float], None]] = None,
    ):
        self.geometry = geometry
        self.scheduler = scheduler
        self.animate = animate
        self.delay = delay
        self.duration = duration
        self.on_change = on_change
        self.start_offset = geometry.empty_offset
        self.current_dash_offset = geometry.empty_offset
        self.committed = False
        self.closed = False
        self._pending: Any = None

    @property
    def target_percentage(self) -> float:
        return self.geometry.percentage

    @property
    def target_offset(self) -> float:
        return self.geometry.dash_offset

    @property
    def radius(self) -> float:
        return self.geometry.radius

    @property
    def circumference(self) -> float:
        return self.geometry.circumference

    @property
    def reference_mark_percentage(self) -> Optional[float]:
        return self.geometry.tick.percentage if self.geometry.tick else None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def start(self) -> None:
        if self.closed:
            return
        self._cancel_pending()
        if not self.animate or self.scheduler is None:
            self._set_offset(self.target_offset)
            self.committed = True
            return
        self.committed = False
        self.start_offset = self.geometry.empty_offset
        self._set_offset(self.start_offset)
        self._pending = self.scheduler.call_later(self.delay, self._commit)

    def retrigger(self) -> None:
        """Replay the fill from empty, e.g. after the sidebar opens or closes."""
        self.start()

    def update(self, geometry: RingGeometry) -> None:
        if self.closed:
            return
        self._cancel_pending()
        self.geometry = geometry
        self.start()

    def close(self) -> None:
        self._cancel_pending()
        self.closed = True

    def offset_at(self, elapsed: float) -> float:
        """Eased offset ``elapsed`` seconds into the transition."""
        if not self.animate or self.duration <= 0:
            return self.target_offset
        progress = ease_in_out(elapsed / self.duration)
        return self.start_offset + (self.target_offset - self.start_offset) * progress

    def _commit(self) -> None:
        self._pending = None
        if self.closed:
            return
        self._set_offset(self.target_offset)
        self.committed = True

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            logger.debug("Cancelled pending ring commit (%s)", self.geometry.label)
            self._pending = None

    def _set_offset(self, offset: float) -> None:
        self.current_dash_offset = offset
        if self.on_change is not None:
            self.on_change(offset)
