from __future__ import annotations

from html import escape
from core.ring import DURATION_S, EASING, TICK_COLOR, TICK_DASH, TICK_OPACITY, TICK_WIDTH, TRACK_COLOR, RingGeometry


def _num(value: float) -> str:
    return f"{value:.4f}".rstrip("0").rstrip(".")


def ring_svg(geometry: RingGeometry, *, animate: bool = True, title: str = "") -> str:
    """Render ``geometry`` as a standalone ``<svg>`` element.

    With ``animate`` the ring is emitted empty and fills through a CSS
    keyframe transition; otherwise it is drawn at its final offset.
    """
    g = geometry
    c = _num(g.center)
    final = _num(g.dash_offset)
    easing = "cubic-bezier({})".format(", ".join(_num(v) for v in EASING))

    style = ""
    if animate:
        name = "ring-fill-{}-{}".format(_num(g.size).replace(".", "_"), _num(g.percentage).replace(".", "_"))
        start = _num(g.circumference)
        style = (
            f"<style>@keyframes {name} {{ from {{ stroke-dashoffset: {start}; }} "
            f"to {{ stroke-dashoffset: {final}; }} }}</style>"
        )
        fill_attrs = (
            f'stroke-dashoffset="{final}" '
            f'style="animation: {name} {DURATION_S}s {easing} 0.05s both"'
        )
    else:
        fill_attrs = f'stroke-dashoffset="{final}"'

    tick = ""
    if g.tick is not None:
        t = g.tick
        tick = (
            f'<line x1="{_num(t.x1)}" y1="{_num(t.y1)}" x2="{_num(t.x2)}" y2="{_num(t.y2)}" '
            f'stroke="{TICK_COLOR}" stroke-width="{TICK_WIDTH}" stroke-dasharray="{TICK_DASH}" '
            f'stroke-linecap="round" opacity="{TICK_OPACITY}"/>'
        )

    title_el = f"<title>{escape(title)}</title>" if title else ""
    size = _num(g.size)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="0 0 {size} {size}" class="donut-chart">'
        f"{title_el}{style}"
        f'<circle cx="{c}" cy="{c}" r="{_num(g.radius)}" fill="transparent" stroke="{TRACK_COLOR}" '
        f'stroke-opacity="0.9" stroke-width="{_num(g.stroke_width)}"/>'
        f'<g transform="{g.transform}">'
        f'<circle cx="{c}" cy="{c}" r="{_num(g.radius)}" fill="transparent" stroke="{escape(g.color)}" '
        f'stroke-width="{_num(g.stroke_width)}" stroke-dasharray="{_num(g.dash_array)}" {fill_attrs} '
        f'stroke-linecap="{g.line_cap}"/>'
        f"{tick}</g>"
        f'<text x="50%" y="50%" text-anchor="middle" dy=".45em" fill="white" font-size="{g.font_size}" '
        f'font-weight="600">{escape(g.label)}</text>'
        "</svg>"
    )
