"""Test ring chart geometry."""

import math
from dataclasses import asdict

import pytest

from core.filters import HIGH_COLOR, LOW_COLOR, MID_COLOR, THREE_TIER, TWO_TIER, thresholds_for
from core.ring import compute_geometry, geometry_from_dict, percentage_label
from core.svg import ring_svg


class TestGeometry:
    """Radius, circumference and dash offset."""

    def test_half_filled_ring(self):
        g = compute_geometry(size=180, stroke_width=20, percentage=50)
        assert g.radius == 80
        assert g.center == 90
        assert g.circumference == pytest.approx(2 * math.pi * 80)
        assert g.dash_array == g.circumference
        assert g.dash_offset == pytest.approx(g.circumference / 2)

    def test_empty_and_full(self):
        assert compute_geometry(percentage=0).dash_offset == pytest.approx(compute_geometry(percentage=0).circumference)
        assert compute_geometry(percentage=100).dash_offset == pytest.approx(0)

    def test_out_of_range_is_not_clamped(self):
        g = compute_geometry(percentage=150)
        assert g.dash_offset == pytest.approx(-g.circumference / 2)
        assert g.label == "150%"

    def test_rotation_puts_zero_at_top(self):
        assert compute_geometry(size=110, stroke_width=13, percentage=10).transform == "rotate(-90 55 55)"

    def test_presentation_defaults(self):
        small = compute_geometry(size=40, stroke_width=6, percentage=10)
        large = compute_geometry(size=180, stroke_width=20, percentage=10)
        assert small.font_size == "18px"
        assert large.font_size == "39.6px"
        assert small.line_cap == "butt"
        assert large.line_cap == "round"

    def test_round_trip_through_dict(self):
        g = compute_geometry(percentage=42, reference_mark_percentage=30)
        assert geometry_from_dict(asdict(g)) == g


class TestLabel:
    """Label is the rounded percentage with a percent sign."""

    def test_rounding(self):
        assert percentage_label(49.5) == "50%"
        assert percentage_label(12.4) == "12%"
        assert compute_geometry(percentage=40.1666).label == "40%"

    def test_negative_halves_round_toward_positive(self):
        assert percentage_label(-2.5) == "-2%"
        assert percentage_label(-2.6) == "-3%"
        assert percentage_label(2.5) == "3%"
        assert percentage_label(float("nan")) == "0%"


class TestColorThresholds:
    """Fill colors come from versioned threshold tables."""

    def test_three_tier_boundaries(self):
        assert compute_geometry(percentage=67.1).color == HIGH_COLOR
        assert compute_geometry(percentage=67).color == MID_COLOR
        assert compute_geometry(percentage=33).color == MID_COLOR
        assert compute_geometry(percentage=32.9).color == LOW_COLOR

    def test_two_tier_boundaries(self):
        assert compute_geometry(percentage=50, thresholds=TWO_TIER).color == HIGH_COLOR
        assert compute_geometry(percentage=49.9, thresholds=TWO_TIER).color == LOW_COLOR
        assert compute_geometry(percentage=40, thresholds=TWO_TIER).color == LOW_COLOR

    def test_explicit_color_wins(self):
        assert compute_geometry(percentage=10, color="#C5FBA3").color == "#C5FBA3"

    def test_version_lookup_falls_back(self):
        assert thresholds_for("v2") is TWO_TIER
        assert thresholds_for("v9") is THREE_TIER
        assert thresholds_for(None) is THREE_TIER


class TestReferenceTick:
    """The reference tick spans the stroke at the given percentage."""

    def test_no_tick_by_default(self):
        assert compute_geometry(percentage=10).tick is None

    def test_tick_at_zero_lies_on_start_axis(self):
        tick = compute_geometry(size=180, stroke_width=20, percentage=10, reference_mark_percentage=0).tick
        assert tick.x1 == pytest.approx(160)
        assert tick.y1 == pytest.approx(90)
        assert tick.x2 == pytest.approx(180)
        assert tick.y2 == pytest.approx(90)

    def test_tick_at_quarter_turn(self):
        tick = compute_geometry(size=180, stroke_width=20, percentage=10, reference_mark_percentage=25).tick
        assert tick.x1 == pytest.approx(90)
        assert tick.y1 == pytest.approx(160)
        assert tick.y2 == pytest.approx(180)

    def test_tick_length_is_stroke_width(self):
        tick = compute_geometry(size=180, stroke_width=20, percentage=10, reference_mark_percentage=37).tick
        assert math.hypot(tick.x2 - tick.x1, tick.y2 - tick.y1) == pytest.approx(20)


class TestSvg:
    """SVG output binds geometry to drawable primitives."""

    def test_static_ring(self):
        g = compute_geometry(percentage=50)
        svg = ring_svg(g, animate=False)
        assert svg.startswith("<svg")
        assert 'stroke-dashoffset="251.3274"' in svg
        assert "@keyframes" not in svg
        assert ">50%</text>" in svg

    def test_animated_ring_starts_empty(self):
        g = compute_geometry(percentage=50)
        svg = ring_svg(g, animate=True)
        assert "@keyframes" in svg
        assert "from { stroke-dashoffset: 502.6548; }" in svg
        assert "cubic-bezier(0.65, 0, 0.35, 1)" in svg

    def test_tick_and_title(self):
        g = compute_geometry(percentage=50, reference_mark_percentage=30)
        svg = ring_svg(g, animate=False, title="Asylum <Granted>")
        assert "<line" in svg
        assert "<title>Asylum &lt;Granted&gt;</title>" in svg

    def test_keyframes_follow_geometry_offset(self):
        g = compute_geometry(percentage=25)
        svg = ring_svg(g, animate=True)
        assert "to { stroke-dashoffset: 376.9911; }" in svg
        assert 'stroke-dashoffset="376.9911"' in svg
