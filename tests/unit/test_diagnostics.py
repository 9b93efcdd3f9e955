"""
Tests for the diagnostics snapshots and text report.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from layerzoom_core.domain.enums import PresentationMode
from layerzoom_core.services.detail_resolver import DetailStateResolver
from layerzoom_core.services.diagnostics import diagnose, format_report
from layerzoom_core.services.scale_bar import ScaleBar


@pytest.fixture
def resolver():
    return DetailStateResolver(ScaleBar(2))


class TestDiagnose:
    """Per-layer snapshots."""

    def test_one_snapshot_per_layer(self, resolver):
        zoom = resolver.scale_bar.optimal_zoom(1)
        snapshots = diagnose(resolver, zoom)
        assert [s.layer for s in snapshots] == [0, 1, 2]
        assert [s.mode for s in snapshots] == [
            PresentationMode.COLLAPSED,
            PresentationMode.EXPANDED,
            PresentationMode.INVISIBLE,
        ]

    def test_snapshot_matches_resolver(self, resolver):
        for snap in diagnose(resolver, -0.8):
            assert snap.state == resolver.detail_state(snap.layer, -0.8)
            assert snap.window == resolver.scale_bar.window(snap.layer)
            assert snap.optimal_zoom == resolver.scale_bar.optimal_zoom(snap.layer)


class TestFormatReport:
    """Plain-text report."""

    def test_layout(self, resolver):
        lines = format_report(resolver, 0.0).splitlines()
        assert len(lines) == 4
        assert lines[0] == "Zoom: 0.00 (L0-optimal: 0.00) | scale: 1.000"
        assert lines[1].startswith("L0  expanded")
        assert "opacity=1.00" in lines[1]
        assert lines[3].startswith("L2  invisible")

    def test_layer_zero_boundaries(self, resolver):
        line = format_report(resolver, 0.0).splitlines()[1]
        assert "[-∞ | 0.000 1.390 | 2.158 4.171 | 6.473]" in line

    def test_top_layer_open_ended(self, resolver):
        line = format_report(resolver, 0.0).splitlines()[3]
        assert line.endswith("∞ | ∞]")

    def test_primary_layer_in_header(self, resolver):
        report = format_report(resolver, -3.0)
        assert report.splitlines()[0].startswith("Zoom: -3.00 (L2-optimal: -3.17)")
