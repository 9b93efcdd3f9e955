"""
Tests for LayerDetailService.

These tests verify layer discovery from an entity hierarchy, the
before-build fallbacks, node sizing, and per-layer metadata lookups.
"""

import logging

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from layerzoom_core.domain.config import LayerDetailConfig, LayerMetadata
from layerzoom_core.domain.enums import PresentationMode
from layerzoom_core.domain.models import HierarchyNode
from layerzoom_core.ports.entity_port import LayeredEntity
from layerzoom_core.services.layer_detail import LayerDetailService
from layerzoom_core.services.scale_bar import InvalidRelativeScaleError


def build_hierarchy():
    """One layer-2 module with two groups of two nodes each."""
    module = HierarchyNode("module", layer=2)
    for g in range(2):
        group = module.add_child(HierarchyNode(f"group_{g}", layer=1))
        for n in range(2):
            group.add_child(HierarchyNode(f"node_{g}_{n}", layer=0))
    return [module]


@pytest.fixture
def service():
    return LayerDetailService()


class TestHierarchyDiscovery:
    """Layer set discovery and scale bar building."""

    def test_hierarchy_node_is_layered_entity(self):
        assert isinstance(HierarchyNode("x"), LayeredEntity)

    def test_layers_in_hierarchy(self, service):
        assert service.layers_in_hierarchy(build_hierarchy()) == [0, 1, 2]

    def test_layers_in_empty_hierarchy(self, service):
        assert service.layers_in_hierarchy([]) == []

    def test_build_from_entities(self, service):
        bar = service.build_from_entities(build_hierarchy())
        assert service.is_built
        assert service.scale_bar is bar
        assert bar.layers == [0, 1, 2]
        assert not bar.is_degenerate

    def test_build_from_empty_hierarchy(self, service):
        bar = service.build_from_entities([])
        assert bar.layers == [0]
        assert service.mode(0, -10.0) == PresentationMode.EXPANDED

    def test_build_with_gap_is_degenerate(self, service):
        roots = [HierarchyNode("top", layer=3, children=[HierarchyNode("leaf", layer=0)])]
        bar = service.build_from_entities(roots)
        assert bar.is_degenerate
        assert service.visible_layers(-20.0) == [0, 3]

    def test_build_scale_bar_range(self, service):
        bar = service.build_scale_bar(0, 3)
        assert bar.layers == [0, 1, 2, 3]

    def test_build_scale_bar_offset_range_is_degenerate(self, service):
        assert service.build_scale_bar(1, 3).is_degenerate

    def test_build_scale_bar_rejects_inverted_range(self, service):
        with pytest.raises(ValueError):
            service.build_scale_bar(3, 1)

    def test_clear(self, service):
        service.build_scale_bar(0, 2)
        service.clear()
        assert not service.is_built
        assert service.scale_bar is None

    def test_rebuild_replaces_scale_bar(self, service):
        first = service.build_scale_bar(0, 1)
        second = service.build_scale_bar(0, 4)
        assert service.scale_bar is second
        assert first.layers == [0, 1]


class TestBeforeBuild:
    """Queries before any scale bar exists fall back to everything visible."""

    def test_defaults(self, service):
        assert service.optimal_zoom(2) == 0.0
        assert service.primary_layer(-5.0) == 0
        assert service.mode(0, 0.0) is None
        assert service.visible_layers(0.0) == []

    def test_detail_state_is_default(self, service):
        state = service.detail_state(1, -3.0)
        assert state.visible
        assert state.opacity == 1.0
        assert state.show_children

    def test_visible_entities_returns_all(self, service):
        entities = [HierarchyNode("a", 0), HierarchyNode("b", 5)]
        assert service.visible_entities(entities, 0.0) == entities


class TestQueries:
    """Per-frame queries after a build."""

    def test_visible_entities_after_build(self, service):
        roots = build_hierarchy()
        service.build_from_entities(roots)
        everything = list(roots[0].walk())

        at_nodes = service.visible_entities(everything, 0.0)
        assert {e.layer for e in at_nodes} == {0}

        at_groups = service.visible_entities(everything, service.optimal_zoom(1))
        assert {e.layer for e in at_groups} == {0, 1}

    def test_debug_logging(self, caplog):
        service = LayerDetailService(LayerDetailConfig(debug=True))
        service.build_scale_bar(0, 1)
        with caplog.at_level(logging.INFO, logger="layerzoom_core.services.layer_detail"):
            service.visible_entities([HierarchyNode("n1", 0)], 0.0)
        assert "visible layers: [0]" in caplog.text
        assert "n1" in caplog.text

    def test_configured_scales_reach_scale_bar(self):
        config = LayerDetailConfig(
            default_relative_scale=2.0,
            layer_metadata={1: LayerMetadata(relative_scale=8.0)},
        )
        service = LayerDetailService(config)
        service.build_scale_bar(0, 2)
        assert service.optimal_zoom(1) == pytest.approx(-1.0)
        assert service.optimal_zoom(2) == pytest.approx(-4.0)


class TestValidation:
    """Configuration is checked when the service is created."""

    def test_bad_default_scale(self):
        with pytest.raises(InvalidRelativeScaleError):
            LayerDetailService(LayerDetailConfig(default_relative_scale=0))

    def test_bad_metadata_scale(self):
        config = LayerDetailConfig(layer_metadata={2: LayerMetadata(relative_scale=-4.0)})
        with pytest.raises(InvalidRelativeScaleError):
            LayerDetailService(config)

    @pytest.mark.parametrize("fraction", [0.0, 0.75])
    def test_bad_expand_fraction(self, fraction):
        """Rejected when the service is created, before any build."""
        with pytest.raises(ValueError, match="expand_fraction"):
            LayerDetailService(LayerDetailConfig(expand_fraction=fraction))


class TestMetadata:
    """Node sizing and per-layer styling."""

    def test_node_radius_default(self, service):
        assert service.node_radius(10.0, 0) == 10.0
        assert service.node_radius(10.0, 1) == pytest.approx(30.0)
        assert service.node_radius(10.0, 2) == pytest.approx(90.0)

    def test_node_radius_cumulative_overrides(self):
        config = LayerDetailConfig(layer_metadata={
            0: LayerMetadata(relative_scale=2.0),
            1: LayerMetadata(relative_scale=5.0),
        })
        service = LayerDetailService(config)
        assert service.node_radius(1.0, 2) == pytest.approx(10.0)
        assert service.node_radius(1.0, 3) == pytest.approx(30.0)

    def test_relative_scale_fallback(self):
        config = LayerDetailConfig(
            default_relative_scale=4.0,
            layer_metadata={0: LayerMetadata(entity_shape="rectangle")},
        )
        service = LayerDetailService(config)
        assert service.relative_scale(0) == 4.0
        assert service.relative_scale(5) == 4.0

    def test_styling_defaults(self, service):
        assert service.entity_shape(0) == "circle"
        assert service.entity_colour(0) == "#3498db"
        assert service.edge_colour(0) == "#95a5a6"

    def test_styling_overrides(self):
        config = LayerDetailConfig(layer_metadata={
            1: LayerMetadata(entity_shape="rectangle", entity_colour="#e74c3c", edge_colour="#2c3e50"),
        })
        service = LayerDetailService(config)
        assert service.entity_shape(1) == "rectangle"
        assert service.entity_colour(1) == "#e74c3c"
        assert service.edge_colour(1) == "#2c3e50"
        assert service.entity_shape(0) == "circle"
