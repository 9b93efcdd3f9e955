"""
Tests for LayerDetailConfig parsing.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from layerzoom_core.domain.config import LayerDetailConfig, LayerMetadata


class TestDefaults:
    """Defaults without any input."""

    def test_defaults(self):
        config = LayerDetailConfig()
        assert config.default_relative_scale == 3.0
        assert config.expand_fraction == 0.3
        assert config.background_opacity_transparent == 0.15
        assert config.background_opacity_opaque == 1.0
        assert config.layer_metadata == {}
        assert not config.debug

    def test_metadata_for_unknown_layer(self):
        meta = LayerDetailConfig().metadata_for(4)
        assert meta == LayerMetadata()
        assert meta.relative_scale is None

    def test_relative_scale_overrides_skip_unset(self):
        config = LayerDetailConfig(layer_metadata={
            0: LayerMetadata(relative_scale=2.0),
            1: LayerMetadata(entity_colour="#ffffff"),
        })
        assert config.relative_scale_overrides() == {0: 2.0}


class TestFromDict:
    """Parsing from plain (JSON-style) dicts."""

    def test_full_dict(self):
        config = LayerDetailConfig.from_dict({
            "default_relative_scale": "2.5",
            "expand_fraction": 0.25,
            "debug": 1,
            "layer_metadata": {
                "0": {"relative_scale": 4, "entity_colour": "#ffffff"},
                2: {"entity_shape": "rectangle"},
            },
        })
        assert config.default_relative_scale == 2.5
        assert config.expand_fraction == 0.25
        assert config.debug is True
        assert config.layer_metadata[0].relative_scale == 4.0
        assert config.layer_metadata[0].entity_colour == "#ffffff"
        assert config.layer_metadata[2].entity_shape == "rectangle"
        assert config.relative_scale_overrides() == {0: 4.0}

    def test_empty_dict(self):
        assert LayerDetailConfig.from_dict({}) == LayerDetailConfig()

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown config keys"):
            LayerDetailConfig.from_dict({"relative_scale": 3})

    def test_unknown_metadata_key(self):
        with pytest.raises(ValueError, match="Unknown layer metadata keys"):
            LayerDetailConfig.from_dict({"layer_metadata": {"0": {"colour": "red"}}})

    def test_non_integer_layer_key(self):
        with pytest.raises(ValueError, match="integer"):
            LayerDetailConfig.from_dict({"layer_metadata": {"top": {}}})

    def test_negative_layer_key(self):
        with pytest.raises(ValueError, match="non-negative"):
            LayerDetailConfig.from_dict({"layer_metadata": {"-1": {}}})

    @pytest.mark.parametrize("key", ["background_opacity_transparent", "background_opacity_opaque"])
    def test_opacity_out_of_range(self, key):
        with pytest.raises(ValueError, match=key):
            LayerDetailConfig.from_dict({key: 1.5})

    def test_non_numeric_scale(self):
        with pytest.raises(ValueError):
            LayerDetailConfig.from_dict({"default_relative_scale": "big"})
