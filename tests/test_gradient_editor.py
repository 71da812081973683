"""
Unit tests for the gradient model, stop ordering and editing actions
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from pydantic import ValidationError

from core.gradient import (
    AnimationType,
    ColorStop,
    GradientConfig,
    GradientType,
    default_config,
    format_number,
)
from services.stop_service import sort_stops
from services import editor_service as editor


def make_config(*stops, **fields) -> GradientConfig:
    return GradientConfig(
        stops=[ColorStop(id=str(i), color=color, offset=offset) for i, (color, offset) in enumerate(stops)],
        **fields,
    )


class TestGradientConfig:
    """Test configuration validation"""

    def test_default_config(self):
        """Should start as a black and white linear gradient at 135 degrees"""
        config = default_config()

        assert config.type == GradientType.LINEAR
        assert config.angle == 135
        assert config.animation == AnimationType.NONE
        assert config.animation_duration == 10
        assert [(s.id, s.color, s.offset) for s in config.stops] == [
            ("1", "#ffffff", 0),
            ("2", "#000000", 100),
        ]

    def test_requires_two_stops(self):
        """Should reject a single-stop gradient"""
        with pytest.raises(ValidationError):
            make_config(("#fff", 0))

    def test_rejects_duplicate_stop_ids(self):
        """Should keep stop identifiers unique"""
        with pytest.raises(ValidationError):
            GradientConfig(stops=[
                ColorStop(id="a", color="#fff", offset=0),
                ColorStop(id="a", color="#000", offset=100),
            ])

    @pytest.mark.parametrize("field,value", [
        ("angle", -1),
        ("angle", 361),
        ("animation_duration", 0),
        ("type", "conic"),
        ("animation", "spin"),
    ])
    def test_rejects_out_of_range_fields(self, field, value):
        """Should validate every field"""
        with pytest.raises(ValidationError):
            make_config(("#fff", 0), ("#000", 100), **{field: value})

    def test_offset_range(self):
        """Should keep offsets within 0-100"""
        with pytest.raises(ValidationError):
            ColorStop(id="x", color="#fff", offset=101)

    def test_accepts_camel_case_duration(self):
        """Should accept the JSON alias animationDuration"""
        config = GradientConfig.model_validate({
            "stops": [{"id": "a", "color": "#fff", "offset": 0}, {"id": "b", "color": "#000", "offset": 100}],
            "animationDuration": 4,
        })

        assert config.animation_duration == 4
        assert config.model_dump(by_alias=True)["animationDuration"] == 4

    def test_is_immutable(self):
        """Should not allow in-place mutation"""
        config = default_config()

        with pytest.raises(ValidationError):
            config.angle = 10


class TestFormatNumber:
    """Test number rendering shared by the formatters"""

    def test_integral_values_have_no_decimal_point(self):
        assert format_number(90.0) == "90"
        assert format_number(0) == "0"

    def test_fractions_are_kept(self):
        assert format_number(12.5) == "12.5"
        assert format_number(2.25) == "2.25"


class TestSortStops:
    """Test stop normalization"""

    def test_sorts_by_offset(self):
        """Should order stops ascending by offset"""
        config = make_config(("#ff0000", 80), ("#00ff00", 10), ("#0000ff", 50))

        assert [s.offset for s in sort_stops(config.stops)] == [10, 50, 80]

    def test_sort_is_stable(self):
        """Should keep editing order for equal offsets"""
        config = make_config(("#aaa", 50), ("#bbb", 20), ("#ccc", 50))

        assert [s.color for s in sort_stops(config.stops)] == ["#bbb", "#aaa", "#ccc"]

    def test_does_not_mutate_input(self):
        """Should return a new list"""
        stops = list(make_config(("#aaa", 90), ("#bbb", 10)).stops)
        original = list(stops)

        result = sort_stops(stops)

        assert stops == original
        assert result is not stops


class TestEditorActions:
    """Test immutable editing actions"""

    def test_add_stop(self):
        """Should append a white stop at 50% with a new id"""
        config = default_config()

        updated = editor.add_stop(config)

        assert len(updated.stops) == 3
        assert len(config.stops) == 2
        new_stop = updated.stops[-1]
        assert (new_stop.color, new_stop.offset) == ("#ffffff", 50)
        assert new_stop.id not in {"1", "2"}

    def test_added_stops_get_unique_ids(self):
        config = editor.add_stop(editor.add_stop(default_config()))

        assert len({s.id for s in config.stops}) == 4

    def test_remove_stop_down_to_two(self):
        """Should allow removing while more than two stops remain"""
        config = make_config(("#a00", 0), ("#0a0", 50), ("#00a", 100))

        updated = editor.remove_stop(config, "1")

        assert [s.id for s in updated.stops] == ["0", "2"]

    def test_remove_stop_below_two_is_noop(self):
        """Should silently keep the last two stops"""
        config = default_config()

        updated = editor.remove_stop(config, "1")

        assert updated == config
        assert len(updated.stops) == 2

    def test_remove_unknown_stop(self):
        config = make_config(("#a00", 0), ("#0a0", 50), ("#00a", 100))

        assert editor.remove_stop(config, "missing") == config

    def test_update_stop(self):
        """Should change only the targeted stop"""
        config = default_config()

        updated = editor.update_stop(config, "2", color="#123456", offset=75)

        assert updated.stops[1].color == "#123456"
        assert updated.stops[1].offset == 75
        assert updated.stops[0] == config.stops[0]
        assert config.stops[1].color == "#000000"

    def test_update_stop_invalid_offset(self):
        """Should refuse offsets outside 0-100"""
        with pytest.raises(ValidationError):
            editor.update_stop(default_config(), "1", offset=150)

    def test_field_setters(self):
        """Should return new configurations with one field replaced"""
        config = default_config()

        assert editor.set_type(config, "radial").type == GradientType.RADIAL
        assert editor.set_angle(config, 45).angle == 45
        assert editor.set_animation(config, AnimationType.PULSE).animation == AnimationType.PULSE
        assert editor.set_duration(config, 2.5).animation_duration == 2.5
        assert config == default_config()

    def test_set_duration_must_be_positive(self):
        with pytest.raises(ValidationError):
            editor.set_duration(default_config(), 0)

    @pytest.mark.parametrize("seconds", [float("inf"), float("nan")])
    def test_set_duration_must_be_finite(self, seconds):
        """Should refuse durations that would render as dur="infs" """
        with pytest.raises(ValidationError):
            editor.set_duration(default_config(), seconds)

    def test_set_angle_rejects_nan(self):
        with pytest.raises(ValidationError):
            editor.set_angle(default_config(), float("nan"))

    def test_update_stop_rejects_infinite_offset(self):
        with pytest.raises(ValidationError):
            editor.update_stop(default_config(), "1", offset=float("inf"))

    def test_replace_config(self):
        """Should swap in the new configuration wholesale"""
        new_config = make_config(("#f00", 0), ("#00f", 100), type="radial")

        assert editor.replace_config(default_config(), new_config) is new_config
