"""
Gradient configuration model.

A GradientConfig is an immutable value: editing actions return a new
instance built with model_copy(update=...) and re-validated.
"""
from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_STOPS = 2


class GradientType(str, Enum):
    LINEAR = "linear"
    RADIAL = "radial"


class AnimationType(str, Enum):
    NONE = "none"
    ROTATE = "rotate"
    PULSE = "pulse"


class ColorStop(BaseModel):
    """One anchor of the color transition. `color` is passed through unvalidated."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str
    color: str
    offset: float = Field(ge=0, le=100)


class GradientConfig(BaseModel):
    """Everything needed to render a gradient as CSS or SVG."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    type: GradientType = GradientType.LINEAR
    angle: float = Field(135, ge=0, le=360)
    stops: List[ColorStop] = Field(min_length=MIN_STOPS)
    animation: AnimationType = AnimationType.NONE
    animation_duration: float = Field(10, gt=0, alias="animationDuration")

    @field_validator("stops")
    @classmethod
    def _unique_stop_ids(cls, stops: List[ColorStop]) -> List[ColorStop]:
        ids = [stop.id for stop in stops]
        if len(ids) != len(set(ids)):
            raise ValueError("stop ids must be unique within a configuration")
        return stops

    def updated(self, **changes) -> "GradientConfig":
        """Return a validated copy with the given fields replaced."""
        data = self.model_dump()
        data.update(changes)
        return GradientConfig.model_validate(data)


def default_config() -> GradientConfig:
    """Starting configuration of a new editing session."""
    return GradientConfig(
        type=GradientType.LINEAR,
        angle=135,
        animation=AnimationType.NONE,
        animation_duration=10,
        stops=[
            ColorStop(id="1", color="#ffffff", offset=0),
            ColorStop(id="2", color="#000000", offset=100),
        ],
    )


def format_number(value: float) -> str:
    """Render a number the way it appears in CSS/SVG output: 90 -> '90', 12.5 -> '12.5'."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
