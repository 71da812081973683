"""
Editing actions for a gradient configuration.

Every action takes the current configuration and returns a new one; the
input value is never mutated. Invalid field values raise
pydantic.ValidationError and leave the caller's configuration as it was.
"""
import logging
import uuid
from typing import Optional

from core.gradient import (
    MIN_STOPS,
    AnimationType,
    ColorStop,
    GradientConfig,
    GradientType,
)

logger = logging.getLogger(__name__)

DEFAULT_NEW_STOP_COLOR = "#ffffff"
DEFAULT_NEW_STOP_OFFSET = 50


def new_stop_id() -> str:
    return str(uuid.uuid4())


def add_stop(
    config: GradientConfig,
    color: str = DEFAULT_NEW_STOP_COLOR,
    offset: float = DEFAULT_NEW_STOP_OFFSET,
) -> GradientConfig:
    stop = ColorStop(id=new_stop_id(), color=color, offset=offset)
    return config.updated(stops=[*config.stops, stop])


def remove_stop(config: GradientConfig, stop_id: str) -> GradientConfig:
    """Removes a stop by id. Refused silently once only two stops remain."""
    if len(config.stops) <= MIN_STOPS:
        logger.debug(f"Keeping stop {stop_id}: a gradient needs at least {MIN_STOPS} stops")
        return config
    remaining = [stop for stop in config.stops if stop.id != stop_id]
    if len(remaining) == len(config.stops):
        return config
    return config.updated(stops=remaining)


def update_stop(
    config: GradientConfig,
    stop_id: str,
    color: Optional[str] = None,
    offset: Optional[float] = None,
) -> GradientConfig:
    changes = {}
    if color is not None:
        changes["color"] = color
    if offset is not None:
        changes["offset"] = offset
    if not changes:
        return config

    stops = [
        ColorStop.model_validate({**stop.model_dump(), **changes}) if stop.id == stop_id else stop
        for stop in config.stops
    ]
    return config.updated(stops=stops)


def set_type(config: GradientConfig, gradient_type: GradientType | str) -> GradientConfig:
    return config.updated(type=gradient_type)


def set_angle(config: GradientConfig, angle: float) -> GradientConfig:
    return config.updated(angle=angle)


def set_animation(config: GradientConfig, animation: AnimationType | str) -> GradientConfig:
    return config.updated(animation=animation)


def set_duration(config: GradientConfig, seconds: float) -> GradientConfig:
    return config.updated(animation_duration=seconds)


def replace_config(config: GradientConfig, new_config: GradientConfig) -> GradientConfig:
    """Full replacement, used when an AI suggestion is accepted."""
    logger.info(f"Replacing gradient ({len(config.stops)} stops) with {len(new_config.stops)}-stop suggestion")
    return new_config
