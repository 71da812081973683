"""
SVG export of a gradient configuration.

The document layout mirrors the markup shown in the SVG export tab, so the
output is stable line for line. Animation fragments that do not apply to the
current type/animation pair are rendered as empty strings on their own line;
the result may contain blank lines but never a dangling tag.

Stop colors are HTML-escaped inside the stop-color attribute, quotes
included (`'` becomes `&#x27;`), so the document stays well-formed for any
color string. The CSS export writes colors verbatim, so the two texts differ
for colors containing `&`, `<`, `>` or quotes. Hex colors are identical.
"""
import html
from typing import Optional

from core.gradient import AnimationType, GradientConfig, GradientType, format_number
from core.settings import settings
from services.stop_service import sort_stops

SVG_OPEN = '<svg width="100%" height="100%" viewBox="0 0 100 100" xmlns="http://www.w3.org/2000/svg">'
STOP_SEPARATOR = "\n    "


class SVGGradientFormatter:
    """Builds a standalone SVG document: one gradient definition and one rect filled by it."""

    def __init__(self, gradient_id: Optional[str] = None):
        self.gradient_id = gradient_id or settings.SVG_GRADIENT_ID

    def format(self, config: GradientConfig) -> str:
        stops_xml = self.format_stops(config)
        if config.type == GradientType.RADIAL:
            return self._radial_document(config, stops_xml)
        return self._linear_document(config, stops_xml)

    def format_stops(self, config: GradientConfig) -> str:
        return STOP_SEPARATOR.join(
            f'<stop offset="{format_number(stop.offset)}%" stop-color="{html.escape(stop.color)}" />'
            for stop in sort_stops(config.stops)
        )

    # --- Animation fragments ---

    def rotate_animation(self, config: GradientConfig) -> str:
        """Endless 360 degree spin of a linear gradient around its center."""
        if config.type != GradientType.LINEAR or config.animation != AnimationType.ROTATE:
            return ""
        return "\n".join([
            "",
            "      <animateTransform ",
            '        attributeName="gradientTransform" ',
            '        type="rotate" ',
            '        from="0 .5 .5" ',
            '        to="360 .5 .5" ',
            f'        dur="{format_number(config.animation_duration)}s" ',
            '        repeatCount="indefinite" ',
            "      />",
        ])

    def pulse_animation(self, config: GradientConfig) -> str:
        """Radius breathing for radial gradients."""
        if config.type != GradientType.RADIAL or config.animation != AnimationType.PULSE:
            return ""
        return "\n".join([
            "",
            "       <animate ",
            '         attributeName="r" ',
            '         values="0.5; 0.8; 0.5" ',
            f'         dur="{format_number(config.animation_duration)}s" ',
            '         repeatCount="indefinite" ',
            "       />",
        ])

    def static_angle(self, config: GradientConfig) -> str:
        """
        Fixed rotate transform expressing the configured angle.

        Linear gradients here always run left to right, so any other angle
        needs a transform. Only emitted when the gradient is not spinning.
        """
        if config.type != GradientType.LINEAR or config.animation == AnimationType.ROTATE:
            return ""
        angle = format_number(config.angle)
        return (
            '<animateTransform attributeName="gradientTransform" type="rotate" '
            f'from="{angle} .5 .5" to="{angle} .5 .5" dur="1s" fill="freeze" />'
        )

    # --- Documents ---

    def _radial_document(self, config: GradientConfig, stops_xml: str) -> str:
        return "\n".join([
            SVG_OPEN,
            "  <defs>",
            f'    <radialGradient id="{self.gradient_id}" cx="50%" cy="50%" r="50%" fx="50%" fy="50%">',
            f"      {stops_xml}",
            f"      {self.pulse_animation(config)}",
            "    </radialGradient>",
            "  </defs>",
            self._rect(),
            "</svg>",
        ])

    def _linear_document(self, config: GradientConfig, stops_xml: str) -> str:
        return "\n".join([
            SVG_OPEN,
            "  <defs>",
            f'    <linearGradient id="{self.gradient_id}" x1="0%" y1="50%" x2="100%" y2="50%">',
            f"      {stops_xml}",
            f"      {self.rotate_animation(config)}",
            f"      {self.static_angle(config)}",
            "    </linearGradient>",
            "  </defs>",
            self._rect(),
            "</svg>",
        ])

    def _rect(self) -> str:
        return f'  <rect x="0" y="0" width="100" height="100" fill="url(#{self.gradient_id})" />'
