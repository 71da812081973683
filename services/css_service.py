from core.gradient import GradientConfig, GradientType, format_number
from services.stop_service import sort_stops


class CSSGradientFormatter:
    """
    Converts a GradientConfig into a CSS gradient function call.

    Colors are written verbatim; nothing here validates color syntax.
    """

    def format(self, config: GradientConfig) -> str:
        stop_list = self.format_stops(config)
        if config.type == GradientType.RADIAL:
            return f"radial-gradient(circle, {stop_list})"
        return f"linear-gradient({format_number(config.angle)}deg, {stop_list})"

    def format_stops(self, config: GradientConfig) -> str:
        return ", ".join(
            f"{stop.color} {format_number(stop.offset)}%"
            for stop in sort_stops(config.stops)
        )

    def declaration(self, config: GradientConfig) -> str:
        """The copy-ready `background:` declaration shown in the CSS export tab."""
        return f"background: {self.format(config)};"
