import sys
import json
import logging
from pathlib import Path
from mcp.server.fastmcp import FastMCP
from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv()

# --- 🛡️ PROTOCOL PROTECTION & LOGGING SETUP 🛡️ ---
# stdout carries the MCP protocol, so logs go to stderr.
logging.basicConfig(
    level=logging.INFO,
    stream=sys.stderr,
    format='%(message)s'
)

for lib in ["httpx", "httpcore", "asyncio"]:
    logging.getLogger(lib).setLevel(logging.WARNING)

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

# 1. Initialize MCP Server
mcp = FastMCP("Chromaflow", dependencies=["langchain-google-genai", "langchain-core", "pydantic"])

# 2. Import Core Logic
try:
    from core.gradient import GradientConfig
    from services.css_service import CSSGradientFormatter
    from services.svg_service import SVGGradientFormatter
    from services.mood_service import (
        AIGenerationError,
        MoodGradientGenerator,
        generate_gradient_from_mood,
    )
    logging.info("✅ All services imported successfully")
except ImportError as e:
    logging.error(f"❌ Critical Import Error: {e}")
    raise

css_formatter = CSSGradientFormatter()
svg_formatter = SVGGradientFormatter()


def _load_config(config_json: str) -> GradientConfig:
    """Accepts the camelCase JSON shape (animationDuration) as well as snake_case."""
    return GradientConfig.model_validate_json(config_json)


@mcp.tool()
def render_css(config_json: str) -> str:
    """
    Renders a gradient configuration as a CSS gradient.

    Args:
        config_json: JSON object with type, angle, animation, animationDuration
            and stops ([{id, color, offset}], at least two).
    """
    try:
        return css_formatter.format(_load_config(config_json))
    except ValidationError as e:
        logging.warning(f"⚠️ Invalid gradient configuration: {e}")
        return f"❌ Invalid gradient configuration: {e}"


@mcp.tool()
def render_svg(config_json: str) -> str:
    """
    Renders a gradient configuration as an animated SVG document.

    Args:
        config_json: Same JSON shape as render_css.
    """
    try:
        return svg_formatter.format(_load_config(config_json))
    except ValidationError as e:
        logging.warning(f"⚠️ Invalid gradient configuration: {e}")
        return f"❌ Invalid gradient configuration: {e}"


@mcp.tool()
def generate_gradient(mood: str, provider: str = "gemini") -> str:
    """
    Asks the AI for a gradient matching a mood description.

    Returns JSON with the gradient name, description, configuration, CSS and SVG.
    """
    try:
        result = generate_gradient_from_mood(mood, MoodGradientGenerator(provider=provider))
    except AIGenerationError as e:
        logging.error(f"❌ Gradient generation failed: {e}")
        return f"❌ Gradient generation failed: {e}"
    except (RuntimeError, ValueError) as e:
        logging.error(f"❌ LLM provider unavailable: {e}")
        return f"❌ LLM provider unavailable: {e}"

    return json.dumps({
        "gradientName": result.name,
        "description": result.description,
        "config": result.config.model_dump(mode="json", by_alias=True),
        "css": css_formatter.format(result.config),
        "svg": svg_formatter.format(result.config),
    }, indent=2)


if __name__ == "__main__":
    logging.info("🚀 MCP Server 'Chromaflow' starting...")
    logging.info("🎨 Available tools:")
    logging.info("   • CSS gradient        → render_css()")
    logging.info("   • Animated SVG        → render_svg()")
    logging.info("   • Mood to gradient    → generate_gradient()")

    try:
        mcp.run()
    except KeyboardInterrupt:
        logging.info("🛑 Server stopped manually.")
    except Exception as e:
        logging.critical(f"❌ Fatal server error: {e}")
        sys.exit(1)
