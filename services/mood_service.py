import json
import logging
import uuid
from typing import Any, List, Literal, Optional, Tuple, Union

from langchain_core.messages import SystemMessage, HumanMessage
from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr, ValidationError

from core.gradient import ColorStop, GradientConfig
from core.llm_factory import LLMClientSingleton

logger = logging.getLogger(__name__)

DEFAULT_ANGLE = 90
DEFAULT_ANIMATION = "none"
DEFAULT_DURATION = 10

Number = Union[StrictInt, StrictFloat]


class AIGenerationError(Exception):
    """The AI service gave no usable gradient. The current configuration stays as it is."""


class GenerationBusyError(AIGenerationError):
    """A mood request is already in flight."""


class AIStopPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    color: StrictStr
    offset: Number


class AIGradientPayload(BaseModel):
    """Shape of the JSON the model is asked to return. Anything else is rejected."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    gradientName: StrictStr
    description: StrictStr = ""
    type: Literal["linear", "radial"]
    angle: Optional[Number] = None
    animation: Optional[Literal["none", "rotate", "pulse"]] = None
    animationDuration: Optional[Number] = None
    stops: List[AIStopPayload]


class GeneratedGradient(BaseModel):
    """A configuration suggested by the AI, with its name and blurb for display."""

    model_config = ConfigDict(frozen=True)

    config: GradientConfig
    name: str
    description: str = ""


def parse_ai_response(text: Optional[str]) -> dict:
    """Parses the raw model reply into a JSON object."""
    if text is None or not str(text).strip():
        raise AIGenerationError("No response from AI")

    content = _clean_json_output(str(text))
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise AIGenerationError(f"AI response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise AIGenerationError("AI response must be a JSON object")
    return data


def map_ai_response(payload: Any) -> GeneratedGradient:
    """
    Converts a schema-conforming payload into a fresh GradientConfig.

    Optional fields fall back to angle=90, animation=none, duration=10.
    The service never supplies stop ids, so every stop gets a new uuid.
    """
    if not isinstance(payload, dict):
        raise AIGenerationError("AI response must be a JSON object")

    try:
        data = AIGradientPayload.model_validate(payload)
        duration = data.animationDuration
        config = GradientConfig(
            type=data.type,
            angle=DEFAULT_ANGLE if data.angle is None else data.angle,
            animation=data.animation or DEFAULT_ANIMATION,
            animation_duration=duration if duration and duration > 0 else DEFAULT_DURATION,
            stops=[
                ColorStop(id=str(uuid.uuid4()), color=stop.color, offset=stop.offset)
                for stop in data.stops
            ],
        )
    except ValidationError as e:
        raise AIGenerationError(f"AI response does not describe a valid gradient: {e}") from e

    return GeneratedGradient(config=config, name=data.gradientName, description=data.description)


def _clean_json_output(content: str) -> str:
    """Strips Markdown fences some models wrap around JSON."""
    if "```json" in content:
        content = content.split("```json")[1].split("```")[0]
    elif "```" in content:
        content = content.split("```")[1].split("```")[0]
    return content.strip()


class MoodGradientGenerator:
    """
    Asks a chat model for a gradient matching a free-text mood.
    Returns the parsed JSON object; mapping into a configuration is map_ai_response's job.
    """

    def __init__(self, llm=None, provider: Optional[str] = None):
        self.llm = llm or LLMClientSingleton().get_client(provider)

    def generate(self, prompt: str) -> dict:
        messages = self._build_messages(prompt)
        logger.info(f"🎨 Generating gradient for mood: {prompt[:60]}")
        try:
            response = self.llm.invoke(messages)
        except Exception as e:
            logger.error(f"AI Generation failed: {e}")
            raise AIGenerationError(f"AI Generation failed: {e}") from e
        return parse_ai_response(self._response_text(response))

    async def agenerate(self, prompt: str) -> dict:
        messages = self._build_messages(prompt)
        logger.info(f"🎨 Generating gradient for mood: {prompt[:60]}")
        try:
            response = await self.llm.ainvoke(messages)
        except Exception as e:
            logger.error(f"AI Generation failed: {e}")
            raise AIGenerationError(f"AI Generation failed: {e}") from e
        return parse_ai_response(self._response_text(response))

    def _build_messages(self, prompt: str) -> list:
        if not prompt or not prompt.strip():
            raise AIGenerationError("Describe a mood first")

        request = f"""
        Generate a beautiful CSS/SVG gradient based on this description: "{prompt.strip()}".
        Ensure colors are harmonious and accessible.
        If the user mentions a specific style (cyberpunk, pastel, nature), match it strictly.

        Output strictly in JSON format:
        {{
            "gradientName": "A creative name for the gradient",
            "description": "Short explanation of the color choices",
            "type": "linear" or "radial",
            "angle": integer angle in degrees (0-360) if linear, default 90,
            "animation": "none", "rotate" or "pulse",
            "animationDuration": suggested animation duration in seconds (3-20),
            "stops": [
                {{"color": "Hex color code e.g. #FF0000", "offset": integer position 0-100}}
            ]
        }}
        """
        return [
            SystemMessage(content="You are a JSON-only color and gradient designer."),
            HumanMessage(content=request),
        ]

    def _response_text(self, response) -> Optional[str]:
        content = getattr(response, "content", None)
        # Some chat models return a list of content blocks.
        if isinstance(content, list):
            return "".join(
                block if isinstance(block, str) else block.get("text", "")
                for block in content
            )
        return content


def generate_gradient_from_mood(prompt: str, generator: Optional[MoodGradientGenerator] = None) -> GeneratedGradient:
    generator = generator or MoodGradientGenerator()
    result = map_ai_response(generator.generate(prompt))
    logger.info(f"✅ Generated '{result.name}' with {len(result.config.stops)} stops")
    return result


class GenerationSession:
    """
    Single-slot gate around the async mood request.

    While a request is outstanding, `busy` is True and further requests are
    rejected with GenerationBusyError instead of being queued.
    """

    def __init__(self, generator: MoodGradientGenerator):
        self.generator = generator
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def request(self, prompt: str) -> GeneratedGradient:
        if self._busy:
            raise GenerationBusyError("A gradient is already being generated")

        self._busy = True
        try:
            payload = await self.generator.agenerate(prompt)
            result = map_ai_response(payload)
            logger.info(f"✅ Generated '{result.name}' with {len(result.config.stops)} stops")
            return result
        finally:
            self._busy = False

    async def apply(
        self, prompt: str, current: GradientConfig
    ) -> Tuple[GradientConfig, Optional[GeneratedGradient], Optional[AIGenerationError]]:
        """
        Runs a request and returns the configuration to show next.
        On failure the current configuration comes back untouched with the error.
        """
        try:
            result = await self.request(prompt)
        except AIGenerationError as e:
            logger.warning(f"⚠️ Keeping current gradient: {e}")
            return current, None, e
        return result.config, result, None
