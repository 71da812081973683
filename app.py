import gradio as gr
import logging
import sys
from pathlib import Path

# --- SETUP PATHS ---
sys.path.insert(0, str(Path(__file__).parent))

# --- IMPORTS ---
from core.gradient import AnimationType, GradientConfig, GradientType, default_config
from core.llm_factory import LLMFactory
from core.settings import settings
from services.css_service import CSSGradientFormatter
from services.svg_service import SVGGradientFormatter
from services import editor_service as editor
from services.mood_service import AIGenerationError, GenerationSession, MoodGradientGenerator

# --- LOGGING SETUP ---
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

css_formatter = CSSGradientFormatter()
svg_formatter = SVGGradientFormatter()

# Created on first mood request so the editor works without an API key.
_session: GenerationSession | None = None
_session_provider: str | None = None

COPY_JS = "(text) => { navigator.clipboard.writeText(text); return text; }"


# --- HELPER FUNCTIONS ---
def render_outputs(config: GradientConfig) -> tuple:
    """Preview HTML, CSS declaration and SVG source for a configuration."""
    svg = svg_formatter.format(config)
    preview = f'<div style="width:100%;height:420px;">{svg}</div>'
    return preview, css_formatter.declaration(config), svg


def stop_choices(config: GradientConfig) -> list[tuple[str, str]]:
    """Dropdown entries for the stop editor, listed in editing order."""
    return [(f"{stop.color} @ {stop.offset:g}%", stop.id) for stop in config.stops]


def _selected_stop(config: GradientConfig, stop_id: str | None):
    return next((stop for stop in config.stops if stop.id == stop_id), config.stops[0])


def refresh(config: GradientConfig, stop_id: str | None = None) -> tuple:
    """Every output that depends on the configuration, in the order the UI wires them."""
    stop = _selected_stop(config, stop_id)
    preview, css, svg = render_outputs(config)
    return (
        config,
        preview,
        css,
        svg,
        gr.update(choices=stop_choices(config), value=stop.id),
        gr.update(value=stop.color),
        gr.update(value=stop.offset),
        gr.update(visible=config.type == GradientType.LINEAR),
        gr.update(visible=config.animation != AnimationType.NONE),
        gr.update(interactive=len(config.stops) > 2),
    )


def _safe_edit(action, config: GradientConfig, *args) -> GradientConfig:
    """Applies an editor action; invalid input keeps the current configuration."""
    try:
        return action(config, *args)
    except ValueError as e:
        logger.warning(f"⚠️ Edit rejected: {e}")
        gr.Warning(f"Edit rejected: {e}")
        return config


def on_type(config, gradient_type, stop_id):
    return refresh(_safe_edit(editor.set_type, config, gradient_type), stop_id)


def on_angle(config, angle, stop_id):
    return refresh(_safe_edit(editor.set_angle, config, angle), stop_id)


def on_animation(config, animation, stop_id):
    return refresh(_safe_edit(editor.set_animation, config, animation), stop_id)


def on_duration(config, seconds, stop_id):
    return refresh(_safe_edit(editor.set_duration, config, seconds), stop_id)


def on_stop_color(config, stop_id, color):
    return refresh(_safe_edit(editor.update_stop, config, stop_id, color), stop_id)


def on_stop_offset(config, stop_id, offset):
    return refresh(_safe_edit(editor.update_stop, config, stop_id, None, offset), stop_id)


def on_add_stop(config, stop_id):
    config = editor.add_stop(config)
    return refresh(config, config.stops[-1].id)


def on_remove_stop(config, stop_id):
    return refresh(editor.remove_stop(config, stop_id))


def on_select_stop(config, stop_id):
    return refresh(config, stop_id)


async def on_generate(prompt: str, config: GradientConfig, provider: str):
    """Mood → AI suggestion. Failures leave the configuration unchanged."""
    global _session, _session_provider
    try:
        if _session is None or (_session_provider != provider and not _session.busy):
            _session = GenerationSession(MoodGradientGenerator(provider=provider))
            _session_provider = provider
    except (RuntimeError, ValueError) as e:
        logger.error(f"❌ LLM provider unavailable: {e}")
        gr.Warning(f"AI provider unavailable: {e}")
        return (*refresh(config), "", gr.update(interactive=True))

    new_config, result, error = await _session.apply(prompt, config)
    if error is not None:
        gr.Warning(f"AI generation failed: {error}")
        return (*refresh(config), "", gr.update(interactive=True))

    info = f"### {result.name}\n{result.description}"
    return (*refresh(editor.replace_config(config, new_config)), info, gr.update(interactive=True))


def build_ui() -> gr.Blocks:
    initial = default_config()
    preview, css, svg = render_outputs(initial)
    first = initial.stops[0]

    with gr.Blocks(title=f"{settings.APP_NAME} - SVG Animated Gradients") as demo:
        config_state = gr.State(initial)
        gr.Markdown(f"# 🎨 {settings.APP_NAME} `BETA`\nSVG animated gradients")

        with gr.Row():
            with gr.Column(scale=2):
                with gr.Tabs():
                    with gr.Tab("👁️ Preview"):
                        preview_html = gr.HTML(preview)
                    with gr.Tab("CSS"):
                        css_code = gr.Code(css, language="css", interactive=False)
                        copy_css_btn = gr.Button("📋 Copy CSS", size="sm")
                    with gr.Tab("SVG"):
                        svg_code = gr.Code(svg, language="html", interactive=False)
                        copy_svg_btn = gr.Button("📋 Copy SVG", size="sm")

            with gr.Column(scale=1):
                gr.Markdown("### ✨ AI Generation")
                with gr.Row():
                    mood_input = gr.Textbox(placeholder="Describe mood...", show_label=False, scale=4)
                    generate_btn = gr.Button("⚡", variant="primary", scale=1)
                provider_choice = gr.Dropdown(
                    choices=LLMFactory.list_providers(), value=settings.LLM_PROVIDER, label="Provider"
                )
                ai_info = gr.Markdown()

                gr.Markdown("### Type")
                type_radio = gr.Radio([t.value for t in GradientType], value=initial.type.value, show_label=False)
                angle_slider = gr.Slider(0, 360, value=initial.angle, step=1, label="Angle")

                gr.Markdown("### Animation")
                animation_radio = gr.Radio(
                    [a.value for a in AnimationType], value=initial.animation.value, show_label=False
                )
                duration_slider = gr.Slider(
                    1, 20, value=initial.animation_duration, step=0.5, label="Duration (s)", visible=False
                )

                gr.Markdown("### Stops")
                stop_select = gr.Dropdown(choices=stop_choices(initial), value=first.id, label="Stop")
                stop_color = gr.ColorPicker(value=first.color, label="Color")
                stop_offset = gr.Slider(0, 100, value=first.offset, step=1, label="Position (%)")
                with gr.Row():
                    add_btn = gr.Button("➕ Add Stop", size="sm")
                    remove_btn = gr.Button("🗑️ Remove Stop", size="sm", interactive=False)

        outputs = [
            config_state, preview_html, css_code, svg_code,
            stop_select, stop_color, stop_offset,
            angle_slider, duration_slider, remove_btn,
        ]

        type_radio.change(on_type, [config_state, type_radio, stop_select], outputs)
        angle_slider.release(on_angle, [config_state, angle_slider, stop_select], outputs)
        animation_radio.change(on_animation, [config_state, animation_radio, stop_select], outputs)
        duration_slider.release(on_duration, [config_state, duration_slider, stop_select], outputs)
        stop_select.input(on_select_stop, [config_state, stop_select], outputs)
        stop_color.input(on_stop_color, [config_state, stop_select, stop_color], outputs)
        stop_offset.release(on_stop_offset, [config_state, stop_select, stop_offset], outputs)
        add_btn.click(on_add_stop, [config_state, stop_select], outputs)
        remove_btn.click(on_remove_stop, [config_state, stop_select], outputs)

        # The session rejects requests from other clients while one is outstanding;
        # the button only guards this client.
        generate_btn.click(
            lambda: gr.update(interactive=False), None, generate_btn, queue=False
        ).then(
            on_generate,
            [mood_input, config_state, provider_choice],
            [*outputs, ai_info, generate_btn],
            concurrency_limit=None,
        )

        copy_css_btn.click(None, css_code, None, js=COPY_JS)
        copy_svg_btn.click(None, svg_code, None, js=COPY_JS)

    return demo


if __name__ == "__main__":
    logger.info(f"🚀 Starting {settings.APP_NAME} on {settings.HOST}:{settings.PORT}")
    build_ui().launch(server_name=settings.HOST, server_port=settings.PORT, debug=settings.DEBUG)
