"""Gradio app entrypoint."""

from __future__ import annotations

from typing import Any

import gradio as gr

from seclens.config.settings import load_config
from seclens.core.logging import setup_logging
from seclens.domain.verdicts import AnalysisKind
from seclens.orchestrator.service import AnalysisService, create_service
from seclens.orchestrator.session import ToolSession, ToolState
from seclens.tools.validation import image_file_to_data_url
from seclens.ui.render import render_markdown

TOOLS = (
    (AnalysisKind.DOMAIN, "Email & Domain", "Domain or email address", "example.com or user@example.com", 1),
    (AnalysisKind.URL, "URL Analyzer", "URL", "https://example.com/login", 1),
    (AnalysisKind.TOKEN, "Auth Token", "Token", "Paste your auth token here (e.g., a JWT)", 6),
    (AnalysisKind.SECRETS, "Secret Scanner", "Text", "Paste code, config or logs to scan", 12),
    (AnalysisKind.RAW_EMAIL, "Raw Email", "Raw email source", "Paste the full .eml source here", 14),
)


def format_state(state: ToolState) -> str:
    if state.busy:
        return "_Analyzing..._"
    parts = []
    if state.error:
        parts.append(f"**Error:** {state.error}")
    if state.result is not None:
        parts.append(render_markdown(state.result))
    return "\n\n".join(parts)


def _format_runtime_hint(runtime: dict[str, Any]) -> str:
    hint = f"Current: profile={runtime.get('profile')}, provider={runtime.get('provider')}, model={runtime.get('model')}"
    if runtime.get("provider") == "gemini" and not runtime.get("api_key_configured"):
        hint += " (no API key configured: set `SECLENS_API_KEY` or `GEMINI_API_KEY`)"
    if runtime.get("provider") == "ollama":
        hint += " (ensure Ollama is running at the configured api_base)"
    return hint


def _resolve_model_options(runtime: dict[str, Any]) -> tuple[list[str], str | None]:
    current_model = str(runtime.get("model", "")).strip()
    choices = [str(item).strip() for item in runtime.get("model_choices", []) if str(item).strip()]
    if current_model and current_model not in choices:
        choices.insert(0, current_model)
    return choices, current_model or None


class ToolBoard:
    """The per-tool sessions of one browser session."""

    def __init__(self, service: AnalysisService) -> None:
        self.sessions = {kind: ToolSession(service, kind) for kind in AnalysisKind}

    def rebind(self, service: AnalysisService) -> None:
        for session in self.sessions.values():
            session.service = service

    async def run(self, kind: AnalysisKind, raw: str) -> str:
        state = await self.sessions[kind].submit(raw)
        return format_state(state)

    async def run_screenshot(self, image_path: str | None) -> str:
        data_url = image_file_to_data_url(image_path) if image_path else ""
        return await self.run(AnalysisKind.SCREENSHOT, data_url)


async def run_tool(
    kind: AnalysisKind,
    raw: str,
    board: ToolBoard | None,
    service: AnalysisService,
) -> tuple[str, ToolBoard]:
    """Run one tool on the caller's board, creating it on first use.

    `board` lives in a per-browser `gr.State`, so results never cross sessions.
    """

    board = board or ToolBoard(service)
    if kind is AnalysisKind.SCREENSHOT:
        return await board.run_screenshot(raw or None), board
    return await board.run(kind, raw), board


def build() -> gr.Blocks:
    service, runtime = create_service()
    choices, current_model = _resolve_model_options(runtime)

    def _switch_backend(profile: str, model: str | None, board: ToolBoard | None):
        selected_model = (model or "").strip() or None
        new_service, new_runtime = create_service(profile_override=profile, model_override=selected_model)
        board = board or ToolBoard(new_service)
        board.rebind(new_service)
        return _format_runtime_hint(new_runtime), board

    def _reload_models(profile: str, board: ToolBoard | None):
        new_service, new_runtime = create_service(profile_override=profile)
        board = board or ToolBoard(new_service)
        board.rebind(new_service)
        new_choices, value = _resolve_model_options(new_runtime)
        dropdown = gr.Dropdown(choices=new_choices, value=value, allow_custom_value=True)
        return dropdown, _format_runtime_hint(new_runtime), board

    with gr.Blocks(title="seclens") as demo:
        gr.Markdown("# seclens")
        gr.Markdown(
            "AI-assisted security checks. Models come from env + `src/seclens/config/defaults.yaml`."
        )
        board = gr.State(None)
        runtime_hint = gr.Markdown(_format_runtime_hint(runtime))
        with gr.Row():
            profile = gr.Dropdown(
                choices=runtime.get("profile_choices") or [runtime.get("profile")],
                value=runtime.get("profile"),
                label="Profile",
            )
            model = gr.Dropdown(choices=choices, value=current_model, label="Model", allow_custom_value=True)
        profile.change(_reload_models, inputs=[profile, board], outputs=[model, runtime_hint, board])
        model.change(_switch_backend, inputs=[profile, model, board], outputs=[runtime_hint, board])

        with gr.Tabs():
            for kind, title, label, placeholder, lines in TOOLS:
                with gr.Tab(title):
                    inp = gr.Textbox(label=label, placeholder=placeholder, lines=lines)
                    btn = gr.Button("Analyze")
                    out = gr.Markdown()

                    async def _handler(raw: str, state: ToolBoard | None, _kind: AnalysisKind = kind):
                        return await run_tool(_kind, raw, state, service)

                    btn.click(_handler, inputs=[inp, board], outputs=[out, board])
            with gr.Tab("Screenshot"):
                image = gr.Image(label="Email screenshot", type="filepath")
                btn = gr.Button("Analyze")
                out = gr.Markdown()

                async def _screenshot(image_path: str | None, state: ToolBoard | None):
                    return await run_tool(AnalysisKind.SCREENSHOT, image_path or "", state, service)

                btn.click(_screenshot, inputs=[image, board], outputs=[out, board])
    return demo


def launch() -> None:
    cfg, _ = load_config()
    setup_logging(cfg.log_level)
    build().launch(share=cfg.gradio_share)


if __name__ == "__main__":
    launch()
