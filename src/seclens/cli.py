"""Command line runner."""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
import sys

from seclens.config.settings import load_config
from seclens.core.errors import SeclensError
from seclens.core.logging import setup_logging
from seclens.domain.verdicts import AnalysisKind
from seclens.orchestrator.service import create_service
from seclens.tools.validation import image_file_to_data_url


def read_input(args: argparse.Namespace) -> str:
    if args.image:
        return image_file_to_data_url(args.image)
    if args.input_file:
        return Path(args.input_file).read_text(encoding="utf-8", errors="replace")
    return args.input or ""


def run_once(
    kind: AnalysisKind | str,
    raw: str,
    *,
    profile: str | None = None,
    model: str | None = None,
) -> str:
    service, runtime = create_service(profile_override=profile, model_override=model)
    result = asyncio.run(service.analyze(kind, raw))
    payload = {"kind": AnalysisKind(kind).value, "result": result.to_wire(), "runtime": runtime}
    return json.dumps(payload, ensure_ascii=True, indent=2)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seclens")
    parser.add_argument("--tool", choices=[kind.value for kind in AnalysisKind], help="Analysis to run once.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--input", help="Input text (domain, email, URL, token, text).")
    source.add_argument("--input-file", help="Read the input from a file, e.g. a raw .eml source.")
    source.add_argument("--image", help="Screenshot file for the screenshot tool.")
    parser.add_argument("--profile", help="Config profile to use, e.g. gemini or ollama.")
    parser.add_argument("--model", help="Override model for this run, e.g. gemini-2.5-pro.")
    parser.add_argument("--ui", action="store_true", help="Launch the gradio UI.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.ui and not args.tool:
        parser.error("--tool is required unless --ui is given")
    cfg, _ = load_config(profile_override=args.profile)
    setup_logging(cfg.log_level)

    if args.ui:
        from seclens.ui.gradio_app import build

        build().launch(share=cfg.gradio_share)
        return 0

    try:
        print(run_once(args.tool, read_input(args), profile=args.profile, model=args.model))
    except (SeclensError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0
