"""Command line interface.

Usage:
    cascade figma frames <file-key>
    cascade figma frame <file-key> <frame-id>
    cascade figma to-react <file-key> <frame-id> [-f mui-tsx] [-n Name] [-i "..."] [-o path]
    cascade figma to-react <file-key> <frame-id> --ai [--model gpt-4o]
    cascade model get
    cascade model set <model>

Frame ids may be given in URL form (7-16) or API form (7:16).

Requires:
    - FIGMA_TOKEN env var set (figma commands)
"""
from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from . import __version__
from .codegen.compiler import (
    compile_component,
    default_component_name,
    derive_component_name,
    validate_component_name,
)
from .codegen.templates import FrameworkVariant
from .config_store import get_config_path, get_selected_model, resolve_model, set_selected_model
from .errors import CascadeError, ComponentNameError, MissingCredentialError
from .integrations.ai_proxy import AIProxyClient
from .integrations.figma_client import FigmaClient
from .integrations.request_executor import AttemptOutcome, RequestAttempt
from .logging_config import get_cli_logger
from .output import resolve_output_path, write_component

TOKEN_HELP = (
    "Please set your Figma personal access token as FIGMA_TOKEN environment variable.\n"
    "Example: export FIGMA_TOKEN=your_token_here\n"
    "Get your token at: https://www.figma.com/developers/api#authentication"
)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _report_attempt(record: RequestAttempt) -> None:
    """Progress lines for retried requests (stderr)."""
    if record.outcome != AttemptOutcome.RETRYABLE_FAILURE:
        return
    next_attempt = f"(Attempt {record.attempt + 1}/{record.max_attempts})"
    if record.status_code == 429:
        _eprint(f"Rate limit hit. Retrying in {record.wait:g} seconds... {next_attempt}")
    else:
        _eprint(f"Network error. Retrying in {record.wait:g} seconds... {next_attempt}")


def _suggested_name(frame_name: str) -> str:
    """Frame name minus punctuation when that is a valid name, PascalCase otherwise."""
    suggestion = default_component_name(frame_name)
    try:
        return validate_component_name(suggestion)
    except ComponentNameError:
        return derive_component_name(frame_name)


def _figma_client() -> FigmaClient:
    if not os.getenv("FIGMA_TOKEN"):
        raise MissingCredentialError("FIGMA_TOKEN environment variable is not set.")
    return FigmaClient(on_attempt=_report_attempt)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def _cmd_frames(args: argparse.Namespace) -> int:
    async with _figma_client() as client:
        frames = await client.list_frames(args.file_key)

    if not frames:
        print("No frames found in this file.")
        return 0

    print(f"\nFound {len(frames)} frame(s) in file: {args.file_key}\n")
    for index, frame in enumerate(frames, start=1):
        box = frame.absolute_bounding_box
        width = box.width if box else "N/A"
        height = box.height if box else "N/A"
        print(f"{index}. {frame.name}")
        print(f"   ID: {frame.id}")
        print(f"   Size: {width} x {height}")
        print(f"   Type: {frame.type}")
        if frame.background_color is not None:
            print(f"   Background: {json.dumps(frame.background_color.model_dump())}")
        print("")
    return 0


async def _cmd_frame(args: argparse.Namespace) -> int:
    async with _figma_client() as client:
        document = await client.get_frame_data(args.file_key, args.frame_id)
    print(json.dumps(document, indent=2, ensure_ascii=False))
    return 0


async def _cmd_to_react(args: argparse.Namespace) -> int:
    if args.name:
        validate_component_name(args.name)
    variant = FrameworkVariant.resolve(args.framework)

    async with _figma_client() as client:
        frame = await client.get_frame(args.file_key, args.frame_id)

    component_name = args.name or _suggested_name(frame.name)
    if args.ai:
        model = resolve_model(args.model)
        async with AIProxyClient(on_attempt=_report_attempt) as ai:
            code = await ai.generate_component(
                frame, variant.value, component_name, args.instructions, model,
            )
    else:
        code = compile_component(frame, variant, component_name, args.instructions)

    path = write_component(code, resolve_output_path(component_name, variant, args.output))
    print(f"✓ Component saved to: {path}")
    print(f"✓ Framework: {variant.value}")
    print(f"✓ Component name: {component_name}")
    return 0


def _cmd_model(args: argparse.Namespace) -> int:
    if args.model_command == "set":
        path = set_selected_model(args.model)
        print(f"Selected model set to {args.model} ({path})")
        return 0
    selected = get_selected_model()
    if selected:
        print(selected)
    else:
        print(f"No model selected; using default {resolve_model()} ({get_config_path()})")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cascade", description="Convert Figma frames into React components",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    commands = parser.add_subparsers(dest="command", required=True)

    figma = commands.add_parser("figma", help="Interact with the Figma API")
    figma_commands = figma.add_subparsers(dest="figma_command", required=True)

    frames = figma_commands.add_parser("frames", help="List all frames in a Figma file")
    frames.add_argument(
        "file_key", help="Figma file key (from the URL: figma.com/file/{file-key}/...)",
    )

    frame = figma_commands.add_parser("frame", help="Print the JSON of a specific frame")
    frame.add_argument("file_key", help="Figma file key")
    frame.add_argument("frame_id", help="Frame node ID (URL or API form, e.g. 7-16 or 7:16)")

    to_react = figma_commands.add_parser(
        "to-react", help="Convert a Figma frame to a React component",
    )
    to_react.add_argument("file_key", help="Figma file key")
    to_react.add_argument("frame_id", help="Frame node ID (URL or API form, e.g. 7-16 or 7:16)")
    to_react.add_argument(
        "-f", "--framework", default=FrameworkVariant.MUI_TSX.value,
        choices=[v.value for v in FrameworkVariant],
        help="Component framework (default: mui-tsx)",
    )
    to_react.add_argument(
        "-n", "--name", default=None,
        help="Component name (default: derived from the frame name)",
    )
    to_react.add_argument(
        "-i", "--instructions", default="",
        help="Additional instructions, added as a comment (or sent to the AI model)",
    )
    to_react.add_argument(
        "-o", "--output", default=None,
        help="Output file path (default: ./{Name}.tsx or ./{Name}.jsx)",
    )
    to_react.add_argument(
        "--ai", action="store_true", help="Generate the component with the AI proxy",
    )
    to_react.add_argument(
        "--model", default=None, help="AI model (default: stored selection)",
    )

    model = commands.add_parser("model", help="Show or change the selected AI model")
    model_commands = model.add_subparsers(dest="model_command", required=True)
    model_commands.add_parser("get", help="Print the selected model")
    model_set = model_commands.add_parser("set", help="Store the selected model")
    model_set.add_argument("model", help="Model identifier")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    get_cli_logger(verbose=args.verbose)

    try:
        if args.command == "model":
            return _cmd_model(args)
        handler = {
            "frames": _cmd_frames,
            "frame": _cmd_frame,
            "to-react": _cmd_to_react,
        }[args.figma_command]
        return asyncio.run(handler(args))
    except MissingCredentialError as e:
        _eprint(f"Error: {e}")
        _eprint(TOKEN_HELP)
        return 1
    except CascadeError as e:
        _eprint(f"Error: {e}")
        return 1
    except OSError as e:
        _eprint(f"Error: failed to write component: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
