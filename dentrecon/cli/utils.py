"""CLI utility functions."""

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console

from dentrecon.cli.theme import theme
from dentrecon.domain.value_objects.engine_limits import (
    DEFAULT_LIMITS,
    LIMIT_PRESETS,
    EngineLimits,
    LimitPreset,
)
from dentrecon.domain.value_objects.image_ref import ImageRef, build_manifest
from dentrecon.infrastructure.utils.ai_json import parse_ai_json

console = Console()


def default_state_dir() -> Path:
    return Path.cwd() / ".dentrecon"


def limits_from(ctx: typer.Context) -> EngineLimits:
    """Engine limits for the preset chosen on the root command."""
    preset = (ctx.obj or {}).get("preset", LimitPreset.DEFAULT)
    return LIMIT_PRESETS.get(preset, DEFAULT_LIMITS)


def read_document(path: Path, fallback: Any = None) -> Any:
    """JSON document from a file that may also hold prose or a fenced block."""
    if not path.exists():
        fail(f"File not found: {path}")
    return parse_ai_json(path.read_text(encoding="utf-8"), fallback)


def load_manifest(images: int | None, manifest: Path | None) -> list[ImageRef]:
    """Image manifest from ``--manifest`` (ids or entries) or ``--images`` count."""
    if manifest is not None:
        entries = read_document(manifest, [])
        if not isinstance(entries, list):
            fail(f"Manifest must be a JSON list: {manifest}")
        refs: list[ImageRef] = []
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict):
                entry = {"id": str(entry)}
            try:
                refs.append(ImageRef.model_validate({**entry, "index": i}))
            except ValidationError:
                fail(f"Invalid manifest entry {i} in {manifest}")
        return refs
    count = 1 if images is None else images
    return build_manifest([f"image-{i}" for i in range(count)])


def echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def fail(message: str) -> NoReturn:
    console.print(f"[{theme.ERROR_BOLD}]Error:[/] {message}")
    raise typer.Exit(1)
