"""Configuration loader for wikidown.toml."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .core.model import NoteFile
from .core.pipeline import DEFAULT_MAX_EMBED_DEPTH, DEFAULT_PAYWALL


@dataclass
class LinksConfig:
    """Link rendering configuration."""
    base_url: str = ""


@dataclass
class NotesConfig:
    """Where embedded and linked notes come from."""
    folder: Path
    files: list[NoteFile] | None = None  # registry mode when set


@dataclass
class PaywallConfig:
    """Fragment substituted for private regions; empty disables the pass."""
    html: str | None = DEFAULT_PAYWALL


@dataclass
class EmbedConfig:
    """Embed expansion configuration."""
    max_depth: int = DEFAULT_MAX_EMBED_DEPTH


@dataclass
class WikidownConfig:
    """Complete wikidown configuration."""
    notes: NotesConfig
    links: LinksConfig = field(default_factory=LinksConfig)
    paywall: PaywallConfig = field(default_factory=PaywallConfig)
    embeds: EmbedConfig = field(default_factory=EmbedConfig)


def _note_files(entries: list[dict[str, Any]] | None) -> list[NoteFile] | None:
    if entries is None:
        return None
    return [
        NoteFile(
            file=e["file"],
            permalink=e.get("permalink"),
            content=e.get("content"),
        )
        for e in entries
    ]


def load_config(config_path: Path | None = None, notes_path: Path | None = None) -> WikidownConfig:
    """
    Load configuration from wikidown.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/wikidown.toml
    3. notes_path/wikidown.toml

    Args:
        config_path: Explicit path to config file
        notes_path: Notes folder for fallback search

    Returns:
        WikidownConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / "wikidown.toml")
    if notes_path:
        search_paths.append(notes_path / "wikidown.toml")

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    # Parse notes config
    notes_data = toml_data.get("notes", {})
    notes_config = NotesConfig(
        folder=Path(notes_data.get("folder", notes_path or Path("./content"))),
        files=_note_files(notes_data.get("files")),
    )

    links_data = toml_data.get("links", {})
    links_config = LinksConfig(base_url=links_data.get("base_url", ""))

    paywall_data = toml_data.get("paywall", {})
    paywall_config = PaywallConfig(html=paywall_data.get("html", DEFAULT_PAYWALL) or None)

    embeds_data = toml_data.get("embeds", {})
    embed_config = EmbedConfig(
        max_depth=embeds_data.get("max_depth", DEFAULT_MAX_EMBED_DEPTH)
    )

    return WikidownConfig(
        notes=notes_config,
        links=links_config,
        paywall=paywall_config,
        embeds=embed_config,
    )
