"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_storage import FsStorage
from .adapters.html_renderer import HtmlRenderer
from .adapters.markdown_parser import MarkdownParser
from .adapters.md_serializer import MarkdownSerializer
from .adapters.resolvers import (
    CallableResolver,
    FetchContent,
    FolderResolver,
    RegistryResolver,
    TitleToUrl,
)
from .adapters.yaml_codec import YamlFrontmatter
from .config import WikidownConfig, load_config
from .core.pipeline import Processor
from .core.ports import NoteResolver


@dataclass
class Runtime:
    """Container for all wired components."""
    processor: Processor
    resolver: NoteResolver
    parser: MarkdownParser
    html: HtmlRenderer
    markdown: MarkdownSerializer
    config: WikidownConfig


def build_resolver(
    config: WikidownConfig,
    title_to_url: TitleToUrl | None = None,
    fetch_embed_content: FetchContent | None = None,
) -> NoteResolver:
    """Registry mode when known notes are configured, folder mode otherwise."""
    base_url = config.links.base_url
    resolver: NoteResolver
    if config.notes.files is not None:
        resolver = RegistryResolver(config.notes.files, base_url=base_url)
    else:
        resolver = FolderResolver(
            FsStorage(config.notes.folder), base_url=base_url, frontmatter=YamlFrontmatter()
        )
    if title_to_url is not None or fetch_embed_content is not None:
        resolver = CallableResolver(
            resolver, title_to_url=title_to_url, fetch_embed_content=fetch_embed_content
        )
    return resolver


def build_runtime(
    config_path: Path | None = None,
    notes_path: Path | None = None,
    base_url: str | None = None,
    title_to_url: TitleToUrl | None = None,
    fetch_embed_content: FetchContent | None = None,
    config: WikidownConfig | None = None,
) -> Runtime:
    """Build and wire all components."""
    if config is None:
        config = load_config(config_path=config_path, notes_path=notes_path)

    # Explicit arguments win over config values
    if notes_path is not None:
        config.notes.folder = notes_path
    if base_url is not None:
        config.links.base_url = base_url

    parser = MarkdownParser(YamlFrontmatter())
    resolver = build_resolver(config, title_to_url, fetch_embed_content)
    processor = Processor(
        resolver,
        parser,
        paywall=config.paywall.html,
        max_embed_depth=config.embeds.max_depth,
    )

    return Runtime(
        processor=processor,
        resolver=resolver,
        parser=parser,
        html=HtmlRenderer(),
        markdown=MarkdownSerializer(),
        config=config,
    )
