import logging
from pathlib import Path
from typing import Callable, Iterable

from ..core.model import NoteFile, ResolvedReference
from ..core.ports import FrontmatterCodec, NoteResolver, StorageStrategy
from ..core.utils import slugify
from .fs_storage import FsStorage
from .yaml_codec import YamlFrontmatter

logger = logging.getLogger(__name__)

TitleToUrl = Callable[[str], str]
FetchContent = Callable[[str], str | None]


def join_url(base_url: str, path: str) -> str:
    if not base_url:
        return path
    return base_url.rstrip("/") + "/" + path.lstrip("/")


class SlugResolver(NoteResolver):
    """Every title is a note at /<slug>; no content is ever available."""

    def __init__(self, base_url: str = ""):
        self.base_url = base_url

    def resolve(self, target: str) -> ResolvedReference:
        return ResolvedReference(
            href=join_url(self.base_url, f"/{slugify(target)}"), title=target
        )

    def fetch_content(self, target: str) -> str | None:
        return None


class FolderResolver(NoteResolver):
    """
    Notes are files <folder>/<title>.md. A `slug` in a note's frontmatter
    overrides the slugified title. Existence is never checked for links.
    """

    def __init__(
        self,
        storage: StorageStrategy,
        base_url: str = "",
        frontmatter: FrontmatterCodec | None = None,
    ):
        self.storage = storage
        self.base_url = base_url
        self.frontmatter = frontmatter or YamlFrontmatter()

    @classmethod
    def from_folder(cls, folder: Path, base_url: str = "") -> "FolderResolver":
        return cls(FsStorage(folder), base_url=base_url)

    def resolve(self, target: str) -> ResolvedReference:
        slug = slugify(target)
        raw = self.storage.read_raw(target)
        if raw is not None:
            meta, _body = self.frontmatter.decode(raw)
            if meta.get("slug"):
                slug = str(meta["slug"]).strip("/")
        return ResolvedReference(href=join_url(self.base_url, f"/{slug}"), title=target)

    def fetch_content(self, target: str) -> str | None:
        return self.storage.read_raw(target)


class RegistryResolver(NoteResolver):
    """
    Resolve against an explicit list of known notes. Targets missing from
    the registry are reported as not found.
    """

    def __init__(self, files: Iterable[NoteFile], base_url: str = ""):
        self.files = {f.name: f for f in files}
        self.base_url = base_url

    def resolve(self, target: str) -> ResolvedReference:
        entry = self.files.get(target)
        if entry is None:
            logger.debug("Link target %r is not a known note", target)
        if entry is not None and entry.permalink:
            path = entry.permalink
        else:
            path = f"/{slugify(target)}"
        return ResolvedReference(
            href=join_url(self.base_url, path), title=target, found=entry is not None
        )

    def fetch_content(self, target: str) -> str | None:
        entry = self.files.get(target)
        return entry.content if entry is not None else None


class CallableResolver(NoteResolver):
    """
    Plug user functions in front of another resolver.

    `title_to_url` returns the complete href: the wrapped resolver's base URL
    is not prepended. Existence is still answered by the wrapped resolver.
    """

    def __init__(
        self,
        fallback: NoteResolver,
        title_to_url: TitleToUrl | None = None,
        fetch_embed_content: FetchContent | None = None,
    ):
        self.fallback = fallback
        self.title_to_url = title_to_url
        self.fetch_embed_content = fetch_embed_content

    def resolve(self, target: str) -> ResolvedReference:
        if self.title_to_url is None:
            return self.fallback.resolve(target)
        found = self.fallback.resolve(target).found
        return ResolvedReference(href=self.title_to_url(target), title=target, found=found)

    def fetch_content(self, target: str) -> str | None:
        if self.fetch_embed_content is None:
            return self.fallback.fetch_content(target)
        return self.fetch_embed_content(target)
