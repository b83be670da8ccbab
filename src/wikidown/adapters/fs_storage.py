from pathlib import Path

from ..core.ports import StorageStrategy


class FsStorage(StorageStrategy):
    """Notes named `<title>.md` directly under one folder."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def note_path(self, title: str) -> Path:
        return self.root / f"{title}.md"

    def read_raw(self, name: str) -> str | None:
        path = self.note_path(name)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")
