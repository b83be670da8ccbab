import logging
import re
from typing import Any

import yaml

from ..core.ports import FrontmatterCodec

logger = logging.getLogger(__name__)

# A leading `---` fence pair. The same lines are also a thematic break and a
# setext heading in plain markdown, so the block only counts as frontmatter
# when it loads as a YAML mapping.
FRONTMATTER_RE = re.compile(r"\A[ \t\r\n]*---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


class YamlFrontmatter(FrontmatterCodec):
    """Split a YAML frontmatter mapping from the note body."""

    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        m = FRONTMATTER_RE.match(text)
        if m is None:
            return {}, text
        try:
            meta = yaml.safe_load(m.group(1))
        except yaml.YAMLError as e:
            logger.debug("Leading --- block is not YAML, keeping it as markdown: %s", e)
            return {}, text
        if meta is None:
            meta = {}
        if not isinstance(meta, dict):
            return {}, text
        return meta, text[m.end() :]
