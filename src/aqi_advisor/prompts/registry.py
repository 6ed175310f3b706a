"""Prompt templates with named placeholders and content-hash versions."""
from __future__ import annotations

import hashlib
import re
from pathlib import Path

TEMPLATES_DIR = Path(__file__).parent / "templates"

# {city}, {before_pm25}; the JSON skeleton in a template never matches since
# its braces are followed by whitespace or a quote
_PLACEHOLDER = re.compile(r"\{([a-z][a-z0-9_]*)\}")


class PromptRegistry:
    """Reads ``<name>.md`` templates from a directory and renders them.

    The version of a template is ``<name>-<first 8 hex of its SHA-256>``, so
    a reconciliation result records exactly which wording produced it.
    """

    def __init__(self, templates_dir: Path = TEMPLATES_DIR):
        self._templates_dir = Path(templates_dir)
        self._cache: dict[str, str] = {}
        self._hashes: dict[str, str] = {}

    def load_template(self, name: str) -> str:
        if name not in self._cache:
            path = self._templates_dir / f"{name}.md"
            if not path.is_file():
                raise FileNotFoundError(f"Prompt template not found: {path}")
            self._cache[name] = path.read_text(encoding="utf-8")
        return self._cache[name]

    def placeholders(self, template_name: str) -> set[str]:
        return set(_PLACEHOLDER.findall(self.load_template(template_name)))

    def render(self, template_name: str, variables: dict | None = None) -> str:
        """Fill the named placeholders; unknown ones are left as written."""
        values = {key: str(value) for key, value in (variables or {}).items()}

        def _fill(match: re.Match) -> str:
            return values.get(match.group(1), match.group(0))

        return _PLACEHOLDER.sub(_fill, self.load_template(template_name))

    def get_hash(self, template_name: str) -> str:
        if template_name not in self._hashes:
            digest = hashlib.sha256(self.load_template(template_name).encode("utf-8"))
            self._hashes[template_name] = digest.hexdigest()[:16]
        return self._hashes[template_name]

    def get_version(self, template_name: str) -> str:
        return f"{template_name}-{self.get_hash(template_name)[:8]}"

    def clear_cache(self) -> None:
        """Forget loaded templates so edits on disk are picked up."""
        self._cache.clear()
        self._hashes.clear()
