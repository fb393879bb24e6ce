"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(lang="en", template_dir="views")
    """

    # Success responses
    default_mime: str = "text/gemini"
    charset: str | None = None
    lang: str | None = None

    # Synthesized responses
    not_found_meta: str = "-"
    failure_meta: str = "Server error"

    # Collect print() output from handlers into the response body.
    # Swaps sys.stdout for the whole process while a stack runs.
    capture_output: bool = True

    # Templates
    template_dir: str | Path = "templates"
    autoescape: bool = False
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Logging (used by the ``geode`` CLI)
    log_level: str = "warning"

    @property
    def default_meta(self) -> str:
        """Meta for a fresh success response, e.g. ``text/gemini; lang=en``."""
        parts = [self.default_mime]
        if self.charset:
            parts.append(f"charset={self.charset}")
        if self.lang:
            parts.append(f"lang={self.lang}")
        return "; ".join(parts)
