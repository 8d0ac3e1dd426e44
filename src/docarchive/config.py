"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from docarchive.errors import ConfigurationError

DEFAULT_USERNAME = "dave"
DEFAULT_PASSWORD = "somepassword"

IMAGE_DPI = 600
# Half of the nominal archive scan resolution.
THUMBNAIL_DPI = IMAGE_DPI // 2


@dataclass(slots=True)
class AppConfig:
    archive_root: Path | None = None
    host: str = "0.0.0.0"
    port: int = 8000
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    thumbnail_dpi: int = THUMBNAIL_DPI
    cors_origins: tuple[str, ...] = ("*",)

    def resolve_archive_root(self, base_dir: Path | None = None) -> Path:
        if self.archive_root is None:
            raise ConfigurationError("An archive path is required")
        root = Path(self.archive_root).expanduser()
        if root.is_absolute() or base_dir is None:
            return root
        return base_dir / root
