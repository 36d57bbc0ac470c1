"""Runtime settings, read from the process environment."""

import os
from typing import Tuple

from pydantic import BaseModel, Field

DEFAULT_CONTENT_DIR = "/www"
DEFAULT_STATIC_DIRS = ("js", "style", "audio", "images", "media")


class Settings(BaseModel):
    content_dir: str = DEFAULT_CONTENT_DIR
    live_reload: bool = Field(
        default=True,
        description="Rebuild the content model before every request (disabled when RELEASE=1).",
    )
    static_dirs: Tuple[str, ...] = DEFAULT_STATIC_DIRS
    legacy_suffixes: Tuple[str, ...] = (".yml",)
    module_suffixes: Tuple[str, ...] = (".json",)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``DOCSITE_*`` variables and ``RELEASE``."""
        values: dict = {"live_reload": os.getenv("RELEASE") != "1"}

        content_dir = os.getenv("DOCSITE_CONTENT_DIR")
        if content_dir:
            values["content_dir"] = content_dir

        static_dirs = os.getenv("DOCSITE_STATIC_DIRS")
        if static_dirs is not None:
            values["static_dirs"] = tuple(d.strip() for d in static_dirs.split(",") if d.strip())

        return cls(**values)
