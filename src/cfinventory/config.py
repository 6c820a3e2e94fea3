"""Configuration management for the template inventory analyzer."""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


DEFAULT_TEMPLATE_EXTENSIONS = ["cfm", "cfml", "cfc"]

DEFAULT_BINARY_EXTENSIONS = [
    "exe", "dll", "so", "dylib", "jar", "war", "zip", "rar",
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx",
    "jpg", "jpeg", "png", "gif", "bmp", "ico", "svg",
    "mp3", "mp4", "avi", "mov",
]

DEFAULT_IGNORED_DIRS = [
    ".git",
    ".svn",
    ".hg",
    "node_modules",
    "target",
    "bin",
    "obj",
    "logs",
    "temp",
    "cache",
    "__pycache__",
]

# Gitignore-style patterns, matched against the lowercased file name
DEFAULT_ARTIFACT_PATTERNS = [
    ".ds_store",
    "thumbs.db",
    ".idea*",
    ".vscode*",
    "*.iml",
    "*.suo",
    "*.user",
    "*.tmp",
    "*.temp",
    "*.log",
    "*.bak",
    "*~",
]

DEFAULT_ENCODINGS = ["utf-8", "iso-8859-1", "cp1252"]


class Config(BaseModel):
    """Application configuration."""

    # Scanner Settings
    template_extensions: list[str] = Field(
        default_factory=lambda: DEFAULT_TEMPLATE_EXTENSIONS.copy()
    )
    binary_extensions: list[str] = Field(
        default_factory=lambda: DEFAULT_BINARY_EXTENSIONS.copy()
    )
    ignored_dirs: list[str] = Field(default_factory=lambda: DEFAULT_IGNORED_DIRS.copy())
    artifact_patterns: list[str] = Field(
        default_factory=lambda: DEFAULT_ARTIFACT_PATTERNS.copy()
    )
    respect_gitignore: bool = Field(default=False)

    # Loader Settings
    encodings: list[str] = Field(default_factory=lambda: DEFAULT_ENCODINGS.copy())

    # Pipeline Settings
    max_workers: int = Field(default=4, ge=1)

    # Output Settings
    output_dir: Path = Field(default=Path("reports"))

    def is_template(self, extension: str) -> bool:
        """Return True if files with this extension go through tag extraction."""
        return extension.lower().lstrip(".") in {
            ext.lower().lstrip(".") for ext in self.template_extensions
        }

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        def _parse_int(value: Optional[str], fallback: int) -> int:
            try:
                parsed = int(value) if value is not None else fallback
            except ValueError:
                return fallback
            return parsed if parsed >= 1 else fallback

        ignored_dirs = DEFAULT_IGNORED_DIRS.copy()
        extra_ignored = os.getenv("IGNORED_DIRS")
        if extra_ignored:
            ignored_dirs.extend(
                [entry.strip() for entry in extra_ignored.split(",") if entry.strip()]
            )

        output_dir_env = os.getenv("OUTPUT_DIR")

        return cls(
            ignored_dirs=ignored_dirs,
            max_workers=_parse_int(os.getenv("MAX_WORKERS"), 4),
            output_dir=Path(output_dir_env) if output_dir_env else Path("reports"),
        )
