"""Markdown bodies for catalog entries.

Catalog rows only hold a file reference; the article itself is read from a
storage provider keyed by ``<folder>/<name>.md``.
"""

from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path

import aiofiles

from handbook.config import get_settings


class ContentFileNotFoundError(Exception):
    """Raised when a markdown file does not exist in storage."""


class MarkdownStorage(ABC):
    """Abstract base class for markdown providers."""

    @abstractmethod
    async def read(self, key: str) -> str:
        """Return the markdown text stored under ``key``.

        Raises
        ------
            ContentFileNotFoundError: If nothing is stored under ``key``.
        """
        raise NotImplementedError


class LocalMarkdownStorage(MarkdownStorage):
    """Local filesystem markdown provider."""

    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path).resolve()

    def _get_full_path(self, key: str) -> Path:
        path = (self.base_path / key).resolve()
        # Keys must stay inside the content root
        if not path.is_relative_to(self.base_path):
            msg = f"File not found: {key}"
            raise ContentFileNotFoundError(msg)
        return path

    async def read(self, key: str) -> str:
        path = self._get_full_path(key)
        if not path.is_file():
            msg = f"File not found: {key}"
            raise ContentFileNotFoundError(msg)
        async with aiofiles.open(path, encoding="utf-8") as f:
            return await f.read()


def markdown_key(folder: str, name: str) -> str:
    return f"{folder}/{name}.md"


@lru_cache
def get_markdown_storage() -> MarkdownStorage:
    """Get the configured markdown storage provider."""
    return LocalMarkdownStorage(get_settings().CONTENT_FILES_PATH)
