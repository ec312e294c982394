#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/workspace.py
"""File collaborator for Docusaurus projects.

The editor core only ever sees Markdown bodies. Reading, writing and listing
files belongs to a ``ContentStore``; ``FileSystemStore`` is the reference
implementation over a project directory on disk::

    my-site/
        docusaurus.config.ts
        sidebars.ts
        docs/
            intro.md
            tutorial/
                _category_.json
                setup.mdx
        blog/
            2025-01-01-welcome.md

Examples
--------
    >>> store = FileSystemStore("my-site")
    >>> metadata, body = store.read_body("docs/intro.md")
    >>> store.write_body("docs/intro.md", body.replace("Hello", "Hi"), metadata)
    True
    >>> [entry.classification for entry in store.list_files()]
    ['config_file', 'config_file', 'doc', 'category_metadata', 'doc', 'blog_post']

"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, Union

from docublocks.constants import (
    BLOG_DIR,
    CATEGORY_METADATA_FILENAME,
    CONFIG_FILENAMES,
    DEFAULT_CATEGORY_LINK_TYPE,
    DOCS_DIR,
    MARKDOWN_EXTENSIONS,
    FileClassification,
)
from docublocks.exceptions import DocumentNotFoundError, FileAccessError, MalformedFileError
from docublocks.frontmatter import join_frontmatter, split_frontmatter

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ProjectFile:
    """A classified file of a Docusaurus project.

    Parameters
    ----------
    path : Path
        Absolute path of the file
    classification : {'doc', 'blog_post', 'config_file', 'category_metadata'}
        Role of the file within the project

    """

    path: Path
    classification: FileClassification


@dataclass
class CategoryLink:
    """Link settings of a sidebar category."""

    type: str = DEFAULT_CATEGORY_LINK_TYPE
    description: str = ""


@dataclass
class CategoryMetadata:
    """Contents of a ``_category_.json`` file.

    Parameters
    ----------
    label : str
        Sidebar label of the category
    position : int or float or None, default = None
        Sort position in the sidebar
    link : CategoryLink
        Category index page settings

    """

    label: str
    position: Optional[Union[int, float]] = None
    link: CategoryLink = field(default_factory=CategoryLink)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape Docusaurus reads."""
        data: dict[str, Any] = {"label": self.label}
        if self.position is not None:
            data["position"] = self.position
        data["link"] = {"type": self.link.type, "description": self.link.description}
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CategoryMetadata:
        """Build from parsed ``_category_.json`` content.

        Raises
        ------
        ValueError
            If ``label`` is missing or a field has the wrong type

        """
        label = data.get("label")
        if not isinstance(label, str):
            raise ValueError("Category metadata requires a string 'label'")
        position = data.get("position")
        if position is not None and (isinstance(position, bool) or not isinstance(position, (int, float))):
            raise ValueError(f"Category 'position' must be a number, got {type(position).__name__}")
        link_data = data.get("link") or {}
        if not isinstance(link_data, Mapping):
            raise ValueError("Category 'link' must be an object")
        link = CategoryLink(
            type=str(link_data.get("type", DEFAULT_CATEGORY_LINK_TYPE)),
            description=str(link_data.get("description", "")),
        )
        return cls(label=label, position=position, link=link)


class ContentStore(Protocol):
    """Protocol for the file collaborator used by editor front ends."""

    def read_body(self, path: PathLike) -> tuple[dict[str, Any], str]:
        """Return the frontmatter mapping and Markdown body of a document."""
        ...

    def write_body(self, path: PathLike, body: str, metadata: Mapping[str, Any] | None = None) -> bool:
        """Save a document; return False when the write failed."""
        ...

    def list_files(self, root: PathLike | None = None) -> list[ProjectFile]:
        """Return the classified files of a project."""
        ...


class FileSystemStore:
    """``ContentStore`` over a Docusaurus project directory.

    Relative paths are resolved against ``root``.

    Parameters
    ----------
    root : str or Path
        Project directory (the one holding ``docusaurus.config.*``)

    """

    def __init__(self, root: PathLike):
        """Initialize the store for a project directory."""
        self.root = Path(root)

    def _resolve(self, path: PathLike) -> Path:
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self.root / candidate

    def _load_file(self, path: PathLike) -> tuple[Path, str]:
        file_path = self._resolve(path)
        if not file_path.is_file():
            raise DocumentNotFoundError(str(file_path))
        try:
            return file_path, file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedFileError(
                f"File is not valid UTF-8: {file_path}", file_path=str(file_path), original_error=e
            ) from e
        except OSError as e:
            raise FileAccessError(
                f"Could not read file: {file_path}", file_path=str(file_path), original_error=e
            ) from e

    def read_text(self, path: PathLike) -> str:
        """Read a file as UTF-8 text without splitting its frontmatter.

        Raises the same errors as ``read_body``.
        """
        return self._load_file(path)[1]

    def read_body(self, path: PathLike) -> tuple[dict[str, Any], str]:
        """Read a document and split off its frontmatter.

        Returns
        -------
        tuple[dict, str]
            Frontmatter mapping and Markdown body

        Raises
        ------
        DocumentNotFoundError
            If the file does not exist
        MalformedFileError
            If the file is not UTF-8 text
        FileAccessError
            If the file cannot be read

        """
        file_path, text = self._load_file(path)
        metadata, body = split_frontmatter(text)
        logger.debug(f"Read {file_path} ({len(body)} body characters, {len(metadata)} frontmatter keys)")
        return metadata, body

    def write_body(self, path: PathLike, body: str, metadata: Mapping[str, Any] | None = None) -> bool:
        """Join frontmatter and body and write the document.

        Returns
        -------
        bool
            True on success; failures are logged and reported as False

        """
        file_path = self._resolve(path)
        try:
            file_path.write_text(join_frontmatter(metadata, body), encoding="utf-8")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save {file_path}: {e}")
            return False
        logger.debug(f"Saved {file_path}")
        return True

    def list_files(self, root: PathLike | None = None) -> list[ProjectFile]:
        """List and classify the files of a project.

        Config files come first, then docs and blog posts in path order.
        Missing ``docs/`` or ``blog/`` directories are logged and skipped.

        Parameters
        ----------
        root : str or Path, optional
            Project directory; defaults to the store's root

        """
        project_root = Path(root) if root is not None else self.root
        entries: list[ProjectFile] = []

        for name in CONFIG_FILENAMES:
            candidate = project_root / name
            if candidate.is_file():
                entries.append(ProjectFile(candidate, "config_file"))

        for directory, classification in ((DOCS_DIR, "doc"), (BLOG_DIR, "blog_post")):
            content_dir = project_root / directory
            if not content_dir.is_dir():
                logger.info(f"No {directory}/ directory in {project_root}")
                continue
            for file_path in sorted(p for p in content_dir.rglob("*") if p.is_file()):
                if file_path.name == CATEGORY_METADATA_FILENAME:
                    entries.append(ProjectFile(file_path, "category_metadata"))
                elif file_path.suffix.lower() in MARKDOWN_EXTENSIONS:
                    entries.append(ProjectFile(file_path, classification))  # type: ignore[arg-type]

        return entries

    def create_file(
        self, path: PathLike, title: str, body: str = "", metadata: Mapping[str, Any] | None = None
    ) -> Path:
        """Create a new document with a ``title`` frontmatter field.

        Parent directories are created as needed. Fields in ``metadata``
        follow the title and override it when they also name ``title``.

        Raises
        ------
        FileAccessError
            If the file already exists or cannot be written

        """
        file_path = self._resolve(path)
        if file_path.exists():
            raise FileAccessError(f"File already exists: {file_path}", file_path=str(file_path))
        frontmatter: dict[str, Any] = {"title": title}
        frontmatter.update(metadata or {})
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(join_frontmatter(frontmatter, body), encoding="utf-8")
        except OSError as e:
            raise FileAccessError(
                f"Could not create file: {file_path}", file_path=str(file_path), original_error=e
            ) from e
        logger.info(f"Created {file_path}")
        return file_path

    def delete_file(self, path: PathLike) -> None:
        """Delete a document.

        Raises
        ------
        DocumentNotFoundError
            If the file does not exist
        FileAccessError
            If the file cannot be removed

        """
        file_path = self._resolve(path)
        if not file_path.is_file():
            raise DocumentNotFoundError(str(file_path))
        try:
            file_path.unlink()
        except OSError as e:
            raise FileAccessError(
                f"Could not delete file: {file_path}", file_path=str(file_path), original_error=e
            ) from e
        logger.info(f"Deleted {file_path}")

    def read_category(self, path: PathLike) -> CategoryMetadata:
        """Read a ``_category_.json`` file or the one inside a directory.

        Raises
        ------
        DocumentNotFoundError
            If the file does not exist
        MalformedFileError
            If the content is not valid category JSON

        """
        target = self._resolve(path)
        if target.is_dir():
            target = target / CATEGORY_METADATA_FILENAME
        file_path, text = self._load_file(target)
        try:
            data = json.loads(text)
            if not isinstance(data, dict):
                raise ValueError("Category metadata must be a JSON object")
            return CategoryMetadata.from_dict(data)
        except ValueError as e:
            raise MalformedFileError(
                f"Invalid category metadata in {file_path}: {e}", file_path=str(file_path), original_error=e
            ) from e

    def write_category(self, path: PathLike, category: CategoryMetadata) -> bool:
        """Write a ``_category_.json`` file (or the one inside a directory)."""
        target = self._resolve(path)
        if target.is_dir():
            target = target / CATEGORY_METADATA_FILENAME
        try:
            target.write_text(json.dumps(category.to_dict(), indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save {target}: {e}")
            return False
        return True


__all__ = [
    "ContentStore",
    "FileSystemStore",
    "ProjectFile",
    "CategoryMetadata",
    "CategoryLink",
]
