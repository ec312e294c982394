#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the file system content store."""

from pathlib import Path

import pytest

from docublocks.exceptions import DocumentNotFoundError, FileAccessError, MalformedFileError
from docublocks.workspace import CategoryLink, CategoryMetadata, FileSystemStore, ProjectFile


@pytest.mark.unit
class TestReadWrite:
    """Test reading and saving documents."""

    def test_read_body(self, docusaurus_project: Path) -> None:
        """Test that frontmatter is split from the body."""
        metadata, body = FileSystemStore(docusaurus_project).read_body("docs/intro.md")
        assert metadata == {"title": "Intro", "sidebar_position": 1}
        assert body == "# Hello\n"

    def test_read_absolute_path(self, docusaurus_project: Path) -> None:
        """Test that absolute paths bypass the root."""
        store = FileSystemStore("/nonexistent")
        _, body = store.read_body(docusaurus_project / "docs" / "tutorial" / "setup.mdx")
        assert body == "# Setup\n"

    def test_read_missing(self, docusaurus_project: Path) -> None:
        """Test reading a file that does not exist."""
        with pytest.raises(DocumentNotFoundError) as exc_info:
            FileSystemStore(docusaurus_project).read_body("docs/missing.md")
        assert exc_info.value.file_path.endswith("missing.md")

    def test_read_invalid_utf8(self, docusaurus_project: Path) -> None:
        """Test that undecodable files are reported as malformed."""
        (docusaurus_project / "docs" / "binary.md").write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(MalformedFileError):
            FileSystemStore(docusaurus_project).read_body("docs/binary.md")

    def test_read_text_keeps_frontmatter(self, docusaurus_project: Path) -> None:
        """Test reading the raw file."""
        assert FileSystemStore(docusaurus_project).read_text("docs/intro.md").startswith("---\ntitle: Intro")

    def test_write_body(self, docusaurus_project: Path) -> None:
        """Test saving with the original frontmatter."""
        store = FileSystemStore(docusaurus_project)
        metadata, _ = store.read_body("docs/intro.md")
        assert store.write_body("docs/intro.md", "# Changed", metadata) is True
        content = (docusaurus_project / "docs" / "intro.md").read_text(encoding="utf-8")
        assert content == "---\ntitle: Intro\nsidebar_position: 1\n---\n# Changed\n"

    def test_write_failure_returns_false(self, docusaurus_project: Path, caplog) -> None:
        """Test that write errors are logged and reported as False."""
        store = FileSystemStore(docusaurus_project)
        assert store.write_body("no-such-dir/page.md", "x") is False
        assert "Failed to save" in caplog.text


@pytest.mark.unit
class TestListFiles:
    """Test project listing and classification."""

    def test_classification(self, docusaurus_project: Path) -> None:
        """Test the order and roles of project files."""
        entries = FileSystemStore(docusaurus_project).list_files()
        assert [(entry.classification, entry.path.relative_to(docusaurus_project).as_posix()) for entry in entries] == [
            ("config_file", "docusaurus.config.ts"),
            ("config_file", "sidebars.ts"),
            ("doc", "docs/intro.md"),
            ("category_metadata", "docs/tutorial/_category_.json"),
            ("doc", "docs/tutorial/setup.mdx"),
            ("blog_post", "blog/2025-01-01-welcome.md"),
        ]
        assert all(isinstance(entry, ProjectFile) for entry in entries)

    def test_other_root(self, docusaurus_project: Path) -> None:
        """Test listing a root other than the store's."""
        entries = FileSystemStore("/nonexistent").list_files(docusaurus_project)
        assert len(entries) == 6

    def test_missing_directories(self, tmp_path: Path) -> None:
        """Test a project without docs or blog."""
        (tmp_path / "docusaurus.config.js").write_text("module.exports = {};\n", encoding="utf-8")
        entries = FileSystemStore(tmp_path).list_files()
        assert [entry.classification for entry in entries] == ["config_file"]


@pytest.mark.unit
class TestCreateDelete:
    """Test creating and deleting documents."""

    def test_create(self, docusaurus_project: Path) -> None:
        """Test creating a document in a new directory."""
        store = FileSystemStore(docusaurus_project)
        path = store.create_file("docs/guides/deploy.md", "Deploy", "# Deploy", {"sidebar_position": 3})
        assert path.read_text(encoding="utf-8") == "---\ntitle: Deploy\nsidebar_position: 3\n---\n# Deploy\n"

    def test_create_existing(self, docusaurus_project: Path) -> None:
        """Test that existing files are never overwritten."""
        with pytest.raises(FileAccessError, match="already exists"):
            FileSystemStore(docusaurus_project).create_file("docs/intro.md", "Again")

    def test_delete(self, docusaurus_project: Path) -> None:
        """Test deleting a document."""
        store = FileSystemStore(docusaurus_project)
        store.delete_file("docs/intro.md")
        assert not (docusaurus_project / "docs" / "intro.md").exists()

    def test_delete_missing(self, docusaurus_project: Path) -> None:
        """Test deleting a file that does not exist."""
        with pytest.raises(DocumentNotFoundError):
            FileSystemStore(docusaurus_project).delete_file("docs/missing.md")


@pytest.mark.unit
class TestCategories:
    """Test ``_category_.json`` handling."""

    def test_read_from_directory(self, docusaurus_project: Path) -> None:
        """Test reading the category file of a directory."""
        category = FileSystemStore(docusaurus_project).read_category("docs/tutorial")
        assert category == CategoryMetadata(
            label="Tutorial", position=2, link=CategoryLink(type="generated-index", description="Learn")
        )

    def test_write_and_read(self, docusaurus_project: Path) -> None:
        """Test writing a new category file."""
        store = FileSystemStore(docusaurus_project)
        (docusaurus_project / "docs" / "api").mkdir()
        assert store.write_category("docs/api", CategoryMetadata(label="API")) is True
        assert store.read_category("docs/api/_category_.json") == CategoryMetadata(label="API")

    def test_to_dict_omits_missing_position(self) -> None:
        """Test the JSON shape."""
        assert CategoryMetadata(label="X").to_dict() == {
            "label": "X",
            "link": {"type": "generated-index", "description": ""},
        }

    @pytest.mark.parametrize(
        "content",
        ["not json", "[1, 2]", '{"position": 1}', '{"label": "X", "position": "first"}', '{"label": "X", "link": 3}'],
    )
    def test_malformed(self, docusaurus_project: Path, content: str) -> None:
        """Test that invalid category files are reported as malformed."""
        target = docusaurus_project / "docs" / "tutorial" / "_category_.json"
        target.write_text(content, encoding="utf-8")
        with pytest.raises(MalformedFileError):
            FileSystemStore(docusaurus_project).read_category(target)

    @pytest.mark.parametrize("data", [{}, {"label": 3}, {"label": "X", "position": True}])
    def test_from_dict_rejects(self, data: dict) -> None:
        """Test field validation."""
        with pytest.raises(ValueError):
            CategoryMetadata.from_dict(data)
