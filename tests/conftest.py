"""Pytest configuration and shared fixtures for the docublocks test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture
def sample_markdown() -> str:
    """Provide a document using every supported construct.

    Returns
    -------
    str
        Normalized Markdown that survives a parse/serialize round trip unchanged.

    """
    return """# Getting Started

This is a **sample document** with _italic text_ and some `inline code`.

:::tip My Tip

This is a **formatted** tip with some _styling_

:::

```typescript title="example.ts"
const greeting: string = "hello";
```

- Unordered 1
  1. Ordered 1.1
  2. Ordered 1.2
  - Unordered 1.2.1
- Unordered 2

> Quoted text

---

See the [docs](https://docusaurus.io) for ==more== and ~~less~~."""


@pytest.fixture
def docusaurus_project(tmp_path: Path) -> Path:
    """Create a small Docusaurus project on disk.

    Returns
    -------
    Path
        Project root containing config files, docs with a category and a blog post.

    """
    (tmp_path / "docusaurus.config.ts").write_text("export default {};\n", encoding="utf-8")
    (tmp_path / "sidebars.ts").write_text("export default {};\n", encoding="utf-8")

    docs = tmp_path / "docs"
    (docs / "tutorial").mkdir(parents=True)
    (docs / "intro.md").write_text("---\ntitle: Intro\nsidebar_position: 1\n---\n# Hello\n", encoding="utf-8")
    (docs / "tutorial" / "setup.mdx").write_text("# Setup\n", encoding="utf-8")
    (docs / "tutorial" / "_category_.json").write_text(
        '{"label": "Tutorial", "position": 2, "link": {"type": "generated-index", "description": "Learn"}}',
        encoding="utf-8",
    )
    (docs / "tutorial" / "notes.txt").write_text("not markdown\n", encoding="utf-8")

    blog = tmp_path / "blog"
    blog.mkdir()
    (blog / "2025-01-01-welcome.md").write_text("---\ntitle: Welcome\n---\nHi!\n", encoding="utf-8")

    return tmp_path
