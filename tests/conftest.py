"""Shared test fixtures for virgil tests."""

import json
import os
import subprocess
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner


def _git(*args: str, cwd: Path) -> None:
    subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True)


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository.

    Initializes a git repo with user config and an initial commit.
    Changes cwd to the repo directory for the duration of the test.
    """
    _git("init", cwd=tmp_path)
    _git("config", "user.email", "test@test.com", cwd=tmp_path)
    _git("config", "user.name", "Test User", cwd=tmp_path)

    (tmp_path / "README.md").write_text("# Test\n")
    _git("add", ".", cwd=tmp_path)
    _git("commit", "-m", "Initial commit", cwd=tmp_path)

    original_cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)


@pytest.fixture
def sample_markdown() -> str:
    """Return a markdown walkthrough with frontmatter, a diff step and an info step."""
    return """# Request handling

---
remote: git@github.com:acme/server.git
commit: 4f2a9c1e
baseBranch: main
audience: backend
---

How a request travels through the server.

## Entry point
[handler (10-20,33)](src/server.ts)
[Base (5-9)](src/server.ts)

The handler now validates input before routing.

## Wrap up

Nothing else changes.
"""


@pytest.fixture
def walkthrough_data() -> dict:
    """Return a hierarchical walkthrough document as persisted JSON data."""
    return {
        "title": "Hierarchy tour",
        "description": "Nested steps",
        "repository": {"remote": "https://github.com/acme/server", "commit": "abc123"},
        "steps": [
            {"id": 1, "title": "Overview"},
            {"id": 2, "title": "Router", "parentId": 1, "location": "src/router.ts:1-10"},
            {"id": 3, "title": "Storage", "location": "src/db.ts:4-8"},
            {"id": 4, "title": "Routes table", "parentId": 2, "location": "src/routes.ts:3-3"},
        ],
    }


@pytest.fixture
def walkthrough_file(tmp_path: Path, walkthrough_data: dict) -> Path:
    """Write walkthrough_data to tour.walkthrough.json in tmp_path."""
    path = tmp_path / "tour.walkthrough.json"
    path.write_text(json.dumps(walkthrough_data, indent=2))
    return path
