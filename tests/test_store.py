"""Tests for walkthrough file storage."""

import json
from pathlib import Path

import pytest

from virgil.models import Walkthrough, WalkthroughStep
from virgil.services import (
    WalkthroughLoadError,
    default_output_path,
    find_walkthroughs,
    is_markdown,
    load_any,
    load_walkthrough,
    save_walkthrough,
)


class TestLoadWalkthrough:
    """Tests for load_walkthrough."""

    def test_loads_aliases(self, walkthrough_file: Path) -> None:
        walkthrough = load_walkthrough(walkthrough_file)
        assert walkthrough.title == "Hierarchy tour"
        assert walkthrough.steps[1].parent_id == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(WalkthroughLoadError, match="Cannot read"):
            load_walkthrough(tmp_path / "missing.walkthrough.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.walkthrough.json"
        path.write_text("{not json")
        with pytest.raises(WalkthroughLoadError, match="Invalid JSON"):
            load_walkthrough(path)

    def test_schema_mismatch(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.walkthrough.json"
        path.write_text(json.dumps({"steps": []}))
        with pytest.raises(WalkthroughLoadError, match="Invalid walkthrough"):
            load_walkthrough(path)


class TestSaveWalkthrough:
    """Tests for save_walkthrough."""

    def test_writes_persisted_form(self, tmp_path: Path) -> None:
        walkthrough = Walkthrough(
            title="T", steps=[WalkthroughStep(id=2, title="B", parent_id=1, base_location="a:1-1")]
        )
        path = save_walkthrough(walkthrough, tmp_path / "nested" / "t.walkthrough.json")

        text = path.read_text()
        assert text.endswith("}\n")
        data = json.loads(text)
        assert data == {
            "title": "T",
            "steps": [{"id": 2, "title": "B", "base_location": "a:1-1", "parentId": 1}],
        }

    def test_compact(self, tmp_path: Path) -> None:
        walkthrough = Walkthrough(title="T")
        path = save_walkthrough(walkthrough, tmp_path / "t.json", indent=None)
        assert path.read_text() == '{"title":"T","steps":[]}\n'

    def test_save_then_load_keeps_comments(self, tmp_path: Path, walkthrough_file: Path) -> None:
        walkthrough = load_walkthrough(walkthrough_file)
        walkthrough.steps[0].add_comment("ana", "Looks good")
        save_walkthrough(walkthrough, walkthrough_file)

        reloaded = load_walkthrough(walkthrough_file)
        assert reloaded == walkthrough
        assert reloaded.steps[0].comments[0].author == "ana"


class TestFindWalkthroughs:
    """Tests for find_walkthroughs."""

    def test_finds_sorted(self, tmp_path: Path) -> None:
        (tmp_path / "b.walkthrough.json").write_text("{}")
        (tmp_path / "a.walkthrough.json").write_text("{}")
        (tmp_path / "notes.json").write_text("{}")
        (tmp_path / "tour.md").write_text("# T")

        assert [p.name for p in find_walkthroughs(tmp_path)] == [
            "a.walkthrough.json",
            "b.walkthrough.json",
        ]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert find_walkthroughs(tmp_path / "nope") == []


class TestLoadAny:
    """Tests for load_any."""

    def test_markdown_carries_warnings(self, tmp_path: Path) -> None:
        path = tmp_path / "tour.md"
        path.write_text("No title\n\n## A\n")
        result = load_any(path)
        assert result.walkthrough.steps[0].title == "A"
        assert len(result.warnings) == 1

    def test_json_has_no_warnings(self, walkthrough_file: Path) -> None:
        result = load_any(walkthrough_file)
        assert result.warnings == []
        assert len(result.walkthrough.steps) == 4

    def test_missing_markdown(self, tmp_path: Path) -> None:
        with pytest.raises(WalkthroughLoadError):
            load_any(tmp_path / "missing.md")


def test_is_markdown() -> None:
    assert is_markdown(Path("tour.md"))
    assert is_markdown(Path("TOUR.MARKDOWN"))
    assert not is_markdown(Path("tour.walkthrough.json"))


def test_default_output_path() -> None:
    assert default_output_path(Path("docs/tour.md")) == Path("docs/tour.walkthrough.json")
    assert default_output_path(Path("tour.md"), ".json") == Path("tour.json")
