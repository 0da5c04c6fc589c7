"""Tests for ralph.loop.payload."""

from ralph.lib.prompts import clear_cache
from ralph.loop.payload import build_story_payload, read_prd_markdown
from ralph.tasks.models import TaskItem, TaskList

TASKS = TaskList({"title": "Shop", "overview": "Sell things", "userStories": []})


class TestReadPrdMarkdown:

    def test_missing(self, tmp_path):
        assert read_prd_markdown(tmp_path) is None

    def test_blank_counts_as_missing(self, tmp_path):
        (tmp_path / "prd.md").write_text("\n\n")
        assert read_prd_markdown(tmp_path) is None

    def test_present(self, tmp_path):
        (tmp_path / "prd.md").write_text("# Shop\n")
        assert read_prd_markdown(tmp_path) == "# Shop"


class TestBuildStoryPayload:

    def setup_method(self):
        clear_cache()

    def test_contains_story_and_context(self):
        item = TaskItem(id=4, title="Cart", description="As a user, I want a cart",
                        acceptance_criteria=["Add item", "Remove item"])
        payload = build_story_payload(TASKS, item, "# Shop PRD")

        assert "Shop - Sell things" in payload
        assert "- ID: 4" in payload
        assert "- Title: Cart" in payload
        assert "- Description: As a user, I want a cart" in payload
        assert "  - Add item\n  - Remove item" in payload
        assert "FULL PRD FOR REFERENCE:\n\n# Shop PRD" in payload

    def test_without_prd_markdown(self):
        payload = build_story_payload(TASKS, TaskItem(id=1, title="x"), None)
        assert "FULL PRD FOR REFERENCE" not in payload
        assert "  - (none listed)" in payload
