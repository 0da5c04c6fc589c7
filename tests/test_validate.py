"""Tests for ralph.lib.validate module."""


import pytest

from ralph.lib.validate import ValidationError, validate, validate_before_write


def _prd(**overrides):
    doc = {
        "title": "Shop",
        "overview": "Sell things",
        "userStories": [
            {"id": 1, "title": "Login", "description": "", "acceptance": ["a"], "passes": False},
        ],
    }
    doc.update(overrides)
    return doc


class TestPrdSchema:

    def test_valid_document(self):
        validate(_prd(), "prd")

    def test_items_alias_accepted(self):
        doc = {"title": "Shop", "items": [{"id": 1, "title": "x", "acceptanceCriteria": [], "passes": False}]}
        validate(doc, "prd")

    def test_missing_story_list_rejected(self):
        with pytest.raises(ValidationError):
            validate({"title": "Shop"}, "prd")

    def test_string_id_rejected(self):
        doc = _prd(userStories=[{"id": "1", "title": "x", "passes": False}])
        with pytest.raises(ValidationError) as exc:
            validate(doc, "prd")
        assert "userStories.0.id" in str(exc.value)

    def test_passes_optional(self):
        validate(_prd(userStories=[{"id": 1, "title": "x", "description": "d", "acceptance": []}]), "prd")

    def test_non_boolean_passes_rejected(self):
        doc = _prd(userStories=[{"id": 1, "title": "x", "passes": "no"}])
        with pytest.raises(ValidationError):
            validate(doc, "prd")

    def test_extra_metadata_allowed(self):
        validate(_prd(techStack={"framework": "Angular"}, firebaseProjectId="shop-abc123"), "prd")


class TestStoriesSchema:

    def test_valid_array(self):
        validate([{"title": "Wishlist", "acceptance": ["x"]}], "stories")

    def test_object_rejected(self):
        with pytest.raises(ValidationError):
            validate({"title": "Wishlist"}, "stories")


class TestErrors:

    def test_root_shape_error_path(self):
        with pytest.raises(ValidationError) as exc:
            validate([], "prd")
        assert exc.value.path == "(root)"
        assert exc.value.schema_name == "prd"

    def test_validate_before_write_names_file(self, tmp_path):
        with pytest.raises(ValidationError, match="Refusing to write invalid data to prd.json"):
            validate_before_write({"title": "x"}, "prd", tmp_path / "prd.json")

    def test_validate_before_write_accepts_valid(self, tmp_path):
        validate_before_write(_prd(), "prd", tmp_path / "prd.json")

    def test_unknown_schema(self):
        with pytest.raises(ValidationError, match="Schema file not found"):
            validate({}, "nonexistent")
