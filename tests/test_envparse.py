"""Tests for ralph.lib.envparse module."""

import pytest

from ralph.lib.envparse import parse_env, load_env, load_env_optional


class TestParseEnv:

    def test_basic_pairs(self):
        assert parse_env('A=1\nB_KEY="two"\nC=\'three\'\n') == {"A": "1", "B_KEY": "two", "C": "three"}

    def test_skips_comments_and_blank_lines(self):
        assert parse_env("# comment\n\nA=1\n") == {"A": "1"}

    def test_accepts_export_prefix(self):
        assert parse_env("export GITHUB_USERNAME=octo\n") == {"GITHUB_USERNAME": "octo"}

    def test_value_may_contain_equals(self):
        assert parse_env("TOKEN=abc=def\n") == {"TOKEN": "abc=def"}

    def test_token_passes_through_unchanged(self):
        assert parse_env("GITHUB_PAT=ghp_AbC123xyz\n")["GITHUB_PAT"] == "ghp_AbC123xyz"

    def test_missing_equals_raises(self):
        with pytest.raises(ValueError, match="no '='"):
            parse_env("JUSTAKEY\n")

    def test_invalid_key_raises(self):
        with pytest.raises(ValueError, match="invalid key"):
            parse_env("lower=1\n")

    @pytest.mark.parametrize("value", ["$(whoami)", "`id`", "${HOME}", "a;b", "a && b", "a | b"])
    def test_forbidden_patterns(self, value):
        with pytest.raises(ValueError, match="forbidden pattern"):
            parse_env(f"KEY={value}\n")


class TestLoadEnv:

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_env(tmp_path / "missing.env")

    def test_optional_missing_file_is_empty(self, tmp_path):
        assert load_env_optional(tmp_path / "missing.env") == {}

    def test_error_mentions_source_and_line(self, tmp_path):
        path = tmp_path / "ralph.env"
        path.write_text("A=1\nbroken\n")
        with pytest.raises(ValueError, match=r"ralph.env:2"):
            load_env(path)
