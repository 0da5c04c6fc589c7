"""Tests for ralph.builder.scaffold and ralph.builder.github."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from ralph.builder.github import create_repo, repo_description
from ralph.builder.scaffold import (
    ScaffoldError,
    project_exists,
    scaffold_command,
    scaffold_project,
    validate_project_name,
)
from ralph.lib.config import BuilderConfig


class TestValidateProjectName:

    @pytest.mark.parametrize("name", ["shop", "my-shop-2", "a"])
    def test_valid(self, name):
        assert validate_project_name(name) is None

    @pytest.mark.parametrize("name", ["My-Shop", "my_shop", "my shop", "shop!", ""])
    def test_invalid(self, name):
        assert validate_project_name(name) is not None


class TestScaffoldCommand:

    def test_ionic(self):
        cmd = scaffold_command("Angular/Ionic", "shop")
        assert cmd[:4] == ["npx", "ionic", "start", "shop"]
        assert "--capacitor" in cmd and "--no-git" in cmd

    def test_angular(self):
        cmd = scaffold_command("Angular", "shop")
        assert cmd[:4] == ["npx", "ng", "new", "shop"]
        assert "--skip-git" in cmd and "--routing" in cmd

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown framework"):
            scaffold_command("React", "shop")


class TestScaffoldProject:

    def test_refuses_existing_folder(self, tmp_path):
        (tmp_path / "apps" / "shop").mkdir(parents=True)
        with pytest.raises(ScaffoldError, match="Folder already exists"):
            scaffold_project("Angular", "shop", tmp_path / "apps")

    @patch("ralph.builder.scaffold.subprocess.run")
    def test_runs_in_apps_dir(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=0)
        project_dir = scaffold_project("Angular", "shop", tmp_path / "apps")
        assert project_dir == tmp_path / "apps" / "shop"
        assert mock_run.call_args[1]["cwd"] == str(tmp_path / "apps")
        assert (tmp_path / "apps").is_dir()

    @patch("ralph.builder.scaffold.subprocess.run")
    def test_failure(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=1)
        with pytest.raises(ScaffoldError, match="exit 1"):
            scaffold_project("Angular", "shop", tmp_path)

    @patch("ralph.builder.scaffold.subprocess.run")
    def test_missing_npx(self, mock_run, tmp_path):
        mock_run.side_effect = FileNotFoundError("npx")
        with pytest.raises(ScaffoldError, match="npx not found"):
            scaffold_project("Angular", "shop", tmp_path)

    def test_project_exists(self, tmp_path):
        assert project_exists(tmp_path, "shop") is False
        (tmp_path / "shop" / ".git").mkdir(parents=True)
        assert project_exists(tmp_path, "shop") is True


class TestCreateRepo:

    @pytest.fixture
    def config(self, tmp_path):
        return BuilderConfig(github_pat="ghp_secret", github_username="octo", apps_dir=tmp_path)

    def test_description(self):
        assert repo_description("A shop") == "AI-generated: A shop"

    @patch("ralph.builder.github.subprocess.run")
    def test_success(self, mock_run, config):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        url = create_repo("shop", "A shop", config)

        assert url == "https://github.com/octo/shop.git"
        cmd = mock_run.call_args[0][0]
        assert cmd[:4] == ["gh", "repo", "create", "shop"]
        assert "--public" in cmd
        assert cmd[cmd.index("--description") + 1] == "AI-generated: A shop"
        assert mock_run.call_args[1]["env"]["GH_TOKEN"] == "ghp_secret"

    @patch("ralph.builder.github.subprocess.run")
    def test_failure(self, mock_run, config):
        mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="name already exists")
        with pytest.raises(ScaffoldError, match="name already exists"):
            create_repo("shop", "A shop", config)

    @patch("ralph.builder.github.subprocess.run")
    def test_timeout(self, mock_run, config):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="gh", timeout=60)
        with pytest.raises(ScaffoldError, match="timed out"):
            create_repo("shop", "A shop", config)
