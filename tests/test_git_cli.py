"""Tests for the git adapter."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from updo.adapters.git_cli import GitRepository, RepositoryError


def completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def repo(tmp_path):
    return GitRepository(tmp_path)


class TestDiscover:
    @patch("updo.adapters.git_cli.subprocess.run")
    def test_uses_toplevel(self, mock_run, tmp_path):
        todo = tmp_path / "TODO.md"
        todo.write_text("")
        mock_run.return_value = completed(stdout=f"{tmp_path}\n")

        repo = GitRepository.discover(todo)

        assert repo.root == tmp_path
        cmd = mock_run.call_args[0][0]
        assert cmd == ["git", "rev-parse", "--show-toplevel"]
        assert mock_run.call_args[1]["cwd"] == tmp_path.resolve()

    @patch("updo.adapters.git_cli.subprocess.run")
    def test_no_repository(self, mock_run, tmp_path):
        mock_run.return_value = completed(returncode=128, stderr="fatal: not a git repository")

        with pytest.raises(RepositoryError, match="No git repository"):
            GitRepository.discover(tmp_path / "TODO.md")

    @patch("updo.adapters.git_cli.subprocess.run")
    def test_custom_git_binary(self, mock_run, tmp_path):
        mock_run.return_value = completed(stdout=f"{tmp_path}\n")
        repo = GitRepository.discover(tmp_path, git="/opt/git")
        assert repo.git == "/opt/git"
        assert mock_run.call_args[0][0][0] == "/opt/git"


class TestCommit:
    @patch("updo.adapters.git_cli.subprocess.run")
    def test_commits_single_file(self, mock_run, repo, tmp_path):
        mock_run.side_effect = [completed(), completed(returncode=1), completed()]

        assert repo.commit(tmp_path / "TODO.md", "Update TODO.md") is True

        commands = [call[0][0] for call in mock_run.call_args_list]
        assert commands == [
            ["git", "add", "--", "TODO.md"],
            ["git", "diff", "--cached", "--quiet", "--", "TODO.md"],
            ["git", "commit", "--quiet", "-m", "Update TODO.md", "--", "TODO.md"],
        ]

    @patch("updo.adapters.git_cli.subprocess.run")
    def test_nothing_to_commit(self, mock_run, repo, tmp_path):
        mock_run.side_effect = [completed(), completed(returncode=0)]

        assert repo.commit(tmp_path / "TODO.md", "msg") is False
        assert mock_run.call_count == 2

    @patch("updo.adapters.git_cli.subprocess.run")
    def test_commit_failure(self, mock_run, repo, tmp_path):
        mock_run.side_effect = [completed(), completed(returncode=1), completed(returncode=1, stderr="hook failed")]

        with pytest.raises(RepositoryError, match="hook failed"):
            repo.commit(tmp_path / "TODO.md", "msg")

    @patch("updo.adapters.git_cli.subprocess.run")
    def test_git_not_installed(self, mock_run, repo, tmp_path):
        mock_run.side_effect = FileNotFoundError()

        with pytest.raises(RepositoryError, match="not found"):
            repo.commit(tmp_path / "TODO.md", "msg")

    @patch("updo.adapters.git_cli.subprocess.run")
    def test_timeout(self, mock_run, repo, tmp_path):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="git", timeout=30)

        with pytest.raises(RepositoryError, match="timed out"):
            repo.commit(tmp_path / "TODO.md", "msg")


class TestRelativePath:
    def test_inside_repository(self, repo, tmp_path):
        assert repo.relative_path(tmp_path / "notes" / "TODO.md") == Path("notes/TODO.md")

    def test_outside_repository(self, repo, tmp_path):
        with pytest.raises(RepositoryError, match="outside"):
            repo.relative_path(tmp_path.parent / "elsewhere.md")
