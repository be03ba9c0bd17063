"""Tests for the shared workflow layer."""

import io
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from updo.adapters.markdown_parser import MarkdownItParser
from updo.config import Config
from updo.core import InvalidTitleError
from updo.core.document import Container, Heading, List, Text
from updo.workflows import commit_file, read_input, update_document, write_output


class TestUpdateDocument:
    def test_sorts_unfinished_first(self):
        assert update_document("- [ ] b\n- [x] a\n- [ ] c\n") == "- [ ] b\n- [ ] c\n- [x] a\n"

    def test_next_day(self):
        text = "# Today\n\n- [x] a\n- [ ] b\n"
        result = update_document(text, next_day=True, title="Tomorrow")
        assert result == "# Tomorrow\n\n- [ ] b\n\n# Today\n\n- [x] a\n"

    def test_next_day_keeps_nested_structure(self):
        text = (
            "# Monday\n"
            "\n"
            "- [x] shipped\n"
            "- [ ] review\n"
            "  - [x] read diff\n"
            "  - [ ] leave comments\n"
            "\n"
            "Notes for later.\n"
        )
        result = update_document(text, next_day=True, title="Tuesday")
        assert result == (
            "# Tuesday\n"
            "\n"
            "- [ ] review\n"
            "  - [ ] leave comments\n"
            "  - [x] read diff\n"
            "\n"
            "# Monday\n"
            "\n"
            "- [x] shipped\n"
            "\n"
            "Notes for later.\n"
        )

    def test_no_next_day_ignores_title(self):
        assert update_document("- [ ] a\n", title="bad\ntitle") == "- [ ] a\n"

    def test_invalid_title(self):
        with pytest.raises(InvalidTitleError):
            update_document("- [ ] a\n", next_day=True, title="")

    def test_idempotent(self):
        text = "- [x] a\n- [ ] b\n  - [x] c\n  - [ ] d\n"
        once = update_document(text)
        assert update_document(once) == once

    def test_escapes_and_entities_survive(self):
        text = "- [ ] &lt;b&gt; \\[ ] x\n- \\[ ] not a task\n- [ ] y\n"
        assert update_document(text) == "- [ ] &lt;b&gt; \\[ ] x\n- [ ] y\n- \\[ ] not a task\n"

    def test_next_day_without_heading_keeps_lists_apart(self):
        result = update_document("- [x] a\n- [ ] b\n", next_day=True, title="Tue")
        assert result == "# Tue\n\n- [ ] b\n\n* [x] a\n"

        doc = MarkdownItParser().parse(result)
        assert [type(node.tag) for node in doc] == [Heading, List, List]
        assert update_document(result) == result

    def test_custom_parser(self):
        parser = MagicMock()
        parser.parse.return_value = [Container(Heading(2), [Text("Parsed")])]

        assert update_document("ignored", parser=parser) == "## Parsed\n"
        parser.parse.assert_called_once_with("ignored")


class TestReadWrite:
    def test_read_file(self, tmp_path):
        path = tmp_path / "TODO.md"
        path.write_text("- [ ] a\n", encoding="utf-8")
        assert read_input(str(path)) == "- [ ] a\n"

    @pytest.mark.parametrize("source", ["-", None])
    def test_read_stdin(self, source):
        with patch("updo.workflows.sys.stdin", io.StringIO("from stdin")):
            assert read_input(source) == "from stdin"

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_input(str(tmp_path / "missing.md"))

    def test_write_output(self, tmp_path):
        path = tmp_path / "TODO.md"
        write_output(path, "- [ ] ünïcode\n")
        assert path.read_text(encoding="utf-8") == "- [ ] ünïcode\n"


class TestCommitFile:
    def test_message_embeds_relative_path(self, tmp_path):
        repository = MagicMock()
        repository.relative_path.return_value = Path("lists/TODO.md")
        repository.commit.return_value = True
        config = Config(commit_message="todo: {path}")

        assert commit_file(tmp_path / "lists" / "TODO.md", config, repository) is True
        repository.commit.assert_called_once_with(tmp_path / "lists" / "TODO.md", "todo: lists/TODO.md")

    @patch("updo.workflows.GitRepository")
    def test_discovers_repository(self, mock_cls, tmp_path):
        mock_repo = MagicMock()
        mock_repo.relative_path.return_value = Path("TODO.md")
        mock_repo.commit.return_value = False
        mock_cls.discover.return_value = mock_repo

        assert commit_file(tmp_path / "TODO.md", Config(git_binary="git2")) is False
        mock_cls.discover.assert_called_once_with(tmp_path / "TODO.md", git="git2")
        mock_repo.commit.assert_called_once_with(tmp_path / "TODO.md", "Update TODO.md")
