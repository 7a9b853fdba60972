# =============================================================================
# tests/test_cli.py - Command Line Tests
# =============================================================================

import json

import pytest

from linter.cli import EXIT_LINT_FAILED, EXIT_OK, EXIT_USAGE, build_parser, main
from tests.conftest import make_page


class TestCheckCommand:
    """Tests for `docsite-lint check`."""

    def test_clean_site(self, docs_dir, capsys):
        exit_code = main(["check", str(docs_dir)])
        out = capsys.readouterr().out

        assert exit_code == EXIT_OK
        assert "✅ Passed (4 pages)" in out

    def test_failures(self, write_docs, capsys):
        root = write_docs({"a.md": "# No front matter\n"})

        exit_code = main(["check", str(root)])
        out = capsys.readouterr().out

        assert exit_code == EXIT_LINT_FAILED
        assert "a.md:1 [front_matter_present]" in out

    def test_json_output(self, write_docs, capsys):
        root = write_docs({
            "a.md": make_page("A", body="```\ncode\n```\n"),
        })

        exit_code = main(["check", str(root), "--format", "json"])
        report = json.loads(capsys.readouterr().out)

        assert exit_code == EXIT_LINT_FAILED
        assert report["passed"] is False
        assert report["issues"][0]["check_name"] == "code_block_language"

    def test_allow_untagged(self, write_docs):
        root = write_docs({"a.md": make_page("A", body="```\ncode\n```\n")})
        assert main(["check", str(root), "--allow-untagged"]) == EXIT_OK

    def test_extra_language(self, write_docs):
        root = write_docs({"a.md": make_page("A", body="```Bicep\nparam x string\n```\n")})

        assert main(["check", str(root)]) == EXIT_LINT_FAILED
        assert main(["check", str(root), "--language", "bicep"]) == EXIT_OK

    def test_strict(self, write_docs):
        root = write_docs({"a.md": make_page("A", body="# A\n\n### C\n")})

        assert main(["check", str(root)]) == EXIT_OK
        assert main(["check", str(root), "--strict"]) == EXIT_LINT_FAILED

    def test_disable(self, write_docs):
        root = write_docs({"a.md": "# No front matter\n"})
        assert main(["check", str(root), "--disable", "front_matter_present"]) == EXIT_OK

    def test_exclude(self, write_docs):
        root = write_docs({
            "a.md": make_page("A"),
            "drafts/wip.md": "# No front matter\n",
        })
        assert main(["check", str(root), "--exclude", "drafts/*"]) == EXIT_OK

    def test_unknown_check(self, docs_dir, capsys):
        exit_code = main(["check", str(docs_dir), "--disable", "spellcheck"])

        assert exit_code == EXIT_USAGE
        assert "UNKNOWN_CHECK" in capsys.readouterr().err

    def test_missing_directory(self, tmp_path, capsys):
        exit_code = main(["check", str(tmp_path / "missing")])

        assert exit_code == EXIT_USAGE
        assert "DOCS_ROOT_NOT_FOUND" in capsys.readouterr().err


class TestOtherCommands:
    """Tests for `rules` and argument handling."""

    def test_rules(self, capsys):
        assert main(["rules"]) == EXIT_OK
        out = capsys.readouterr().out

        assert "internal_links" in out
        assert "[site]" in out

    def test_no_command(self, capsys):
        assert main([]) == EXIT_USAGE
        assert "usage" in capsys.readouterr().out

    def test_invalid_format(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["check", "--format", "xml"])

    def test_serve_arguments(self):
        args = build_parser().parse_args(["serve", "--port", "9000", "--reload"])

        assert args.port == 9000
        assert args.reload
        assert args.host is None
