# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================
# Tests that environment variables flow through Settings into LintOptions.
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import Settings


class TestSettings:
    """Tests for Settings loaded from the environment."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.DOCS_ROOT == "docs"
        assert settings.required_fields_list == ["title", "description"]
        assert not settings.ALLOW_DIRECTORY_LINT
        assert settings.max_document_size_bytes == 512 * 1024

    def test_lists_from_env(self, monkeypatch):
        monkeypatch.setenv("DISABLED_CHECKS", "heading_structure, admonitions,")
        monkeypatch.setenv("EXCLUDE_PATTERNS", "drafts/*,changelog.md")
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, https://docs.example.com")

        settings = Settings(_env_file=None)

        assert settings.disabled_checks_list == ["heading_structure", "admonitions"]
        assert settings.exclude_patterns_list == ["drafts/*", "changelog.md"]
        assert settings.cors_origins_list == ["http://localhost:3000", "https://docs.example.com"]

    def test_extra_languages_merged(self, monkeypatch):
        monkeypatch.setenv("ALLOWED_LANGUAGES", "cs,json")
        monkeypatch.setenv("EXTRA_LANGUAGES", "Razor,JSON")

        settings = Settings(_env_file=None)

        assert settings.allowed_languages_list == ["cs", "json", "razor"]

    def test_booleans_from_env(self, monkeypatch):
        monkeypatch.setenv("STRICT_MODE", "true")
        monkeypatch.setenv("TITLE_COLLISIONS_ARE_ERRORS", "1")

        options = Settings(_env_file=None).lint_options()

        assert options.strict
        assert options.title_collisions_are_errors

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "qa")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_environment_flags(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        settings = Settings(_env_file=None)

        assert settings.is_production
        assert not settings.is_development


class TestLintOptionsFromSettings:
    """Tests for Settings.lint_options()."""

    def test_maps_settings(self, monkeypatch):
        monkeypatch.setenv("REQUIRED_FIELDS", "title")
        monkeypatch.setenv("ALLOW_UNTAGGED_FENCES", "true")
        monkeypatch.setenv("ADMONITION_KINDS", "note,Tip")

        options = Settings(_env_file=None).lint_options()

        assert options.required_fields == ["title"]
        assert options.allow_untagged_fences
        assert options.admonition_kinds == ["note", "tip"]

    def test_overrides(self):
        options = Settings(_env_file=None).lint_options(strict=True, disabled_checks=["admonitions"])

        assert options.strict
        assert options.disabled_checks == ["admonitions"]

    def test_none_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv("STRICT_MODE", "true")

        options = Settings(_env_file=None).lint_options(strict=None)

        assert options.strict
