# =============================================================================
# core/models/options.py - Lint Options
# =============================================================================
# Per-run knobs for the linter. Built from Settings (app/config.py) by the
# CLI and API, or constructed directly in code and tests.
# =============================================================================

from pydantic import BaseModel, Field, field_validator


# Language tags the documentation site's highlighter understands.
DEFAULT_LANGUAGES = [
    "bash", "c", "cpp", "cs", "csharp", "css", "cshtml", "diff", "docker",
    "dockerfile", "fsharp", "go", "graphql", "html", "http", "ini", "java",
    "javascript", "js", "json", "jsonc", "jsx", "kotlin", "log", "makefile",
    "markdown", "md", "nginx", "plaintext", "powershell", "ps1", "protobuf",
    "python", "py", "razor", "ruby", "rust", "scss", "sh", "shell", "sql",
    "svelte", "text", "toml", "ts", "tsx", "txt", "typescript", "vb", "xml",
    "yaml", "yml",
]

DEFAULT_ADMONITION_KINDS = [
    "note", "tip", "info", "important", "warning", "caution", "danger",
]


class LintOptions(BaseModel):
    """
    Options controlling which checks run and how strict they are.

    Example:
        options = LintOptions(strict=True, disabled_checks=["heading_structure"])
        report = DocsLinter(options).lint_directory("docs")
    """

    required_fields: list[str] = Field(
        default_factory=lambda: ["title", "description"],
        description="Front matter keys that must hold non-empty strings"
    )

    allowed_languages: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LANGUAGES),
        description="Recognised code fence language tags (case-insensitive)"
    )

    allow_untagged_fences: bool = Field(
        default=False,
        description="Accept fenced code blocks without a language tag"
    )

    admonition_kinds: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ADMONITION_KINDS),
        description="Recognised admonition kinds (case-insensitive)"
    )

    title_collisions_are_errors: bool = Field(
        default=False,
        description="Report duplicate page titles as errors instead of warnings"
    )

    strict: bool = Field(
        default=False,
        description="Treat warnings as failures"
    )

    disabled_checks: list[str] = Field(
        default_factory=list,
        description="Checks to skip by name"
    )

    extensions: list[str] = Field(
        default_factory=lambda: [".md", ".markdown"],
        description="File extensions treated as documentation pages"
    )

    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns (relative to the docs root) to skip"
    )

    @field_validator("allowed_languages", "admonition_kinds")
    @classmethod
    def _lowercase(cls, value: list[str]) -> list[str]:
        return [item.strip().lower() for item in value if item.strip()]

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        normalized = []
        for ext in value:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized

    def is_language_allowed(self, language: str) -> bool:
        return language.lower() in self.allowed_languages

    def is_enabled(self, check_name: str) -> bool:
        return check_name not in self.disabled_checks
