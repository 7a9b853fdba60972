# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the docs linter:
# - test_markdown.py: Page parser (front matter, fences, headings, links)
# - test_site.py: Discovery, routing table and link resolution
# - test_checks.py: Individual checks and the check registry
# - test_linter.py: DocsLinter orchestration and reports
# - test_models.py: Pydantic model behaviour
# - test_config.py: Settings and option building
# - test_cli.py: Command line interface
# - test_api.py: HTTP API endpoints
#
# Run tests with: pytest
# =============================================================================
