"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are tool protocol details and file naming conventions.

For configurable values, see models.py (SearchConfig, SemanticConfig, etc.).
"""

# =============================================================================
# Project layout
# =============================================================================

PROJECT_CONFIG_NAME = ".refsweep.yaml"
"""Per-project config file, read from the project root."""

PROJECT_ROOT_MARKERS = ("dune-project", ".merlin", ".git")
"""Files or directories marking a project root, checked nearest-first."""

# =============================================================================
# Search tool protocol
# =============================================================================

SEARCH_OUTPUT_FLAGS = (
    "--vimgrep",
    "--no-heading",
    "--line-number",
    "--column",
    "--color",
    "never",
)
"""One self-contained path:line:column:text line per match."""

SEARCH_SUCCESS_CODES = (0, 1)
"""ripgrep exits 0 with matches and 1 without; anything else is a failure."""

# =============================================================================
# Semantic service protocol
# =============================================================================

MERLIN_ALREADY_AT_DEFINITION = "Already at definition point"
"""Merlin's locate answer when the cursor is on the definition itself."""
