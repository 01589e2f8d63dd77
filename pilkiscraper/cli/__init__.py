# =============================================================================
# pilkiscraper/cli/__init__.py - CLI Module Overview
# =============================================================================
#
# Command-line entry points for the transcript scraper, run via
# `python -m pilkiscraper.cli <command>` or the `pilkiscraper` console script.
#
#   crawl   - full crawl of the archived transcripts category
#   parse   - assemble one locally saved page
#   status  - count written transcripts and cached pages
#
# Architecture Notes:
#   - argparse for argument parsing (not Click/Typer).
#   - Each command builds its own collaborators (http client, cache, store)
#     rather than relying on a DI container; the CLI runs as a one-shot
#     script, not a long-lived server.
# =============================================================================

"""CLI tools for the pilkiscraper transcript crawler."""
