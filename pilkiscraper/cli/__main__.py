# =============================================================================
# pilkiscraper/cli/__main__.py - Package Entry Point
# =============================================================================
#
# Enables running the CLI package itself as a module:
#     python -m pilkiscraper.cli crawl
# =============================================================================

"""Allow ``python -m pilkiscraper.cli`` execution."""

from pilkiscraper.cli.scrape import main

main()
