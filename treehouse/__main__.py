"""
Entry point for running the treehouse as a module.

Usage:
    python -m treehouse status
    python -m treehouse feed apple
    python -m treehouse --help
"""

from treehouse.app.cli import main

if __name__ == "__main__":
    main()
