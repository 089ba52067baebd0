"""
Entry point for running Gist Manager as a module.

This allows users to run the CLI using:
    python -m gist_manager [command] [options]
"""

from gist_manager.cli.app import main

if __name__ == "__main__":
    main()
