"""
Entry point for running dreamjournal as a module: python -m dreamjournal
"""

from dreamjournal.cli.commands import app

if __name__ == "__main__":
    app()
