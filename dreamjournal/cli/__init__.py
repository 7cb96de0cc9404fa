"""CLI module for dreamjournal."""
