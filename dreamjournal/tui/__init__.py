"""Terminal interface: key translation, rendering and the main loop."""

from dreamjournal.tui.app import TerminalApp, run_terminal

__all__ = ["TerminalApp", "run_terminal"]
