"""
dreamjournal - A terminal dream journal.
"""

__version__ = "0.1.0"
__logo__ = "☾"
