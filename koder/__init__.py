"""Editor support: file-name helpers, editorconfig, backups, preferences, find history, themes and languages."""

__version__ = "0.1.0"