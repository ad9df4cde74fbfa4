"""Sync the GitLab To-Do feed into a local todo.txt file."""

__version__ = "0.3.0"
