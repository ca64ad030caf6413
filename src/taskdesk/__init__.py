"""taskdesk: console client for a personal task-tracking service."""

__version__ = "0.1.0"
