"""Workspaces - a registry of named project directories with lifecycle hooks."""

__version__ = "0.1.0"
