"""Sync agent skills from Git and local sources into AI tool skill folders."""

__version__ = "0.1.0"
