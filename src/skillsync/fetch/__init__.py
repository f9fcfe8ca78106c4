"""Fetching sources into the mirror."""

from skillsync.fetch.git import clone_repo
from skillsync.fetch.protocols import Cloner
from skillsync.fetch.remote import fetch_remote_source
from skillsync.fetch.runner import FetchOutcome, fetch_source, run_fetch

__all__ = [
    "Cloner",
    "FetchOutcome",
    "clone_repo",
    "fetch_remote_source",
    "fetch_source",
    "run_fetch",
]
