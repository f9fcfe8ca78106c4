"""Exception types raised by skillsync."""


class SkillSyncError(Exception):
    """Base class for all skillsync errors."""


class ConfigError(SkillSyncError):
    """Invalid configuration change (duplicate or unknown name)."""


class SourceError(SkillSyncError):
    """A single source could not be fetched.

    Source errors are reported per source; the surrounding run continues
    with the next source.
    """


class SourceMissingError(SourceError):
    """A local source directory does not exist."""


class NoUrlError(SourceError):
    """A remote source has no URL configured."""

    def __init__(self, name: str):
        super().__init__("no URL")
        self.name = name


class CloneError(SourceError):
    """The external clone command failed."""


class SubdirNotFoundError(SourceError):
    """The configured subdirectory is absent from the cloned tree."""

    def __init__(self, subdir: str):
        super().__init__(f'Subdir "{subdir}" not found')
        self.subdir = subdir
