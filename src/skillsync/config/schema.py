"""Pydantic models for skillsync configuration."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Source(BaseModel):
    """A named skill source, either a remote repository or a local directory."""

    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = Field(default=None, description="Git URL of a remote source")
    subdir: Optional[str] = Field(
        default=None, description="Subdirectory of the repository holding the skills"
    )
    enabled: bool = Field(default=True, description="Whether the source is used")
    local_path: Optional[str] = Field(
        default=None,
        alias="localPath",
        description="Directory of a local source (mutually exclusive with url)",
    )

    @model_validator(mode="after")
    def validate_kind(self) -> "Source":
        """Validate that a source is not both remote and local."""
        if self.url is not None and self.local_path is not None:
            raise ValueError("Source cannot have both url and localPath")
        return self

    @property
    def is_local(self) -> bool:
        """True if this source mirrors a local directory."""
        return bool(self.local_path)


class Target(BaseModel):
    """A directory that receives synced skills."""

    path: str = Field(description="Absolute path of the target skills directory")
    enabled: bool = Field(default=True, description="Whether the target is synced")


class SkillSyncConfig(BaseModel):
    """Root configuration: named sources and named targets.

    Dict insertion order is preserved and is the processing order for
    fetch and sync runs.
    """

    sources: dict[str, Source] = Field(default_factory=dict)
    targets: dict[str, Target] = Field(default_factory=dict)

    def to_json_dict(self) -> dict:
        """Serialize to the on-disk JSON shape (camelCase keys, no nulls)."""
        return self.model_dump(by_alias=True, exclude_none=True)
