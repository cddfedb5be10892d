"""Manifest models produced by the module assembler.

A manifest is the complete description of one module project: its
targets in a fixed order, the merged project settings and the schemes
(build/test/run workflows) that operate on the targets.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .targets import Target


class ConfigurationName(str, Enum):
    """Build configurations shared by every module."""

    DEV = "dev"
    STAGE = "stage"
    PROD = "prod"


class Configuration(BaseModel):
    """A named build configuration."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    variant: Literal["debug", "release"]
    xcconfig: str | None = Field(None, description="xcconfig file applied to this configuration")

    @classmethod
    def debug(cls, name: str | ConfigurationName, xcconfig: str | None = None) -> "Configuration":
        return cls(name=_configuration_name(name), variant="debug", xcconfig=xcconfig)

    @classmethod
    def release(cls, name: str | ConfigurationName, xcconfig: str | None = None) -> "Configuration":
        return cls(name=_configuration_name(name), variant="release", xcconfig=xcconfig)


def _configuration_name(name: str | ConfigurationName) -> str:
    if isinstance(name, ConfigurationName):
        return name.value
    return name


class ProjectSettings(BaseModel):
    """Project-level build settings inherited by every target."""

    model_config = ConfigDict(frozen=True)

    base: dict[str, Any] = Field(default_factory=dict)
    configurations: list[Configuration] = Field(default_factory=list)
    default_settings: Literal["recommended", "essential", "none"] = "recommended"


class Scheme(BaseModel):
    """A named build/test/run workflow.

    ``test_targets`` may name a target that is absent from the manifest;
    the renderer treats that as a scheme without a test action.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    shared: bool = True
    build_targets: list[str] = Field(..., min_length=1)
    test_targets: list[str] = Field(default_factory=list)
    configuration: str = Field(default=ConfigurationName.DEV.value)
    coverage: bool = True
    code_coverage_targets: list[str] = Field(default_factory=list)
    run_configuration: str = Field(default=ConfigurationName.DEV.value)
    archive_configuration: str = Field(default=ConfigurationName.DEV.value)
    profile_configuration: str = Field(default=ConfigurationName.DEV.value)
    analyze_configuration: str = Field(default=ConfigurationName.DEV.value)

    @property
    def build_target(self) -> str:
        """Primary target built by this scheme."""
        return self.build_targets[0]

    @property
    def test_target(self) -> str | None:
        return self.test_targets[0] if self.test_targets else None


class Manifest(BaseModel):
    """Complete project description for a single feature module."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    organization_name: str
    packages: list[Any] = Field(default_factory=list, description="Package references, passed through")
    settings: ProjectSettings = Field(default_factory=ProjectSettings)
    targets: list[Target] = Field(default_factory=list)
    schemes: list[Scheme] = Field(default_factory=list)

    def target_names(self) -> list[str]:
        return [target.name for target in self.targets]

    def get_target(self, name: str) -> Target | None:
        """Get a target by name.

        Args:
            name: Target name to look up

        Returns:
            The target, or None if the manifest has no such target
        """
        for target in self.targets:
            if target.name == name:
                return target
        return None

    def has_target(self, name: str) -> bool:
        return self.get_target(name) is not None

    def get_scheme(self, name: str) -> Scheme | None:
        for scheme in self.schemes:
            if scheme.name == name:
                return scheme
        return None
