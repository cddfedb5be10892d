"""Environment configuration using pydantic-settings.

The values here are the process-wide defaults every module manifest is
built from: organization identity, platform destination, deployment
targets and base build settings. They are read once and frozen into an
``EnvironmentContext`` that is handed to the assembler explicitly.
"""

import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.targets import Destination


class Settings(BaseSettings):
    """Generator settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MODULEKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project identity
    project_name: str = ""
    organization_name: str = Field(
        default="com.example",
        description="Prefix for every derived bundle identifier",
    )

    # Platform
    destination: Destination = Destination.IPHONE
    deployment_targets: dict[str, str] = Field(
        default_factory=lambda: {"iOS": "18.0"},
        description="Minimum OS version per platform",
    )

    # Build settings
    base_settings: dict[str, Any] = Field(
        default_factory=dict,
        description="Settings applied before every other settings layer",
    )
    code_sign_style: str = "Automatic"
    development_team: str = ""
    shared_xcconfig: str = Field(
        default="XCConfig/Shared.xcconfig",
        description="xcconfig shared by the default configurations",
    )

    # CI detection reads the unprefixed variable set by most CI providers
    ci: str | None = Field(default=None, validation_alias="CI")

    log_level: str = "INFO"

    def is_ci(self) -> bool:
        """Check if running under CI (only the exact value "1" counts)."""
        return self.ci == "1"

    @property
    def code_sign_settings(self) -> dict[str, Any]:
        """Code signing defaults merged after the base settings."""
        code_sign: dict[str, Any] = {"CODE_SIGN_STYLE": self.code_sign_style}
        if self.development_team:
            code_sign["DEVELOPMENT_TEAM"] = self.development_team
        return code_sign


class EnvironmentContext(BaseModel):
    """Immutable snapshot of the generator environment.

    Built once at process start and passed to every assembler call. The
    CI flag is evaluated at construction and never re-read.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Workspace/project name")
    organization_name: str = Field(..., description="Bundle identifier prefix")
    destination: Destination = Field(default=Destination.IPHONE)
    deployment_targets: Mapping[str, str] = Field(default_factory=dict)
    base_settings: Mapping[str, Any] = Field(default_factory=dict)
    code_sign_settings: Mapping[str, Any] = Field(default_factory=dict)
    shared_xcconfig: str | None = Field(default=None)
    is_ci: bool = Field(default=False)

    @field_validator("deployment_targets", "base_settings", "code_sign_settings", mode="after")
    @classmethod
    def freeze_mapping(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        """Copy into a read-only view so the context cannot change in place."""
        return MappingProxyType(dict(v))

    @classmethod
    def from_settings(cls, settings: Settings) -> "EnvironmentContext":
        """Freeze loaded settings into an environment context."""
        return cls(
            name=settings.project_name,
            organization_name=settings.organization_name,
            destination=settings.destination,
            deployment_targets=dict(settings.deployment_targets),
            base_settings=dict(settings.base_settings),
            code_sign_settings=settings.code_sign_settings,
            shared_xcconfig=settings.shared_xcconfig,
            is_ci=settings.is_ci(),
        )


@lru_cache(maxsize=1)
def load_environment() -> EnvironmentContext:
    """Load the process-wide environment context once."""
    return EnvironmentContext.from_settings(Settings())


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from the ``log_level`` setting."""
    settings = settings or Settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
