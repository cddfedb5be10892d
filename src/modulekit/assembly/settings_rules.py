"""Settings layers and the ordered settings merge.

Project settings are built by merging a stack of layers in order, later
layers winning on conflicting keys:

    base settings -> code signing -> caller overrides -> linker flags
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from ..core.config import EnvironmentContext
from ..core.domain.manifest import Configuration, ConfigurationName, ProjectSettings
from ..core.domain.module import ModuleDescriptor
from ..core.domain.targets import Product

logger = logging.getLogger(__name__)

LINKER_FLAGS_KEY = "OTHER_LDFLAGS"
FORCE_LOAD_FLAG = "-all_load"


class SettingsLayer(ABC):
    """Abstract base class for settings layers.

    A layer contributes a mapping of build settings for one module.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the layer name for logging and debugging."""
        pass

    @abstractmethod
    def resolve(self, descriptor: ModuleDescriptor, env: EnvironmentContext) -> dict[str, Any]:
        """Resolve the settings this layer contributes.

        Args:
            descriptor: Module being assembled
            env: Environment context

        Returns:
            Build settings keyed by setting name
        """
        pass


class BaseSettingsLayer(SettingsLayer):
    """Environment-wide base settings."""

    @property
    def name(self) -> str:
        return "base_settings"

    def resolve(self, descriptor: ModuleDescriptor, env: EnvironmentContext) -> dict[str, Any]:
        return dict(env.base_settings)


class CodeSignLayer(SettingsLayer):
    """Code signing defaults."""

    @property
    def name(self) -> str:
        return "code_sign"

    def resolve(self, descriptor: ModuleDescriptor, env: EnvironmentContext) -> dict[str, Any]:
        return dict(env.code_sign_settings)


class OverridesLayer(SettingsLayer):
    """Settings supplied by the module descriptor."""

    @property
    def name(self) -> str:
        return "overrides"

    def resolve(self, descriptor: ModuleDescriptor, env: EnvironmentContext) -> dict[str, Any]:
        return dict(descriptor.settings)


class LinkerFlagLayer(SettingsLayer):
    """Linker flag policy.

    Frameworks force-load every object file of their static dependencies;
    every other product only inherits the linker flags.
    """

    @property
    def name(self) -> str:
        return "linker_flags"

    def resolve(self, descriptor: ModuleDescriptor, env: EnvironmentContext) -> dict[str, Any]:
        if descriptor.product == Product.FRAMEWORK:
            return {LINKER_FLAGS_KEY: f"$(inherited) {FORCE_LOAD_FLAG}"}
        return {LINKER_FLAGS_KEY: "$(inherited)"}


def default_layers() -> list[SettingsLayer]:
    return [
        BaseSettingsLayer(),
        CodeSignLayer(),
        OverridesLayer(),
        LinkerFlagLayer(),
    ]


def default_configurations(xcconfig: str | None = None) -> list[Configuration]:
    """Three-tier configuration set used when a module supplies none."""
    return [
        Configuration.debug(ConfigurationName.DEV, xcconfig=xcconfig),
        Configuration.debug(ConfigurationName.STAGE, xcconfig=xcconfig),
        Configuration.release(ConfigurationName.PROD, xcconfig=xcconfig),
    ]


class SettingsMerger:
    """Merges settings layers into project settings."""

    def __init__(self, custom_layers: list[SettingsLayer] | None = None):
        """Initialize the merger.

        Args:
            custom_layers: Optional layer stack to use instead of the defaults
        """
        self.layers = custom_layers if custom_layers is not None else default_layers()

    def merge(
        self,
        descriptor: ModuleDescriptor,
        env: EnvironmentContext,
    ) -> tuple[dict[str, Any], list[str]]:
        """Merge every layer in order.

        Returns:
            Tuple of (merged settings, names of layers that contributed keys)
        """
        merged: dict[str, Any] = {}
        applied_layers: list[str] = []

        for layer in self.layers:
            contribution = layer.resolve(descriptor, env)
            if not contribution:
                continue
            overridden = sorted(key for key in contribution if key in merged)
            if overridden:
                logger.debug(
                    f"Layer '{layer.name}' overrides {', '.join(overridden)} for {descriptor.name}"
                )
            merged.update(contribution)
            applied_layers.append(layer.name)

        return merged, applied_layers

    def configurations(
        self,
        descriptor: ModuleDescriptor,
        env: EnvironmentContext,
    ) -> list[Configuration]:
        """Caller configurations replace the defaults wholesale."""
        if descriptor.configurations:
            return list(descriptor.configurations)
        return default_configurations(env.shared_xcconfig)

    def build(self, descriptor: ModuleDescriptor, env: EnvironmentContext) -> ProjectSettings:
        base, applied_layers = self.merge(descriptor, env)
        logger.debug(f"Settings for {descriptor.name} merged from layers: {applied_layers}")
        return ProjectSettings(
            base=base,
            configurations=self.configurations(descriptor, env),
            default_settings="recommended",
        )
