"""Module Assembly - Manifest generation for feature modules.

This module turns module descriptors into manifests: targets, dependency
edges, schemes and merged project settings.
"""

from .assembler import ModuleAssembler, ModuleAssemblyError, assemble_module
from .naming import TargetNaming
from .settings_rules import SettingsLayer, SettingsMerger

__all__ = [
    "ModuleAssembler",
    "ModuleAssemblyError",
    "assemble_module",
    "TargetNaming",
    "SettingsLayer",
    "SettingsMerger",
]
