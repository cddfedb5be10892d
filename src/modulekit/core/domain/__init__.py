"""Domain models for module manifests.

This module contains the input descriptor and every output entity the
assembler produces.
"""

# Target models - Buildable units and the opaque values they carry
from .targets import (
    DependencyKind,
    Destination,
    InfoPlist,
    ModuleKind,
    Product,
    SourceSet,
    Target,
    TargetDependency,
    TargetScript,
)

# Manifest models - Assembler output
from .manifest import (
    Configuration,
    ConfigurationName,
    Manifest,
    ProjectSettings,
    Scheme,
)

# Module models - Assembler input
from .module import ModuleDescriptor

__all__ = [
    # Target models
    "DependencyKind",
    "Destination",
    "InfoPlist",
    "ModuleKind",
    "Product",
    "SourceSet",
    "Target",
    "TargetDependency",
    "TargetScript",

    # Manifest models
    "Configuration",
    "ConfigurationName",
    "Manifest",
    "ProjectSettings",
    "Scheme",

    # Module models
    "ModuleDescriptor",
]
