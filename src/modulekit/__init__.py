"""modulekit - declarative manifest generation for feature modules."""

from .assembly import ModuleAssembler, ModuleAssemblyError, assemble_module
from .core.config import EnvironmentContext, Settings, configure_logging, load_environment
from .core.domain import (
    Configuration,
    Destination,
    Manifest,
    ModuleDescriptor,
    ModuleKind,
    Product,
    Scheme,
    Target,
    TargetDependency,
)
from .registry import ModuleRegistry, feature_module

__all__ = [
    "ModuleAssembler",
    "ModuleAssemblyError",
    "assemble_module",
    "EnvironmentContext",
    "Settings",
    "configure_logging",
    "load_environment",
    "Configuration",
    "Destination",
    "Manifest",
    "ModuleDescriptor",
    "ModuleKind",
    "Product",
    "Scheme",
    "Target",
    "TargetDependency",
    "ModuleRegistry",
    "feature_module",
]

__version__ = "0.1.0"
