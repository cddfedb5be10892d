"""Module Registry - Workspace module declaration and discovery.

This module provides the @feature_module decorator for declaring modules
and a per-workspace registry that assembles every registered module
against one environment.
"""

from .decorator import feature_module
from .registry import ModuleRegistry

__all__ = ["feature_module", "ModuleRegistry"]
