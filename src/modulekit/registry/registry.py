"""Module Registry implementation for multi-module workspaces.

This module provides a registry of the feature modules declared in one
workspace, with discovery, filtering and bulk assembly. Each workspace
owns its own ``ModuleRegistry`` instance; nothing is shared between
instances.
"""

import logging
from typing import Any, Dict, List

from ..assembly.assembler import ModuleAssembler
from ..core.config import EnvironmentContext
from ..core.domain.manifest import Manifest
from ..core.domain.module import ModuleDescriptor
from ..core.domain.targets import ModuleKind, Product

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Registry for the modules of one workspace.

    Modules are kept in registration order. Each module is assembled
    independently of the others.
    """

    def __init__(self) -> None:
        self._modules: Dict[str, ModuleDescriptor] = {}

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def register_module(self, descriptor: ModuleDescriptor) -> None:
        """Register a module descriptor.

        Args:
            descriptor: Module to register; replaces a module with the same name
        """
        if descriptor.name in self._modules:
            logger.warning(f"Module '{descriptor.name}' is being re-registered")

        self._modules[descriptor.name] = descriptor
        logger.info(
            f"Registered module '{descriptor.name}' "
            f"({descriptor.product.value}, {len(descriptor.targets)} sub-targets)"
        )

    def get_module(self, name: str) -> ModuleDescriptor | None:
        """Get a module descriptor by name.

        Args:
            name: Module name to retrieve

        Returns:
            Module descriptor or None if not found
        """
        return self._modules.get(name)

    def list_modules(
        self,
        product: Product | None = None,
        kind: ModuleKind | None = None,
    ) -> List[str]:
        """List registered modules with optional filtering.

        Args:
            product: Filter by main product kind
            kind: Filter by requested sub-target kind

        Returns:
            Module names in registration order
        """
        modules = list(self._modules.values())

        if product:
            modules = [module for module in modules if module.product == product]

        if kind:
            modules = [module for module in modules if module.requests(kind)]

        return [module.name for module in modules]

    def assemble(
        self,
        name: str,
        env: EnvironmentContext,
        strict: bool = False,
    ) -> Manifest:
        """Assemble one registered module.

        Raises:
            ValueError: If the module is not registered
        """
        descriptor = self.get_module(name)
        if descriptor is None:
            raise ValueError(f"Module '{name}' not found")
        return ModuleAssembler(env, strict=strict).assemble(descriptor)

    def assemble_all(
        self,
        env: EnvironmentContext,
        strict: bool = False,
    ) -> Dict[str, Manifest]:
        """Assemble every registered module.

        Args:
            env: Environment context shared by all modules
            strict: Forwarded to the assembler

        Returns:
            Manifests keyed by module name, in registration order
        """
        assembler = ModuleAssembler(env, strict=strict)
        manifests = {
            name: assembler.assemble(descriptor)
            for name, descriptor in self._modules.items()
        }
        logger.info(f"Assembled {len(manifests)} modules")
        return manifests

    def get_registry_stats(self) -> dict[str, Any]:
        """Get registry statistics.

        Returns:
            Dictionary with registry statistics
        """
        product_counts = {}
        for product in Product:
            count = len(self.list_modules(product=product))
            if count:
                product_counts[product.value] = count

        return {
            "total_modules": len(self._modules),
            "product_distribution": product_counts,
            "modules_by_kind": {
                kind.value: len(self.list_modules(kind=kind)) for kind in ModuleKind
            },
        }

    def clear_registry(self) -> None:
        """Clear all registered modules."""
        self._modules.clear()
        logger.info("Module registry cleared")

    def discover_modules_from_module(self, module: Any) -> List[str]:
        """Discover and register modules declared in a Python module.

        Args:
            module: Python module to scan for @feature_module factories

        Returns:
            List of discovered module names
        """
        from .decorator import get_module_descriptor, is_feature_module

        discovered = []

        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if callable(attr) and is_feature_module(attr):
                descriptor = get_module_descriptor(attr)
                if descriptor and descriptor.name not in discovered:
                    self.register_module(descriptor)
                    discovered.append(descriptor.name)

        logger.info(f"Discovered {len(discovered)} modules from {module.__name__}")
        return discovered
