"""Feature module decorator for declaring workspace modules.

This module provides the @feature_module decorator: the decorator
arguments name the module and its shape, the decorated function returns
the remaining descriptor fields (dependencies, sources, overrides).
"""

from typing import TYPE_CHECKING, Any, Callable, Iterable, TypeVar

from ..core.domain.module import ModuleDescriptor
from ..core.domain.targets import ModuleKind, Product

if TYPE_CHECKING:
    from .registry import ModuleRegistry

F = TypeVar('F', bound=Callable[..., Any])


def feature_module(
    name: str,
    product: Product,
    targets: Iterable[ModuleKind] = (),
    registry: "ModuleRegistry | None" = None,
) -> Callable[[F], F]:
    """Decorator to declare a function as a feature module factory.

    The function is called once, at decoration time, and must return a
    mapping of extra ``ModuleDescriptor`` fields (or None).

    Args:
        name: Module name
        product: Product kind of the main target
        targets: Sub-target kinds to generate
        registry: Registry to register the module with; without one the
            descriptor is only attached to the function

    Returns:
        The decorated function, tagged with its module descriptor

    Example:
        workspace = ModuleRegistry()

        @feature_module(
            name="Login",
            product=Product.FRAMEWORK,
            targets={ModuleKind.INTERFACE, ModuleKind.UNIT_TEST},
            registry=workspace,
        )
        def login() -> dict:
            return {"external_dependencies": [TargetDependency.external("Alamofire")]}
    """
    def decorator(func: F) -> F:
        fields = func() or {}
        if not isinstance(fields, dict):
            raise TypeError(
                f"Feature module factory '{func.__name__}' must return a dict or None, "
                f"got {type(fields).__name__}"
            )

        descriptor = ModuleDescriptor(
            name=name,
            product=product,
            targets=frozenset(targets),
            **fields,
        )

        func._feature_module_descriptor = descriptor  # type: ignore

        if registry is not None:
            registry.register_module(descriptor)

        return func

    return decorator


def get_module_descriptor(func: Callable[..., Any]) -> ModuleDescriptor | None:
    """Get the module descriptor attached to a decorated function.

    Args:
        func: Function to check for module metadata

    Returns:
        Module descriptor if function is a feature module factory, None otherwise
    """
    return getattr(func, '_feature_module_descriptor', None)


def is_feature_module(func: Callable[..., Any]) -> bool:
    """Check if a function is a feature module factory."""
    return hasattr(func, '_feature_module_descriptor')
