"""Naming policy for derived targets.

Every target name, bundle identifier and target reference in a module
manifest is derived here, so a reference always matches the name the
target was created with.
"""

from ..core.domain.targets import ModuleKind, TargetDependency

TARGET_SUFFIXES: dict[ModuleKind, str] = {
    ModuleKind.INTERFACE: "Interface",
    ModuleKind.TESTING: "Testing",
    ModuleKind.UNIT_TEST: "Tests",
    ModuleKind.UI_TEST: "UITests",
    ModuleKind.DEMO: "DemoApp",
}


class TargetNaming:
    """Derives names for one module.

    ``kind=None`` stands for the main target, which carries the bare
    module name.
    """

    def __init__(self, module_name: str, organization_name: str):
        self.module_name = module_name
        self.organization_name = organization_name

    def target_name(self, kind: ModuleKind | None = None) -> str:
        if kind is None:
            return self.module_name
        return f"{self.module_name}{TARGET_SUFFIXES[kind]}"

    def bundle_id(self, kind: ModuleKind | None = None) -> str:
        return f"{self.organization_name}.{self.target_name(kind)}"

    def reference(self, kind: ModuleKind | None = None) -> TargetDependency:
        return TargetDependency.target(self.target_name(kind))

    def all_target_names(self) -> set[str]:
        """Every name this module could derive, emitted or not."""
        return set(self.derived_kinds())

    def derived_kinds(self) -> dict[str, ModuleKind | None]:
        """Map each derivable target name back to its kind."""
        kinds: dict[str, ModuleKind | None] = {
            self.target_name(kind): kind for kind in TARGET_SUFFIXES
        }
        kinds[self.target_name()] = None
        return kinds
