"""Module assembler.

Turns a ``ModuleDescriptor`` into a ``Manifest``: decides which targets
exist, what each target depends on, which schemes are exposed and what
the project settings are. The assembler performs no I/O and holds no
state between calls, so assembling the same descriptor twice yields
equal manifests.
"""

import logging
from typing import Any

from ..core.config import EnvironmentContext
from ..core.domain.manifest import Manifest, Scheme
from ..core.domain.module import ModuleDescriptor
from ..core.domain.targets import (
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
from .naming import TargetNaming
from .schemes import make_demo_scheme, make_scheme
from .settings_rules import SettingsMerger

logger = logging.getLogger(__name__)

DEMO_PLIST_ROWS = {
    "UIMainStoryboardFile": "",
    "UILaunchStoryboardName": "LaunchScreen",
    "ENABLE_TESTS": True,
}
DEMO_RESOURCES = ["Demo/Resources/**"]

# Targets may only depend on module targets of a lower rank
BUILD_RANK: dict[ModuleKind | None, int] = {
    ModuleKind.INTERFACE: 0,
    None: 1,
    ModuleKind.TESTING: 1,
    ModuleKind.DEMO: 2,
    ModuleKind.UNIT_TEST: 3,
    ModuleKind.UI_TEST: 3,
}


class ModuleAssemblyError(Exception):
    """A module descriptor violates an assembly precondition."""


class ModuleAssembler:
    """Builds module manifests against one environment.

    Targets are emitted in a fixed order:
    interface, main, testing, unit tests, UI tests, demo app.
    """

    def __init__(
        self,
        env: EnvironmentContext,
        strict: bool = False,
        settings_merger: SettingsMerger | None = None,
    ):
        """Initialize the assembler.

        Args:
            env: Environment context read by every assembly
            strict: Reject descriptors requesting testing doubles without an interface
            settings_merger: Optional merger with a custom settings layer stack
        """
        self.env = env
        self.strict = strict
        self.settings_merger = settings_merger or SettingsMerger()

    def assemble(self, descriptor: ModuleDescriptor) -> Manifest:
        """Assemble the manifest for one module.

        Args:
            descriptor: Module to assemble

        Returns:
            Manifest with ordered targets and schemes

        Raises:
            ModuleAssemblyError: If the descriptor violates a precondition
        """
        self._check_preconditions(descriptor)

        naming = TargetNaming(descriptor.name, self.env.organization_name)
        scripts = [] if self.env.is_ci else [TargetScript.swiftlint()]
        destination = descriptor.destination or self.env.destination

        interface = self._interface_target(descriptor, naming, destination, scripts)
        testing = self._testing_target(descriptor, naming, destination, scripts)
        test_dependencies = self._test_target_dependencies(descriptor, naming, testing is not None)

        candidates = (
            interface,
            self._main_target(descriptor, naming, destination, scripts, interface is not None),
            testing,
            self._unit_test_target(descriptor, naming, destination, scripts, test_dependencies),
            self._ui_test_target(descriptor, naming, destination, scripts, test_dependencies),
            self._demo_target(descriptor, naming, destination, scripts, testing is not None),
        )
        targets = [target for target in candidates if target is not None]

        self._verify_references(targets, naming)

        manifest = Manifest(
            name=descriptor.name,
            organization_name=self.env.organization_name,
            packages=list(descriptor.packages),
            settings=self.settings_merger.build(descriptor, self.env),
            targets=targets,
            schemes=self._schemes(descriptor, naming),
        )

        logger.info(
            f"Assembled module {descriptor.name}: "
            f"targets={manifest.target_names()}, schemes={len(manifest.schemes)}"
        )
        return manifest

    def _check_preconditions(self, descriptor: ModuleDescriptor) -> None:
        if descriptor.requests(ModuleKind.TESTING) and not descriptor.requests(ModuleKind.INTERFACE):
            if self.strict:
                raise ModuleAssemblyError(
                    f"Module '{descriptor.name}' requests a testing target without an interface target"
                )
            logger.warning(
                f"Module {descriptor.name} requests testing without interface; "
                f"no testing target will be generated"
            )

    def _target(
        self,
        naming: TargetNaming,
        kind: ModuleKind | None,
        product: Product,
        destination: Destination,
        scripts: list[TargetScript],
        dependencies: list[TargetDependency],
        **fields: Any,
    ) -> Target:
        """Create a target with the fields every module target shares."""
        target = Target(
            name=naming.target_name(kind),
            destinations=[destination],
            product=product,
            bundle_id=naming.bundle_id(kind),
            deployment_targets=dict(self.env.deployment_targets),
            scripts=list(scripts),
            dependencies=dependencies,
            **fields,
        )
        logger.debug(f"Created target {target.name} depending on {target.dependency_names()}")
        return target

    def _interface_target(
        self,
        descriptor: ModuleDescriptor,
        naming: TargetNaming,
        destination: Destination,
        scripts: list[TargetScript],
    ) -> Target | None:
        if not descriptor.requests(ModuleKind.INTERFACE):
            return None
        # Interfaces only carry their own dependencies
        return self._target(
            naming,
            ModuleKind.INTERFACE,
            Product.FRAMEWORK,
            destination,
            scripts,
            list(descriptor.interface_dependencies),
            info_plist=InfoPlist.default(),
            sources=SourceSet.interface(),
            additional_files=list(descriptor.additional_files),
        )

    def _main_target(
        self,
        descriptor: ModuleDescriptor,
        naming: TargetNaming,
        destination: Destination,
        scripts: list[TargetScript],
        has_interface: bool,
    ) -> Target:
        dependencies = [*descriptor.internal_dependencies, *descriptor.external_dependencies]
        if has_interface:
            dependencies.append(naming.reference(ModuleKind.INTERFACE))
        return self._target(
            naming,
            None,
            descriptor.product,
            destination,
            scripts,
            dependencies,
            info_plist=InfoPlist.extending_default(descriptor.additional_plist_rows),
            sources=descriptor.sources,
            resources=list(descriptor.resources) if descriptor.resources is not None else None,
        )

    def _testing_target(
        self,
        descriptor: ModuleDescriptor,
        naming: TargetNaming,
        destination: Destination,
        scripts: list[TargetScript],
    ) -> Target | None:
        if not (descriptor.requests(ModuleKind.TESTING) and descriptor.requests(ModuleKind.INTERFACE)):
            return None
        return self._target(
            naming,
            ModuleKind.TESTING,
            Product.FRAMEWORK,
            destination,
            scripts,
            [naming.reference(ModuleKind.INTERFACE), *descriptor.testing_dependencies],
            info_plist=InfoPlist.default(),
            sources=SourceSet.testing(),
        )

    def _test_target_dependencies(
        self,
        descriptor: ModuleDescriptor,
        naming: TargetNaming,
        has_testing: bool,
    ) -> list[TargetDependency]:
        """Dependencies shared by unit and UI test targets.

        Tests run against the demo app when there is one, otherwise
        against the module itself, plus the testing doubles if generated.
        """
        host_kind = ModuleKind.DEMO if descriptor.requests(ModuleKind.DEMO) else None
        dependencies = [naming.reference(host_kind)]
        if has_testing:
            dependencies.append(naming.reference(ModuleKind.TESTING))
        return dependencies

    def _unit_test_target(
        self,
        descriptor: ModuleDescriptor,
        naming: TargetNaming,
        destination: Destination,
        scripts: list[TargetScript],
        test_dependencies: list[TargetDependency],
    ) -> Target | None:
        if not descriptor.requests(ModuleKind.UNIT_TEST):
            return None
        return self._target(
            naming,
            ModuleKind.UNIT_TEST,
            Product.UNIT_TESTS,
            destination,
            scripts,
            [*test_dependencies, *descriptor.unit_test_dependencies],
            info_plist=InfoPlist.default(),
            sources=SourceSet.unit_tests(),
        )

    def _ui_test_target(
        self,
        descriptor: ModuleDescriptor,
        naming: TargetNaming,
        destination: Destination,
        scripts: list[TargetScript],
        test_dependencies: list[TargetDependency],
    ) -> Target | None:
        if not descriptor.requests(ModuleKind.UI_TEST):
            return None
        return self._target(
            naming,
            ModuleKind.UI_TEST,
            Product.UI_TESTS,
            destination,
            scripts,
            [*test_dependencies, *descriptor.ui_test_dependencies],
            info_plist=InfoPlist.default(),
        )

    def _demo_target(
        self,
        descriptor: ModuleDescriptor,
        naming: TargetNaming,
        destination: Destination,
        scripts: list[TargetScript],
        has_testing: bool,
    ) -> Target | None:
        if not descriptor.requests(ModuleKind.DEMO):
            return None
        dependencies = [*descriptor.demo_dependencies, naming.reference()]
        if has_testing:
            dependencies.append(naming.reference(ModuleKind.TESTING))
        return self._target(
            naming,
            ModuleKind.DEMO,
            Product.APP,
            destination,
            scripts,
            dependencies,
            info_plist=InfoPlist.extending_default(DEMO_PLIST_ROWS),
            sources=SourceSet.demo_sources(),
            resources=list(DEMO_RESOURCES),
        )

    def _schemes(self, descriptor: ModuleDescriptor, naming: TargetNaming) -> list[Scheme]:
        schemes = [make_scheme(naming)]
        if descriptor.requests(ModuleKind.DEMO):
            schemes.append(make_demo_scheme(naming))
        return schemes

    def _verify_references(self, targets: list[Target], naming: TargetNaming) -> None:
        """Reject module references that are dangling or break the build order.

        A target may only reference a sibling of a strictly lower build
        rank, which rules out self-references and cycles. Caller-supplied
        references to other targets are treated as external.
        """
        emitted = {target.name for target in targets}
        derived = naming.derived_kinds()
        for target in targets:
            owner_rank = BUILD_RANK[derived[target.name]]
            for dependency in target.dependencies:
                if dependency.kind != DependencyKind.TARGET or dependency.name not in derived:
                    continue
                if dependency.name not in emitted:
                    raise ModuleAssemblyError(
                        f"Target '{target.name}' references '{dependency.name}', "
                        f"which is not generated for module '{naming.module_name}'"
                    )
                if BUILD_RANK[derived[dependency.name]] >= owner_rank:
                    raise ModuleAssemblyError(
                        f"Target '{target.name}' cannot depend on '{dependency.name}': "
                        f"self-references and cycles between module targets are not allowed"
                    )


def assemble_module(
    descriptor: ModuleDescriptor,
    env: EnvironmentContext,
    *,
    strict: bool = False,
) -> Manifest:
    """Assemble the manifest for one module against an environment."""
    return ModuleAssembler(env, strict=strict).assemble(descriptor)
