"""Scheme derivation for module manifests."""

from ..core.domain.manifest import ConfigurationName, Scheme
from ..core.domain.targets import ModuleKind
from .naming import TargetNaming


def make_scheme(naming: TargetNaming, configuration: ConfigurationName = ConfigurationName.DEV) -> Scheme:
    """Primary scheme: builds the main target and runs the unit tests.

    The unit test target is referenced even when it was not generated.
    """
    main_name = naming.target_name()
    return _scheme(
        name=main_name,
        build_target=main_name,
        test_target=naming.target_name(ModuleKind.UNIT_TEST),
        configuration=configuration,
    )


def make_demo_scheme(naming: TargetNaming, configuration: ConfigurationName = ConfigurationName.DEV) -> Scheme:
    """Demo scheme: builds the demo app and measures coverage over it."""
    demo_name = naming.target_name(ModuleKind.DEMO)
    return _scheme(
        name=demo_name,
        build_target=demo_name,
        test_target=naming.target_name(ModuleKind.UNIT_TEST),
        configuration=configuration,
    )


def _scheme(
    name: str,
    build_target: str,
    test_target: str,
    configuration: ConfigurationName,
) -> Scheme:
    return Scheme(
        name=name,
        shared=True,
        build_targets=[build_target],
        test_targets=[test_target],
        configuration=configuration.value,
        coverage=True,
        code_coverage_targets=[build_target],
        run_configuration=configuration.value,
        archive_configuration=configuration.value,
        profile_configuration=configuration.value,
        analyze_configuration=configuration.value,
    )
