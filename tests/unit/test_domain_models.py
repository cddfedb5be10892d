"""Unit tests for domain models."""

import pytest
from pydantic import ValidationError

from modulekit.core.domain import (
    Configuration,
    ConfigurationName,
    DependencyKind,
    InfoPlist,
    Manifest,
    ModuleDescriptor,
    ModuleKind,
    Product,
    Scheme,
    SourceSet,
    Target,
    TargetDependency,
    TargetScript,
)
from modulekit.core.domain.targets import Destination


class TestModuleKind:
    """Test cases for ModuleKind enum."""

    def test_all_module_kinds(self) -> None:
        """Test that all expected sub-target kinds exist."""
        expected_kinds = {"interface", "testing", "unit_test", "ui_test", "demo"}
        actual_kinds = {kind.value for kind in ModuleKind}
        assert actual_kinds == expected_kinds


class TestTargetDependency:
    """Test cases for dependency references."""

    def test_target_reference(self) -> None:
        dependency = TargetDependency.target("LoginInterface")

        assert dependency.kind == DependencyKind.TARGET
        assert dependency.name == "LoginInterface"
        assert dependency.path is None

    def test_project_reference(self) -> None:
        dependency = TargetDependency.project(target="Network", path="Projects/Core/Network")

        assert dependency.kind == DependencyKind.PROJECT
        assert dependency.name == "Network"
        assert dependency.path == "Projects/Core/Network"

    def test_xcframework_reference_uses_file_name(self) -> None:
        dependency = TargetDependency.xcframework("Vendor/Analytics.xcframework")

        assert dependency.name == "Analytics.xcframework"
        assert dependency.path == "Vendor/Analytics.xcframework"

    def test_references_compare_by_value(self) -> None:
        """Test that equal references are equal and hashable."""
        assert TargetDependency.external("Alamofire") == TargetDependency.external("Alamofire")
        assert len({TargetDependency.sdk("UIKit"), TargetDependency.sdk("UIKit")}) == 1

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TargetDependency.target("")


class TestModuleDescriptor:
    """Test cases for ModuleDescriptor model."""

    def test_minimal_descriptor(self) -> None:
        """Test defaults of a minimal descriptor."""
        descriptor = ModuleDescriptor(name="Login", product=Product.FRAMEWORK)

        assert descriptor.targets == frozenset()
        assert descriptor.destination is None
        assert descriptor.sources == SourceSet.sources()
        assert descriptor.resources is None
        assert descriptor.settings == {}
        assert descriptor.configurations == []

    def test_targets_have_set_semantics(self) -> None:
        """Test that repeated kinds collapse."""
        descriptor = ModuleDescriptor(
            name="Login",
            product=Product.FRAMEWORK,
            targets=[ModuleKind.INTERFACE, ModuleKind.INTERFACE, "demo"],
        )

        assert descriptor.targets == frozenset({ModuleKind.INTERFACE, ModuleKind.DEMO})
        assert descriptor.requests(ModuleKind.DEMO)
        assert not descriptor.requests(ModuleKind.TESTING)

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ModuleDescriptor(name="", product=Product.FRAMEWORK)

        assert "name" in str(exc_info.value)

    @pytest.mark.parametrize("name", ["1Login", "Login Feature", "Login-Feature", "Login.Core"])
    def test_invalid_name_rejected(self, name: str) -> None:
        with pytest.raises(ValidationError):
            ModuleDescriptor(name=name, product=Product.FRAMEWORK)

    def test_sources_accept_globs(self) -> None:
        """Test that bare globs are wrapped in a source set."""
        single = ModuleDescriptor(name="Login", product=Product.APP, sources="App/**")
        several = ModuleDescriptor(name="Login", product=Product.APP, sources=["A/**", "B/**"])

        assert single.sources.globs == ["App/**"]
        assert several.sources.globs == ["A/**", "B/**"]

    def test_descriptor_is_immutable(self) -> None:
        descriptor = ModuleDescriptor(name="Login", product=Product.FRAMEWORK)

        with pytest.raises(ValidationError):
            descriptor.name = "Signup"  # type: ignore[misc]


class TestTarget:
    """Test cases for Target model."""

    def test_valid_target(self) -> None:
        target = Target(
            name="Login",
            destinations=[Destination.IPHONE],
            product=Product.FRAMEWORK,
            bundle_id="com.example.Login",
            dependencies=[TargetDependency.target("LoginInterface")],
        )

        assert target.info_plist == InfoPlist.default()
        assert target.sources is None
        assert target.settings is None
        assert target.depends_on("LoginInterface")
        assert not target.depends_on("LoginTesting")
        assert target.dependency_names() == ["LoginInterface"]

    def test_depends_on_ignores_non_target_references(self) -> None:
        target = Target(
            name="Login",
            destinations=[Destination.IPHONE],
            product=Product.FRAMEWORK,
            bundle_id="com.example.Login",
            dependencies=[TargetDependency.external("LoginInterface")],
        )

        assert not target.depends_on("LoginInterface")

    def test_bundle_id_whitespace_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Target(
                name="Login",
                destinations=[Destination.IPHONE],
                product=Product.APP,
                bundle_id="com.example.Log in",
            )

    def test_destinations_required(self) -> None:
        with pytest.raises(ValidationError):
            Target(
                name="Login",
                destinations=[],
                product=Product.APP,
                bundle_id="com.example.Login",
            )

    def test_swiftlint_script(self) -> None:
        script = TargetScript.swiftlint()

        assert script.name == "SwiftLint"
        assert "swiftlint" in script.script
        assert script.phase == "pre"


class TestManifestModels:
    """Test cases for Configuration, Scheme and Manifest."""

    def test_configuration_constructors(self) -> None:
        dev = Configuration.debug(ConfigurationName.DEV, xcconfig="Shared.xcconfig")
        prod = Configuration.release("prod")

        assert dev.name == "dev"
        assert dev.variant == "debug"
        assert dev.xcconfig == "Shared.xcconfig"
        assert prod.variant == "release"
        assert prod.xcconfig is None

    def test_scheme_accessors(self) -> None:
        scheme = Scheme(name="Login", build_targets=["Login"], test_targets=["LoginTests"])

        assert scheme.build_target == "Login"
        assert scheme.test_target == "LoginTests"
        assert scheme.configuration == "dev"
        assert scheme.shared is True

    def test_scheme_without_tests(self) -> None:
        scheme = Scheme(name="Login", build_targets=["Login"])
        assert scheme.test_target is None

    def test_manifest_lookup(self) -> None:
        target = Target(
            name="Login",
            destinations=[Destination.IPHONE],
            product=Product.FRAMEWORK,
            bundle_id="com.example.Login",
        )
        manifest = Manifest(
            name="Login",
            organization_name="com.example",
            targets=[target],
            schemes=[Scheme(name="Login", build_targets=["Login"])],
        )

        assert manifest.target_names() == ["Login"]
        assert manifest.get_target("Login") == target
        assert manifest.get_target("LoginTests") is None
        assert manifest.has_target("Login")
        assert manifest.get_scheme("Login") is not None
        assert manifest.get_scheme("LoginDemoApp") is None
