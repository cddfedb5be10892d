"""Target models for module manifests.

These models describe the buildable units a module manifest is made of,
together with the opaque values (products, destinations, dependency
references, source globs, plist handling, build scripts) the manifest
renderer consumes.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ModuleKind(str, Enum):
    """Optional sub-targets a feature module can request.

    The main implementation target is not listed here: it is always
    generated.
    """

    INTERFACE = "interface"   # Public protocols and models
    TESTING = "testing"       # Test doubles for the interface
    UNIT_TEST = "unit_test"
    UI_TEST = "ui_test"
    DEMO = "demo"             # Standalone app exercising the module


class Product(str, Enum):
    """Product kinds understood by the manifest renderer."""

    APP = "app"
    STATIC_LIBRARY = "static_library"
    DYNAMIC_LIBRARY = "dynamic_library"
    FRAMEWORK = "framework"
    STATIC_FRAMEWORK = "static_framework"
    UNIT_TESTS = "unit_tests"
    UI_TESTS = "ui_tests"
    BUNDLE = "bundle"
    APP_EXTENSION = "app_extension"


class Destination(str, Enum):
    """Platform destinations a target can be built for."""

    IPHONE = "iPhone"
    IPAD = "iPad"
    MAC = "mac"
    MAC_WITH_IPAD_DESIGN = "macWithiPadDesign"
    APPLE_VISION = "appleVision"
    APPLE_TV = "appleTv"
    APPLE_WATCH = "appleWatch"


class DependencyKind(str, Enum):
    """Kinds of dependency references."""

    TARGET = "target"            # Target in the same manifest
    PROJECT = "project"          # Target in another project
    EXTERNAL = "external"        # Third-party dependency
    PACKAGE = "package"          # Package product
    SDK = "sdk"
    XCFRAMEWORK = "xcframework"


class TargetDependency(BaseModel):
    """Reference from a target to something it depends on.

    Only ``target`` references are created by the assembler; every other
    kind is supplied by callers and passed through untouched.
    """

    model_config = ConfigDict(frozen=True)

    kind: DependencyKind = Field(..., description="What the reference points at")
    name: str = Field(..., description="Target, product or library name", min_length=1)
    path: str | None = Field(None, description="Project or artifact path when relevant")

    @classmethod
    def target(cls, name: str) -> "TargetDependency":
        return cls(kind=DependencyKind.TARGET, name=name)

    @classmethod
    def project(cls, target: str, path: str) -> "TargetDependency":
        return cls(kind=DependencyKind.PROJECT, name=target, path=path)

    @classmethod
    def external(cls, name: str) -> "TargetDependency":
        return cls(kind=DependencyKind.EXTERNAL, name=name)

    @classmethod
    def package(cls, product: str) -> "TargetDependency":
        return cls(kind=DependencyKind.PACKAGE, name=product)

    @classmethod
    def sdk(cls, name: str) -> "TargetDependency":
        return cls(kind=DependencyKind.SDK, name=name)

    @classmethod
    def xcframework(cls, path: str) -> "TargetDependency":
        return cls(kind=DependencyKind.XCFRAMEWORK, name=path.rsplit("/", 1)[-1], path=path)


class SourceSet(BaseModel):
    """Named list of file globs, resolved later by the renderer."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="custom")
    globs: list[str] = Field(default_factory=list)

    @classmethod
    def sources(cls) -> "SourceSet":
        return cls(name="sources", globs=["Sources/**"])

    @classmethod
    def interface(cls) -> "SourceSet":
        return cls(name="interface", globs=["Interface/**"])

    @classmethod
    def testing(cls) -> "SourceSet":
        return cls(name="testing", globs=["Testing/**"])

    @classmethod
    def unit_tests(cls) -> "SourceSet":
        return cls(name="unit_tests", globs=["Tests/**"])

    @classmethod
    def demo_sources(cls) -> "SourceSet":
        return cls(name="demo_sources", globs=["Demo/Sources/**"])


class InfoPlist(BaseModel):
    """Info.plist handling for a target."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["default", "extending_default"] = "default"
    entries: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def default(cls) -> "InfoPlist":
        return cls()

    @classmethod
    def extending_default(cls, entries: dict[str, Any]) -> "InfoPlist":
        return cls(kind="extending_default", entries=dict(entries))


class TargetScript(BaseModel):
    """Build phase script attached to a target."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    script: str = Field(..., description="Shell script body")
    phase: Literal["pre", "post"] = "pre"

    @classmethod
    def swiftlint(cls) -> "TargetScript":
        """Lint phase; skipped silently when the linter is not installed."""
        return cls(
            name="SwiftLint",
            script=(
                'if which swiftlint >/dev/null; then\n'
                '  swiftlint\n'
                'else\n'
                '  echo "warning: SwiftLint not installed"\n'
                'fi'
            ),
        )


class Target(BaseModel):
    """A single buildable unit in a module manifest."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Target name derived from the module name", min_length=1)
    destinations: list[Destination] = Field(..., min_length=1)
    product: Product
    bundle_id: str = Field(..., description="Bundle identifier, <organization>.<target name>")
    deployment_targets: dict[str, str] = Field(default_factory=dict)
    info_plist: InfoPlist = Field(default_factory=InfoPlist.default)
    sources: SourceSet | None = Field(None, description="Source globs, None for UI test targets")
    resources: list[str] | None = None
    scripts: list[TargetScript] = Field(default_factory=list)
    dependencies: list[TargetDependency] = Field(default_factory=list)
    settings: dict[str, Any] | None = Field(
        None,
        description="Target-level settings; None inherits the manifest settings",
    )
    additional_files: list[str] = Field(default_factory=list)

    @field_validator("bundle_id")
    @classmethod
    def validate_bundle_id(cls, v: str) -> str:
        """Bundle identifiers are dotted and never contain whitespace."""
        if any(ch.isspace() for ch in v):
            raise ValueError("Bundle identifier must not contain whitespace")
        return v

    def depends_on(self, name: str) -> bool:
        """Check whether this target references a target by name."""
        return any(
            dep.kind == DependencyKind.TARGET and dep.name == name
            for dep in self.dependencies
        )

    def dependency_names(self) -> list[str]:
        return [dep.name for dep in self.dependencies]
