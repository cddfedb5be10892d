"""Module descriptor, the single input of the module assembler."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .manifest import Configuration
from .targets import Destination, ModuleKind, Product, SourceSet, TargetDependency

_MODULE_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


class ModuleDescriptor(BaseModel):
    """High-level description of a feature module.

    Every target name in the generated manifest is derived from ``name``.
    Dependency lists, source globs, resources and overrides are never
    inspected, only placed on the right targets.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="Module name, stem for every derived target name",
        min_length=1,
        max_length=100,
    )
    product: Product = Field(..., description="Product kind of the main target")
    targets: frozenset[ModuleKind] = Field(
        default_factory=frozenset,
        description="Optional sub-targets to generate",
    )
    destination: Destination | None = Field(
        None,
        description="Platform destination, None uses the environment default",
    )
    packages: list[Any] = Field(default_factory=list)

    # Dependencies, in the order they appear on the generated targets
    external_dependencies: list[TargetDependency] = Field(default_factory=list)
    internal_dependencies: list[TargetDependency] = Field(default_factory=list)
    interface_dependencies: list[TargetDependency] = Field(default_factory=list)
    testing_dependencies: list[TargetDependency] = Field(default_factory=list)
    unit_test_dependencies: list[TargetDependency] = Field(default_factory=list)
    ui_test_dependencies: list[TargetDependency] = Field(default_factory=list)
    demo_dependencies: list[TargetDependency] = Field(default_factory=list)

    # Pass-through values for the main target and project
    sources: SourceSet = Field(default_factory=SourceSet.sources)
    resources: list[str] | None = None
    settings: dict[str, Any] = Field(
        default_factory=dict,
        description="Caller build setting overrides",
    )
    additional_plist_rows: dict[str, Any] = Field(default_factory=dict)
    additional_files: list[str] = Field(default_factory=list)
    configurations: list[Configuration] = Field(
        default_factory=list,
        description="Replaces the default configurations when non-empty",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate module name format."""
        if not _MODULE_NAME_RE.match(v):
            raise ValueError(
                "Module name must start with a letter and contain only letters, digits and underscores"
            )
        return v

    @field_validator("sources", mode="before")
    @classmethod
    def coerce_sources(cls, v: Any) -> Any:
        """Accept a bare glob or list of globs for the main target sources."""
        if isinstance(v, str):
            return SourceSet(globs=[v])
        if isinstance(v, (list, tuple)):
            return SourceSet(globs=list(v))
        return v

    def requests(self, kind: ModuleKind) -> bool:
        """Check whether a sub-target kind was requested."""
        return kind in self.targets
