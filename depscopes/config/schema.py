"""Configuration schema definitions using Pydantic for validation.

``ScopesConfig`` controls which dependency buckets the plugin adds and
whether shared libraries are patched into link boundaries. The remaining
models describe a build model file: projects, their native components
and binaries, and the dependencies declared on configurations.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator

from depscopes.model.components import BinaryKind, ComponentKind
from depscopes.scopes.buckets import BucketKind


def _unique_names(items: List[Any], what: str) -> List[Any]:
    seen = set()
    for item in items:
        if item.name in seen:
            raise ValueError(f"Duplicate {what} name '{item.name}'")
        seen.add(item.name)
    return items


class ScopesConfig(BaseModel):
    """Dependency-scopes plugin settings.

    Attributes:
        buckets: Bucket kinds to add to each applicable component.
        link_boundary: Whether shared-library link elements expose only
            API dependencies.
    """

    buckets: List[BucketKind] = Field(default_factory=lambda: list(BucketKind))
    link_boundary: bool = True

    model_config = {"extra": "forbid"}

    @field_validator("buckets")
    @classmethod
    def dedupe_buckets(cls, v: List[BucketKind]) -> List[BucketKind]:
        """Drop repeated bucket kinds, keeping first occurrence order."""
        return list(dict.fromkeys(v))

    def is_enabled(self, kind: BucketKind) -> bool:
        return kind in self.buckets


class BinarySpec(BaseModel):
    """A binary declared on a component."""

    name: str = Field(min_length=1)
    kind: BinaryKind


class ComponentSpec(BaseModel):
    """A native component and its binaries."""

    name: str = Field(default="main", min_length=1)
    kind: ComponentKind
    binaries: List[BinarySpec] = Field(default_factory=list)

    @field_validator("binaries")
    @classmethod
    def validate_binaries(cls, v: List[BinarySpec]) -> List[BinarySpec]:
        return _unique_names(v, "binary")


class ProjectSpec(BaseModel):
    """A project, its components and declared dependencies.

    Attributes:
        name: Project name; its path is ``:<name>``.
        components: Components declared in the project.
        dependencies: Configuration name to dependency notations.
    """

    name: str = Field(min_length=1)
    components: List[ComponentSpec] = Field(default_factory=list)
    dependencies: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("components")
    @classmethod
    def validate_components(cls, v: List[ComponentSpec]) -> List[ComponentSpec]:
        return _unique_names(v, "component")


class BuildModelSpec(BaseModel):
    """Top-level build model description."""

    scopes: ScopesConfig = Field(default_factory=ScopesConfig)
    projects: List[ProjectSpec] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @field_validator("projects")
    @classmethod
    def validate_projects(cls, v: List[ProjectSpec]) -> List[ProjectSpec]:
        return _unique_names(v, "project")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuildModelSpec":
        return cls.model_validate(data)
