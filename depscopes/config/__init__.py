"""Configuration schema and validation for depscopes."""

from .schema import (
    BinarySpec,
    BuildModelSpec,
    ComponentSpec,
    ProjectSpec,
    ScopesConfig,
)

__all__ = [
    "BinarySpec",
    "BuildModelSpec",
    "ComponentSpec",
    "ProjectSpec",
    "ScopesConfig",
]
