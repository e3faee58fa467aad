"""In-memory native build model."""

from depscopes.model.collections import DomainObjectSet
from depscopes.model.components import Binary, BinaryKind, Component, ComponentKind
from depscopes.model.configurations import (
    Configuration,
    ConfigurationContainer,
    ConfigurationProvider,
)
from depscopes.model.conventions import NativeConventions
from depscopes.model.project import Build, Project

__all__ = [
    "Binary",
    "BinaryKind",
    "Build",
    "Component",
    "ComponentKind",
    "Configuration",
    "ConfigurationContainer",
    "ConfigurationProvider",
    "DomainObjectSet",
    "NativeConventions",
    "Project",
]
