"""Dependency buckets.

A bucket is a declaration-only configuration: it is neither resolvable
nor consumable and only serves as the source of extends edges, giving
build authors a place to declare dependencies for a narrower scope than
``implementation`` or ``api``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from depscopes import naming
from depscopes.errors import DuplicateBucketError
from depscopes.model.components import Component, ComponentKind
from depscopes.model.configurations import Configuration, ConfigurationProvider

if TYPE_CHECKING:
    from depscopes.model.project import Project

logger = logging.getLogger("depscopes.scopes.buckets")


class BucketKind(str, Enum):
    """Scopes a component can declare dependencies in."""

    COMPILE_ONLY = "compileOnly"
    COMPILE_ONLY_API = "compileOnlyApi"
    LINK_ONLY = "linkOnly"
    LINK_ONLY_API = "linkOnlyApi"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def is_api(self) -> bool:
        return self in (BucketKind.COMPILE_ONLY_API, BucketKind.LINK_ONLY_API)

    @property
    def component_kinds(self) -> frozenset:
        """Component kinds that get a bucket of this kind."""
        if self.is_api:
            return frozenset({ComponentKind.LIBRARY})
        return frozenset(ComponentKind)

    def applies_to(self, component: Component) -> bool:
        return component.kind in self.component_kinds

    def description_of(self, component: Component) -> str:
        return f"{naming.capitalize(self.display_name)} dependencies of {component}"


_DISPLAY_NAMES = {
    BucketKind.COMPILE_ONLY: "compile only",
    BucketKind.COMPILE_ONLY_API: "compile only API",
    BucketKind.LINK_ONLY: "link only",
    BucketKind.LINK_ONLY_API: "link only API",
}


def bucket_configuration_name(component: Component, kind: BucketKind) -> str:
    return naming.bucket_configuration_name(component, kind.value)


def create_bucket(project: "Project", component: Component, kind: BucketKind) -> ConfigurationProvider:
    """Register the ``kind`` bucket of ``component``.

    The configuration is registered lazily; its flags and description are
    applied when it is first realized.

    Raises:
        DuplicateBucketError: If the bucket is already registered. Nothing
            is registered or modified in that case.
        NamingConventionError: If the bucket name cannot be derived.
    """
    name = bucket_configuration_name(component, kind)
    if name in project.configurations:
        raise DuplicateBucketError(name, component)

    description = kind.description_of(component)

    def configure_bucket(configuration: Configuration) -> None:
        configuration.consumable = False
        configuration.resolvable = False
        configuration.description = description
        configuration.dependency_scope = kind.value

    provider = project.configurations.register(name, configure_bucket)
    logger.debug("Registered %s bucket %s for %s", kind.value, name, component)
    return provider
