"""Dependency-scopes plugin.

Adds ``compileOnly``, ``compileOnlyApi``, ``linkOnly`` and ``linkOnlyApi``
dependency buckets to native components and turns shared libraries into
link boundaries. Applied to a build, it reacts to every project, every
component of those projects and every binary of those components,
whenever they are declared.
"""

from __future__ import annotations

import logging
from typing import Optional

from depscopes.config.schema import ScopesConfig
from depscopes.errors import DuplicateBucketError
from depscopes.model.components import Component
from depscopes.model.project import Build, Project
from depscopes.scopes.boundary import install_link_boundary
from depscopes.scopes.buckets import BucketKind, bucket_configuration_name
from depscopes.scopes.wiring import apply_bucket, validate_wiring_table

logger = logging.getLogger("depscopes.scopes.plugin")


class DependencyScopesPlugin:
    """Installs dependency buckets and the link boundary on a build."""

    def __init__(self, config: Optional[ScopesConfig] = None) -> None:
        self.config = config or ScopesConfig()
        validate_wiring_table()

    def apply(self, build: Build) -> None:
        build.all_projects(self.apply_to_project, name="dependency-scopes")
        logger.info(
            "Dependency scopes enabled: %s (link boundary %s)",
            ", ".join(kind.value for kind in self.config.buckets) or "none",
            "on" if self.config.link_boundary else "off",
        )

    def apply_to_project(self, project: Project) -> None:
        project.components.configure_each(
            lambda component: self.observe_component(project, component),
            name="dependency-scopes",
        )
        logger.debug("Dependency scopes applied to project %s", project.path)

    def observe_component(self, project: Project, component: Component) -> None:
        """Add buckets to a newly declared component and wire them.

        Must run once per component; a second call fails with
        ``DuplicateBucketError``.
        """
        kinds = [
            kind for kind in BucketKind
            if self.config.is_enabled(kind) and kind.applies_to(component)
        ]
        # Fail before touching the component if any bucket already exists.
        for kind in kinds:
            name = bucket_configuration_name(component, kind)
            if name in project.configurations:
                raise DuplicateBucketError(name, component)

        if self.config.link_boundary:
            install_link_boundary(project, component)

        for kind in kinds:
            apply_bucket(project, component, kind)
        logger.debug("Observed %s in %s", component, project.path)
