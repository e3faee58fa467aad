"""Link boundary of shared libraries.

A shared library is a hard link boundary: consumers link against it and
nothing else it links internally. Its link elements therefore extend
only the component's ``api`` dependencies instead of the host default
``implementation``. The ``linkOnlyApi`` bucket wired into the link
elements is kept, so the result does not depend on which of the two runs
first. Private buckets such as ``linkOnly`` never cross the boundary.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from depscopes import naming
from depscopes.errors import ConfigurationError
from depscopes.model.components import Binary, BinaryKind, Component, ComponentKind
from depscopes.model.configurations import Configuration
from depscopes.scopes.buckets import BucketKind

if TYPE_CHECKING:
    from depscopes.model.project import Project

logger = logging.getLogger("depscopes.scopes.boundary")


def restrict_to_api(link_elements: Configuration, api: Configuration) -> None:
    """Replace the extends-set of ``link_elements`` with ``api`` and ``linkOnlyApi``.

    Any other bucket, ``linkOnly`` included, stays behind the boundary.
    """
    exposed = [
        c for c in link_elements.extended
        if c.dependency_scope == BucketKind.LINK_ONLY_API.value and c != api
    ]
    link_elements.set_extends_from([api, *exposed])


def patch_link_boundary(project: "Project", component: Component, binary: Binary) -> None:
    """Restrict the link elements of one shared-library binary.

    Raises:
        ConfigurationError: If the component has no API dependencies.
        UnknownConfigurationError: If the link elements are missing.
    """
    api = component.api_dependencies
    if api is None:
        raise ConfigurationError(f"{component} has no API dependencies to expose")
    link_elements = project.configurations.named(naming.link_elements_name(binary))
    link_elements.configure(lambda configuration: restrict_to_api(configuration, api.get()))
    logger.debug("%s restricted to %s", link_elements.name, api.name)


def install_link_boundary(project: "Project", component: Component) -> None:
    """Patch every present and future shared binary of a library."""
    if component.kind is not ComponentKind.LIBRARY:
        return
    component.binaries.configure_each(
        lambda binary: patch_link_boundary(project, component, binary),
        kind=BinaryKind.SHARED_LIBRARY,
        name="link-boundary",
    )
