"""Host conventions for native components.

Registers the configurations a C++ build model provides before any
plugin runs: the ``api``/``implementation`` declaration buckets of each
component, the per-binary compile, link and runtime classpaths, and the
outgoing elements of libraries. Out of the box, library link elements
extend ``implementation``; the dependency-scopes link boundary narrows
that for shared libraries.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from depscopes import naming
from depscopes.model.components import LIBRARY_BINARY_KINDS, Binary, Component
from depscopes.model.configurations import Configuration, ConfigurationProvider

if TYPE_CHECKING:
    from depscopes.model.project import Project

logger = logging.getLogger("depscopes.model.conventions")


def _bucket(description: str):
    def action(configuration: Configuration) -> None:
        configuration.resolvable = False
        configuration.consumable = False
        configuration.description = description

    return action


def _incoming(description: str, parent: ConfigurationProvider):
    def action(configuration: Configuration) -> None:
        configuration.resolvable = True
        configuration.consumable = False
        configuration.description = description
        configuration.extends_from(parent.get())

    return action


def _outgoing(description: str, parent: ConfigurationProvider):
    def action(configuration: Configuration) -> None:
        configuration.resolvable = False
        configuration.consumable = True
        configuration.description = description
        configuration.extends_from(parent.get())

    return action


class NativeConventions:
    """Registers host configurations for every component and binary."""

    def apply(self, project: "Project") -> None:
        project.components.configure_each(
            lambda component: self._configure_component(project, component),
            name="native-conventions",
        )

    def _configure_component(self, project: "Project", component: Component) -> None:
        configurations = project.configurations

        api = None
        if component.is_library:
            api = configurations.register(
                naming.api_name(component), _bucket(f"API dependencies for {component}.")
            )

        def configure_implementation(configuration: Configuration) -> None:
            _bucket(f"Implementation only dependencies for {component}.")(configuration)
            if api is not None:
                configuration.extends_from(api.get())

        implementation = configurations.register(
            naming.implementation_name(component), configure_implementation
        )
        component.implementation_dependencies = implementation
        component.api_dependencies = api

        if api is not None:
            configurations.register(
                naming.api_elements_name(component),
                _outgoing(f"API elements for {component}.", api),
            )

        logger.debug("Registered host configurations of %s in %s", component, project.path)
        component.binaries.configure_each(
            lambda binary: self._configure_binary(project, component, binary),
            name="native-conventions",
        )

    def _configure_binary(self, project: "Project", component: Component, binary: Binary) -> None:
        configurations = project.configurations
        implementation = component.implementation_dependencies

        configurations.register(
            naming.cpp_compile_name(binary),
            _incoming(f"Header dependencies for {binary.name}.", implementation),
        )
        configurations.register(
            naming.native_link_name(binary),
            _incoming(f"Link libraries for {binary.name}.", implementation),
        )
        configurations.register(
            naming.native_runtime_name(binary),
            _incoming(f"Runtime libraries for {binary.name}.", implementation),
        )

        if component.is_library and binary.kind in LIBRARY_BINARY_KINDS:
            configurations.register(
                naming.link_elements_name(binary),
                _outgoing(f"Link elements for {binary.name}.", implementation),
            )
            configurations.register(
                naming.runtime_elements_name(binary),
                _outgoing(f"Runtime elements for {binary.name}.", implementation),
            )
        logger.debug("Registered host configurations of binary %s", binary.name)
