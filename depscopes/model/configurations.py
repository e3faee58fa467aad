"""Dependency configurations of a project.

A configuration is a named vertex of the project's dependency graph. The
container keeps configurations in a ``networkx.DiGraph``: node attributes
hold the configuration flags and declared dependencies, and an
``extends`` edge ``a -> b`` means that ``a`` transitively includes every
dependency of ``b``.

Configurations are registered lazily. ``register`` and ``named`` return a
``ConfigurationProvider``; actions passed to ``configure`` are queued and
run in order when the configuration is first realized (``get``), or
immediately once it is.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import networkx as nx

from depscopes.errors import (
    ConfigurationError,
    DuplicateConfigurationError,
    NotResolvableError,
    UnknownConfigurationError,
)
from depscopes.runtime.eventbus import Event, EventBus, EventType

logger = logging.getLogger("depscopes.model.configurations")

EXTENDS = "extends"

ConfigurationAction = Callable[["Configuration"], None]


class Configuration:
    """View over one realized node of a ``ConfigurationContainer``."""

    def __init__(self, container: "ConfigurationContainer", name: str) -> None:
        self._container = container
        self.name = name

    @property
    def _data(self) -> Dict[str, Any]:
        return self._container.graph.nodes[self.name]

    @property
    def resolvable(self) -> bool:
        return self._data["resolvable"]

    @resolvable.setter
    def resolvable(self, value: bool) -> None:
        self._data["resolvable"] = bool(value)

    @property
    def consumable(self) -> bool:
        return self._data["consumable"]

    @consumable.setter
    def consumable(self, value: bool) -> None:
        self._data["consumable"] = bool(value)

    @property
    def description(self) -> Optional[str]:
        return self._data.get("description")

    @description.setter
    def description(self, value: Optional[str]) -> None:
        self._data["description"] = value

    @property
    def dependency_scope(self) -> Optional[str]:
        """Scope name when this configuration is a dependency bucket."""
        return self._data.get("dependency_scope")

    @dependency_scope.setter
    def dependency_scope(self, value: Optional[str]) -> None:
        self._data["dependency_scope"] = value

    @property
    def dependencies(self) -> List[str]:
        """Dependency notations declared directly on this configuration."""
        return list(self._data["dependencies"])

    def add_dependency(self, notation: str) -> None:
        if notation not in self._data["dependencies"]:
            self._data["dependencies"].append(notation)

    @property
    def extended(self) -> List["Configuration"]:
        """Configurations this one directly extends, in insertion order."""
        return [self._container.get(name) for name in self._container.graph.successors(self.name)]

    def extends_from(self, *configurations: "Configuration") -> "Configuration":
        """Add extends edges; existing edges are kept.

        Raises:
            ConfigurationError: If an edge would make the hierarchy cyclic.
        """
        for other in configurations:
            self._check_acyclic(other)
            self._container.graph.add_edge(self.name, other.name, kind=EXTENDS)
            logger.debug("%s extends from %s", self.name, other.name)
        return self

    def set_extends_from(self, configurations: Iterable["Configuration"]) -> "Configuration":
        """Replace the whole extends-set with ``configurations``."""
        targets = list(configurations)
        for other in targets:
            self._check_acyclic(other)
        graph = self._container.graph
        graph.remove_edges_from(list(graph.out_edges(self.name)))
        for other in targets:
            graph.add_edge(self.name, other.name, kind=EXTENDS)
        logger.debug(
            "%s now extends exactly from [%s]", self.name, ", ".join(c.name for c in targets)
        )
        return self

    @property
    def hierarchy(self) -> List["Configuration"]:
        """This configuration followed by everything it transitively extends."""
        names = nx.dfs_preorder_nodes(self._container.graph, self.name)
        return [self._container.get(name) for name in names]

    def _check_acyclic(self, other: "Configuration") -> None:
        if other._container is not self._container:
            raise ConfigurationError(
                f"Configuration '{other.name}' belongs to another project than '{self.name}'."
            )
        graph = self._container.graph
        if other.name == self.name or nx.has_path(graph, other.name, self.name):
            raise ConfigurationError(
                f"Cyclic extendsFrom from '{self.name}' and '{other.name}' is not allowed."
            )

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Configuration)
            and other._container is self._container
            and other.name == self.name
        )

    def __hash__(self) -> int:
        return hash((id(self._container), self.name))

    def __repr__(self) -> str:
        return f"configuration '{self._container.project_path}:{self.name}'"


class ConfigurationProvider:
    """Lazy handle to a registered configuration."""

    def __init__(self, container: "ConfigurationContainer", name: str) -> None:
        self._container = container
        self.name = name
        self._actions: List[ConfigurationAction] = []
        self._configuration: Optional[Configuration] = None

    @property
    def is_realized(self) -> bool:
        return self._configuration is not None

    def configure(self, action: ConfigurationAction) -> "ConfigurationProvider":
        if self._configuration is not None:
            action(self._configuration)
        else:
            self._actions.append(action)
        return self

    def get(self) -> Configuration:
        if self._configuration is None:
            self._configuration = self._container._realize(self.name)
            actions, self._actions = self._actions, []
            for action in actions:
                action(self._configuration)
            self._container._realized(self._configuration)
        return self._configuration

    def __repr__(self) -> str:
        state = "realized" if self.is_realized else "registered"
        return f"provider({self.name!r}, {state})"


class ConfigurationContainer:
    """Named configurations of a single project."""

    def __init__(self, project_path: str = ":", eventbus: Optional[EventBus] = None) -> None:
        self.project_path = project_path
        self._eventbus = eventbus
        self._graph = nx.DiGraph(project=project_path)
        self._providers: Dict[str, ConfigurationProvider] = {}

    @property
    def graph(self) -> nx.DiGraph:
        """Graph of realized configurations and their extends edges."""
        return self._graph

    def register(
        self, name: str, action: Optional[ConfigurationAction] = None
    ) -> ConfigurationProvider:
        """Register a configuration without realizing it.

        Raises:
            DuplicateConfigurationError: If ``name`` is already registered.
        """
        if name in self._providers:
            raise DuplicateConfigurationError(name)
        provider = ConfigurationProvider(self, name)
        if action is not None:
            provider.configure(action)
        self._providers[name] = provider
        logger.debug("Registered configuration %s%s", self._prefix, name)
        if self._eventbus is not None:
            self._eventbus.publish(
                Event(
                    EventType.CONFIGURATION_REGISTERED,
                    source=self.project_path,
                    data={"owner": self, "item": provider},
                )
            )
        return provider

    def named(self, name: str) -> ConfigurationProvider:
        """Look up a registered configuration.

        Raises:
            UnknownConfigurationError: If nothing is registered under ``name``.
        """
        provider = self._providers.get(name)
        if provider is None:
            raise UnknownConfigurationError(name, self.project_path)
        return provider

    def get(self, name: str) -> Configuration:
        return self.named(name).get()

    def names(self) -> List[str]:
        return list(self._providers)

    def realize_all(self) -> List[Configuration]:
        return [provider.get() for provider in list(self._providers.values())]

    def resolve(self, name: str) -> List[str]:
        """Compute the effective dependencies of a resolvable configuration.

        Returns:
            List[str]: Declared dependencies of the whole hierarchy, in
            traversal order, without duplicates.

        Raises:
            NotResolvableError: If the configuration is not resolvable.
        """
        configuration = self.get(name)
        if not configuration.resolvable:
            raise NotResolvableError(name)
        # Extended configurations may still be pending realization.
        for provider in list(self._providers.values()):
            provider.get()
        seen: Dict[str, None] = {}
        for member in configuration.hierarchy:
            for notation in member.dependencies:
                seen.setdefault(notation, None)
        return list(seen)

    def _realize(self, name: str) -> Configuration:
        self._graph.add_node(
            name,
            resolvable=True,
            consumable=True,
            description=None,
            dependency_scope=None,
            dependencies=[],
        )
        return Configuration(self, name)

    def _realized(self, configuration: Configuration) -> None:
        logger.debug("Realized configuration %s%s", self._prefix, configuration.name)
        if self._eventbus is not None:
            self._eventbus.publish(
                Event(
                    EventType.CONFIGURATION_REALIZED,
                    source=self.project_path,
                    data={"owner": self, "item": configuration},
                )
            )

    @property
    def _prefix(self) -> str:
        return self.project_path if self.project_path.endswith(":") else self.project_path + ":"

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)
