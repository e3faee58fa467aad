"""Projects and the build that holds them."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from depscopes.model.collections import DomainObjectSet
from depscopes.model.components import Component, ComponentKind
from depscopes.model.configurations import ConfigurationContainer
from depscopes.model.conventions import NativeConventions
from depscopes.runtime.eventbus import EventBus, EventType

logger = logging.getLogger("depscopes.model.project")


class Project:
    """A project: its configurations and its native components."""

    def __init__(self, name: str, eventbus: Optional[EventBus] = None, path: Optional[str] = None) -> None:
        self.name = name
        self.path = path or f":{name}"
        self.eventbus = eventbus or EventBus()
        self.configurations = ConfigurationContainer(self.path, self.eventbus)
        self.components: DomainObjectSet[Component] = DomainObjectSet(
            f"{self.path}:components", self.eventbus, EventType.COMPONENT_DECLARED
        )

    def add_component(self, name: str, kind: ComponentKind) -> Component:
        component = Component(name, kind, self.eventbus, self.path)
        logger.debug("Declaring %s in %s", component, self.path)
        return self.components.add(component)

    def library(self, name: str = "main") -> Component:
        return self.add_component(name, ComponentKind.LIBRARY)

    def executable(self, name: str = "main") -> Component:
        return self.add_component(name, ComponentKind.EXECUTABLE)

    def __repr__(self) -> str:
        return f"Project({self.path!r})"


class Build:
    """All projects of one configuration pass.

    Each project gets the native host conventions before it is announced,
    so plugin rules always find the host configurations registered.
    """

    def __init__(self, eventbus: Optional[EventBus] = None) -> None:
        self.eventbus = eventbus or EventBus()
        self.projects: DomainObjectSet[Project] = DomainObjectSet(
            "build:projects", self.eventbus, EventType.PROJECT_DECLARED
        )

    def project(self, name: str) -> Project:
        project = Project(name, self.eventbus)
        NativeConventions().apply(project)
        logger.info("Declaring project %s", project.path)
        return self.projects.add(project)

    def all_projects(self, action: Callable[[Project], None], name: Optional[str] = None) -> str:
        """Run ``action`` for every present and future project."""
        return self.projects.configure_each(action, name=name)
