"""Native components and their binaries."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from depscopes.model.collections import DomainObjectSet
from depscopes.model.configurations import ConfigurationProvider
from depscopes.runtime.eventbus import EventBus, EventType

logger = logging.getLogger("depscopes.model.components")


class ComponentKind(str, Enum):
    """Kinds of buildable units."""

    LIBRARY = "library"
    EXECUTABLE = "executable"

    @property
    def display_name(self) -> str:
        return f"C++ {self.value}"


class BinaryKind(str, Enum):
    """Kinds of binaries a component produces."""

    SHARED_LIBRARY = "shared_library"
    STATIC_LIBRARY = "static_library"
    EXECUTABLE = "executable"
    TEST_EXECUTABLE = "test_executable"


LIBRARY_BINARY_KINDS = (BinaryKind.SHARED_LIBRARY, BinaryKind.STATIC_LIBRARY)


class Binary:
    """One buildable variant of a component."""

    def __init__(self, name: str, kind: BinaryKind) -> None:
        self.name = name
        self.kind = BinaryKind(kind)

    @property
    def is_test_executable(self) -> bool:
        return self.kind is BinaryKind.TEST_EXECUTABLE

    def __repr__(self) -> str:
        return f"Binary({self.name!r}, {self.kind.value})"


class Component:
    """A declared library or executable.

    ``implementation_dependencies`` and, for libraries,
    ``api_dependencies`` are attached by the host conventions when the
    component is declared.
    """

    def __init__(self, name: str, kind: ComponentKind, eventbus: EventBus, project_path: str = ":") -> None:
        self.name = name
        self.kind = ComponentKind(kind)
        self.project_path = project_path
        self.binaries: DomainObjectSet[Binary] = DomainObjectSet(
            f"{project_path}:{name}:binaries", eventbus, EventType.BINARY_DECLARED
        )
        self.implementation_dependencies: Optional[ConfigurationProvider] = None
        self.api_dependencies: Optional[ConfigurationProvider] = None

    @property
    def is_library(self) -> bool:
        return self.kind is ComponentKind.LIBRARY

    def add_binary(self, name: str, kind: BinaryKind) -> Binary:
        return self.binaries.add(Binary(name, kind))

    def __str__(self) -> str:
        return f"{self.kind.display_name} '{self.name}'"

    def __repr__(self) -> str:
        return f"Component({self.name!r}, {self.kind.value}, project={self.project_path!r})"
