"""Tests for the shared-library link boundary and its interplay with buckets."""

from __future__ import annotations

from typing import Set, Tuple

import pytest

from depscopes.errors import ConfigurationError
from depscopes.model.components import Binary, BinaryKind, Component
from depscopes.model.project import Build, Project
from depscopes.scopes.boundary import install_link_boundary, patch_link_boundary
from depscopes.scopes.buckets import BucketKind
from depscopes.scopes.wiring import apply_bucket


def _shared_library() -> Tuple[Project, Component, Binary]:
    """Declare a library with one shared binary and host conventions only."""
    project = Build().project("lib")
    component = project.library()
    binary = component.add_binary("mainDebugShared", BinaryKind.SHARED_LIBRARY)
    return project, component, binary


def _link_elements(project: Project) -> Set[str]:
    return {c.name for c in project.configurations.get("debugSharedLinkElements").extended}


def test_host_default_exposes_implementation() -> None:
    """Before the patch, link elements leak implementation dependencies."""
    project, _, _ = _shared_library()

    assert _link_elements(project) == {"implementation"}


def test_patch_replaces_extends_set_with_api() -> None:
    """The patch replaces rather than adds."""
    project, component, binary = _shared_library()
    patch_link_boundary(project, component, binary)

    assert _link_elements(project) == {"api"}


def test_patch_on_realized_configuration() -> None:
    """A realized link elements configuration is patched immediately."""
    project, component, binary = _shared_library()
    project.configurations.get("debugSharedLinkElements")

    patch_link_boundary(project, component, binary)

    assert _link_elements(project) == {"api"}


@pytest.mark.parametrize("realize_between", [False, True])
@pytest.mark.parametrize("patch_first", [True, False])
def test_patch_and_link_only_api_commute(patch_first: bool, realize_between: bool) -> None:
    """Whatever runs first, link elements end up with api and linkOnlyApi."""
    project, component, binary = _shared_library()

    steps = [
        lambda: patch_link_boundary(project, component, binary),
        lambda: apply_bucket(project, component, BucketKind.LINK_ONLY_API),
    ]
    if not patch_first:
        steps.reverse()

    steps[0]()
    if realize_between:
        project.configurations.get("debugSharedLinkElements")
    steps[1]()

    assert _link_elements(project) == {"api", "linkOnlyApi"}


def test_only_shared_binaries_are_patched() -> None:
    """The standing rule skips static libraries and covers later shared ones."""
    project = Build().project("lib")
    component = project.library()
    install_link_boundary(project, component)
    component.add_binary("mainDebugStatic", BinaryKind.STATIC_LIBRARY)
    component.add_binary("mainReleaseShared", BinaryKind.SHARED_LIBRARY)

    assert {c.name for c in project.configurations.get("debugStaticLinkElements").extended} == {"implementation"}
    assert {c.name for c in project.configurations.get("releaseSharedLinkElements").extended} == {"api"}


def test_executables_are_not_link_boundaries() -> None:
    """Installing the boundary on an executable is a no-op."""
    project = Build().project("app")
    component = project.executable()
    subscribers = project.eventbus.subscriber_count()

    install_link_boundary(project, component)

    assert project.eventbus.subscriber_count() == subscribers


def test_patch_requires_api_dependencies() -> None:
    """A library without api dependencies cannot be patched."""
    project, component, binary = _shared_library()
    component.api_dependencies = None

    with pytest.raises(ConfigurationError):
        patch_link_boundary(project, component, binary)


def test_patch_drops_private_link_only_bucket() -> None:
    """Only linkOnlyApi crosses the boundary; a linkOnly edge is removed."""
    project, component, binary = _shared_library()
    apply_bucket(project, component, BucketKind.LINK_ONLY)
    apply_bucket(project, component, BucketKind.LINK_ONLY_API)
    link_elements = project.configurations.get("debugSharedLinkElements")
    link_elements.extends_from(project.configurations.get("linkOnly"))
    assert "linkOnly" in _link_elements(project)

    patch_link_boundary(project, component, binary)

    assert _link_elements(project) == {"api", "linkOnlyApi"}
