"""Tests for the dependency-scopes plugin on complete build models."""

from __future__ import annotations

from typing import Iterable, Optional, Set, Tuple

import pytest

from depscopes.config.schema import ScopesConfig
from depscopes.errors import DuplicateBucketError, UnknownConfigurationError
from depscopes.model.components import BinaryKind, Component
from depscopes.model.project import Build, Project
from depscopes.scopes.buckets import BucketKind
from depscopes.scopes.plugin import DependencyScopesPlugin


def _library_project(
    config: Optional[ScopesConfig] = None,
    binaries: Iterable[Tuple[str, BinaryKind]] = (),
    component_name: str = "main",
) -> Tuple[Project, Component]:
    """Declare a library in a fresh build with the plugin applied."""
    build = Build()
    DependencyScopesPlugin(config).apply(build)
    project = build.project("app")
    component = project.library(component_name)
    for name, kind in binaries:
        component.add_binary(name, kind)
    return project, component


def _extends(project: Project, name: str) -> Set[str]:
    return {c.name for c in project.configurations.get(name).extended}


def test_library_gets_every_bucket() -> None:
    """All four buckets are registered, non-resolvable and non-consumable."""
    project, _ = _library_project()

    for kind in BucketKind:
        bucket = project.configurations.get(kind.value)
        assert bucket.resolvable is False
        assert bucket.consumable is False
        assert bucket.dependency_scope == kind.value

    assert (
        project.configurations.get("linkOnlyApi").description
        == "Link only API dependencies of C++ library 'main'"
    )
    assert (
        project.configurations.get("compileOnly").description
        == "Compile only dependencies of C++ library 'main'"
    )


def test_executable_gets_only_plain_buckets() -> None:
    """API buckets exist only for libraries."""
    build = Build()
    DependencyScopesPlugin().apply(build)
    project = build.project("cli")
    project.executable()

    assert "compileOnly" in project.configurations
    assert "linkOnly" in project.configurations
    assert "compileOnlyApi" not in project.configurations
    assert "linkOnlyApi" not in project.configurations
    assert project.configurations.get("linkOnly").resolvable is False


def test_executable_binaries_are_wired() -> None:
    """Executable compile and link classpaths extend the plain buckets."""
    build = Build()
    DependencyScopesPlugin().apply(build)
    project = build.project("cli")
    component = project.executable()
    component.add_binary("mainDebug", BinaryKind.EXECUTABLE)

    assert _extends(project, "cppCompileDebug") == {"implementation", "compileOnly"}
    assert _extends(project, "nativeLinkDebug") == {"implementation", "linkOnly"}


def test_library_compile_and_link_wiring() -> None:
    """Compile and link classpaths extend plain and API buckets alike."""
    project, _ = _library_project(
        binaries=[("mainDebugShared", BinaryKind.SHARED_LIBRARY), ("mainDebugStatic", BinaryKind.STATIC_LIBRARY)]
    )

    for variant in ("DebugShared", "DebugStatic"):
        assert _extends(project, f"cppCompile{variant}") == {"implementation", "compileOnly", "compileOnlyApi"}
        assert _extends(project, f"nativeLink{variant}") == {"implementation", "linkOnly", "linkOnlyApi"}
    assert _extends(project, "cppApiElements") == {"api", "compileOnlyApi"}


def test_shared_library_link_elements_expose_api_and_link_only_api() -> None:
    """Shared link elements drop implementation but keep the linkOnlyApi bucket."""
    project, _ = _library_project(binaries=[("mainDebugShared", BinaryKind.SHARED_LIBRARY)])

    assert _extends(project, "debugSharedLinkElements") == {"api", "linkOnlyApi"}


def test_static_library_link_elements_are_untouched() -> None:
    """Static libraries are not link boundaries."""
    project, _ = _library_project(binaries=[("mainDebugStatic", BinaryKind.STATIC_LIBRARY)])

    assert _extends(project, "debugStaticLinkElements") == {"implementation"}


def test_link_boundary_alone_exposes_exactly_api() -> None:
    """Without buckets, shared link elements extend exactly the api configuration."""
    project, _ = _library_project(
        config=ScopesConfig(buckets=[]),
        binaries=[("mainDebugShared", BinaryKind.SHARED_LIBRARY)],
    )

    assert _extends(project, "debugSharedLinkElements") == {"api"}
    assert "linkOnly" not in project.configurations


def test_link_boundary_can_be_disabled() -> None:
    """With the boundary off, shared link elements keep the host default."""
    project, _ = _library_project(
        config=ScopesConfig(link_boundary=False),
        binaries=[("mainDebugShared", BinaryKind.SHARED_LIBRARY)],
    )

    assert _extends(project, "debugSharedLinkElements") == {"implementation", "linkOnlyApi"}


def test_binary_declared_after_wiring_is_wired() -> None:
    """Binaries added after the first ones were realized still get their edges."""
    project, component = _library_project(binaries=[("mainDebugShared", BinaryKind.SHARED_LIBRARY)])
    project.configurations.realize_all()

    component.add_binary("mainReleaseShared", BinaryKind.SHARED_LIBRARY)

    assert "compileOnly" in _extends(project, "cppCompileReleaseShared")
    assert "linkOnly" in _extends(project, "nativeLinkReleaseShared")
    assert _extends(project, "releaseSharedLinkElements") == {"api", "linkOnlyApi"}


def test_named_component_configurations() -> None:
    """Non-default components get prefixed bucket and element names."""
    project, component = _library_project(component_name="foo")
    component.add_binary("fooDebugShared", BinaryKind.SHARED_LIBRARY)

    assert "fooLinkOnly" in project.configurations
    assert _extends(project, "fooCppApiElements") == {"fooApi", "fooCompileOnlyApi"}
    assert _extends(project, "fooDebugSharedLinkElements") == {"fooApi", "fooLinkOnlyApi"}
    assert "fooCompileOnly" in _extends(project, "cppCompileFooDebugShared")


def test_test_executable_component() -> None:
    """Test executables are wired under their stripped qualifying name."""
    build = Build()
    DependencyScopesPlugin().apply(build)
    project = build.project("app")
    component = project.executable("test")
    component.add_binary("testExecutable", BinaryKind.TEST_EXECUTABLE)

    assert _extends(project, "cppCompileTest") == {"testImplementation", "testCompileOnly"}
    assert _extends(project, "nativeLinkTest") == {"testImplementation", "testLinkOnly"}


def test_projects_declared_after_apply_are_covered() -> None:
    """The plugin reacts to every project of the build."""
    build = Build()
    DependencyScopesPlugin().apply(build)
    first = build.project("first")
    first.library()
    second = build.project("second")
    second.executable()

    assert "linkOnlyApi" in first.configurations
    assert "linkOnly" in second.configurations


def test_bucket_dependencies_reach_compile_classpath_only() -> None:
    """Dependencies in compileOnly are visible when compiling, not when linking."""
    project, _ = _library_project(binaries=[("mainDebugShared", BinaryKind.SHARED_LIBRARY)])
    project.configurations.named("compileOnly").configure(lambda c: c.add_dependency("headers-only:1.0"))
    project.configurations.named("implementation").configure(lambda c: c.add_dependency("fmt:10.2"))

    assert project.configurations.resolve("cppCompileDebugShared") == ["fmt:10.2", "headers-only:1.0"]
    assert project.configurations.resolve("nativeLinkDebugShared") == ["fmt:10.2"]


def test_observing_a_component_twice_fails_without_mutation() -> None:
    """A second observation is a duplicate-bucket error and changes nothing."""
    project, component = _library_project()
    plugin = DependencyScopesPlugin()
    registered = project.configurations.names()
    subscribers = project.eventbus.subscriber_count()

    with pytest.raises(DuplicateBucketError):
        plugin.observe_component(project, component)

    assert project.configurations.names() == registered
    assert project.eventbus.subscriber_count() == subscribers


def test_missing_elements_configuration_fails() -> None:
    """A host without cppApiElements aborts the component's wiring."""
    project = Project("bare")
    component = project.library()
    component.api_dependencies = project.configurations.register("api")
    component.implementation_dependencies = project.configurations.register("implementation")

    with pytest.raises(UnknownConfigurationError) as excinfo:
        DependencyScopesPlugin().observe_component(project, component)
    assert excinfo.value.name == "cppApiElements"


def test_missing_binary_configuration_fails_on_declaration() -> None:
    """A late binary whose compile classpath is missing fails when declared."""
    project = Project("bare")
    component = project.executable()
    component.implementation_dependencies = project.configurations.register("implementation")
    DependencyScopesPlugin().observe_component(project, component)

    with pytest.raises(UnknownConfigurationError) as excinfo:
        component.add_binary("mainDebug", BinaryKind.EXECUTABLE)
    assert excinfo.value.name == "cppCompileDebug"
