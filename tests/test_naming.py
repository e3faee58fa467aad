"""Tests for configuration naming of native binaries and components."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from depscopes import naming
from depscopes.errors import MalformedBinaryNameError, NamingConventionError
from depscopes.model.components import Binary, BinaryKind


def _component(name: str, implementation: str) -> SimpleNamespace:
    """Create a stub component exposing its implementation configuration name."""
    return SimpleNamespace(
        name=name, implementation_dependencies=SimpleNamespace(name=implementation)
    )


def test_qualifying_name_strips_main_prefix() -> None:
    """The default component prefix is dropped and the rest lower-camel cased."""
    assert naming.qualifying_name(Binary("mainDebug", BinaryKind.EXECUTABLE)) == "debug"
    assert naming.qualifying_name(Binary("mainReleaseShared", BinaryKind.SHARED_LIBRARY)) == "releaseShared"


def test_qualifying_name_of_test_executable_strips_suffix() -> None:
    """Test executables lose their trailing Executable."""
    binary = Binary("mainDebugTestExecutable", BinaryKind.TEST_EXECUTABLE)
    assert naming.qualifying_name(binary) == "debugTest"

    binary = Binary("testExecutable", BinaryKind.TEST_EXECUTABLE)
    assert naming.qualifying_name(binary) == "test"


def test_qualifying_name_keeps_executable_suffix_for_plain_executables() -> None:
    """Only test executables have the suffix stripped."""
    binary = Binary("mainDebugExecutable", BinaryKind.EXECUTABLE)
    assert naming.qualifying_name(binary) == "debugExecutable"


def test_qualifying_name_of_named_component_binary() -> None:
    """Binaries of non-default components keep the component name."""
    binary = Binary("fooDebugShared", BinaryKind.SHARED_LIBRARY)
    assert naming.qualifying_name(binary) == "fooDebugShared"


def test_qualifying_name_may_be_empty() -> None:
    """The sole binary of a default component has no qualifier."""
    binary = Binary("main", BinaryKind.SHARED_LIBRARY)
    assert naming.qualifying_name(binary) == ""
    assert naming.link_elements_name(binary) == "linkElements"
    assert naming.cpp_compile_name(binary) == "cppCompile"
    assert naming.native_link_name(binary) == "nativeLink"


def test_malformed_test_executable_name() -> None:
    """A test executable without the Executable suffix violates the convention."""
    with pytest.raises(MalformedBinaryNameError):
        naming.qualifying_name(Binary("mainDebug", BinaryKind.TEST_EXECUTABLE))


def test_per_binary_configuration_names() -> None:
    """Per-binary configuration names compose the qualifying name."""
    binary = Binary("mainDebugShared", BinaryKind.SHARED_LIBRARY)
    assert naming.cpp_compile_name(binary) == "cppCompileDebugShared"
    assert naming.native_link_name(binary) == "nativeLinkDebugShared"
    assert naming.native_runtime_name(binary) == "nativeRuntimeDebugShared"
    assert naming.link_elements_name(binary) == "debugSharedLinkElements"
    assert naming.runtime_elements_name(binary) == "debugSharedRuntimeElements"


def test_compose_and_qualify() -> None:
    """Leading fragments are lower-cased and trailing fragments capitalized."""
    assert naming.compose_name("cppCompile", "") == "cppCompile"
    assert naming.compose_name("cppCompile", "debug") == "cppCompileDebug"
    assert naming.qualify("", "LinkElements") == "linkElements"
    assert naming.qualify("Debug", "linkElements") == "debugLinkElements"


def test_capitalize_only_touches_first_character() -> None:
    """Unlike str.capitalize, the remainder keeps its case."""
    assert naming.capitalize("linkOnlyApi") == "LinkOnlyApi"
    assert naming.uncapitalize("DebugShared") == "debugShared"
    assert naming.capitalize("") == ""


def test_component_level_names() -> None:
    """The default component gets bare names, others are prefixed."""
    main = SimpleNamespace(name="main")
    foo = SimpleNamespace(name="foo")
    assert naming.api_elements_name(main) == "cppApiElements"
    assert naming.api_elements_name(foo) == "fooCppApiElements"
    assert naming.implementation_name(main) == "implementation"
    assert naming.implementation_name(foo) == "fooImplementation"
    assert naming.api_name(foo) == "fooApi"


def test_bucket_configuration_name_substitutes_token() -> None:
    """Bucket names follow the implementation configuration name."""
    assert naming.bucket_configuration_name(_component("foo", "fooImplementation"), "linkOnly") == "fooLinkOnly"
    assert naming.bucket_configuration_name(_component("main", "implementation"), "compileOnly") == "compileOnly"
    assert (
        naming.bucket_configuration_name(_component("main", "mainImplementation"), "compileOnlyApi")
        == "mainCompileOnlyApi"
    )


def test_bucket_configuration_name_requires_token() -> None:
    """A host name without the implementation token fails loudly."""
    with pytest.raises(NamingConventionError):
        naming.bucket_configuration_name(_component("foo", "fooPrivate"), "linkOnly")
