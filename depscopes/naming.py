"""Configuration naming for native components and binaries.

Binary names follow ``<componentName><variant>[Executable]`` where the
default component contributes no prefix once ``main`` is stripped. The
*qualifying name* of a binary is the variant-identifying fragment left
over, with a lower-case first letter; it is empty for the sole binary of
a default component. Per-binary configuration names are composed from
it:

    cppCompile + Capitalize(q)     cppCompileDebug, cppCompile
    q + LinkElements               debugSharedLinkElements, linkElements

Bucket names piggyback on the host's implementation configuration:
``implementation`` becomes ``linkOnly``, ``fooImplementation`` becomes
``fooLinkOnly``. The host must name that configuration with either the
``implementation`` or the ``Implementation`` token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from depscopes.errors import MalformedBinaryNameError, NamingConventionError

if TYPE_CHECKING:
    from depscopes.model.components import Binary, Component

MAIN_PREFIX = "main"
EXECUTABLE_SUFFIX = "Executable"
IMPLEMENTATION_TOKEN = "implementation"

CPP_COMPILE = "cppCompile"
NATIVE_LINK = "nativeLink"
NATIVE_RUNTIME = "nativeRuntime"
LINK_ELEMENTS = "linkElements"
RUNTIME_ELEMENTS = "runtimeElements"
CPP_API_ELEMENTS = "cppApiElements"


def capitalize(s: str) -> str:
    """Upper-case the first character only; ``str.capitalize`` lowers the rest."""
    return s[:1].upper() + s[1:]


def uncapitalize(s: str) -> str:
    return s[:1].lower() + s[1:]


def qualifying_name(binary: "Binary") -> str:
    """Derive the variant-identifying fragment of a binary name.

    Examples:
        ``mainDebug`` -> ``debug``
        ``mainDebugTestExecutable`` (test executable) -> ``debugTest``
        ``fooReleaseShared`` -> ``fooReleaseShared``

    Raises:
        MalformedBinaryNameError: If a test executable name does not end
            with ``Executable`` once the default prefix is stripped.
    """
    result = binary.name
    if result.startswith(MAIN_PREFIX):
        result = result[len(MAIN_PREFIX):]

    if binary.is_test_executable:
        if not result.endswith(EXECUTABLE_SUFFIX):
            raise MalformedBinaryNameError(
                f"Test executable '{binary.name}' does not follow "
                f"<component><variant>{EXECUTABLE_SUFFIX}"
            )
        result = result[: -len(EXECUTABLE_SUFFIX)]

    return uncapitalize(result)


def compose_name(prefix: str, qualifier: str) -> str:
    """``prefix`` followed by the capitalized ``qualifier``, if any."""
    if not qualifier:
        return prefix
    return uncapitalize(prefix) + capitalize(qualifier)


def qualify(qualifier: str, suffix: str) -> str:
    """``qualifier`` followed by the capitalized ``suffix``.

    An empty qualifier yields the bare, lower-camel ``suffix``.
    """
    if not qualifier:
        return uncapitalize(suffix)
    return uncapitalize(qualifier) + capitalize(suffix)


def cpp_compile_name(binary: "Binary") -> str:
    return compose_name(CPP_COMPILE, qualifying_name(binary))


def native_link_name(binary: "Binary") -> str:
    return compose_name(NATIVE_LINK, qualifying_name(binary))


def native_runtime_name(binary: "Binary") -> str:
    return compose_name(NATIVE_RUNTIME, qualifying_name(binary))


def link_elements_name(binary: "Binary") -> str:
    return qualify(qualifying_name(binary), LINK_ELEMENTS)


def runtime_elements_name(binary: "Binary") -> str:
    return qualify(qualifying_name(binary), RUNTIME_ELEMENTS)


def component_qualifier(component: "Component") -> str:
    """Empty for the default component, its name otherwise."""
    return "" if component.name == MAIN_PREFIX else component.name


def api_elements_name(component: "Component") -> str:
    return qualify(component_qualifier(component), CPP_API_ELEMENTS)


def implementation_name(component: "Component") -> str:
    return qualify(component_qualifier(component), IMPLEMENTATION_TOKEN)


def api_name(component: "Component") -> str:
    return qualify(component_qualifier(component), "api")


def bucket_configuration_name(component: "Component", bucket_name: str) -> str:
    """Name a bucket after the component's implementation configuration.

    Raises:
        NamingConventionError: If the implementation configuration name
            carries neither ``implementation`` nor ``Implementation``.
    """
    if component.implementation_dependencies is None:
        raise NamingConventionError(f"{component} has no implementation configuration")
    implementation = component.implementation_dependencies.name
    capitalized_token = capitalize(IMPLEMENTATION_TOKEN)
    if IMPLEMENTATION_TOKEN not in implementation and capitalized_token not in implementation:
        raise NamingConventionError(
            f"Cannot derive '{bucket_name}' configuration name for {component}: "
            f"'{implementation}' does not contain '{IMPLEMENTATION_TOKEN}'"
        )
    return implementation.replace(IMPLEMENTATION_TOKEN, bucket_name).replace(
        capitalized_token, capitalize(bucket_name)
    )
