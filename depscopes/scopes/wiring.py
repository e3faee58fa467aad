"""Wiring rules for dependency buckets.

Each bucket kind feeds a fixed set of targets:

    compileOnly     every binary's cppCompile<Q>
    compileOnlyApi  every binary's cppCompile<Q>, the component's cppApiElements
    linkOnly        every binary's nativeLink<Q>
    linkOnlyApi     every binary's nativeLink<Q>, each shared binary's <q>LinkElements

"Feeds" means the target extends from the bucket; edges are only ever
added here. Per-binary targets are wired through a standing rule on the
component's binaries so binaries declared later are wired as well.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from depscopes import naming
from depscopes.errors import ConfigurationError
from depscopes.model.components import Binary, BinaryKind, Component, ComponentKind
from depscopes.model.configurations import ConfigurationProvider
from depscopes.scopes.buckets import BucketKind, create_bucket

if TYPE_CHECKING:
    from depscopes.model.project import Project

logger = logging.getLogger("depscopes.scopes.wiring")


class Target(Enum):
    """Host configurations a bucket can feed."""

    COMPILE = "compile"
    LINK = "link"
    API_ELEMENTS = "api_elements"
    LINK_ELEMENTS = "link_elements"


WIRING_TABLE: Dict[BucketKind, Tuple[Target, ...]] = {
    BucketKind.COMPILE_ONLY: (Target.COMPILE,),
    BucketKind.COMPILE_ONLY_API: (Target.COMPILE, Target.API_ELEMENTS),
    BucketKind.LINK_ONLY: (Target.LINK,),
    BucketKind.LINK_ONLY_API: (Target.LINK, Target.LINK_ELEMENTS),
}

# Component kinds that own each target.
TARGET_COMPONENT_KINDS: Dict[Target, frozenset] = {
    Target.COMPILE: frozenset(ComponentKind),
    Target.LINK: frozenset(ComponentKind),
    Target.API_ELEMENTS: frozenset({ComponentKind.LIBRARY}),
    Target.LINK_ELEMENTS: frozenset({ComponentKind.LIBRARY}),
}

# Binary kinds a per-binary target exists for; None marks a per-component target.
TARGET_BINARY_KINDS: Dict[Target, Optional[Tuple[BinaryKind, ...]]] = {
    Target.COMPILE: tuple(BinaryKind),
    Target.LINK: tuple(BinaryKind),
    Target.API_ELEMENTS: None,
    Target.LINK_ELEMENTS: (BinaryKind.SHARED_LIBRARY,),
}

_BINARY_TARGET_NAMES: Dict[Target, Callable[[Binary], str]] = {
    Target.COMPILE: naming.cpp_compile_name,
    Target.LINK: naming.native_link_name,
    Target.LINK_ELEMENTS: naming.link_elements_name,
}

_COMPONENT_TARGET_NAMES: Dict[Target, Callable[[Component], str]] = {
    Target.API_ELEMENTS: naming.api_elements_name,
}


def validate_wiring_table() -> None:
    """Check the tables cover every bucket, target and component kind.

    Raises:
        ConfigurationError: On the first gap found.
    """
    for kind in BucketKind:
        if kind not in WIRING_TABLE:
            raise ConfigurationError(f"No wiring rule for bucket kind '{kind.value}'")
        for target in WIRING_TABLE[kind]:
            missing = kind.component_kinds - TARGET_COMPONENT_KINDS[target]
            if missing:
                raise ConfigurationError(
                    f"Bucket '{kind.value}' feeds {target.value}, which "
                    f"{', '.join(sorted(k.value for k in missing))} components do not have"
                )
    for target in Target:
        if target not in TARGET_COMPONENT_KINDS or target not in TARGET_BINARY_KINDS:
            raise ConfigurationError(f"Target '{target.value}' is missing from the wiring tables")
        names = _COMPONENT_TARGET_NAMES if TARGET_BINARY_KINDS[target] is None else _BINARY_TARGET_NAMES
        if target not in names:
            raise ConfigurationError(f"No naming rule for target '{target.value}'")


def _extend_from_bucket(target: ConfigurationProvider, bucket: ConfigurationProvider) -> None:
    target.configure(lambda configuration: configuration.extends_from(bucket.get()))
    logger.debug("%s extends from bucket %s", target.name, bucket.name)


def wire_bucket(
    project: "Project", component: Component, kind: BucketKind, bucket: ConfigurationProvider
) -> None:
    """Make every target of ``kind`` extend from ``bucket``.

    Raises:
        UnknownConfigurationError: If a target configuration is missing,
            now for existing binaries or later when a binary is declared.
    """
    configurations = project.configurations
    for target in WIRING_TABLE[kind]:
        binary_kinds = TARGET_BINARY_KINDS[target]
        if binary_kinds is None:
            name = _COMPONENT_TARGET_NAMES[target](component)
            _extend_from_bucket(configurations.named(name), bucket)
            continue

        def wire_binary(binary: Binary, target: Target = target) -> None:
            name = _BINARY_TARGET_NAMES[target](binary)
            _extend_from_bucket(configurations.named(name), bucket)

        component.binaries.configure_each(
            wire_binary, kind=binary_kinds, name=f"{bucket.name}->{target.value}"
        )


def apply_bucket(project: "Project", component: Component, kind: BucketKind) -> ConfigurationProvider:
    """Create the ``kind`` bucket of ``component`` and wire it."""
    if not kind.applies_to(component):
        raise ConfigurationError(f"Bucket '{kind.value}' does not apply to {component}")
    bucket = create_bucket(project, component, kind)
    wire_bucket(project, component, kind, bucket)
    logger.info("Added %s bucket %s to %s", kind.value, bucket.name, component)
    return bucket
