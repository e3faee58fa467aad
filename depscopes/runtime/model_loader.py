"""Helpers for loading build models from TOML/JSON sources.

``load_model_spec`` accepts various sources:

* None -> empty BuildModelSpec
* dict -> BuildModelSpec.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

``build_model`` turns a spec into a configured ``Build`` with the
dependency-scopes plugin applied.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from depscopes.config.schema import BuildModelSpec, ScopesConfig
from depscopes.errors import ModelLoadError
from depscopes.model.project import Build
from depscopes.scopes.plugin import DependencyScopesPlugin

logger = logging.getLogger("depscopes.runtime.model_loader")

ModelSource = Union[str, Path, Dict[str, Any], None]


def _is_file(source: Union[str, Path]) -> bool:
    try:
        return Path(source).is_file()
    except (OSError, ValueError):
        # Inline model text can be too long or odd for a path
        return False


def _parse(text: str, fmt: Optional[str]) -> Any:
    """Parse ``text`` as ``fmt``; without a known format, JSON then TOML."""
    if fmt == "json":
        return json.loads(text)
    if fmt == "toml":
        return tomllib.loads(text)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        # TOML table headers such as [scopes] also start with a bracket
        return tomllib.loads(text)


def _read_source(source: Union[str, Path]) -> Dict[str, Any]:
    path = Path(source)
    fmt: Optional[str] = None
    if _is_file(source):
        text = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()
        if suffix in {".toml", ".tml"}:
            fmt = "toml"
        elif suffix == ".json":
            fmt = "json"
        logger.info("Loading build model from file: %s (fmt=%s)", path, fmt or "auto")
    else:
        text = str(source)
        logger.info("Loading build model from inline string")

    try:
        data = _parse(text, fmt)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ModelLoadError(f"Cannot parse build model ({fmt or 'json/toml'}): {e}") from e

    if not isinstance(data, dict):
        raise ModelLoadError("Top-level build model must be a mapping/dict")
    return data


def load_model_spec(source: ModelSource) -> BuildModelSpec:
    """Load and validate a build model description.

    Raises:
        ModelLoadError: If the source cannot be parsed or validated.
    """
    if source is None:
        logger.debug("No model source provided; using an empty build model")
        return BuildModelSpec()

    if isinstance(source, dict):
        data = source
    elif isinstance(source, (str, Path)):
        data = _read_source(source)
    else:
        raise TypeError(f"Unsupported model source type: {type(source)!r}")

    try:
        return BuildModelSpec.from_dict(data)
    except ValidationError as e:
        raise ModelLoadError(f"Invalid build model: {e}") from e


def load_scopes_config(source: ModelSource) -> ScopesConfig:
    """Load a standalone ``ScopesConfig``, with or without a ``[scopes]`` table."""
    if source is None:
        return ScopesConfig()
    data = source if isinstance(source, dict) else _read_source(source)
    data = data.get("scopes", data)
    try:
        return ScopesConfig.model_validate(data)
    except ValidationError as e:
        raise ModelLoadError(f"Invalid scopes configuration: {e}") from e


def build_model(spec: BuildModelSpec, config: Optional[ScopesConfig] = None) -> Build:
    """Declare every project of ``spec`` on a new build with the plugin applied.

    Args:
        spec: Build model description.
        config: Plugin settings overriding ``spec.scopes``.

    Returns:
        Build: The configured build. Configurations are still lazy.
    """
    build = Build()
    DependencyScopesPlugin(config or spec.scopes).apply(build)

    for project_spec in spec.projects:
        project = build.project(project_spec.name)
        for component_spec in project_spec.components:
            component = project.add_component(component_spec.name, component_spec.kind)
            for binary_spec in component_spec.binaries:
                component.add_binary(binary_spec.name, binary_spec.kind)

        for configuration_name, notations in project_spec.dependencies.items():
            provider = project.configurations.named(configuration_name)
            for notation in notations:
                provider.configure(lambda configuration, n=notation: configuration.add_dependency(n))

        logger.info(
            "Configured project %s: %d component(s), %d configuration(s)",
            project.path,
            len(project.components),
            len(project.configurations),
        )
    return build


__all__ = ["build_model", "load_model_spec", "load_scopes_config"]
