"""Inspect command: show one configuration of a wired build model."""

from __future__ import annotations

import logging
from typing import Optional, Set

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from depscopes.errors import ConfigurationError
from depscopes.model.configurations import Configuration
from depscopes.runtime.model_loader import build_model, load_model_spec

logger = logging.getLogger("depscopes.cli.inspect")


def _label(configuration: Configuration) -> str:
    flags = []
    if configuration.resolvable:
        flags.append("resolvable")
    if configuration.consumable:
        flags.append("consumable")
    if configuration.dependency_scope:
        flags.append(f"bucket:{configuration.dependency_scope}")
    suffix = f" [dim]({', '.join(flags)})[/dim]" if flags else ""
    return f"[bold]{configuration.name}[/bold]{suffix}"


def hierarchy_tree(configuration: Configuration, tree: Optional[Tree] = None, seen: Optional[Set[str]] = None) -> Tree:
    """Render the extends hierarchy of ``configuration`` as a Rich tree."""
    seen = seen if seen is not None else set()
    node = Tree(_label(configuration)) if tree is None else tree.add(_label(configuration))
    if configuration.name in seen:
        return node
    seen.add(configuration.name)
    for dependency in configuration.dependencies:
        node.add(f"[green]{dependency}[/green]")
    for parent in configuration.extended:
        hierarchy_tree(parent, node, seen)
    return node


def inspect_command(args, console: Optional[Console] = None) -> int:
    """Execute inspect command.

    Args:
        args: Parsed command-line arguments containing:
            - model: Build model file or inline TOML/JSON
            - project: Project name
            - configuration: Configuration name

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    console = console or Console()
    try:
        build = build_model(load_model_spec(args.model))
        project = next((p for p in build.projects if p.name == args.project), None)
        if project is None:
            logger.error("Project not found: %s", args.project)
            return 1
        project.configurations.realize_all()
        configuration = project.configurations.get(args.configuration)

        table = Table(show_header=False, box=None)
        table.add_row("Configuration", f"{project.path}:{configuration.name}")
        table.add_row("Description", configuration.description or "-")
        table.add_row("Resolvable", str(configuration.resolvable))
        table.add_row("Consumable", str(configuration.consumable))
        console.print(table)
        console.print(hierarchy_tree(configuration))

        if configuration.resolvable:
            resolved = project.configurations.resolve(configuration.name)
            console.print(f"Resolved dependencies: {', '.join(resolved) or 'none'}")
        return 0

    except ConfigurationError as e:
        logger.error("Build configuration failed: %s", e)
        return 1
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Inspect command failed: %s", e, exc_info=True)
        return 1
