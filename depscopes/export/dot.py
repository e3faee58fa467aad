"""DOT export for configuration graphs."""

import logging
from pathlib import Path

import networkx as nx

from depscopes.export.graph import build_graph
from depscopes.model.project import Build

logger = logging.getLogger("depscopes.export.dot")


def _dot_graph(build: Build) -> nx.DiGraph:
    """Copy of the configuration graph with DOT-safe attributes."""
    graph = build_graph(build)
    dot = nx.DiGraph()
    for node_id, attrs in graph.nodes(data=True):
        style = "dashed" if attrs.get("dependency_scope") else "solid"
        shape = "box" if attrs.get("consumable") else "ellipse"
        dot.add_node(f'"{node_id}"', label=f'"{attrs.get("name", node_id)}"', style=style, shape=shape)
    for source, target in graph.edges():
        dot.add_edge(f'"{source}"', f'"{target}"', label="extends")
    return dot


def export_dot(build: Build, output_path: Path) -> bool:
    """Export the configuration graph to DOT format.

    Buckets are drawn dashed, consumable configurations as boxes.

    Returns:
        bool: False when no DOT writer is installed.
    """
    logger.info("Exporting configuration graph to DOT: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    graph = _dot_graph(build)

    # Use pydot if available, otherwise write_dot from pygraphviz
    try:
        from networkx.drawing.nx_pydot import write_dot
        write_dot(graph, str(output_path))
    except ImportError:
        try:
            from networkx.drawing.nx_agraph import write_dot
            write_dot(graph, str(output_path))
        except ImportError:
            logger.warning("Neither pydot nor pygraphviz available, DOT export skipped")
            return False

    logger.info("DOT export completed: %d nodes, %d edges",
                graph.number_of_nodes(), graph.number_of_edges())
    return True
