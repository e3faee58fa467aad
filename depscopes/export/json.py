"""JSON export for configuration graphs."""

import json
import logging
from pathlib import Path

import networkx as nx

from depscopes.export.graph import build_graph
from depscopes.model.project import Build

logger = logging.getLogger("depscopes.export.json")


def export_json(build: Build, output_path: Path) -> None:
    """Export the configuration graph to node-link JSON.

    Args:
        build: Configured build to export.
        output_path: Output file path.
    """
    logger.info("Exporting configuration graph to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    graph = build_graph(build)
    data = nx.readwrite.json_graph.node_link_data(graph, edges="edges")

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info("JSON export completed: %d nodes, %d edges",
                graph.number_of_nodes(), graph.number_of_edges())
