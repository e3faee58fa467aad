"""Build-wide view of configuration graphs."""

import logging

import networkx as nx

from depscopes.model.project import Build

logger = logging.getLogger("depscopes.export.graph")


def build_graph(build: Build) -> nx.DiGraph:
    """Realize every configuration and merge all projects into one graph.

    Node IDs are configuration paths such as ``:app:linkElements``; each
    node keeps its ``project`` and short ``name`` as attributes.
    """
    merged = nx.DiGraph()
    for project in build.projects:
        project.configurations.realize_all()
        graph = project.configurations.graph
        prefix = project.path.rstrip(":") + ":"
        relabeled = nx.relabel_nodes(graph, {name: prefix + name for name in graph.nodes}, copy=True)
        for name in graph.nodes:
            relabeled.nodes[prefix + name].update(project=project.path, name=name)
        merged = nx.compose(merged, relabeled)
    logger.debug(
        "Merged configuration graph: %d nodes, %d edges",
        merged.number_of_nodes(),
        merged.number_of_edges(),
    )
    return merged
