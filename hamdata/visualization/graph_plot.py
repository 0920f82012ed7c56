"""Draw a graph on a circular layout with an optional witness cycle overlay."""

import matplotlib.pyplot as plt
import networkx as nx

from hamdata.graph.types import Graph
from hamdata.visualization.style import (
    EDGE_COLOR,
    HAMILTONIAN_COLOR,
    NODE_COLOR,
    NON_HAMILTONIAN_COLOR,
)


def to_networkx(graph: Graph) -> nx.Graph:
    """Undirected networkx view of a Graph (node labels = node indices)."""
    g = nx.from_numpy_array(graph.copy_adjacency().astype(int))
    g.add_nodes_from(range(graph.node_count))
    return g


def plot_graph(
    graph: Graph,
    cycle: list[int] | None = None,
    ax: plt.Axes | None = None,
    title: str | None = None,
    display_node_labels: bool = True,
) -> plt.Figure:
    """Plot nodes evenly spaced on a circle, every edge, and the cycle.

    Args:
        graph: Graph to draw.
        cycle: Witness cycle (node sequence closing on its start) to
            highlight. An empty list marks the graph as non-Hamiltonian.
        ax: Axes to draw into. A new figure is created when None.
        title: Axes title. Defaults to a summary with the class.
        display_node_labels: Draw node indices.

    Returns:
        The figure containing the axes.
    """
    if ax is None:
        fig, ax = plt.subplots()
    else:
        fig = ax.figure

    g = to_networkx(graph)
    pos = nx.circular_layout(g)

    nx.draw_networkx_edges(g, pos, ax=ax, edge_color=EDGE_COLOR, width=1.5)
    if cycle:
        cycle_edges = list(zip(cycle, cycle[1:]))
        nx.draw_networkx_edges(
            g, pos, edgelist=cycle_edges, ax=ax,
            edge_color=HAMILTONIAN_COLOR, width=4.0,
        )
    nx.draw_networkx_nodes(g, pos, ax=ax, node_color=NODE_COLOR, node_size=300)
    if display_node_labels:
        nx.draw_networkx_labels(g, pos, ax=ax, font_color="white", font_size=9)

    if title is None:
        if cycle is None:
            label = ""
        elif cycle:
            label = ", Hamiltonian"
        else:
            label = ", non-Hamiltonian"
        title = f"n={graph.node_count}, m={graph.edge_count()}{label}"
    ax.set_title(title, color=NON_HAMILTONIAN_COLOR if cycle == [] else "black")
    ax.set_aspect("equal")
    ax.axis("off")
    return fig
