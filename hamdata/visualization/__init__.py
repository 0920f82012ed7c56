"""Static figures of generated graphs with their witness cycles.

Provides render_demonstration() for the demonstration mode and
render_dataset_samples() for saved datasets.
"""

from hamdata.visualization.graph_plot import plot_graph, to_networkx
from hamdata.visualization.render import (
    render_dataset_samples,
    render_demonstration,
)
from hamdata.visualization.style import apply_style, save_figure

__all__ = [
    "apply_style",
    "plot_graph",
    "render_dataset_samples",
    "render_demonstration",
    "save_figure",
    "to_networkx",
]
