"""Orchestrator: render demonstration figures and dataset samples.

Demonstration mode alternates Hamiltonian and non-Hamiltonian graphs,
drawing the witness cycle on the Hamiltonian ones. Every graph is saved
as PNG + SVG.
"""

import logging
from pathlib import Path

import numpy as np

from hamdata.config.experiment import DatasetConfig
from hamdata.dataset.builder import build_class
from hamdata.dataset.io import load_dataset
from hamdata.dataset.types import GraphClass
from hamdata.graph.hamiltonian import get_cycle, verify_cycle
from hamdata.graph.types import Graph
from hamdata.reproducibility.seed import make_rng
from hamdata.visualization.graph_plot import plot_graph
from hamdata.visualization.style import apply_style, save_figure

log = logging.getLogger(__name__)


def _render_one(graph: Graph, out_dir: Path, name: str) -> list[Path]:
    cycle = get_cycle(graph)
    if cycle and not verify_cycle(graph, cycle):
        raise AssertionError(f"{name}: oracle returned an invalid cycle {cycle}")
    fig = plot_graph(graph, cycle=cycle)
    paths = save_figure(fig, out_dir, name)
    log.info("Generated: %s", name)
    return list(paths)


def render_demonstration(
    config: DatasetConfig,
    out_dir: str | Path,
    n_pairs: int = 3,
    rng: np.random.Generator | None = None,
    max_attempts: int | None = None,
) -> list[Path]:
    """Generate and draw n_pairs (Hamiltonian, non-Hamiltonian) graphs.

    Args:
        config: Dataset configuration; its graph and builder sections
            control generation and filtering.
        out_dir: Directory for figures. Created if absent.
        n_pairs: Number of graphs per class.
        rng: Random Generator. Defaults to make_rng(config.seed).
        max_attempts: Candidate budget per figure, passed to build_class.

    Returns:
        List of paths to generated figure files.
    """
    apply_style()
    out_dir = Path(out_dir)
    rng = rng if rng is not None else make_rng(config.seed)
    generated_files: list[Path] = []

    for idx in range(n_pairs):
        for graph_class in (GraphClass.HAMILTONIAN, GraphClass.NON_HAMILTONIAN):
            graph, attempts = build_class(config, graph_class, rng, max_attempts)
            log.debug(
                "%s graph %d found after %d candidates",
                graph_class.value, idx, attempts,
            )
            generated_files.extend(
                _render_one(graph, out_dir, f"demo_{idx:02d}_{graph_class.value}")
            )

    return generated_files


def render_dataset_samples(
    dataset_dir: str | Path,
    n_per_class: int = 4,
    out_dir: str | Path | None = None,
) -> list[Path]:
    """Draw the first n_per_class graphs of each class of a saved dataset.

    Figures go to {dataset_dir}/figures/ unless out_dir is given. A figure
    that fails to render is logged and skipped.

    Returns:
        List of paths to generated figure files.
    """
    apply_style()
    dataset_dir = Path(dataset_dir)
    figures_dir = Path(out_dir) if out_dir is not None else dataset_dir / "figures"
    dataset = load_dataset(dataset_dir)
    generated_files: list[Path] = []

    for graph_class in GraphClass:
        for idx, matrix in enumerate(dataset.graphs(graph_class)[:n_per_class]):
            name = f"sample_{graph_class.value}_{idx:02d}"
            try:
                graph = Graph.from_adjacency(
                    matrix, dataset.metadata.target_edge_count
                )
                generated_files.extend(_render_one(graph, figures_dir, name))
            except Exception as e:
                log.warning("Failed to generate %s: %s", name, e)

    return generated_files
