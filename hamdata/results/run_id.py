"""Run ID generation with scannable parameter slug format."""

from datetime import datetime, timezone

from hamdata.config.experiment import DatasetConfig


def generate_run_id(config: DatasetConfig) -> str:
    """Generate a scannable run ID from config parameters.

    Format: n{node_count}_m{target_edge_count}_{mode}_q{graphs_per_class}_s{seed}_{YYYYMMDD}_{HHMMSS}
    Example: n8_m12_degree_floor_q100_s42_20260224_143012

    Edge-probability runs have no edge target and use p{percent} instead of m.
    """
    ts = datetime.now(timezone.utc)
    g = config.graph
    if g.target_edge_count is None:
        edges = f"p{round(g.edge_probability * 100):02d}"
    else:
        edges = f"m{g.target_edge_count}"
    return (
        f"n{g.node_count}"
        f"_{edges}"
        f"_{g.mode}"
        f"_q{config.builder.graphs_per_class}"
        f"_s{config.seed}"
        f"_{ts.strftime('%Y%m%d_%H%M%S')}"
    )
