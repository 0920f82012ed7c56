#!/usr/bin/env python3
"""Entry point for generating Hamiltonicity-labeled graph datasets.

Modes:
    generate     build both class quotas and write the dataset directory
    demonstrate  draw alternating Hamiltonian / non-Hamiltonian graphs

Usage:
    python run_generation.py --config config.json
    python run_generation.py --config config.json --dry-run
    python run_generation.py --mode demonstrate --pairs 5
    python run_generation.py --config config.json --verbose
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from hamdata.config import (
    ANCHOR_CONFIG,
    DatasetConfig,
    config_from_json,
    config_to_json,
    dataset_config_hash,
    full_config_hash,
)
from hamdata.errors import ConfigError
from hamdata.results import generate_run_id

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_generate(config: DatasetConfig, output_dir: Path) -> Path:
    """Build the dataset, write it with its config, and render samples.

    Returns:
        Path to the dataset directory.
    """
    # Lazy imports to keep --dry-run fast
    from hamdata.dataset import build_dataset, save_dataset
    from hamdata.reproducibility import get_git_hash, make_rng, set_seed
    from hamdata.visualization import render_dataset_samples

    log.info("Seed: %d", config.seed)
    log.info("Git hash: %s", get_git_hash())

    with stage_timer("Reproducibility Seeding"):
        set_seed(config.seed)

    with stage_timer("Dataset Generation"):
        dataset = build_dataset(config, make_rng(config.seed))

    with stage_timer("Save Dataset"):
        save_dataset(dataset, config, output_dir)
        (output_dir / "config.json").write_text(config_to_json(config))

    with stage_timer("Visualization"):
        figures = render_dataset_samples(output_dir)
        log.info("Generated %d figure files", len(figures))

    stats = dataset.stats
    print(f"\n{'=' * 60}")
    print(f"Dataset complete in {stats.elapsed_seconds:.1f}s")
    print(f"  Output:      {output_dir}")
    print(f"  Per class:   {dataset.metadata.graphs_per_class}")
    print(f"  Candidates:  {stats.candidates} "
          f"({stats.filtered} filtered, {stats.discarded_full} surplus)")
    print(f"  Restarts:    {stats.restarts}")
    print(f"  Figures:     {len(figures)} files")
    print(f"{'=' * 60}")
    return output_dir


def run_demonstrate(config: DatasetConfig, output_dir: Path, n_pairs: int) -> Path:
    """Render n_pairs alternating Hamiltonian / non-Hamiltonian graphs."""
    from hamdata.reproducibility import set_seed
    from hamdata.visualization import render_demonstration

    with stage_timer("Reproducibility Seeding"):
        set_seed(config.seed)

    with stage_timer("Demonstration"):
        figures = render_demonstration(config, output_dir, n_pairs=n_pairs)

    print(f"\nDemonstration: {len(figures)} files in {output_dir}")
    return output_dir


def load_config(path: str | None) -> DatasetConfig:
    if path is None:
        return ANCHOR_CONFIG
    config_path = Path(path)
    if not config_path.exists():
        print(f"Error: config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)
    return config_from_json(config_path.read_text())


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate Hamiltonian / non-Hamiltonian graph datasets"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to dataset config JSON file (default configuration if omitted)",
    )
    parser.add_argument(
        "--mode",
        choices=("generate", "demonstrate"),
        default="generate",
        help="Build a dataset or draw demonstration graphs",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output directory (default: datasets/{run_id})",
    )
    parser.add_argument(
        "--pairs",
        type=int,
        default=3,
        help="Graphs per class in demonstrate mode",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the generation plan without building anything",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except ConfigError as e:
        log.error("Invalid configuration: %s", e)
        sys.exit(1)

    run_id = generate_run_id(config)
    output_dir = Path(args.output) if args.output else Path("datasets") / run_id
    g = config.graph
    b = config.builder

    print(f"Run ID:        {run_id}")
    print(f"Config hash:   {full_config_hash(config)}")
    print(f"Dataset hash:  {dataset_config_hash(config)}")
    print()
    edges = (
        f"m={g.target_edge_count}"
        if g.target_edge_count is not None
        else f"p={g.edge_probability}"
    )
    print(f"Graph:    n={g.node_count}, {edges}, mode={g.mode}")
    print(f"Builder:  graphs_per_class={b.graphs_per_class}, "
          f"filter={b.filter_candidates}, workers={b.n_workers}")
    print(f"Seed:     {config.seed}")

    if args.dry_run:
        print(f"\nPlan for {args.mode} run {run_id}:")
        print(f"  1. Set seed: {config.seed}")
        if args.mode == "generate":
            print(f"  2. Fill {b.graphs_per_class} Hamiltonian + "
                  f"{b.graphs_per_class} non-Hamiltonian graphs")
            print(f"  3. Save dataset + manifest")
            print(f"  4. Render sample figures")
            print(f"\nOutput: {output_dir}/")
            print(f"  - hamiltonian_graphs.json")
            print(f"  - non_hamiltonian_graphs.json")
            print(f"  - manifest.json")
            print(f"  - config.json (copy)")
            print(f"  - figures/ (PNG + SVG)")
        else:
            print(f"  2. Draw {args.pairs} graphs per class to {output_dir}/")
        print(f"\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        if args.mode == "generate":
            run_generate(config, output_dir)
        else:
            run_demonstrate(config, output_dir, args.pairs)
    except Exception:
        log.exception("Generation failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
