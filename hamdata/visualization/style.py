"""Figure style for graph drawings.

White seaborn theme with the colorblind palette; save_figure() writes every
figure as PNG and SVG.
"""

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for headless rendering

import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path

FIGURE_FORMATS = ("png", "svg")
RASTER_DPI = 300

# seaborn 'colorblind' preset; single colors are hex strings
PALETTE = sns.color_palette("colorblind", n_colors=8)
HAMILTONIAN_COLOR = PALETTE.as_hex()[2]  # green, witness cycle overlay
NON_HAMILTONIAN_COLOR = PALETTE.as_hex()[3]  # red
NODE_COLOR = PALETTE.as_hex()[0]  # blue
EDGE_COLOR = "#808080"


def apply_style() -> None:
    """Seaborn white theme (no grid behind the drawn graphs), square figures.

    Idempotent.
    """
    sns.set_theme(style="white", palette=PALETTE)
    plt.rcParams.update({
        "figure.dpi": 150,
        "savefig.dpi": RASTER_DPI,
        "figure.figsize": (6, 6),
        "axes.titlesize": 12,
        "font.size": 10,
        "svg.fonttype": "none",  # Embed text as SVG text elements
    })


def save_figure(fig: plt.Figure, output_dir: Path, name: str) -> tuple[Path, ...]:
    """Write fig as {name}.png and {name}.svg into output_dir, then close it.

    Args:
        fig: Matplotlib figure to save.
        output_dir: Target directory. Created if absent.
        name: Base filename without extension.

    Returns:
        Written paths, in FIGURE_FORMATS order.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = tuple(output_dir / f"{name}.{ext}" for ext in FIGURE_FORMATS)
    for path in paths:
        fig.savefig(path, dpi=RASTER_DPI, bbox_inches="tight")
    plt.close(fig)
    return paths
