"""Visualization functions for the TF enrichment results.

All plot functions accept an output_path argument and save to disk.
They do not call plt.show() — call that explicitly if running interactively.
"""

from pathlib import Path
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns


def plot_top_tfs(
    ranked: pd.DataFrame,
    output_path: str | Path,
    top_n: int = 15,
    title: str = "",
    fdr_threshold: float = 0.05,
    color: str = "steelblue",
    figsize: tuple = (6, 6),
) -> tuple[pd.DataFrame, plt.Axes]:
    """Plot -log10(FDR) of the most significant TFs as horizontal bars.

    The most significant TF is drawn at the top of the chart. A dashed
    vertical line marks the FDR threshold.

    Args:
        ranked: Ranked enrichment table with 'tf' and 'FDR' columns.
        output_path: Path to save the figure (PNG and SVG).
        top_n: Number of TFs to show.
        title: Figure title.
        fdr_threshold: FDR value marked by the reference line.
        color: Bar color.
        figsize: Figure width × height in inches.

    Returns:
        Tuple of (plotted rows, most significant first; the chart axes).
    """
    top = ranked.sort_values("FDR").head(top_n).copy()
    top["neg_log10_FDR"] = -np.log10(top["FDR"].clip(lower=np.finfo(float).tiny))

    fig, ax = plt.subplots(figsize=figsize)
    sns.barplot(
        data=top,
        x="neg_log10_FDR",
        y="tf",
        order=top["tf"].tolist(),
        color=color,
        ax=ax,
    )
    ax.axvline(-np.log10(fdr_threshold), color="gray", linestyle="--", linewidth=1)
    ax.set_title(title)
    ax.set_xlabel("-log10(FDR)")
    ax.set_ylabel("Transcription factor")
    plt.tight_layout()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    fig.savefig(output_path.with_suffix(".svg"), bbox_inches="tight")
    plt.close(fig)
    return top, ax
