"""End-to-end TF enrichment analysis for ageing and Alzheimer's gene sets.

Pipeline:
  1. Load the ageing genes, Alzheimer's genes, human TF list and the
     curated TF–target interaction table.
  2. Build high-confidence regulons (A/B edges, TF sources only).
  3. Run the regulon over-representation analysis once per reference set.
  4. Write each ranked table and a top-15 -log10(FDR) bar chart.
  5. Export the regulon edges of TFs significant in the ageing analysis
     (FDR < 0.05) for import into Cytoscape or a similar network viewer.

Usage:
    python -m tf_ageing_grn.pipeline --config configs/default_config.yaml \\
        --ageing-file data/genage_human.csv \\
        --alzheimer-file data/alzheimer_genes.xlsx \\
        --tf-file data/human_tfs.xlsx \\
        --interactions-file data/dorothea_hs.tsv \\
        --output-dir results/tf_enrichment/
"""

import argparse
import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from .enrichment import run_enrichment
from .loaders import (
    load_ageing_genes,
    load_alzheimer_genes,
    load_interactions,
    load_tf_list,
)
from .regulon_builder import build_regulon
from .utils.io import load_config, save_edges
from .utils.plotting import plot_top_tfs

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
log = logging.getLogger(__name__)

ANALYSIS_TITLES = {
    "ageing": "TF enrichment: ageing genes",
    "alzheimer": "TF enrichment: Alzheimer's genes",
}


def sig_edges_filename(name: str) -> str:
    """File name for an analysis' significant-edge export."""
    return f"TF_{name.capitalize()}_Regulon_SigEdges.tsv"


# ── Significant edges ─────────────────────────────────────────────────────────

def select_significant_edges(
    ranked: pd.DataFrame,
    regulon: pd.DataFrame,
    fdr_threshold: float = 0.05,
) -> pd.DataFrame:
    """Keep regulon edges whose source TF is significant in ranked.

    Args:
        ranked: Output of run_enrichment() with 'tf' and 'FDR' columns.
        regulon: Full edge list from build_regulon().
        fdr_threshold: Strict upper bound on FDR.

    Returns:
        Subset of regulon rows, index reset.
    """
    sig_tfs = set(ranked.loc[ranked["FDR"] < fdr_threshold, "tf"])
    edges = regulon[regulon["source"].isin(sig_tfs)].reset_index(drop=True)
    log.info("%d significant TFs → %d edges", len(sig_tfs), len(edges))
    return edges


# ── Full pipeline ─────────────────────────────────────────────────────────────

def run_tf_enrichment_pipeline(
    ageing_path: str | Path,
    alzheimer_path: str | Path,
    tf_path: str | Path,
    interactions_path: str | Path,
    output_dir: str | Path,
    confidence_levels: Iterable[str] = ("A", "B"),
    fdr_threshold: float = 0.05,
    top_n: int = 15,
    plot: bool = True,
    export_edges_for: Iterable[str] = ("ageing",),
) -> dict:
    """Run the ageing and Alzheimer's TF enrichment analyses.

    All inputs are loaded before any analysis starts, so a bad input aborts
    the run without partial output.

    Args:
        ageing_path: Ageing gene table ('symbol' column).
        alzheimer_path: Alzheimer's gene spreadsheet ('Symbol' column).
        tf_path: TF annotation spreadsheet ('Is TF?', 'HGNC symbol').
        interactions_path: TF–target table (tf, target, confidence, mor).
        output_dir: Output directory.
        confidence_levels: Interaction confidence letters to keep.
        fdr_threshold: FDR cutoff for significant TFs.
        top_n: Number of TFs shown per bar chart.
        plot: Whether to draw the bar charts.
        export_edges_for: Analyses whose significant edges are exported.

    Returns:
        Dict with keys 'ageing', 'alzheimer' (ranked DataFrames), 'regulon'
        (edge list) and 'sig_edges' (ageing significant edges).
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    reference_sets = {
        "ageing": load_ageing_genes(ageing_path),
        "alzheimer": load_alzheimer_genes(alzheimer_path),
    }
    tf_set = load_tf_list(tf_path)
    interactions = load_interactions(interactions_path)

    regulon = build_regulon(interactions, tf_set, confidence_levels=confidence_levels)

    export_edges_for = set(export_edges_for)
    results = {"regulon": regulon}
    sig_edges = {}
    for name, genes in reference_sets.items():
        ranked = run_enrichment(
            genes, regulon, tf_set=tf_set, name=name, fdr_threshold=fdr_threshold,
        )
        ranked.to_csv(output_dir / f"{name}_tf_enrichment.csv", index=False)
        results[name] = ranked

        if plot:
            plot_top_tfs(
                ranked,
                output_dir / f"{name}_top_tfs.png",
                top_n=top_n,
                title=ANALYSIS_TITLES.get(name, name),
                fdr_threshold=fdr_threshold,
            )

        sig_edges[name] = select_significant_edges(ranked, regulon, fdr_threshold)
        if name in export_edges_for:
            path = save_edges(sig_edges[name], output_dir / sig_edges_filename(name))
            log.info("[%s] significant edges saved → %s", name, path)

    results["sig_edges"] = sig_edges["ageing"]
    return results


# ── CLI ───────────────────────────────────────────────────────────────────────

def main() -> None:
    parser = argparse.ArgumentParser(
        description="Rank TFs by regulon enrichment in ageing and Alzheimer's gene sets."
    )
    parser.add_argument("--config", help="Path to YAML config file.")
    parser.add_argument("--ageing-file", required=True, help="Ageing gene table.")
    parser.add_argument("--alzheimer-file", required=True, help="Alzheimer's gene spreadsheet.")
    parser.add_argument("--tf-file", required=True, help="Human TF annotation spreadsheet.")
    parser.add_argument("--interactions-file", required=True, help="TF-target interaction table.")
    parser.add_argument("--output-dir", required=True, help="Output directory.")
    parser.add_argument("--confidence-levels", nargs="+", default=["A", "B"])
    parser.add_argument("--fdr-threshold", type=float, default=0.05)
    parser.add_argument("--top-n", type=int, default=15)
    parser.add_argument("--no-plot", action="store_true")
    args = parser.parse_args()

    cfg = load_config(args.config) if args.config else {}
    te_cfg = cfg.get("tf_enrichment", {})

    run_tf_enrichment_pipeline(
        ageing_path=args.ageing_file,
        alzheimer_path=args.alzheimer_file,
        tf_path=args.tf_file,
        interactions_path=args.interactions_file,
        output_dir=args.output_dir,
        confidence_levels=te_cfg.get("confidence_levels", args.confidence_levels),
        fdr_threshold=te_cfg.get("fdr_threshold", args.fdr_threshold),
        top_n=te_cfg.get("top_n", args.top_n),
        plot=False if args.no_plot else te_cfg.get("plot", True),
        export_edges_for=te_cfg.get("export_edges_for", ["ageing"]),
    )


if __name__ == "__main__":
    main()
