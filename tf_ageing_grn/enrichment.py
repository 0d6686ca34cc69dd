"""TF regulon over-representation analysis against a reference gene set.

For a reference gene set R (ageing genes, Alzheimer's genes, ...) and a set
of TF regulons:

  1. Universe:  U = R ∩ {all regulon targets}. Every gene in U is a hit;
     the test is unsigned (mode of regulation is ignored).
  2. ORA:       for each TF, a one-tailed Fisher's exact test of its targets
     against U, with the population being every distinct regulon target.
     The p-value is P(X >= k) for X ~ Hypergeom(N, |U|, |regulon|).
  3. Counts:    per-TF regulon size and hit count, computed separately and
     joined onto the test results.
  4. Ranking:   Benjamini-Hochberg FDR across all TFs of the run, sorted
     ascending.

Each reference set is analysed by its own call to run_enrichment(); runs
share no state and are corrected independently.
"""

import logging
from typing import Iterable, Optional

import pandas as pd

from .regulon_builder import regulon_gene_sets
from .utils.stats import apply_bh_correction, build_contingency, run_fisher_test

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
log = logging.getLogger(__name__)


class EmptyUniverseError(ValueError):
    """Raised when a reference gene set shares no genes with any regulon."""


# ── Universe ──────────────────────────────────────────────────────────────────

def compute_universe(
    reference_set: Iterable[str],
    regulon: pd.DataFrame,
    name: str = "analysis",
) -> set:
    """Intersect a reference gene set with all regulon targets.

    Args:
        reference_set: Uppercase gene symbols under test.
        regulon: Edge list with 'source' and 'target' columns.
        name: Analysis label used in log and error messages.

    Returns:
        Set of reference genes that are targets of at least one TF.

    Raises:
        EmptyUniverseError: If the intersection is empty, which makes the
            hypergeometric test degenerate.
    """
    universe = set(reference_set) & set(regulon["target"])
    if not universe:
        raise EmptyUniverseError(
            f"[{name}] none of the {len(set(reference_set))} reference genes are "
            f"targets in the regulon ({regulon['target'].nunique()} targets); "
            "enrichment is undefined"
        )
    log.info("[%s] universe: %d of %d reference genes are regulon targets",
             name, len(universe), len(set(reference_set)))
    return universe


# ── Over-representation test ──────────────────────────────────────────────────

def run_ora(regulon: pd.DataFrame, universe: set) -> pd.DataFrame:
    """Run a one-tailed over-representation test for every TF regulon.

    Args:
        regulon: Edge list with 'source' and 'target' columns.
        universe: Hit genes from compute_universe().

    Returns:
        DataFrame with columns ['tf', 'pvalue', 'odds_ratio',
        'expected_hits'], one row per TF with at least one target.
    """
    gene_sets = regulon_gene_sets(regulon)
    population = set().union(*gene_sets.values()) if gene_sets else set()

    records = []
    for tf, targets in sorted(gene_sets.items()):
        if not targets:
            log.warning("Skipping %s: empty regulon", tf)
            continue
        a, b, c, d = build_contingency(targets, universe, population)
        odds_ratio, pvalue = run_fisher_test(a, b, c, d, alternative="greater")
        records.append({
            "tf": tf,
            "pvalue": pvalue,
            "odds_ratio": odds_ratio,
            "expected_hits": len(targets) * len(universe) / len(population),
        })
    return pd.DataFrame(records, columns=["tf", "pvalue", "odds_ratio", "expected_hits"])


# ── Per-TF counts ─────────────────────────────────────────────────────────────

def regulon_statistics(regulon: pd.DataFrame, universe: set) -> pd.DataFrame:
    """Count regulon size and reference-set hits for every TF.

    Args:
        regulon: Edge list with 'source' and 'target' columns.
        universe: Hit genes from compute_universe().

    Returns:
        DataFrame with columns ['tf', 'regulon_size', 'hits', 'hit_genes'];
        hit_genes is a sorted, comma-separated string.
    """
    records = []
    for tf, targets in sorted(regulon_gene_sets(regulon).items()):
        hits = sorted(targets & universe)
        records.append({
            "tf": tf,
            "regulon_size": len(targets),
            "hits": len(hits),
            "hit_genes": ",".join(hits),
        })
    return pd.DataFrame(records, columns=["tf", "regulon_size", "hits", "hit_genes"])


def rank_tfs(ora_df: pd.DataFrame, stats_df: pd.DataFrame) -> pd.DataFrame:
    """Join test results with per-TF counts, apply BH FDR and sort.

    Ties in FDR are broken by raw p-value, then TF name, so the ranking
    is deterministic.
    """
    merged = stats_df.merge(ora_df, on="tf", how="inner")
    ranked = apply_bh_correction(merged, pvalue_col="pvalue")
    return ranked.sort_values(["FDR", "pvalue", "tf"]).reset_index(drop=True)


# ── Single analysis run ───────────────────────────────────────────────────────

def run_enrichment(
    reference_set: Iterable[str],
    regulon: pd.DataFrame,
    tf_set: Optional[Iterable[str]] = None,
    name: str = "analysis",
    fdr_threshold: float = 0.05,
) -> pd.DataFrame:
    """Rank TFs by enrichment of their regulons in a reference gene set.

    Args:
        reference_set: Uppercase gene symbols (e.g. ageing genes).
        regulon: Edge list from regulon_builder.build_regulon().
        tf_set: Optional TF symbols; if given, sources outside it are dropped.
        name: Analysis label for logging.
        fdr_threshold: FDR cutoff used in the summary log.

    Returns:
        DataFrame with columns ['tf', 'regulon_size', 'hits', 'hit_genes',
        'pvalue', 'odds_ratio', 'expected_hits', 'FDR', 'neg_log10_FDR'],
        one row per TF, sorted by FDR ascending.

    Raises:
        EmptyUniverseError: If no reference gene is a regulon target.
    """
    if tf_set is not None:
        regulon = regulon[regulon["source"].isin(set(tf_set))]
    reference_set = set(reference_set)

    universe = compute_universe(reference_set, regulon, name=name)
    ora_df = run_ora(regulon, universe)
    stats_df = regulon_statistics(regulon, universe)
    ranked = rank_tfs(ora_df, stats_df)

    log.info("[%s] %d TFs tested, %d with FDR < %g",
             name, len(ranked), fdr_threshold,
             int((ranked["FDR"] < fdr_threshold).sum()))
    if not ranked.empty:
        top = ranked.iloc[0]
        log.info("[%s] top TF: %s (hits %d/%d, FDR %.3g)",
                 name, top["tf"], top["hits"], top["regulon_size"], top["FDR"])
    return ranked
