"""Build TF regulons from a curated TF–target interaction table.

The interaction table (DoRothEA-style) grades each TF→target edge with a
confidence letter A–E. Only high-confidence edges (A and B by default) are
kept, the letter is mapped to a numeric likelihood, and edges whose source
is not a recognised human TF are dropped. Each TF's set of targets is then
treated as one gene set for enrichment testing.
"""

import logging
from typing import Iterable

import pandas as pd

from .utils.io import EDGE_COLUMNS, require_columns

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
log = logging.getLogger(__name__)

CONFIDENCE_LIKELIHOOD = {"A": 1.0, "B": 0.75, "C": 0.5, "D": 0.25, "E": 0.05}


def build_regulon(
    interactions: pd.DataFrame,
    tf_set: Iterable[str],
    confidence_levels: Iterable[str] = ("A", "B"),
) -> pd.DataFrame:
    """Filter interactions to a high-confidence, TF-restricted edge list.

    Args:
        interactions: Table with columns ['tf', 'target', 'confidence', 'mor'].
        tf_set: Uppercase symbols of recognised TFs.
        confidence_levels: Confidence letters to retain.

    Returns:
        DataFrame with columns ['source', 'target', 'mode_of_regulation',
        'likelihood'], one row per unique (source, target) edge.

    Raises:
        ValueError: If a requested confidence level is not one of A–E, a
            retained edge has a mode of regulation other than +1/-1, or
            required columns are missing.
    """
    levels = {str(c).strip().upper() for c in confidence_levels}
    unknown = levels - set(CONFIDENCE_LIKELIHOOD)
    if unknown:
        raise ValueError(
            f"Unknown confidence levels {sorted(unknown)}; "
            f"expected a subset of {sorted(CONFIDENCE_LIKELIHOOD)}"
        )
    require_columns(interactions, {"tf", "target", "confidence", "mor"}, "Interaction table")

    df = interactions.copy()
    df["confidence"] = df["confidence"].astype(str).str.strip().str.upper()
    df = df[df["confidence"].isin(levels)]

    edges = pd.DataFrame({
        "source": df["tf"].astype(str).str.strip().str.upper(),
        "target": df["target"].astype(str).str.strip().str.upper(),
        "mode_of_regulation": pd.to_numeric(df["mor"], errors="coerce"),
        "likelihood": df["confidence"].map(CONFIDENCE_LIKELIHOOD),
    })

    tf_set = set(tf_set)
    not_tf = set(edges["source"]) - tf_set
    if not_tf:
        log.info(
            "Dropping %d sources absent from the TF list (e.g. %s)",
            len(not_tf), ", ".join(sorted(not_tf)[:5]),
        )
    edges = edges[edges["source"].isin(tf_set)].copy()

    bad_mor = ~edges["mode_of_regulation"].isin([1, -1])
    if bad_mor.any():
        examples = edges.loc[bad_mor, ["source", "target"]].head(3)
        raise ValueError(
            f"Interaction table has {int(bad_mor.sum())} edges with mode of "
            f"regulation outside {{+1, -1}} "
            f"(e.g. {', '.join(s + '->' + t for s, t in examples.itertuples(index=False))})"
        )
    edges["mode_of_regulation"] = edges["mode_of_regulation"].astype(int)

    # Highest-confidence row wins for a repeated (source, target) pair
    edges = (
        edges.sort_values("likelihood", ascending=False, kind="mergesort")
        .drop_duplicates(subset=["source", "target"])
        .sort_index()
        .reset_index(drop=True)
    )

    log.info(
        "Regulon: %d edges, %d TFs, %d targets (confidence %s)",
        len(edges), edges["source"].nunique(), edges["target"].nunique(),
        "".join(sorted(levels)),
    )
    return edges[EDGE_COLUMNS]


def regulon_gene_sets(regulon: pd.DataFrame) -> dict[str, set]:
    """Return a mapping of TF → set of target genes."""
    return {
        tf: set(sub["target"])
        for tf, sub in regulon.groupby("source")
    }
