"""Shared statistical functions used by the enrichment analysis."""

from typing import Optional
import numpy as np
import pandas as pd
from scipy.stats import fisher_exact
from statsmodels.stats.multitest import multipletests


def build_contingency(
    regulon_targets: set,
    universe: set,
    population: set,
) -> tuple[int, int, int, int]:
    """Build the 2×2 over-representation table for one regulon.

                          In regulon | Not in regulon
      In universe (hit)       a      |      b
      Not a hit               c      |      d

    a = regulon targets that are hits
    b = hits outside the regulon
    c = regulon targets that are not hits
    d = population genes that are neither

    Args:
        regulon_targets: Target genes of one TF.
        universe: Hit genes (reference set ∩ all regulon targets).
        population: All distinct targets across every regulon.

    Returns:
        Tuple (a, b, c, d).
    """
    a = len(regulon_targets & universe)
    b = len(universe) - a
    c = len(regulon_targets) - a
    d = len(population) - a - b - c
    return a, b, c, d


def run_fisher_test(
    a: int, b: int, c: int, d: int, alternative: str = "greater"
) -> tuple[float, float]:
    """Run a one-tailed Fisher's exact test.

    With alternative='greater' the p-value is the hypergeometric upper
    tail P(X >= a), i.e. the over-representation p-value.

    Args:
        a, b, c, d: Cells of the 2×2 contingency table.
        alternative: Tail direction ('greater', 'less', or 'two-sided').

    Returns:
        Tuple of (odds_ratio, p_value).
    """
    table = np.array([[a, b], [c, d]])
    odds_ratio, p_value = fisher_exact(table, alternative=alternative)
    return float(odds_ratio), float(p_value)


def apply_bh_correction(
    df: pd.DataFrame,
    pvalue_col: str = "pvalue",
    group_cols: Optional[list] = None,
) -> pd.DataFrame:
    """Apply Benjamini-Hochberg FDR correction to a p-value column.

    Adds 'FDR' and 'neg_log10_FDR' columns to the DataFrame. When group_cols
    is specified, correction is applied independently within each group.
    Rows with a missing p-value get a missing FDR and do not count towards
    the number of tests.

    Args:
        df: DataFrame containing a column of p-values.
        pvalue_col: Name of the column containing raw p-values.
        group_cols: Optional list of column names defining groups for
            within-group correction.

    Returns:
        Copy of df with 'FDR' and 'neg_log10_FDR' columns added.
    """
    df = df.copy()
    df["FDR"] = np.nan
    groups = df.groupby(group_cols).groups.values() if group_cols else [df.index]
    for idx in groups:
        pvals = df.loc[idx, pvalue_col]
        tested = pvals.dropna()
        if tested.empty:
            continue
        _, fdr, _, _ = multipletests(tested.values, method="fdr_bh")
        df.loc[tested.index, "FDR"] = fdr

    df["neg_log10_FDR"] = -np.log10(df["FDR"].clip(lower=np.finfo(float).tiny))
    return df
