"""Loaders for the reference gene sets and the TF–target interaction table.

Three reference sets are read from flat files and reduced to unique,
uppercase gene symbols:

  - ageing genes      (table with a 'symbol' column)
  - Alzheimer's genes (spreadsheet, first sheet, 'Symbol' column)
  - human TFs         (annotation spreadsheet; rows with 'Is TF?' == 'Yes',
                       symbols from 'HGNC symbol')

The curated TF–target interaction resource is read as-is; confidence
filtering happens in regulon_builder.
"""

import logging
from pathlib import Path

import pandas as pd

from .utils.io import read_table, require_columns

log = logging.getLogger(__name__)

INTERACTION_COLUMNS = ["tf", "target", "confidence", "mor"]


def normalize_symbols(symbols: pd.Series) -> frozenset:
    """Uppercase, strip and deduplicate a column of gene symbols.

    Missing values and empty strings are dropped.
    """
    cleaned = symbols.dropna().astype(str).str.strip().str.upper()
    return frozenset(cleaned[cleaned != ""])


def _read_input(path: str | Path, label: str, sheet_name: int | str = 0) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{label} not found: {path}")
    return read_table(path, sheet_name=sheet_name)


def load_ageing_genes(path: str | Path, symbol_col: str = "symbol") -> frozenset:
    """Load the ageing gene list.

    Args:
        path: Table with one row per ageing-associated gene.
        symbol_col: Column holding the gene symbol.

    Returns:
        Frozen set of uppercase gene symbols.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If symbol_col is missing.
    """
    df = _read_input(path, "Ageing gene table")
    require_columns(df, {symbol_col}, "Ageing gene table")
    genes = normalize_symbols(df[symbol_col])
    log.info("Loaded %d unique ageing genes from %s", len(genes), path)
    return genes


def load_alzheimer_genes(
    path: str | Path,
    symbol_col: str = "Symbol",
    sheet_name: int | str = 0,
) -> frozenset:
    """Load the Alzheimer's disease gene list (first sheet by default).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If symbol_col is missing.
    """
    df = _read_input(path, "Alzheimer's gene table", sheet_name=sheet_name)
    require_columns(df, {symbol_col}, "Alzheimer's gene table")
    genes = normalize_symbols(df[symbol_col])
    log.info("Loaded %d unique Alzheimer's genes from %s", len(genes), path)
    return genes


def load_tf_list(
    path: str | Path,
    flag_col: str = "Is TF?",
    symbol_col: str = "HGNC symbol",
) -> frozenset:
    """Load human transcription factors from an annotation table.

    Only rows whose flag column reads 'yes' (case-insensitive) are kept.

    Args:
        path: TF annotation table (e.g. the Lambert et al. human TF census).
        flag_col: Yes/No column marking bona fide TFs.
        symbol_col: Column holding the HGNC symbol.

    Returns:
        Frozen set of uppercase TF symbols.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If either column is missing.
    """
    df = _read_input(path, "TF annotation table")
    require_columns(df, {flag_col, symbol_col}, "TF annotation table")
    is_tf = df[flag_col].astype(str).str.strip().str.lower() == "yes"
    tfs = normalize_symbols(df.loc[is_tf, symbol_col])
    log.info("Loaded %d TFs (%d annotation rows flagged yes)", len(tfs), int(is_tf.sum()))
    return tfs


def load_interactions(path: str | Path) -> pd.DataFrame:
    """Load the curated TF–target interaction table.

    Args:
        path: Table with columns ['tf', 'target', 'confidence', 'mor'].

    Returns:
        DataFrame restricted to those four columns.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If required columns are missing.
    """
    df = _read_input(path, "TF-target interaction table")
    require_columns(df, set(INTERACTION_COLUMNS), "TF-target interaction table")
    log.info("Loaded %d TF-target interactions from %s", len(df), path)
    return df[INTERACTION_COLUMNS].copy()
