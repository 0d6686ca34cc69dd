"""I/O helpers for loading input tables and saving analysis outputs."""

from pathlib import Path

import pandas as pd
import yaml

EXCEL_SUFFIXES = {".xlsx", ".xls"}
TAB_SUFFIXES = {".tsv", ".txt", ".tab"}

EDGE_COLUMNS = ["source", "target", "mode_of_regulation", "likelihood"]


def read_table(path: str | Path, sheet_name: int | str = 0) -> pd.DataFrame:
    """Read a tabular file, choosing the parser from the file suffix.

    Spreadsheets are read from a single sheet (the first by default);
    .tsv/.txt/.tab files are tab-delimited and everything else is read
    as comma-delimited CSV.

    Args:
        path: Path to the table.
        sheet_name: Sheet index or name for spreadsheet inputs.

    Returns:
        DataFrame with the file contents.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input table not found: {path}")
    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        return pd.read_excel(path, sheet_name=sheet_name)
    if suffix in TAB_SUFFIXES:
        return pd.read_csv(path, sep="\t")
    return pd.read_csv(path)


def require_columns(df: pd.DataFrame, required: set, label: str) -> None:
    """Raise if any of the required columns is absent from df.

    Raises:
        ValueError: If required columns are missing.
    """
    missing = set(required) - set(df.columns)
    if missing:
        raise ValueError(f"{label} missing columns: {sorted(missing)}")


def save_edges(df: pd.DataFrame, path: str | Path) -> Path:
    """Write a regulatory edge list as a tab-delimited file.

    The column order (source, target, mode_of_regulation, likelihood) is
    what network viewers such as Cytoscape expect on import.

    Args:
        df: Edge DataFrame containing at least EDGE_COLUMNS.
        path: Output path.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df[EDGE_COLUMNS].to_csv(path, sep="\t", index=False)
    return path


def load_config(path: str | Path) -> dict:
    """Load a YAML configuration file.

    Args:
        path: Path to a YAML config file.

    Returns:
        Dictionary of configuration parameters.

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        return yaml.safe_load(f) or {}
