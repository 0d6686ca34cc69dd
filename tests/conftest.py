"""Shared fixtures: small synthetic reference sets and interaction tables."""

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest


def _genes(start, stop):
    return [f"G{i}" for i in range(start, stop + 1)]


@pytest.fixture
def scenario_regulon():
    """TFA→GENE1/GENE2 (A, +1) and TFB→GENE3 (B, -1)."""
    return pd.DataFrame({
        "source": ["TFA", "TFA", "TFB"],
        "target": ["GENE1", "GENE2", "GENE3"],
        "mode_of_regulation": [1, 1, -1],
        "likelihood": [1.0, 1.0, 0.75],
    })


@pytest.fixture
def interactions():
    """Raw interaction table with mixed confidence and a non-TF source.

    TFA regulates G1–G10, TFB G11–G30, TFC G31–G40 and KLF4 G5, G20–G28.
    POU5F1 (Oct3/4) is not in the TF list; TFB→G1 is confidence C.
    """
    rows = []
    rows += [("TFA", g, "A", 1) for g in _genes(1, 10)]
    rows += [("TFB", g, "B", -1) for g in _genes(11, 30)]
    rows += [("TFC", g, "A", 1) for g in _genes(31, 40)]
    rows += [("KLF4", g, "B", 1) for g in ["G5"] + _genes(20, 28)]
    rows += [("POU5F1", g, "A", 1) for g in _genes(1, 10) + ["G41"]]
    rows += [("TFB", "G1", "C", 1), ("TFC", "G2", "D", -1), ("TFA", "G3", "E", 1)]
    return pd.DataFrame(rows, columns=["tf", "target", "confidence", "mor"])


@pytest.fixture
def tf_set():
    return frozenset({"TFA", "TFB", "TFC", "KLF4"})


@pytest.fixture
def ageing_genes():
    return frozenset(_genes(1, 10) + ["NOTATARGET"])


@pytest.fixture
def input_files(tmp_path, interactions):
    """Write the four pipeline inputs to tmp_path and return their paths."""
    ageing = tmp_path / "ageing_genes.csv"
    pd.DataFrame({"symbol": [g.lower() for g in _genes(1, 10)] + ["G1", "NotATarget"]}).to_csv(
        ageing, index=False
    )

    alzheimer = tmp_path / "alzheimer_genes.xlsx"
    pd.DataFrame({"Symbol": ["g31", "G32", "G33", "G34", "G35", "G35"]}).to_excel(
        alzheimer, index=False
    )

    tfs = tmp_path / "human_tfs.xlsx"
    pd.DataFrame({
        "HGNC symbol": ["TFA", "tfb", "TFC", "KLF4", "POU5F1", "GAPDH"],
        "Is TF?": ["Yes", "Yes", "Yes", "Yes", "No", "No"],
    }).to_excel(tfs, index=False)

    interactions_path = tmp_path / "interactions.tsv"
    interactions.to_csv(interactions_path, sep="\t", index=False)

    return {
        "ageing_path": ageing,
        "alzheimer_path": alzheimer,
        "tf_path": tfs,
        "interactions_path": interactions_path,
    }
