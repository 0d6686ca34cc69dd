"""Tests for universe construction, ORA and TF ranking."""

import logging

import pandas as pd
import pytest

from tf_ageing_grn.enrichment import (
    EmptyUniverseError,
    compute_universe,
    regulon_statistics,
    run_enrichment,
    run_ora,
)
from tf_ageing_grn.regulon_builder import build_regulon


@pytest.fixture
def regulon(interactions, tf_set):
    return build_regulon(interactions, tf_set)


def test_scenario_universe(scenario_regulon):
    assert compute_universe({"GENE1", "GENE2"}, scenario_regulon) == {"GENE1", "GENE2"}


def test_scenario_counts(scenario_regulon):
    stats = regulon_statistics(scenario_regulon, {"GENE1", "GENE2"}).set_index("tf")
    assert stats.loc["TFA", "regulon_size"] == 2
    assert stats.loc["TFA", "hits"] == 2
    assert stats.loc["TFA", "hit_genes"] == "GENE1,GENE2"
    assert stats.loc["TFB", "regulon_size"] == 1
    assert stats.loc["TFB", "hits"] == 0
    assert stats.loc["TFB", "hit_genes"] == ""


def test_scenario_ranking(scenario_regulon):
    ranked = run_enrichment({"GENE1", "GENE2"}, scenario_regulon, tf_set={"TFA", "TFB"})
    assert ranked["tf"].tolist() == ["TFA", "TFB"]
    pvals = ranked.set_index("tf")["pvalue"]
    # N=3, K=2, n=2, k=2 → 1/C(3,2)
    assert pvals["TFA"] == pytest.approx(1 / 3)
    assert pvals["TFB"] == pytest.approx(1.0)
    assert ranked.loc[0, "FDR"] <= ranked.loc[1, "FDR"]


def test_empty_universe_raises(scenario_regulon):
    with pytest.raises(EmptyUniverseError, match="ageing"):
        compute_universe({"UNRELATED"}, scenario_regulon, name="ageing")
    with pytest.raises(ValueError):
        run_enrichment(set(), scenario_regulon)


def test_ora_columns(regulon, ageing_genes):
    universe = compute_universe(ageing_genes, regulon)
    ora = run_ora(regulon, universe)
    assert list(ora.columns) == ["tf", "pvalue", "odds_ratio", "expected_hits"]
    assert ora["pvalue"].between(0, 1).all()
    # TFA: 10 of 10 targets are hits out of N=40, K=10
    assert ora.set_index("tf").loc["TFA", "expected_hits"] == pytest.approx(2.5)


def test_every_tf_appears_once(regulon, ageing_genes, tf_set):
    ranked = run_enrichment(ageing_genes, regulon, tf_set=tf_set, name="ageing")
    assert sorted(ranked["tf"]) == sorted(tf_set)
    assert ranked["tf"].is_unique
    # zero-hit TFs are still reported
    assert (ranked.set_index("tf").loc[["TFB", "TFC"], "hits"] == 0).all()


def test_ranked_sorted_and_monotone(regulon, ageing_genes):
    ranked = run_enrichment(ageing_genes, regulon)
    assert ranked["FDR"].is_monotonic_increasing
    by_p = ranked.sort_values("pvalue")
    assert by_p["FDR"].is_monotonic_increasing


def test_strong_regulon_is_significant(regulon, ageing_genes):
    ranked = run_enrichment(ageing_genes, regulon).set_index("tf")
    assert ranked.loc["TFA", "FDR"] < 0.05
    assert ranked.loc["KLF4", "FDR"] >= 0.05
    assert ranked.loc["KLF4", "hits"] == 1


def test_deterministic(regulon, ageing_genes):
    first = run_enrichment(ageing_genes, regulon)
    second = run_enrichment(ageing_genes, regulon)
    pd.testing.assert_frame_equal(first, second)


def test_tf_set_restricts_regulon(regulon, ageing_genes):
    ranked = run_enrichment(ageing_genes, regulon, tf_set={"TFA", "TFB"})
    assert set(ranked["tf"]) == {"TFA", "TFB"}


def test_non_tf_source_never_ranked(interactions, tf_set, ageing_genes):
    regulon = build_regulon(interactions, tf_set)
    ranked = run_enrichment(ageing_genes, regulon)
    assert "POU5F1" not in set(ranked["tf"])


def test_analyses_are_independent(regulon, ageing_genes):
    alz = {"G31", "G32", "G33", "G34", "G35"}
    ageing = run_enrichment(ageing_genes, regulon, name="ageing")
    alzheimer = run_enrichment(alz, regulon, name="alzheimer")
    again = run_enrichment(ageing_genes, regulon, name="ageing")
    pd.testing.assert_frame_equal(ageing, again)
    assert alzheimer.loc[0, "tf"] == "TFC"
    assert ageing.loc[0, "tf"] == "TFA"


def test_summary_log_uses_fdr_threshold(regulon, ageing_genes, caplog):
    with caplog.at_level(logging.INFO, logger="tf_ageing_grn.enrichment"):
        run_enrichment(ageing_genes, regulon, name="ageing", fdr_threshold=1.01)
    assert "4 TFs tested, 4 with FDR < 1.01" in caplog.text
