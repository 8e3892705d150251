# ==============================================
# Tests for Similarity Functions
# ==============================================

import math

import pytest

from catalyst_knn.analysis.feature_stats import FeatureStatistics
from catalyst_knn.analysis.similarity import (
    atmosphere_similarity,
    form_similarity,
    jaccard,
    ligand_similarity,
    metal_similarity,
    mof_similarity,
    numeric_similarity,
)


class TestJaccard:

    def test_overlap(self):
        assert jaccard({"a", "b"}, {"b", "c"}) == pytest.approx(1 / 3)

    def test_empty_side(self):
        assert jaccard(set(), {"a"}) == 0.0
        assert jaccard({"a"}, set()) == 0.0


class TestMetalSimilarity:

    def test_identical(self):
        assert metal_similarity("Co", "co") == 1.0

    def test_partial(self):
        assert metal_similarity("Co,Fe", "Fe") == pytest.approx(0.5)

    def test_disjoint(self):
        assert metal_similarity("Co", "Pt") == 0.0

    def test_missing(self):
        assert metal_similarity(None, "Co") == 0.0
        assert metal_similarity("Co", "  ") == 0.0


class TestMofSimilarity:

    def test_case_insensitive_equality(self):
        assert mof_similarity("ZIF-8", "zif-8") == 1.0

    def test_shared_specific_zif_gets_bonus(self):
        assert mof_similarity("ZIF-8 derived carbon", "Fe-doped ZIF-8") == 1.0

    def test_different_specific_zifs(self):
        assert mof_similarity("ZIF-67", "ZIF-8") == 0.0

    def test_partial_overlap(self):
        # {"cozn", "zif"} vs {"zif"}
        assert mof_similarity("CoZn-ZIF", "ZIF-L") == pytest.approx(0.5)

    def test_no_keywords(self):
        assert mof_similarity("polyaniline", "carbon black") == 0.0

    def test_missing(self):
        assert mof_similarity("", "ZIF-8") == 0.0
        assert mof_similarity("ZIF-8", None) == 0.0


class TestFormSimilarity:

    def test_single_atom_synonyms(self):
        assert form_similarity("Co", "SA", "Fe", "single atom") == 1.0

    def test_blank_form_is_inferred_for_platinum(self):
        assert form_similarity("Co", "SA", "Pt", None) == 0.0
        assert form_similarity("Pt", None, "Pt", "Cluster") == 1.0

    def test_blank_form_is_inferred_as_single_atom(self):
        assert form_similarity("Co", None, "Fe", "SA") == 1.0

    def test_mixed_forms(self):
        # Jaccard 0.5 plus the single-atom bonus
        assert form_similarity("Co", "SA and cluster", "Fe", "SA") == pytest.approx(0.7)

    def test_unrecognized_form(self):
        assert form_similarity("Co", "nanoparticles", "Co", "SA") == 0.0


class TestLigandSimilarity:

    def test_aliases_match(self):
        assert ligand_similarity("2-methylimidazole", "2-mim") == 1.0
        assert ligand_similarity("BDC", "1,4-benzenedicarboxylate") == 1.0

    def test_partial_with_primary_bonus(self):
        assert ligand_similarity("2-mim + BDC", "2-mim") == pytest.approx(0.8)

    def test_unrecognized(self):
        assert ligand_similarity("phenanthroline", "phenanthroline") == 0.0

    def test_missing(self):
        assert ligand_similarity(None, "2-mim") == 0.0


class TestAtmosphereSimilarity:

    def test_equivalent_sequences(self):
        assert atmosphere_similarity("Ar/H2", "Ar, then H2") == pytest.approx(1.0)

    def test_different_base_gas(self):
        # additive, sequence and special all agree
        assert atmosphere_similarity("Ar", "N2") == pytest.approx(0.5)

    def test_different_additive(self):
        assert atmosphere_similarity("N2 + NH3", "N2") == pytest.approx(0.7)

    def test_missing(self):
        assert atmosphere_similarity("", "Ar") == 0.0


class TestNumericSimilarity:

    def test_identical(self):
        stats = FeatureStatistics(name="pyro_temp", mean=900.0, std=100.0)
        assert numeric_similarity(900, "900", stats) == 1.0

    def test_one_std_apart(self):
        stats = FeatureStatistics(name="pyro_temp", mean=900.0, std=100.0)
        assert numeric_similarity(900, 1000, stats) == pytest.approx(math.exp(-1))

    def test_missing_or_unparseable(self):
        stats = FeatureStatistics(name="bet")
        assert numeric_similarity(None, 10, stats) == 0.0
        assert numeric_similarity("n/a", 10, stats) == 0.0

    def test_overflowing_gap(self):
        stats = FeatureStatistics(name="bet", mean=0.0, std=1e-300)
        assert numeric_similarity(1e10, -1e10, stats) == 0.0

    def test_undefined_gap(self):
        stats = FeatureStatistics(name="bet", mean=float("inf"), std=float("inf"))

        assert numeric_similarity(1e308, 1.0, stats) == 0.0
        assert numeric_similarity(5.0, 5.0, stats) == 1.0


@pytest.mark.parametrize("fn, a, b", [
    (metal_similarity, "Co,Fe,Ni", "Co,Fe"),
    (mof_similarity, "ZIF-8 ZIF-67 bimetallic", "ZIF-8 ZIF-67"),
    (ligand_similarity, "2-mim, BDC", "2-mim, BDC, BTC"),
    (atmosphere_similarity, "moist Ar then NH3", "moist Ar then NH3"),
])
def test_scores_stay_in_unit_interval(fn, a, b):
    assert 0.0 <= fn(a, b) <= 1.0 + 1e-12


def test_form_score_capped():
    assert form_similarity("Co", "SA", "Co", "SA and SA") <= 1.0
