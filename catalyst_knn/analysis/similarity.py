# ==============================================
# Similarity Functions
# ==============================================
#
# PURPOSE:
#   One similarity per feature (family). Every function takes two raw
#   values, returns a score in [0, 1], and returns 0.0 as soon as either
#   side is missing, before any normalization happens.
#
# FUNCTIONS:
# ----------
# - jaccard(a, b)                       → |a ∩ b| / |a ∪ b|, 0 if either empty
# - metal_similarity(m1, m2)            → Jaccard over element tokens
# - mof_similarity(n1, n2)              → equality / Jaccard + ZIF bonuses
# - form_similarity(m1, f1, m2, f2)     → Jaccard over inferred form tags + SA bonus
# - ligand_similarity(l1, l2)           → Jaccard + 2-MI bonus
# - atmosphere_similarity(a1, a2)       → weighted attribute agreement
# - numeric_similarity(v1, v2, stats)   → exp(-|z1 - z2|)
#
# BONUSES:
# --------
#   Bonuses reward agreement on the tags that matter most for E_half.
#   Every bonus-carrying function caps its result at 1.0.
#
# ==============================================

import math
from typing import AbstractSet, Any, Optional

from .feature_stats import FeatureStatistics
from catalyst_knn.normalization.feature_normalizer import FeatureNormalizer
from catalyst_knn.normalization.value_parser import ValueParser


MOF_SPECIFIC_BONUS = 0.3
FORM_SINGLE_ATOM_BONUS = 0.2
LIGAND_PRIMARY_BONUS = 0.3

ATMOSPHERE_BASE_SCORE = 0.5
ATMOSPHERE_ADDITIVE_SCORE = 0.3
ATMOSPHERE_SEQUENCE_SCORE = 0.1
ATMOSPHERE_SPECIAL_SCORE = 0.1


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def jaccard(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def metal_similarity(metal1: Optional[str], metal2: Optional[str]) -> float:
    if _is_blank(metal1) or _is_blank(metal2):
        return 0.0
    return jaccard(
        FeatureNormalizer.metal_tokens(metal1),
        FeatureNormalizer.metal_tokens(metal2),
    )


def mof_similarity(mof1: Optional[str], mof2: Optional[str]) -> float:
    if _is_blank(mof1) or _is_blank(mof2):
        return 0.0

    s1 = mof1.lower()
    s2 = mof2.lower()
    if s1 == s2:
        return 1.0

    k1 = FeatureNormalizer.mof_keywords(s1)
    k2 = FeatureNormalizer.mof_keywords(s2)
    score = jaccard(k1, k2)
    if score == 0.0:
        return 0.0

    for tag in FeatureNormalizer.SPECIFIC_ZIF_TAGS:
        if tag in k1 and tag in k2:
            score += MOF_SPECIFIC_BONUS

    return min(1.0, score)


def form_similarity(
    metal1: Optional[str],
    form1: Optional[str],
    metal2: Optional[str],
    form2: Optional[str],
) -> float:
    """
    Compare structural forms after inferring blanks from the metal.

    A blank form never short-circuits to 0.0: it is inferred instead
    ("SA", or "Cluster" for platinum).
    """
    tags1 = FeatureNormalizer.form_tags(FeatureNormalizer.infer_form(metal1, form1))
    tags2 = FeatureNormalizer.form_tags(FeatureNormalizer.infer_form(metal2, form2))
    score = jaccard(tags1, tags2)
    if score == 0.0:
        return 0.0

    sa = FeatureNormalizer.SINGLE_ATOM_TAG
    if sa in tags1 and sa in tags2:
        score += FORM_SINGLE_ATOM_BONUS

    return min(1.0, score)


def ligand_similarity(ligand1: Optional[str], ligand2: Optional[str]) -> float:
    if _is_blank(ligand1) or _is_blank(ligand2):
        return 0.0

    tags1 = FeatureNormalizer.ligand_tags(ligand1)
    tags2 = FeatureNormalizer.ligand_tags(ligand2)
    score = jaccard(tags1, tags2)
    if score == 0.0:
        return 0.0

    primary = FeatureNormalizer.PRIMARY_LIGAND_TAG
    if primary in tags1 and primary in tags2:
        score += LIGAND_PRIMARY_BONUS

    return min(1.0, score)


def atmosphere_similarity(atm1: Optional[str], atm2: Optional[str]) -> float:
    if _is_blank(atm1) or _is_blank(atm2):
        return 0.0

    f1 = FeatureNormalizer.atmosphere_features(atm1)
    f2 = FeatureNormalizer.atmosphere_features(atm2)

    score = 0.0
    if f1.base == f2.base:
        score += ATMOSPHERE_BASE_SCORE
    if f1.additive == f2.additive:
        score += ATMOSPHERE_ADDITIVE_SCORE
    if f1.sequence == f2.sequence:
        score += ATMOSPHERE_SEQUENCE_SCORE
    if f1.special == f2.special:
        score += ATMOSPHERE_SPECIAL_SCORE
    return score


def numeric_similarity(value1: Any, value2: Any, stats: FeatureStatistics) -> float:
    """
    Z-score kernel: exp(-|z1 - z2|).

    1.0 for identical values, decays with the standardized gap.
    Missing or unparseable values give 0.0.
    """
    v1 = ValueParser.parse_float(value1)
    v2 = ValueParser.parse_float(value2)
    if v1 is None or v2 is None:
        return 0.0

    if v1 == v2:
        return 1.0

    gap = abs(stats.z_score(v1) - stats.z_score(v2))
    if not math.isfinite(gap):
        return 0.0
    return math.exp(-gap)
