# ==============================================
# DistanceAggregator
# ==============================================
#
# PURPOSE:
#   Combine the nine per-feature similarities into one distance:
#
#       distance = Σ_f  weight_f × (1 − similarity_f)
#
#   The sum is NOT divided by the total weight. 0 means identical on
#   every feature; the worst case is the sum of all weights (10.0 with
#   the default weights). Lower is more similar.
#
# CLASSES:
# --------
# - FeatureWeights (frozen dataclass)
#     metal 1.5, mof 1.2, form 1.0, ligand 0.8, atmosphere 0.7,
#     pyro_temp 2.0, bet 1.5, rpm 0.8, scan_rate 0.5
#
# - DistanceAggregator
#     - __init__(stats: dict[str, FeatureStatistics], weights: FeatureWeights)
#     - breakdown(query, record) -> dict[str, float]   (similarity per feature)
#     - distance(query, record) -> float
#
# ==============================================

import math
from dataclasses import dataclass, asdict
from typing import Dict, Mapping, Optional, Union

from .feature_stats import FeatureStatistics
from .similarity import (
    atmosphere_similarity,
    form_similarity,
    ligand_similarity,
    metal_similarity,
    mof_similarity,
    numeric_similarity,
)
from catalyst_knn.normalization.records import NUMERIC_FEATURES, QuerySample, ReferenceRecord


@dataclass(frozen=True)
class FeatureWeights:
    """Per-feature weights of the distance sum."""
    metal: float = 1.5
    mof: float = 1.2
    form: float = 1.0
    ligand: float = 0.8
    atmosphere: float = 0.7
    pyro_temp: float = 2.0
    bet: float = 1.5
    rpm: float = 0.8
    scan_rate: float = 0.5

    def __post_init__(self):
        for name, weight in asdict(self).items():
            if weight < 0:
                raise ValueError(f"Weight for '{name}' must be non-negative, got {weight}")

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @property
    def total(self) -> float:
        return sum(asdict(self).values())


Sample = Union[QuerySample, ReferenceRecord]


class DistanceAggregator:
    """
    Weighted, unnormalized distance between a query and a reference record.
    """

    def __init__(
        self,
        stats: Mapping[str, FeatureStatistics],
        weights: Optional[FeatureWeights] = None
    ):
        """
        Args:
            stats: Reference statistics per numeric feature. Features
                   without an entry fall back to mean=0, std=1.
            weights: Optional FeatureWeights, defaults if not provided
        """
        self.weights = weights or FeatureWeights()
        self.stats: Dict[str, FeatureStatistics] = {
            name: stats.get(name) or FeatureStatistics(name=name)
            for name in NUMERIC_FEATURES
        }

    def breakdown(self, query: Sample, record: Sample) -> Dict[str, float]:
        """
        Similarity of every feature, keyed like FeatureWeights.

        Args:
            query: The candidate sample
            record: A reference record (or any sample)

        Returns:
            Dictionary of feature name → similarity in [0, 1]
        """
        qc, rc = query.categorical, record.categorical
        similarities = {
            "metal": metal_similarity(qc.metal, rc.metal),
            "mof": mof_similarity(qc.mof, rc.mof),
            "form": form_similarity(qc.metal, qc.form, rc.metal, rc.form),
            "ligand": ligand_similarity(qc.ligand, rc.ligand),
            "atmosphere": atmosphere_similarity(qc.atmosphere, rc.atmosphere),
        }

        for name in NUMERIC_FEATURES:
            similarities[name] = numeric_similarity(
                query.numeric.get(name),
                record.numeric.get(name),
                self.stats[name],
            )

        return similarities

    def distance(self, query: Sample, record: Sample) -> float:
        weights = self.weights.to_dict()
        total = 0.0
        for name, similarity in self.breakdown(query, record).items():
            if not math.isfinite(similarity):
                similarity = 0.0
            total += weights[name] * (1.0 - similarity)
        # Rounding in 1 - similarity can dip just below zero
        return 0.0 if total < 0.0 else total
