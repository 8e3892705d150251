# ==============================================
# TOPIC 2: ANALYSIS (Statistics, Similarity, Distance)
# ==============================================
#
# This package measures how alike a candidate catalyst is to each
# reference catalyst.
#
# Two-step process:
#   Step 1 (Statistics): Summarize numeric features of the reference set
#   Step 2 (Distance):   Per-feature similarity → weighted distance
#
# Modules:
# --------
# - feature_stats.py    → Data class holding mean/std for one numeric feature
# - stats_analyzer.py   → Build FeatureStatistics for all numeric features
# - similarity.py       → One similarity function per feature (family)
# - distance.py         → FeatureWeights + DistanceAggregator
# - result.py           → Prediction results, failure values, predictor state
#
# ==============================================

from .feature_stats import FeatureStatistics
from .stats_analyzer import StatsAnalyzer
from .distance import DistanceAggregator, FeatureWeights
from .result import (
    FailureKind,
    NeighborResult,
    PredictionFailure,
    PredictionResult,
    PredictorState,
)

__all__ = [
    "FeatureStatistics",
    "StatsAnalyzer",
    "DistanceAggregator",
    "FeatureWeights",
    "FailureKind",
    "NeighborResult",
    "PredictionFailure",
    "PredictionResult",
    "PredictorState",
]
