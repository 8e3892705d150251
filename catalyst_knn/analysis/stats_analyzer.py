# ==============================================
# StatsAnalyzer
# ==============================================
#
# PURPOSE:
#   Walk the retained reference records once and build a
#   FeatureStatistics per numeric feature.
#
# CLASS: StatsAnalyzer
# --------------------
#   Stateless: records in, statistics out.
#
#   Methods:
#   --------
#   - analyze(records) -> dict[str, FeatureStatistics]
#       One entry for every key in NUMERIC_FEATURES, even when no
#       record carries a valid value (mean=0, std=1 in that case).
#
#   - collect_values(records, name) -> list[float]
#       Valid values of one feature (None skipped).
#
# ==============================================

from typing import Dict, Iterable, List, Sequence

from .feature_stats import FeatureStatistics
from catalyst_knn.normalization.records import NUMERIC_FEATURES, ReferenceRecord


class StatsAnalyzer:
    """
    Computes reference statistics for the numeric similarity kernel.
    """

    def __init__(self, features: Sequence[str] = NUMERIC_FEATURES):
        """
        Args:
            features: Numeric feature keys to summarize
        """
        self.features = tuple(features)

    def analyze(self, records: Iterable[ReferenceRecord]) -> Dict[str, FeatureStatistics]:
        """
        Build statistics for every numeric feature.

        Args:
            records: Retained reference records (targets already parsed)

        Returns:
            Dictionary of feature name → FeatureStatistics
        """
        records = list(records)
        return {
            name: FeatureStatistics.from_values(name, self.collect_values(records, name))
            for name in self.features
        }

    def collect_values(self, records: Iterable[ReferenceRecord], name: str) -> List[float]:
        values = []
        for record in records:
            value = record.numeric.get(name)
            if value is not None:
                values.append(value)
        return values
