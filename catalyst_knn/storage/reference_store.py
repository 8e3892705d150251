# ==============================================
# ReferenceStore
# ==============================================
#
# PURPOSE:
#   Own the frozen reference dataset and its numeric statistics.
#
# LIFECYCLE:
#   1. load(rows) once, with the raw rows from the ingestion side
#   2. Rows whose target (E_half) does not parse are discarded
#   3. Retained rows become ReferenceRecords (index = retained position)
#   4. StatsAnalyzer computes FeatureStatistics over the retained set
#   5. Records are stored as a tuple and never mutated afterwards
#
# CLASS: ReferenceStore
# ---------------------
#   Methods:
#   --------
#   - load(rows) -> PredictionFailure | None
#       None on success; EMPTY_REFERENCE_SET failure if nothing survives.
#
#   Properties:
#   -----------
#   - records: tuple[ReferenceRecord, ...]
#   - stats: dict[str, FeatureStatistics]
#   - discarded: int        → rows dropped for an unparseable target
#   - is_loaded / is_empty
#
# ==============================================

import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

from catalyst_knn.analysis.feature_stats import FeatureStatistics
from catalyst_knn.analysis.result import FailureKind, PredictionFailure
from catalyst_knn.analysis.stats_analyzer import StatsAnalyzer
from catalyst_knn.normalization.record_normalizer import RecordNormalizer
from catalyst_knn.normalization.records import ReferenceRecord


logger = logging.getLogger(__name__)


class ReferenceStore:
    """
    Frozen collection of reference records plus their statistics.
    """

    def __init__(
        self,
        record_normalizer: Optional[RecordNormalizer] = None,
        stats_analyzer: Optional[StatsAnalyzer] = None
    ):
        self._record_normalizer = record_normalizer or RecordNormalizer()
        self._stats_analyzer = stats_analyzer or StatsAnalyzer()
        self._records: Tuple[ReferenceRecord, ...] = ()
        self._stats: Mapping[str, FeatureStatistics] = MappingProxyType({})
        self._discarded = 0
        self._loaded = False

    def load(self, rows: Iterable[Mapping[str, Any]]) -> Optional[PredictionFailure]:
        """
        Build the reference set from raw rows.

        Args:
            rows: Raw rows keyed by dataset column names

        Returns:
            None on success, or an EMPTY_REFERENCE_SET PredictionFailure

        Raises:
            RuntimeError: If the store was already loaded
        """
        if self._loaded:
            raise RuntimeError("ReferenceStore is frozen; create a new store to reload")

        records = []
        discarded = 0
        for row in rows:
            record = self._record_normalizer.to_reference(row, index=len(records))
            if record is None:
                discarded += 1
                continue
            records.append(record)

        self._records = tuple(records)
        self._discarded = discarded
        self._stats = MappingProxyType(self._stats_analyzer.analyze(self._records))
        self._loaded = True

        if discarded:
            logger.info("Discarded %d rows without a parseable target", discarded)

        if not self._records:
            logger.error("✗ No reference rows with a parseable target")
            return PredictionFailure(
                kind=FailureKind.EMPTY_REFERENCE_SET,
                message="No reference rows have a parseable half-wave potential",
            )

        logger.info("✓ Loaded %d valid reference records", len(self._records))
        return None

    @property
    def records(self) -> Tuple[ReferenceRecord, ...]:
        return self._records

    @property
    def stats(self) -> Mapping[str, FeatureStatistics]:
        return self._stats

    @property
    def discarded(self) -> int:
        return self._discarded

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)
