# ==============================================
# KNNPredictor — Main Class
# ==============================================
#
# PURPOSE:
#   This is the class that ties all topics together. Users interact
#   with this class only; everything else is internal.
#
# HOW IT CONNECTS THE TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                      KNNPredictor                        │
#   │                                                          │
#   │  initialize() ── once ─────────────────────────┐         │
#   │  ┌──────────────────────────────────────────┐  │         │
#   │  │ TOPIC 3: STORAGE                         │  │         │
#   │  │  CsvSource.load() → ReferenceStore.load()│◄─┘         │
#   │  └──────────────┬───────────────────────────┘            │
#   │                 │ frozen records + FeatureStatistics     │
#   │                 ▼                                        │
#   │  predict(query, k) ── every request ──────────┐          │
#   │  ┌──────────────────────────────────────────┐ │          │
#   │  │ TOPIC 1: NORMALIZATION                   │◄┘          │
#   │  │  RecordNormalizer.to_query()             │            │
#   │  └──────────────┬───────────────────────────┘            │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────┐            │
#   │  │ TOPIC 2: ANALYSIS                        │            │
#   │  │  DistanceAggregator.distance() per record│            │
#   │  │  → stable sort → top-K → PredictionResult│            │
#   │  └──────────────────────────────────────────┘            │
#   └──────────────────────────────────────────────────────────┘
#
# STATE MACHINE:
#   UNINITIALIZED → INITIALIZING → READY        (records loaded)
#                                → FAILED_INIT  (fetch/parse error, or
#                                                no usable rows)
#
# PREDICTION RULE:
#   The predicted value is the target of the single closest record
#   (rank 0) whatever K is. K only sets how many neighbors are
#   reported. Ties in distance keep dataset order.
#
# CONCURRENCY:
#   After initialize(), predict() only reads the frozen store, so it
#   can be called from several threads at once.
#
# ==============================================

import asyncio
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from catalyst_knn.analysis.distance import DistanceAggregator, FeatureWeights
from catalyst_knn.analysis.result import (
    FailureKind,
    NeighborResult,
    PredictionFailure,
    PredictionResult,
    PredictorState,
)
from catalyst_knn.config import AppConfig, get_config
from catalyst_knn.errors import InitializationError
from catalyst_knn.normalization.record_normalizer import RecordNormalizer
from catalyst_knn.normalization.records import QuerySample
from catalyst_knn.storage.csv_source import CsvSource
from catalyst_knn.storage.reference_store import ReferenceStore


logger = logging.getLogger(__name__)

PREDICTION_DECIMALS = 4
SIMILARITY_DECIMALS = 3


class KNNPredictor:
    """
    Similarity-based K-nearest-neighbor estimator of half-wave potential.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        weights: Optional[FeatureWeights] = None,
        source: Optional[CsvSource] = None
    ):
        """
        Args:
            config: Application configuration. If None, loads from environment.
            weights: Distance weights. Defaults to FeatureWeights().
            source: Where initialize() fetches rows from when none are passed.
                    Defaults to config.dataset.reference_source.
        """
        self._config = config or get_config()
        self._weights = weights or FeatureWeights()
        self._source = source or CsvSource(
            self._config.dataset.reference_source,
            timeout=self._config.dataset.request_timeout_seconds
        )
        self._record_normalizer = RecordNormalizer()
        self._store: Optional[ReferenceStore] = None
        self._aggregator: Optional[DistanceAggregator] = None
        self._state = PredictorState.UNINITIALIZED

    # ======================================
    # Initialization
    # ======================================
    def initialize(
        self,
        rows: Optional[Iterable[Mapping[str, Any]]] = None
    ) -> Optional[PredictionFailure]:
        """
        Load the reference dataset and compute statistics.

        Args:
            rows: Raw reference rows. If None, they are fetched from the
                  configured CsvSource.

        Returns:
            None when the predictor is READY, or the EMPTY_REFERENCE_SET
            failure when no row had a parseable target.

        Raises:
            InitializationError: If the reference data could not be fetched, parsed
                or summarized. The predictor is left in FAILED_INIT.
            RuntimeError: If called while already initializing or ready.
        """
        if self._state in (PredictorState.INITIALIZING, PredictorState.READY):
            raise RuntimeError(f"Predictor cannot be initialized from state {self._state.value}")

        self._state = PredictorState.INITIALIZING
        logger.info("Initializing KNN predictor...")

        try:
            if rows is None:
                rows = self._source.load()

            store = ReferenceStore(record_normalizer=self._record_normalizer)
            failure = store.load(rows)
        except InitializationError:
            self._state = PredictorState.FAILED_INIT
            logger.exception("✗ Initialization failed")
            raise
        except Exception as e:
            self._state = PredictorState.FAILED_INIT
            logger.error("✗ Initialization failed: %s", e)
            raise InitializationError(self._source.source, str(e)) from e

        self._store = store
        if failure is not None:
            self._state = PredictorState.FAILED_INIT
            return failure

        self._aggregator = DistanceAggregator(store.stats, self._weights)
        self._state = PredictorState.READY
        logger.info("✓ KNN predictor ready (%d reference records)", len(store))
        return None

    async def initialize_async(
        self,
        rows: Optional[Iterable[Mapping[str, Any]]] = None
    ) -> Optional[PredictionFailure]:
        """Run initialize() in a worker thread so the event loop is not blocked by the fetch."""
        return await asyncio.to_thread(self.initialize, rows)

    # ======================================
    # Prediction
    # ======================================
    def predict(
        self,
        sample: Union[QuerySample, Mapping[str, Any]],
        k: Optional[int] = None
    ) -> Union[PredictionResult, PredictionFailure]:
        """
        Predict E_half for a candidate catalyst.

        Args:
            sample: QuerySample, or a mapping with the query fields
            k: Number of neighbors to report (default from config)

        Returns:
            PredictionResult, or a PredictionFailure (NOT_READY /
            EMPTY_REFERENCE_SET)

        Raises:
            ValueError: If k < 1
        """
        k = self._config.predictor.default_k if k is None else k
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")

        failure = self._check_ready()
        if failure is not None:
            return failure

        query = self._to_query(sample)
        ranked = self._rank(query)
        top_k = ranked[:k]

        neighbors = [
            NeighborResult(
                index=record.index,
                target_value=round(record.target, PREDICTION_DECIMALS),
                distance=distance,
                display_similarity=round(1.0 - distance, SIMILARITY_DECIMALS),
            )
            for distance, record in top_k
        ]

        return PredictionResult(
            predicted_value=neighbors[0].target_value,
            neighbors=neighbors,
        )

    def explain(
        self,
        sample: Union[QuerySample, Mapping[str, Any]],
        index: int
    ) -> Union[Dict[str, float], PredictionFailure]:
        """
        Per-feature similarities between a query and one reference record.

        Args:
            sample: QuerySample or query mapping
            index: Reference record index (as reported in NeighborResult.index)

        Returns:
            Dictionary of feature name → similarity, or a PredictionFailure

        Raises:
            IndexError: If index is outside the reference dataset
        """
        failure = self._check_ready()
        if failure is not None:
            return failure

        record = self._store.records[index]
        return self._aggregator.breakdown(self._to_query(sample), record)

    # ======================================
    # Status
    # ======================================
    @property
    def state(self) -> PredictorState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is PredictorState.READY

    @property
    def store(self) -> Optional[ReferenceStore]:
        return self._store

    def get_status(self) -> dict:
        """
        Get current predictor status.

        Returns:
            Dictionary with predictor state information.
        """
        store = self._store
        return {
            "state": self._state.value,
            "source": self._source.source,
            "reference_records": len(store) if store else 0,
            "discarded_rows": store.discarded if store else 0,
            "default_k": self._config.predictor.default_k,
            "weights": self._weights.to_dict(),
            "statistics": {
                name: stats.to_dict() for name, stats in store.stats.items()
            } if store else {},
        }

    # ======================================
    # Internal helpers
    # ======================================
    def _check_ready(self) -> Optional[PredictionFailure]:
        if self._store is not None and self._store.is_empty:
            return PredictionFailure(
                kind=FailureKind.EMPTY_REFERENCE_SET,
                message="Reference dataset is empty",
            )

        if self._state is not PredictorState.READY:
            return PredictionFailure(
                kind=FailureKind.NOT_READY,
                message=f"Predictor is {self._state.value}; call initialize() first",
            )

        return None

    def _to_query(self, sample: Union[QuerySample, Mapping[str, Any]]) -> QuerySample:
        if isinstance(sample, QuerySample):
            return sample
        return self._record_normalizer.to_query(sample)

    def _rank(self, query: QuerySample) -> list:
        """
        Distance to every reference record, ascending.

        sorted() is stable, so equal distances keep dataset order.
        """
        scored = [
            (self._aggregator.distance(query, record), record)
            for record in self._store.records
        ]
        return sorted(scored, key=lambda pair: pair[0])
