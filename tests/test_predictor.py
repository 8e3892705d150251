# ==============================================
# Tests for KNNPredictor
# ==============================================
#
# Lifecycle, ranking, failure values and the async wrapper.
# ==============================================

import asyncio
import math

import pytest

from catalyst_knn.analysis import (
    FailureKind,
    PredictionFailure,
    PredictionResult,
    PredictorState,
    StatsAnalyzer,
)
from catalyst_knn.config import AppConfig, PredictorConfig
from catalyst_knn.errors import InitializationError
from catalyst_knn.normalization import RecordNormalizer
from catalyst_knn.predictor import KNNPredictor
from catalyst_knn.storage import CsvSource


class TestLifecycle:

    def test_starts_uninitialized(self):
        knn = KNNPredictor(config=AppConfig())

        assert knn.state is PredictorState.UNINITIALIZED
        assert not knn.is_ready

    def test_initialize_makes_ready(self, predictor):
        assert predictor.state is PredictorState.READY
        assert predictor.is_ready
        assert len(predictor.store) == 4
        assert predictor.store.discarded == 1

    def test_second_initialize_rejected(self, predictor, reference_rows):
        with pytest.raises(RuntimeError):
            predictor.initialize(reference_rows)

    def test_predict_before_initialize(self, exact_query):
        result = KNNPredictor(config=AppConfig()).predict(exact_query)

        assert isinstance(result, PredictionFailure)
        assert result.kind is FailureKind.NOT_READY
        assert not result.ok

    def test_missing_file_raises(self, tmp_path):
        knn = KNNPredictor(
            config=AppConfig(),
            source=CsvSource(tmp_path / "missing.csv")
        )

        with pytest.raises(InitializationError):
            knn.initialize()

        assert knn.state is PredictorState.FAILED_INIT

    def test_empty_reference_set(self, make_row, exact_query):
        knn = KNNPredictor(config=AppConfig())

        failure = knn.initialize([make_row(target="NAN", metal="Co"), make_row(target="")])

        assert failure.kind is FailureKind.EMPTY_REFERENCE_SET
        assert knn.state is PredictorState.FAILED_INIT

        result = knn.predict(exact_query)
        assert result.kind is FailureKind.EMPTY_REFERENCE_SET

    def test_retry_after_failed_init(self, tmp_path, reference_rows):
        knn = KNNPredictor(
            config=AppConfig(),
            source=CsvSource(tmp_path / "missing.csv")
        )
        with pytest.raises(InitializationError):
            knn.initialize()

        assert knn.initialize(reference_rows) is None
        assert knn.is_ready

    def test_huge_numeric_values_initialize(self, make_row):
        knn = KNNPredictor(config=AppConfig())

        failure = knn.initialize([
            make_row(target="0.80", metal="Co", bet="1e200"),
            make_row(target="0.90", metal="Co", bet="5"),
        ])

        assert failure is None
        assert knn.is_ready
        assert knn.predict({"metal": "Co", "bet": 5}).predicted_value == pytest.approx(0.90)

    def test_unexpected_error_leaves_predictor_retryable(self, monkeypatch, reference_rows):
        def explode(self, records):
            raise OverflowError("numerical result out of range")

        monkeypatch.setattr(StatsAnalyzer, "analyze", explode)
        knn = KNNPredictor(config=AppConfig())

        with pytest.raises(InitializationError) as exc_info:
            knn.initialize(reference_rows)

        assert isinstance(exc_info.value.__cause__, OverflowError)
        assert knn.state is PredictorState.FAILED_INIT

        monkeypatch.undo()
        assert knn.initialize(reference_rows) is None
        assert knn.is_ready

    def test_initialize_async(self, reference_rows, exact_query):
        knn = KNNPredictor(config=AppConfig())

        failure = asyncio.run(knn.initialize_async(reference_rows))

        assert failure is None
        assert knn.is_ready
        assert knn.predict(exact_query).predicted_value == pytest.approx(0.88)


class TestPredict:

    def test_exact_match_ranks_first(self, predictor, exact_query):
        result = predictor.predict(exact_query)

        assert isinstance(result, PredictionResult)
        assert result.ok
        assert result.predicted_value == pytest.approx(0.88)
        assert result.neighbors[0].index == 1
        assert result.neighbors[0].distance == pytest.approx(0.0, abs=1e-9)
        assert result.neighbors[0].display_similarity == 1.0

    def test_prediction_is_closest_target(self, predictor, exact_query):
        result = predictor.predict(exact_query, k=4)
        assert result.predicted_value == result.neighbors[0].target_value

    def test_neighbors_sorted_by_distance(self, predictor, exact_query):
        result = predictor.predict(exact_query, k=4)
        distances = [n.distance for n in result.neighbors]

        assert distances == sorted(distances)
        assert sorted(n.index for n in result.neighbors) == [0, 1, 2, 3]

    def test_default_k_from_config(self, reference_rows, exact_query):
        knn = KNNPredictor(config=AppConfig(predictor=PredictorConfig(default_k=2)))
        knn.initialize(reference_rows)

        assert len(knn.predict(exact_query).neighbors) == 2

    def test_k_larger_than_dataset(self, predictor, exact_query):
        assert len(predictor.predict(exact_query, k=50).neighbors) == 4

    @pytest.mark.parametrize("k", [0, -1])
    def test_invalid_k(self, predictor, exact_query, k):
        with pytest.raises(ValueError):
            predictor.predict(exact_query, k=k)

    def test_ties_keep_dataset_order(self, make_row):
        features = dict(metal="Co", mof="ZIF-67", form="SA", pyro_temp=900)
        knn = KNNPredictor(config=AppConfig())
        knn.initialize([
            make_row(target="0.70", **features),
            make_row(target="0.90", **features),
            make_row(target="0.80", **features),
        ])

        result = knn.predict({"metal": "Co", "mof": "ZIF-67", "form": "SA", "pyro_temp": 900}, k=3)

        assert [n.index for n in result.neighbors] == [0, 1, 2]
        assert result.predicted_value == pytest.approx(0.70)

    def test_unrelated_query_has_negative_display_similarity(self, predictor):
        result = predictor.predict({"metal": "Ni", "form": "nanoparticles"}, k=4)

        # Every record is at the maximum distance, so dataset order wins
        assert [n.index for n in result.neighbors] == [0, 1, 2, 3]
        assert result.predicted_value == pytest.approx(0.85)
        for neighbor in result.neighbors:
            assert neighbor.distance == pytest.approx(10.0)
            assert neighbor.display_similarity == pytest.approx(-9.0)

    def test_display_similarity_rounding(self, predictor, exact_query):
        for neighbor in predictor.predict(exact_query, k=4).neighbors:
            assert neighbor.display_similarity == round(1.0 - neighbor.distance, 3)

    def test_overflowing_values_keep_ranking(self, make_row):
        knn = KNNPredictor(config=AppConfig())
        knn.initialize([
            make_row(target="0.80", metal="Co", bet="1e308"),
            make_row(target="0.85", metal="Co", bet="1e308"),
            make_row(target="0.90", metal="Co", bet="1"),
        ])

        result = knn.predict({"metal": "Co", "bet": 1}, k=3)

        assert result.neighbors[0].index == 2
        assert result.predicted_value == pytest.approx(0.90)
        assert all(math.isfinite(n.distance) for n in result.neighbors)
        assert result.neighbors[0].distance < result.neighbors[1].distance
        for value in knn.explain({"metal": "Co", "bet": 1}, 0).values():
            assert math.isfinite(value)

    def test_target_rounded_to_four_decimals(self, make_row):
        knn = KNNPredictor(config=AppConfig())
        knn.initialize([make_row(target="0.876543", metal="Co")])

        assert knn.predict({"metal": "Co"}).predicted_value == 0.8765

    def test_accepts_query_sample(self, predictor, exact_query):
        sample = RecordNormalizer().to_query(exact_query)
        assert predictor.predict(sample).predicted_value == pytest.approx(0.88)

    def test_query_by_column_names(self, predictor, reference_rows):
        row = dict(reference_rows[1])
        result = predictor.predict(row)
        assert result.neighbors[0].index == 1

    def test_to_dict(self, predictor, exact_query):
        data = predictor.predict(exact_query, k=2).to_dict()

        assert data["predicted_value"] == pytest.approx(0.88)
        assert len(data["neighbors"]) == 2
        assert set(data["neighbors"][0]) == {"index", "target_value", "distance", "display_similarity"}


class TestExplainAndStatus:

    def test_explain_exact_match(self, predictor, exact_query):
        breakdown = predictor.explain(exact_query, 1)
        for value in breakdown.values():
            assert value == pytest.approx(1.0)

    def test_explain_not_ready(self, exact_query):
        result = KNNPredictor(config=AppConfig()).explain(exact_query, 0)
        assert result.kind is FailureKind.NOT_READY

    def test_status(self, predictor):
        status = predictor.get_status()

        assert status["state"] == "ready"
        assert status["reference_records"] == 4
        assert status["discarded_rows"] == 1
        assert set(status["statistics"]) == {"pyro_temp", "bet", "rpm", "scan_rate"}

    def test_status_before_initialize(self):
        status = KNNPredictor(config=AppConfig()).get_status()

        assert status["state"] == "uninitialized"
        assert status["reference_records"] == 0
        assert status["statistics"] == {}
