# ==============================================
# Result (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of a prediction, plus the
#   explicit failure values returned instead of raising.
#
# WHY THIS FILE EXISTS:
#   Separating data classes from logic keeps the predictor clean.
#   The CLI serializes these with to_dict().
#
# ENUMS:
# ------
# - PredictorState(Enum): UNINITIALIZED, INITIALIZING, READY, FAILED_INIT
# - FailureKind(Enum): NOT_READY, EMPTY_REFERENCE_SET
#
# CLASSES:
# --------
# - NeighborResult (dataclass)
#     index, target_value, distance, display_similarity
#
# - PredictionResult (dataclass)
#     predicted_value, neighbors (ascending distance, len ≤ K)
#
# - PredictionFailure (dataclass)
#     kind, message
#
# ==============================================

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List


class PredictorState(Enum):
    """
    Lifecycle of a KNNPredictor.

    UNINITIALIZED → INITIALIZING → READY
                                 → FAILED_INIT
    """
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED_INIT = "failed_init"


class FailureKind(Enum):
    """
    Structural problems reported to the caller as values.

    - NOT_READY: predict() called before a successful initialize()
    - EMPTY_REFERENCE_SET: no reference row had a parseable target
    """
    NOT_READY = "not_ready"
    EMPTY_REFERENCE_SET = "empty_reference_set"


@dataclass(frozen=True)
class NeighborResult:
    """
    One ranked reference record.

    display_similarity is 1 − distance rounded to 3 decimals. It is for
    display only: distance is unnormalized, so this can go negative.
    """

    index: int  # Position in the reference dataset
    target_value: float  # Measured E_half, rounded to 4 decimals
    distance: float  # Weighted distance to the query (≥ 0)
    display_similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "target_value": self.target_value,
            "distance": round(self.distance, 3),
            "display_similarity": self.display_similarity,
        }


@dataclass(frozen=True)
class PredictionResult:
    """
    Outcome of a successful prediction.

    predicted_value is ALWAYS the target of neighbors[0]; K only
    controls how many neighbors are reported.
    """

    predicted_value: float
    neighbors: List[NeighborResult] = field(default_factory=list)

    ok = True

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize for output.

        Returns:
            {"predicted_value": float, "neighbors": [ {...}, ... ]}
        """
        return {
            "predicted_value": self.predicted_value,
            "neighbors": [neighbor.to_dict() for neighbor in self.neighbors],
        }


@dataclass(frozen=True)
class PredictionFailure:
    """
    Explicit failure value returned by KNNPredictor.predict().
    """

    kind: FailureKind
    message: str = ""

    ok = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.kind.value,
            "message": self.message,
        }
