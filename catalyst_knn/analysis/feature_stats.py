# ==============================================
# FeatureStatistics
# ==============================================
#
# PURPOSE:
#   Data class that holds mean / standard deviation for one numeric
#   feature of the reference dataset. The numeric similarity kernel
#   standardizes both values with these before comparing them.
#
# CLASS: FeatureStatistics (dataclass)
# ------------------------------------
#   Attributes:
#   -----------
#   - name: str     → Numeric feature key ("pyro_temp", "bet", ...)
#   - mean: float   → Population mean of the valid values
#   - std: float    → Population standard deviation, never 0
#   - count: int    → How many reference records had a valid value
#
#   Methods:
#   --------
#   - from_values(name, values) -> FeatureStatistics  (classmethod)
#       mean=0, std=1 when there are no values or the statistics are
#       not finite; std=1 when all values are identical.
#
#   - z_score(value: float) -> float
#
#   - to_dict() / from_dict()
#
# ==============================================

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable


MIN_STD = 1e-12


@dataclass(frozen=True)
class FeatureStatistics:
    """
    Reference-set statistics for a single numeric feature.
    """

    name: str
    mean: float = 0.0
    std: float = 1.0
    count: int = 0

    def __post_init__(self):
        if not self.std > 0:
            raise ValueError(f"std for '{self.name}' must be positive, got {self.std}")

    @classmethod
    def from_values(cls, name: str, values: Iterable[float]) -> "FeatureStatistics":
        """
        Compute population mean and standard deviation.

        Args:
            name: Feature key
            values: Valid (already parsed) values

        Returns:
            FeatureStatistics with a strictly positive std
        """
        values = list(values)
        if not values:
            return cls(name=name)

        count = len(values)
        # Work on values scaled into [-1, 1] so huge inputs cannot overflow
        scale = max(abs(v) for v in values)
        if scale == 0:
            return cls(name=name, count=count)

        scaled = [v / scale for v in values]
        scaled_mean = math.fsum(scaled) / count
        variance = math.fsum((s - scaled_mean) ** 2 for s in scaled) / count
        mean = scaled_mean * scale
        std = math.sqrt(variance) * scale

        if not (math.isfinite(mean) and math.isfinite(std)):
            return cls(name=name, count=count)

        # Identical values (up to rounding): keep the kernel well defined
        if std < MIN_STD:
            std = 1.0

        return cls(name=name, mean=mean, std=std, count=count)

    def z_score(self, value: float) -> float:
        return (value - self.mean) / self.std

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "mean": self.mean,
            "std": self.std,
            "count": self.count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeatureStatistics":
        return cls(
            name=data["name"],
            mean=data.get("mean", 0.0),
            std=data.get("std", 1.0),
            count=data.get("count", 0),
        )
