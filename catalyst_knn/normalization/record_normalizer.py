from typing import Any, Mapping, Optional

from .value_parser import ValueParser
from .records import (
    CATEGORICAL_FEATURES,
    COLUMN_NAMES,
    NUMERIC_FEATURES,
    TARGET_COLUMN,
    CategoricalFeatures,
    NumericFeatures,
    QuerySample,
    ReferenceRecord,
)


class RecordNormalizer:
    # Short keys accepted in queries besides the canonical ones
    KEY_ALIASES = {"atm": "atmosphere"}

    def __init__(self, value_parser: Optional[ValueParser] = None):
        self.value_parser = value_parser or ValueParser()

    def to_query(self, raw: Mapping[str, Any]) -> QuerySample:
        if not isinstance(raw, Mapping):
            raise ValueError("Query must be a mapping")

        return QuerySample(
            categorical=self._categorical(raw),
            numeric=self._numeric(raw),
        )

    def to_reference(self, raw: Mapping[str, Any], index: int) -> Optional[ReferenceRecord]:
        """Build a ReferenceRecord, or None when the target does not parse."""
        if not isinstance(raw, Mapping):
            raise ValueError("Reference row must be a mapping")

        target = self.parse_target(raw)
        if target is None:
            return None

        return ReferenceRecord(
            index=index,
            target=target,
            categorical=self._categorical(raw),
            numeric=self._numeric(raw),
        )

    def parse_target(self, raw: Mapping[str, Any]) -> Optional[float]:
        return self.value_parser.parse_float(raw.get(TARGET_COLUMN))

    def _categorical(self, raw: Mapping[str, Any]) -> CategoricalFeatures:
        values = {
            name: self.value_parser.clean_text(self._lookup(raw, name))
            for name in CATEGORICAL_FEATURES
        }
        return CategoricalFeatures(**values)

    def _numeric(self, raw: Mapping[str, Any]) -> NumericFeatures:
        values = {
            name: self.value_parser.parse_float(self._lookup(raw, name))
            for name in NUMERIC_FEATURES
        }
        return NumericFeatures(**values)

    def _lookup(self, raw: Mapping[str, Any], name: str) -> Any:
        if name in raw:
            return raw[name]

        for alias, canonical in self.KEY_ALIASES.items():
            if canonical == name and alias in raw:
                return raw[alias]

        return raw.get(COLUMN_NAMES[name])
