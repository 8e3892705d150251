# ==============================================
# TOPIC 1: NORMALIZATION
# ==============================================
#
# This package turns raw, hand-curated table rows into typed
# records and canonical categorical tags BEFORE anything is
# compared.
#
# Modules:
# --------
# - value_parser.py       → Tolerant float parsing, null-token folding
# - records.py            → Typed record data classes + column names
# - record_normalizer.py  → Raw row / query dict → ReferenceRecord / QuerySample
# - feature_normalizer.py → Categorical text → canonical tag sets
#
# ==============================================

from .value_parser import ValueParser
from .records import (
    CategoricalFeatures,
    NumericFeatures,
    QuerySample,
    ReferenceRecord,
)
from .record_normalizer import RecordNormalizer
from .feature_normalizer import AtmosphereFeatures, FeatureNormalizer

__all__ = [
    "ValueParser",
    "CategoricalFeatures",
    "NumericFeatures",
    "QuerySample",
    "ReferenceRecord",
    "RecordNormalizer",
    "AtmosphereFeatures",
    "FeatureNormalizer",
]
