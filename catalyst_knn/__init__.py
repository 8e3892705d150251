# ==============================================
# Catalyst Half-Wave Potential Estimator
# ==============================================
#
# Package Structure (3 Topics + Predictor):
#
# catalyst_knn/
# ├── normalization/    # Topic 1: Parse raw rows into typed records + categorical tags
# ├── analysis/         # Topic 2: Statistics, similarity kernels, distance, results
# ├── storage/          # Topic 3: Reference dataset source + frozen reference store
# ├── lookup/           # Mass-activity -> source -> half-wave nearest-value lookup
# ├── config.py         # Configuration management
# ├── errors.py         # Exceptions surfaced to callers
# ├── predictor.py      # KNNPredictor (the class users interact with)
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
