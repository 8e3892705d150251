# ==============================================
# TOPIC 3: STORAGE (Reference data)
# ==============================================
#
# This package gets the reference table into memory and keeps it
# frozen for the rest of the session.
#
# Modules:
# --------
# - csv_source.py       → Fetch CSV text (file or http) and parse rows
# - reference_store.py  → Filter rows, build records + statistics, freeze
#
# ==============================================

from .csv_source import CsvSource
from .reference_store import ReferenceStore

__all__ = [
    "CsvSource",
    "ReferenceStore",
]
