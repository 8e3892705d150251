# ==============================================
# LOOKUP: mass activity → half-wave potential
# ==============================================
#
# Modules:
# --------
# - half_wave_lookup.py → Closest mass activity, joined on source_pdf
#
# ==============================================

from .half_wave_lookup import HalfWaveLookup, LookupResult, MassActivityCandidate

__all__ = ["HalfWaveLookup", "LookupResult", "MassActivityCandidate"]
