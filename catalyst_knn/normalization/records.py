# ==============================================
# Records (Data Classes)
# ==============================================
#
# PURPOSE:
#   Typed containers for one catalyst entry. Raw rows arrive as
#   string-keyed dicts; everything past the RecordNormalizer works
#   with these frozen records instead.
#
# CLASSES:
# --------
# - CategoricalFeatures (frozen dataclass)
#     metal, mof, form, ligand, atmosphere: Optional[str]
#     None means "missing" (blank / NAN / NONE were folded at construction).
#
# - NumericFeatures (frozen dataclass)
#     pyro_temp, bet, rpm, scan_rate: Optional[float]
#     None means "missing or unparseable".
#
# - QuerySample (frozen dataclass)
#     categorical + numeric, no target.
#
# - ReferenceRecord (frozen dataclass)
#     index + categorical + numeric + target (measured E_half, V vs RHE).
#
# CONSTANTS:
# ----------
# - NUMERIC_FEATURES: the four numeric feature keys, in weight order
# - CATEGORICAL_FEATURES: the five categorical feature keys
# - COLUMN_NAMES: short key -> dataset column name
# - TARGET_COLUMN: dataset column holding the measured half-wave potential
#
# ==============================================

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


CATEGORICAL_FEATURES: Tuple[str, ...] = ("metal", "mof", "form", "ligand", "atmosphere")
NUMERIC_FEATURES: Tuple[str, ...] = ("pyro_temp", "bet", "rpm", "scan_rate")

COLUMN_NAMES: Dict[str, str] = {
    "metal": "Materials_Structure.Active_Metal",
    "mof": "Materials_Structure.MOF_Name",
    "form": "Materials_Structure.Main_Form_SA_or_Cluster",
    "ligand": "Materials_Structure.Ligand_Type",
    "atmosphere": "Materials_Structure.Pyrolysis_Atmosphere",
    "pyro_temp": "Materials_Structure.Pyrolysis_Temp_C",
    "bet": "Materials_Structure.BET_m2g",
    "rpm": "Experimental_Conditions.Rotation_rpm",
    "scan_rate": "Experimental_Conditions.Scan_Rate_mV_s",
}

TARGET_COLUMN = "Electrochemical_Performance.E_half_V_vs_RHE"


@dataclass(frozen=True)
class CategoricalFeatures:
    """Free-text material descriptors."""
    metal: Optional[str] = None  # e.g. "Co,Fe"
    mof: Optional[str] = None  # e.g. "ZIF-8"
    form: Optional[str] = None  # e.g. "SA", "Cluster", "SA and cluster"
    ligand: Optional[str] = None  # e.g. "2-methylimidazole"
    atmosphere: Optional[str] = None  # e.g. "Ar, then H2"


@dataclass(frozen=True)
class NumericFeatures:
    """Process parameters."""
    pyro_temp: Optional[float] = None  # pyrolysis temperature, deg C
    bet: Optional[float] = None  # BET surface area, m2/g
    rpm: Optional[float] = None  # RDE rotation speed
    scan_rate: Optional[float] = None  # mV/s

    def get(self, name: str) -> Optional[float]:
        return getattr(self, name)


@dataclass(frozen=True)
class QuerySample:
    """A candidate catalyst whose half-wave potential is unknown."""
    categorical: CategoricalFeatures = field(default_factory=CategoricalFeatures)
    numeric: NumericFeatures = field(default_factory=NumericFeatures)


@dataclass(frozen=True)
class ReferenceRecord:
    """A catalyst with a measured half-wave potential."""
    index: int  # position among the retained reference rows
    target: float
    categorical: CategoricalFeatures = field(default_factory=CategoricalFeatures)
    numeric: NumericFeatures = field(default_factory=NumericFeatures)
