# ==============================================
# HalfWaveLookup
# ==============================================
#
# PURPOSE:
#   Single-dimension nearest-value lookup across two tables:
#
#     mass activity  ──closest──▶  source_pdf  ──join──▶  half-wave potential
#     (mass_activity table)                               (half_wave table)
#
#   No weighting, no multi-feature distance: one linear scan for the
#   closest mass activity, then a join on the source document.
#
# TABLE COLUMNS:
# --------------
#   mass_activity rows: "Pt", "PT/NOTPT", "Metal elements",
#                       "mass_activity_A_per_mg", "source_pdf"
#   half_wave rows:     "source_pdf", "half_wave_potential_v"
#
# CANDIDATE FILTER:
# -----------------
#   Pt catalysts:     integer part of Pt == 1
#   Non-Pt catalysts: PT/NOTPT == "NOTPT" and Metal elements contains
#                     the metal (only "Co" and "Fe" are supported)
#
# ==============================================

import logging
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from catalyst_knn.normalization.value_parser import ValueParser


logger = logging.getLogger(__name__)

SUPPORTED_METALS: Tuple[str, ...] = ("Co", "Fe")

MASS_ACTIVITY_COLUMN = "mass_activity_A_per_mg"
SOURCE_COLUMN = "source_pdf"
HALF_WAVE_COLUMN = "half_wave_potential_v"


@dataclass(frozen=True)
class MassActivityCandidate:
    """A mass_activity row that passed the filter, with its parsed value."""
    mass_activity: float
    source_pdf: Optional[str]
    row: Mapping[str, Any]


@dataclass
class LookupResult:
    """Outcome of predict_half_wave(). success=False carries an error message."""
    mass_activity: float
    is_pt: bool
    metal: Optional[str] = None
    success: bool = False
    half_wave_potential: Optional[float] = None
    source_pdf: Optional[str] = None
    closest_mass_activity: Optional[float] = None
    difference: Optional[float] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class HalfWaveLookup:
    """
    Closest-mass-activity lookup joined to the half-wave table.
    """

    def __init__(
        self,
        mass_activity_rows: Sequence[Mapping[str, Any]],
        half_wave_rows: Sequence[Mapping[str, Any]]
    ):
        self._mass_activity_rows = tuple(mass_activity_rows or ())
        self._half_wave_rows = tuple(half_wave_rows or ())

    def find_candidates(self, is_pt: bool, metal: Optional[str] = None) -> List[MassActivityCandidate]:
        """
        Rows matching the catalyst type, with a parseable mass activity.

        Raises:
            ValueError: If is_pt is False and metal is not "Co" or "Fe"
        """
        if is_pt:
            rows = [row for row in self._mass_activity_rows if self._is_pt_row(row)]
        else:
            if metal not in SUPPORTED_METALS:
                raise ValueError(f"metal must be one of {SUPPORTED_METALS}, got {metal!r}")
            rows = [
                row for row in self._mass_activity_rows
                if str(row.get("PT/NOTPT") or "").upper() == "NOTPT"
                and self._contains_element(row.get("Metal elements"), metal)
            ]

        candidates = []
        for row in rows:
            value = ValueParser.parse_first_number(row.get(MASS_ACTIVITY_COLUMN))
            if value is not None:
                candidates.append(MassActivityCandidate(
                    mass_activity=value,
                    source_pdf=row.get(SOURCE_COLUMN) or None,
                    row=row,
                ))
        return candidates

    @staticmethod
    def find_closest(
        candidates: Sequence[MassActivityCandidate],
        mass_activity: float
    ) -> Optional[MassActivityCandidate]:
        """Smallest absolute difference; the first candidate wins ties."""
        closest = None
        best = None
        for candidate in candidates:
            diff = abs(candidate.mass_activity - mass_activity)
            if best is None or diff < best:
                closest, best = candidate, diff
        return closest

    def half_wave_for_source(self, source_pdf: str) -> Optional[float]:
        """
        Half-wave potential of the first row for a source document.

        Exact match first, then a match ignoring case and slash direction.
        """
        matches = [row for row in self._half_wave_rows if row.get(SOURCE_COLUMN) == source_pdf]

        if not matches:
            wanted = self._normalize_path(source_pdf)
            matches = [
                row for row in self._half_wave_rows
                if self._normalize_path(row.get(SOURCE_COLUMN)) == wanted
            ]

        if not matches:
            logger.warning("No half-wave row for source %s", source_pdf)
            return None

        value = ValueParser.parse_first_number(matches[0].get(HALF_WAVE_COLUMN))
        if value is None:
            logger.warning("Unparseable half-wave value %r for %s",
                           matches[0].get(HALF_WAVE_COLUMN), source_pdf)
        return value

    def predict_half_wave(
        self,
        is_pt: bool,
        mass_activity: float,
        metal: Optional[str] = None
    ) -> LookupResult:
        """
        mass activity → closest source → half-wave potential.

        Args:
            is_pt: Platinum-based catalyst?
            mass_activity: Mass activity in A/mg
            metal: "Co" or "Fe" for non-Pt catalysts

        Returns:
            LookupResult; errors are reported in result.error, not raised.
        """
        result = LookupResult(mass_activity=mass_activity, is_pt=is_pt, metal=metal)

        try:
            candidates = self.find_candidates(is_pt, metal)
        except ValueError as e:
            result.error = str(e)
            return result

        closest = self.find_closest(candidates, mass_activity)
        if closest is None or not closest.source_pdf:
            result.error = "No matching mass activity data"
            return result

        result.source_pdf = closest.source_pdf
        result.closest_mass_activity = closest.mass_activity
        result.difference = abs(closest.mass_activity - mass_activity)

        half_wave = self.half_wave_for_source(closest.source_pdf)
        if half_wave is None:
            result.error = "No half-wave potential found for the source document"
            return result

        result.half_wave_potential = half_wave
        result.success = True
        logger.info("✓ Half-wave %.3f V from %s", half_wave, closest.source_pdf)
        return result

    @staticmethod
    def _is_pt_row(row: Mapping[str, Any]) -> bool:
        value = ValueParser.parse_float(row.get("Pt"))
        return value is not None and math.trunc(value) == 1

    @staticmethod
    def _contains_element(cell: Any, element: str) -> bool:
        if ValueParser.is_null(cell):
            return False
        return element.upper() in str(cell).upper()

    @staticmethod
    def _normalize_path(path: Any) -> str:
        return str(path or "").replace("\\", "/").lower()
