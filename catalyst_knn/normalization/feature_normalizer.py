# ==============================================
# FeatureNormalizer
# ==============================================
#
# PURPOSE:
#   Turn free-text categorical descriptors into canonical tags
#   so that two catalysts can be compared by set overlap.
#
# WHY THIS CLASS EXISTS:
#   The reference table was curated by hand from papers, so the same
#   thing is written many ways:
#     - "2-methylimidazole", "2-MIM", "mim", "2-methylimidazolate"
#     - "SA", "single atom", "Single-Atom", "dual atom"
#     - "Ar/H2", "Ar, then H2", "argon + 5% H2"
#   Without canonical tags these compare as unrelated strings.
#
# CLASS: FeatureNormalizer
# ------------------------
#   Stateless utility class. Every recognizer is an ordered rule table
#   (tuple of (patterns, canonical_tag) pairs) evaluated top to bottom,
#   so adding a synonym never touches the similarity code.
#
#   Methods:
#   --------
#   - metal_tokens(text) -> set[str]
#   - mof_keywords(text) -> set[str]
#   - infer_form(metal, form) -> str
#   - form_tags(text) -> set[str]
#   - ligand_tags(text) -> set[str]
#   - atmosphere_features(text) -> AtmosphereFeatures
#
# ==============================================

import re
from dataclasses import dataclass
from typing import Dict, Optional, Set, Tuple


@dataclass(frozen=True)
class AtmosphereFeatures:
    """Structured view of a pyrolysis atmosphere description."""
    base: str = "unknown"  # inert carrier gas: "ar", "n2" or "unknown"
    additive: Optional[str] = None  # "h2", "nh3", "co2" or None
    sequence: bool = False  # multi-stage ("then" or "/")
    special: Optional[str] = None  # "co2", "moist" or None


class FeatureNormalizer:
    """
    Maps raw categorical field values to canonical tags.
    """

    # --- Structural family (MOF) ---
    SPECIFIC_ZIF_TAGS: Tuple[str, ...] = ("zif-8", "zif-67")
    GENERIC_ZIF_TAG = "zif"
    KNOWN_MOFS: Tuple[str, ...] = (
        "mof-5", "hkust-1", "mil-101", "nh2-mil-101", "gt-18",
        "zn/fe-mof", "fe-zif8", "cozn", "zif-zn-co",
    )
    MOF_AUXILIARY_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
        (("bimetallic",), "bimetallic"),
        (("cozn", "zn-co"), "cozn"),
    )

    # --- Structural form ---
    SINGLE_ATOM_TAG = "sa"
    CLUSTER_TAG = "cluster"
    FORM_SYNONYMS: Dict[str, str] = {
        "sa": "sa",
        "single-atom": "sa",
        "dual-atom": "sa",
        "dual": "sa",
        "cluster": "cluster",
        "clusters": "cluster",
    }
    _ATOM_PHRASE = re.compile(r'\b(single|dual)[\s_-]+atoms?\b')
    _FORM_CONJUNCTION = re.compile(r'\band\b|&')
    _FORM_SEPARATOR = re.compile(r'[,\s]+')

    # --- Ligand ---
    PRIMARY_LIGAND_TAG = "2-mi"
    LIGAND_ALIASES: Dict[str, str] = {
        "2-methylimidazole": "2-mi",
        "mim": "2-mi",
        "2-mim": "2-mi",
        "2-methylimidazolate": "2-mi",
        "1,4-benzenedicarboxylate": "bdc",
        "bdc": "bdc",
        "1,3,5-trimesic acid (h3btc)": "btc",
        "btc": "btc",
        "2-aminoterephthalic acid": "nh2-bdc",
        "6-chloropurine": "6-cp",
        "2-aminothiazole": "2-atz",
    }
    # Checked in order, first hit wins
    LIGAND_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
        (("methylimidazol", "mim"), "2-mi"),
        (("benzenedicarboxylate",), "bdc"),
        (("trimesic",), "btc"),
        (("aminoterephthalic",), "nh2-bdc"),
        (("chloropurine",), "6-cp"),
        (("aminothiazole",), "2-atz"),
    )
    _LIGAND_SEPARATOR = re.compile(r'[,&+]')

    # --- Atmosphere ---
    BASE_GASES: Dict[str, str] = {
        "ar": "ar",
        "argon": "ar",
        "n2": "n2",
        "nitrogen": "n2",
    }
    ADDITIVE_GASES: Dict[str, str] = {
        "h2": "h2",
        "hydrogen": "h2",
        "nh3": "nh3",
        "ammonia": "nh3",
        "co2": "co2",
    }
    ADDITIVE_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
        (("nh3", "ammonia"), "nh3"),
        (("co2",), "co2"),
        (("h2", "hydrogen"), "h2"),
    )
    SPECIAL_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
        (("co2",), "co2"),
        (("moist",), "moist"),
    )
    _ATMOSPHERE_SEPARATOR = re.compile(r'\bthen\b|[,&+/\s]+')

    # ======================================
    # Active metal
    # ======================================
    @classmethod
    def metal_tokens(cls, text: Optional[str]) -> Set[str]:
        """
        "Co, Fe" -> {"co", "fe"};  "Pt Pt" -> {"pt"};  None -> set()
        """
        if not text:
            return set()
        return {
            token.strip().lower()
            for token in re.split(r'[,\s]+', text)
            if token.strip()
        }

    # ======================================
    # Structural family
    # ======================================
    @classmethod
    def mof_keywords(cls, text: Optional[str]) -> Set[str]:
        """
        Extract family tags from a MOF name by substring membership.

        "ZIF-8 derived"     -> {"zif-8"}
        "ZIF-L"             -> {"zif"}
        "CoZn bimetallic"   -> {"cozn", "bimetallic"}
        """
        if not text:
            return set()

        lower = text.lower()
        keywords = {tag for tag in cls.SPECIFIC_ZIF_TAGS if tag in lower}
        if cls.GENERIC_ZIF_TAG in lower and not keywords:
            keywords.add(cls.GENERIC_ZIF_TAG)

        keywords.update(mof for mof in cls.KNOWN_MOFS if mof in lower)
        keywords.update(cls._match_all(lower, cls.MOF_AUXILIARY_RULES))
        return keywords

    # ======================================
    # Structural form
    # ======================================
    @classmethod
    def infer_form(cls, metal: Optional[str], form: Optional[str]) -> str:
        """Fill in a missing form: platinum catalysts are clusters, everything else single-atom."""
        if form and form.strip():
            return form
        if metal and "pt" in metal.lower():
            return "Cluster"
        return "SA"

    @classmethod
    def form_tags(cls, text: Optional[str]) -> Set[str]:
        if not text:
            return set()

        lower = cls._ATOM_PHRASE.sub(r'\1-atom', text.lower())
        lower = cls._FORM_CONJUNCTION.sub(',', lower)

        tags = set()
        for token in cls._FORM_SEPARATOR.split(lower):
            tag = cls.FORM_SYNONYMS.get(token.strip())
            if tag:
                tags.add(tag)
        return tags

    # ======================================
    # Ligand
    # ======================================
    @classmethod
    def ligand_tags(cls, text: Optional[str]) -> Set[str]:
        """
        Split on "," "&" "+" and canonicalize every part.

        Alias dictionary first, then LIGAND_RULES in order.
        Parts that match nothing are dropped.
        """
        if not text:
            return set()

        tags = set()
        for part in cls._LIGAND_SEPARATOR.split(text.lower()):
            part = part.strip()
            if not part:
                continue

            if part in cls.LIGAND_ALIASES:
                tags.add(cls.LIGAND_ALIASES[part])
                continue

            tag = cls._first_match(part, cls.LIGAND_RULES)
            if tag:
                tags.add(tag)
        return tags

    # ======================================
    # Atmosphere
    # ======================================
    @classmethod
    def atmosphere_features(cls, text: Optional[str]) -> AtmosphereFeatures:
        """
        "Ar/H2"       -> base="ar", additive="h2", sequence=True
        "N2 + NH3"    -> base="n2", additive="nh3", sequence=False
        "moist air"   -> base="unknown", special="moist"
        """
        if not text:
            return AtmosphereFeatures()

        lower = text.lower().strip()
        tokens = [t for t in cls._ATMOSPHERE_SEPARATOR.split(lower) if t]

        base = None
        additive = None
        for token in tokens:
            if base is None and token in cls.BASE_GASES:
                base = cls.BASE_GASES[token]
                continue
            if additive is None:
                additive = cls.ADDITIVE_GASES.get(token) or cls._first_match(
                    token, cls.ADDITIVE_RULES
                )

        return AtmosphereFeatures(
            base=base or "unknown",
            additive=additive,
            sequence="then" in lower or "/" in lower,
            special=cls._first_match(lower, cls.SPECIAL_RULES),
        )

    # ======================================
    # Rule table helpers
    # ======================================
    @staticmethod
    def _first_match(
        text: str,
        rules: Tuple[Tuple[Tuple[str, ...], str], ...]
    ) -> Optional[str]:
        for patterns, tag in rules:
            if any(pattern in text for pattern in patterns):
                return tag
        return None

    @staticmethod
    def _match_all(
        text: str,
        rules: Tuple[Tuple[Tuple[str, ...], str], ...]
    ) -> Set[str]:
        return {
            tag for patterns, tag in rules
            if any(pattern in text for pattern in patterns)
        }
