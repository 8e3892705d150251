import math
import re
from typing import Any, Optional


class ValueParser:
    NULL_VARIANTS = {"nan", "none", "null", "nil", ""}

    LEADING_NUMBER_PATTERN = re.compile(
        r'^[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?'
    )
    BRACKET_NUMBER_PATTERN = re.compile(r'[-+]?\d*\.?\d+')
    ANY_NUMBER_PATTERN = re.compile(r'[-+]?\d*\.?\d+(?:[eE][-+]?\d+)?')

    @classmethod
    def is_null(cls, value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, float) and value != value:
            return True
        if isinstance(value, str):
            return value.strip().lower() in cls.NULL_VARIANTS
        return False

    @classmethod
    def clean_text(cls, value: Any) -> Optional[str]:
        if cls.is_null(value):
            return None
        return str(value).strip()

    @classmethod
    def parse_float(cls, value: Any) -> Optional[float]:
        """
        Tolerant float parse used for targets and numeric features.

        "['0.830', '0.920']" -> 0.83 (first token of a bracketed list)
        "0.85 V"             -> 0.85 (leading number)
        "NAN", "", None      -> None
        """
        if cls.is_null(value):
            return None

        if isinstance(value, bool):
            return None

        if isinstance(value, (int, float)):
            return cls._finite(float(value))

        text = str(value).strip()

        if "[" in text:
            match = cls.BRACKET_NUMBER_PATTERN.search(text)
            return float(match.group()) if match else None

        try:
            return cls._finite(float(text))
        except ValueError:
            pass

        match = cls.LEADING_NUMBER_PATTERN.match(text)
        if match:
            return float(match.group())
        return None

    @classmethod
    def parse_first_number(cls, value: Any) -> Optional[float]:
        """Strip thousands separators and take the first number anywhere in the text."""
        if cls.is_null(value):
            return None

        if isinstance(value, bool):
            return None

        if isinstance(value, (int, float)):
            return cls._finite(float(value))

        match = cls.ANY_NUMBER_PATTERN.search(str(value).replace(",", ""))
        return float(match.group()) if match else None

    @staticmethod
    def _finite(number: float) -> Optional[float]:
        return number if math.isfinite(number) else None
