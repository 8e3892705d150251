# ==============================================
# CsvSource
# ==============================================
#
# PURPOSE:
#   Fetch a reference table as CSV text and parse it into row dicts
#   keyed by the header. This is the ingestion side of the predictor:
#   everything downstream only sees List[Dict[str, str]].
#
# SOURCES:
# --------
#   - "http://..." / "https://..."  → fetched with requests (timeout applies)
#   - anything else                 → read as a UTF-8 file path
#
# PARSING RULES:
# --------------
#   1. First row is the header (cells stripped)
#   2. Quoted cells may contain commas
#   3. Blank lines are skipped
#   4. Rows whose cell count differs from the header are skipped
#   5. Every cell is stripped
#
# ERRORS:
# -------
#   Network, file, decoding and CSV errors are wrapped in
#   InitializationError so callers handle one exception type.
#
# ==============================================

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Union

import requests

from catalyst_knn.errors import InitializationError


logger = logging.getLogger(__name__)


class CsvSource:
    """
    A CSV table at a file path or an http(s) URL.
    """

    def __init__(self, source: Union[str, Path], timeout: float = 10.0):
        """
        Args:
            source: File path or http(s) URL
            timeout: Seconds to wait for an HTTP response
        """
        self.source = str(source)
        self.timeout = timeout

    @property
    def is_remote(self) -> bool:
        return self.source.lower().startswith(("http://", "https://"))

    def load(self) -> List[Dict[str, str]]:
        """
        Fetch and parse the table.

        Returns:
            List of row dictionaries

        Raises:
            InitializationError: If the table cannot be fetched or parsed
        """
        try:
            rows = self.parse(self.fetch_text())
        except requests.RequestException as e:
            raise InitializationError(self.source, f"HTTP error: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise InitializationError(self.source, f"read error: {e}") from e
        except csv.Error as e:
            raise InitializationError(self.source, f"malformed CSV: {e}") from e

        logger.info("✓ Loaded %d rows from %s", len(rows), self.source)
        return rows

    def fetch_text(self) -> str:
        if self.is_remote:
            response = requests.get(self.source, timeout=self.timeout)
            response.raise_for_status()
            return response.text

        return Path(self.source).read_text(encoding="utf-8-sig")

    @staticmethod
    def parse(text: str) -> List[Dict[str, str]]:
        """
        Parse CSV text into row dictionaries.

        Args:
            text: Full CSV document, header first

        Returns:
            List of rows keyed by header name
        """
        reader = csv.reader(io.StringIO(text.strip()))

        headers = None
        rows = []
        for cells in reader:
            if not cells or not any(cell.strip() for cell in cells):
                continue

            if headers is None:
                headers = [cell.strip() for cell in cells]
                continue

            if len(cells) != len(headers):
                logger.debug("Skipping row with %d cells (expected %d)", len(cells), len(headers))
                continue

            rows.append({
                header: cell.strip()
                for header, cell in zip(headers, cells)
            })

        return rows
