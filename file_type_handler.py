import logging
import os

import pandas as pd

from table_errors import ImportParseFailure, UnsupportedFileType

logger = logging.getLogger(__name__)


class FileTypeHandler:
    """Reads delimited/JSON files into raw records and writes frames back out."""

    SUPPORTED = {".csv", ".json"}

    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in self.SUPPORTED:
            raise UnsupportedFileType(path)

    def read_records(self) -> list[dict]:
        if not os.path.exists(self.path) or os.path.getsize(self.path) == 0:
            return []

        if self.ext == ".csv":
            df = self._read_csv()
        else:
            df = self._read_json()
        logger.debug("Read %d records from %s", len(df), self.path)
        return df.to_dict(orient="records")

    def write_frame(self, df: pd.DataFrame) -> None:
        if self.ext == ".csv":
            df.to_csv(self.path, index=False)
        else:
            df.to_json(self.path, orient="records", indent=2)
        logger.debug("Wrote %d records to %s", len(df), self.path)

    def _read_csv(self) -> pd.DataFrame:
        try:
            return pd.read_csv(
                self.path,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except (pd.errors.ParserError, UnicodeDecodeError) as exc:
            raise ImportParseFailure(f"CSV parsing errors: {exc}") from exc

    def _read_json(self) -> pd.DataFrame:
        try:
            df = pd.read_json(self.path, orient="records", dtype=False)
        except ValueError as exc:
            raise ImportParseFailure(f"JSON parsing errors: {exc}") from exc
        # arrays of scalars or arrays come back with positional column labels
        if not all(isinstance(label, str) for label in df.columns):
            raise ImportParseFailure("JSON parsing errors: expected an array of objects")
        return df.astype(object).where(df.notna(), "")
