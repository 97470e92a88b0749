import os
import time
import logging

import pandas as pd

from dataset import Dataset
from viewer_errors import (
    DecodeError,
    FileNotFound,
    IoError,
    LoadingFailed,
    PermissionDenied,
    UnknownFileType,
)

logger = logging.getLogger(__name__)

# integer columns with nulls stay integers instead of turning into floats
DTYPE_BACKEND = "numpy_nullable"

FILE_TYPES = {
    ".csv": "csv",
    ".parquet": "parquet",
    ".pq": "parquet",
    ".arrow": "arrow",
    ".ipc": "arrow",
    ".feather": "arrow",
    ".xlsx": "xlsx",
}


class FileTypeHandler:
    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()
        self.file_size = self._stat()
        self.file_type = FILE_TYPES.get(self.ext)
        if self.file_type is None:
            raise UnknownFileType(
                "Unsupported file type (use .csv, .parquet, .arrow, .feather or .xlsx)"
            )

    def _stat(self) -> int:
        try:
            if not os.path.exists(self.path):
                raise FileNotFoundError(self.path)
            if not os.path.isfile(self.path):
                raise LoadingFailed(f"Not a file: {self.path}")
            if not os.access(self.path, os.R_OK):
                raise PermissionError(self.path)
            return os.path.getsize(self.path)
        except FileNotFoundError:
            raise FileNotFound(f"File not found: {self.path}")
        except PermissionError:
            raise PermissionDenied(f"Permission denied: {self.path}")
        except OSError as exc:
            raise IoError(str(exc)) from exc

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def load(self) -> Dataset:
        start = time.monotonic()
        df = self._read_frame()
        if df.shape[1] == 0:
            raise LoadingFailed(f"No columns found in {self.name}")
        dataset = Dataset.from_frame(df, self.name)
        elapsed_ms = (time.monotonic() - start) * 1000
        logger.info(
            "Loaded %s (%d bytes, %d rows x %d columns) in %.0fms",
            self.path,
            self.file_size,
            dataset.nrows,
            dataset.ncols,
            elapsed_ms,
        )
        return dataset

    def _read_frame(self) -> pd.DataFrame:
        try:
            if self.file_type == "csv":
                return pd.read_csv(self.path, dtype_backend=DTYPE_BACKEND)
            if self.file_type == "parquet":
                self._ensure_arrow_engine()
                return pd.read_parquet(self.path, dtype_backend=DTYPE_BACKEND)
            if self.file_type == "arrow":
                self._ensure_arrow_engine()
                return pd.read_feather(self.path, dtype_backend=DTYPE_BACKEND)
            if self.file_type == "xlsx":
                self._ensure_excel_engine()
                return pd.read_excel(self.path, sheet_name=0, dtype_backend=DTYPE_BACKEND)
        except pd.errors.EmptyDataError as exc:
            raise LoadingFailed(f"{self.name} is empty") from exc
        except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as exc:
            raise DecodeError(f"Cannot decode {self.name}: {exc}") from exc
        except PermissionError as exc:
            raise PermissionDenied(f"Permission denied: {self.path}") from exc
        except OSError as exc:
            raise IoError(str(exc)) from exc
        raise UnknownFileType(f"Unsupported file type: {self.ext}")

    def _ensure_arrow_engine(self):
        try:
            import pyarrow  # noqa: F401
        except ImportError:
            raise LoadingFailed(
                "Parquet/Arrow support requires pyarrow. Install via: pip install pyarrow"
            )

    def _ensure_excel_engine(self):
        try:
            import openpyxl  # noqa: F401
        except ImportError:
            raise LoadingFailed(
                "XLSX support requires openpyxl. Install via: pip install openpyxl"
            )
