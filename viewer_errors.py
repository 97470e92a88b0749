class TvError(Exception):
    """Base class for every error surfaced at the process boundary."""

    kind = "error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind


class IoError(TvError):
    kind = "io error"


class DecodeError(TvError):
    kind = "decode error"


class LoadingFailed(TvError):
    kind = "loading failed"


class FileNotFound(TvError):
    kind = "file not found"


class PermissionDenied(TvError):
    kind = "permission denied"


class UnknownFileType(TvError):
    kind = "unknown file type"


class DataIndexingError(TvError):
    kind = "data indexing error"
