class ChunkfileError(Exception):
    """Base class for every error reported by chunkfile."""


class InvalidParameterError(ChunkfileError):
    """Raised before any file is touched when an input is unusable."""


class NoChunksFoundError(ChunkfileError):
    """Raised when a merge prefix matches no chunk files."""

    def __init__(self, prefix_path):
        super().__init__("no chunk files found")
        self.prefix_path = prefix_path


class ChunkIOError(ChunkfileError):
    """
    Wraps an OSError raised while splitting or merging.

    Attributes:
        operation (str): What was being done, e.g. "create chunk file".
        path (str): The file the operation was applied to.
    """

    def __init__(self, operation, path, cause):
        super().__init__(f"failed to {operation} {path}: {cause}")
        self.operation = operation
        self.path = path
