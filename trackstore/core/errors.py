class TrackStoreError(Exception):
    """Base class for errors raised by the track store."""


class StorageIOError(TrackStoreError):
    """
    A record or asset could not be written or removed for a reason other
    than absence. The originating OSError is chained as __cause__.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
