"""Error types shared by the store, catalog and API layers."""


class ValidationError(ValueError):
    """Input rejected before any state was mutated."""


class AssetTooLarge(ValidationError):
    """Upload exceeds the configured size limit."""

    def __init__(self, limit_bytes: int) -> None:
        super().__init__(f"File exceeds the {limit_bytes // (1024 * 1024)} MB limit")
        self.limit_bytes = limit_bytes


class AssetIOError(OSError):
    """Storage failure while saving or deleting an asset."""


class StoreCorruption(RuntimeError):
    """A persisted collection could not be parsed."""

    def __init__(self, collection: str, reason: str) -> None:
        super().__init__(f"Collection {collection!r} is corrupt: {reason}")
        self.collection = collection
