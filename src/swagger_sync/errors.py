"""Error types raised while building, comparing and persisting snapshots."""


class SwaggerSyncError(Exception):
    """Base error for swagger-sync operations."""

    pass


class UnresolvedReferenceError(SwaggerSyncError):
    """A dependency names a definition that is not in the snapshot."""

    def __init__(self, name: str, referrer: str) -> None:
        super().__init__(f"Definition not found: {name} (referenced by {referrer})")
        self.name = name
        self.referrer = referrer


class DefinitionCollapseError(SwaggerSyncError):
    """Several raw definitions normalize to the same name."""

    def __init__(self, name: str, raw_names: list[str]) -> None:
        super().__init__(f"Definitions collapse to the same name {name}: {', '.join(raw_names)}")
        self.name = name
        self.raw_names = raw_names


class FetchError(SwaggerSyncError):
    """The API description could not be loaded."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Failed to load {source}: {reason}")
        self.source = source
        self.reason = reason


class LockFileError(SwaggerSyncError):
    """The lock file exists but cannot be read back into a snapshot."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid lock file {path}: {reason}")
        self.path = path
        self.reason = reason
