"""Exception hierarchy for tiered-context."""


class TieredContextError(Exception):
    """Base exception for all tiered-context errors."""


class UnknownResourceError(TieredContextError, KeyError):
    """Raised when a target id is not in the resource registry."""

    def __init__(self, resource_id: str) -> None:
        super().__init__(f"Resource {resource_id!r} not found in registry")
        self.resource_id = resource_id

    def __str__(self) -> str:
        return self.args[0]


class RegistryError(TieredContextError):
    """Raised when the resource catalog violates a graph invariant."""


class TierConfigError(TieredContextError):
    """Raised when a tier assignment is internally inconsistent."""


class CacheUnavailableError(TieredContextError):
    """Raised by cache backends when the store cannot be reached."""


class ArtifactStoreError(TieredContextError):
    """Raised when a user's artifact records cannot be fetched."""


class TokenizerError(TieredContextError):
    """Raised when a size estimator cannot be constructed or used."""
