"""SDK error classes."""

from __future__ import annotations


class DexSdkError(Exception):
    """Base error for SDK operations."""

    pass


class ResourceNotFoundError(DexSdkError):
    """A required on-chain resource does not exist."""

    def __init__(self, resource_type: str, address: str | None = None) -> None:
        self.resource_type = resource_type
        self.address = address
        where = f" at {address}" if address else ""
        super().__init__(f"Resource ({resource_type}) not found{where}")


class ResourceFetchError(DexSdkError):
    """Transport or HTTP failure other than a 404."""

    pass


class InvalidResourceError(DexSdkError):
    """Resource payload does not match the expected shape."""

    pass


class InvalidArgumentError(DexSdkError, ValueError):
    """Caller supplied an argument outside the accepted range."""

    pass
