"""Error taxonomy shared by the store, the aggregation engine and the API."""
from dataclasses import dataclass


class GrocerError(Exception):
    """Base class for all grocer errors."""


class ClientInputError(GrocerError):
    """The request itself is invalid; never retried."""


class ExtractionError(ClientInputError):
    """A recipe reference could not be resolved into ingredients."""


class StorageError(GrocerError):
    """Reading or writing the reference store failed."""


@dataclass(frozen=True)
class ParseWarning:
    """Non-fatal diagnostic from lenient aisle/pantry parsing."""
    message: str
    line: int = 0

    def __str__(self) -> str:
        if self.line:
            return f"line {self.line}: {self.message}"
        return self.message


__all__ = ['GrocerError', 'ClientInputError', 'ExtractionError', 'StorageError', 'ParseWarning']
