"""Best-effort parse output plus the non-fatal warnings collected on the way."""
from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

from grocer.domain.errors import ParseWarning

T = TypeVar("T")


@dataclass
class ParseResult(Generic[T]):
    output: T
    warnings: List[ParseWarning] = field(default_factory=list)

    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def warn(self, message: str, line: int = 0) -> None:
        self.warnings.append(ParseWarning(message, line))
