"""Two-variant result returned by every exposed operation."""

from typing import Any

from pydantic.dataclasses import dataclass

from live_search_llm.errors import OperationError


@dataclass(frozen=True)
class Ok:
    value: str | bool

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> str | bool:
        return self.value

    def unwrap_or(self, default: Any) -> str | bool:
        return self.value


@dataclass(frozen=True)
class Err:
    message: str

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise OperationError(self.message)

    def unwrap_or(self, default: Any) -> Any:
        return default


OperationResult = Ok | Err
