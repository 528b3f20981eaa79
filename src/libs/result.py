"""
Result type shared by the application layer.

Use cases return ``Result`` instead of raising for expected failures:
``Return.ok(value)`` on success, ``Return.err(Error(...))`` otherwise.
"""

from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Error:
    code: str
    message: str
    fields: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = {"code": self.code, "message": self.message}
        if self.fields:
            data["fields"] = self.fields
        return data


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[Error] = None

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None


class Return:
    @staticmethod
    def ok(value: T = None) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
