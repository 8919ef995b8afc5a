"""Soft findings collected while loading or checking a book."""

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal finding.

    Attributes:
        code: Short machine-readable category.
        message: Human readable explanation.
        subject: Identifier of the offending record, when there is one.
    """

    code: str
    message: str
    subject: str | None = None


class Diagnostics:
    """Ordered collection of findings, optionally mirrored to a logger."""

    def __init__(self, logger=None) -> None:
        self._items: list[Diagnostic] = []
        self._logger = logger

    def add(self, code: str, message: str, subject: str | None = None) -> None:
        self._items.append(Diagnostic(code=code, message=message, subject=subject))
        if self._logger is not None:
            self._logger.warning(f"[{code}] {message}")

    def by_code(self, code: str) -> list[Diagnostic]:
        return [item for item in self._items if item.code == code]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


__all__ = ["Diagnostic", "Diagnostics"]
