"""
Diagnostics

Messages collected while an action runs and handed to the renderer.
``Blocking`` diagnostics stop the flow; ``Informational`` ones are notices
such as "You are now logged out."
"""

from dataclasses import dataclass
from typing import Iterator, List, Union


@dataclass(frozen=True)
class Blocking:
    code: str
    message: str


@dataclass(frozen=True)
class Informational:
    code: str
    message: str


Diagnostic = Union[Blocking, Informational]


class ErrorSet:
    """Ordered collection of diagnostics for one request"""

    def __init__(self, *diagnostics: Diagnostic):
        self._items: List[Diagnostic] = list(diagnostics)

    def add(self, diagnostic: Diagnostic) -> "ErrorSet":
        self._items.append(diagnostic)
        return self

    def error(self, code: str, message: str) -> "ErrorSet":
        return self.add(Blocking(code, message))

    def message(self, code: str, message: str) -> "ErrorSet":
        return self.add(Informational(code, message))

    def extend(self, other: "ErrorSet") -> "ErrorSet":
        self._items.extend(other)
        return self

    def clear(self) -> None:
        self._items.clear()

    def codes(self) -> List[str]:
        return [d.code for d in self._items]

    def blocking(self) -> List[Blocking]:
        return [d for d in self._items if isinstance(d, Blocking)]

    def informational(self) -> List[Informational]:
        return [d for d in self._items if isinstance(d, Informational)]

    def has_blocking(self) -> bool:
        return any(isinstance(d, Blocking) for d in self._items)

    def __contains__(self, code: str) -> bool:
        return code in self.codes()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self):
        return f"ErrorSet({self._items!r})"
