from dataclasses import fields, replace
from typing import Callable, Generic, Optional, TypeVar

F = TypeVar("F")


class FormDialog(Generic[F]):
    """Open/closed flag plus the values typed into an add or edit form."""

    def __init__(self, empty: Callable[[], F]):
        self._empty = empty
        self.open = False
        self.busy = False
        self.values: F = empty()

    def show(self, values: Optional[F] = None) -> None:
        self.values = values if values is not None else self._empty()
        self.open = True

    def edit(self, **changes) -> None:
        self.values = replace(self.values, **changes)

    def close(self) -> None:
        """Closes and forgets the entered values. Only called after a successful submit."""
        self.open = False
        self.values = self._empty()


def missing_fields(values: object, required) -> list:
    """Names of required text fields left blank."""
    names = {f.name for f in fields(values)}
    return [name for name in required if name in names and not str(getattr(values, name) or "").strip()]
