from typing import Iterable, Iterator, List, Set, TypeVar

T = TypeVar("T")


class Selection:
    """Working set of selected item ids, e.g. recommendations ticked for ordering."""

    def __init__(self):
        self._ids: Set[int] = set()

    def toggle(self, item_id: int) -> bool:
        """Adds or removes `item_id`. Returns True when it ends up selected."""
        if item_id in self._ids:
            self._ids.remove(item_id)
            return False
        self._ids.add(item_id)
        return True

    def clear(self) -> None:
        self._ids.clear()

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._ids))

    @property
    def ids(self) -> List[int]:
        return sorted(self._ids)

    def pick(self, items: Iterable[T]) -> List[T]:
        """The selected entries of `items`, in list order."""
        return [item for item in items if getattr(item, "id") in self._ids]

    def total(self, items: Iterable[T], key: str = "estimated_cost") -> float:
        return sum(getattr(item, key) for item in self.pick(items))
