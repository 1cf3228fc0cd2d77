from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Optimistic(Generic[T]):
    """
    Holds a value that is changed locally before the server confirms it.
    `apply` remembers the prior value and puts it back if the write raises.
    """

    def __init__(self, value: T):
        self.value = value

    async def apply(
        self,
        update: Callable[[T], T],
        write: Callable[[T], Awaitable[Optional[T]]],
    ) -> T:
        prior = self.value
        candidate = update(prior)
        self.value = candidate
        try:
            confirmed = await write(candidate)
        except Exception:
            # A later apply may already have replaced our candidate; leave that one alone
            if self.value is candidate:
                self.value = prior
            raise
        if confirmed is not None and self.value is candidate:
            self.value = confirmed
        return self.value
