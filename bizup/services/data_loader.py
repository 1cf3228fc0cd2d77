import asyncio
import logging
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from bizup.core.config import REFRESH_INTERVAL

log = logging.getLogger("bizup.data_loader")

T = TypeVar("T")


class DataLoader(Generic[T]):
    """
    Keeps the result of one async fetch function around as `data`, together with
    `loading` and `error`, and optionally re-runs the fetch every `refresh_interval` seconds.

    Every load gets a sequence number and only the most recently started one may write state,
    so a slow response can never overwrite a newer one. After `close()` nothing writes state.

        async with DataLoader(api.get_all, auto_refresh=True) as loader:
            ...
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        *,
        auto_refresh: bool = False,
        refresh_interval: float = REFRESH_INTERVAL,
        on_error: Optional[Callable[[Exception], None]] = None,
        name: Optional[str] = None,
    ):
        self._fetch = fetch
        self.auto_refresh = auto_refresh
        self.refresh_interval = refresh_interval
        self.on_error = on_error
        self.name = name or getattr(fetch, "__qualname__", "loader")

        self.data: Optional[T] = None
        self.error: Optional[Exception] = None
        self.loading = False

        self._seq = 0
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _is_current(self, seq: int) -> bool:
        return not self._closed and seq == self._seq

    async def start(self) -> "DataLoader[T]":
        """Runs the first load and, with auto_refresh, schedules the refresh loop."""
        if self._closed:
            raise RuntimeError(f"Loader '{self.name}' is closed and cannot be restarted.")
        try:
            await self.load()
            if self.auto_refresh and self._task is None:
                self._task = asyncio.create_task(self._poll(), name=f"refresh:{self.name}")
        except BaseException:
            await self.close()
            raise
        return self

    async def load(self) -> None:
        """Invokes the fetch function once. Errors are recorded, never raised."""
        if self._closed:
            return

        self._seq += 1
        seq = self._seq
        self.loading = True
        try:
            result = await self._fetch()
        except Exception as e:
            if not self._is_current(seq):
                log.debug(f"[{self.name}] dropping error from superseded load #{seq}: {e}")
                return
            # Previous data stays visible
            self.error = e
            if self.on_error:
                self.on_error(e)
        else:
            if not self._is_current(seq):
                log.debug(f"[{self.name}] dropping result from superseded load #{seq}")
                return
            self.data = result
            self.error = None
        finally:
            if self._is_current(seq):
                self.loading = False

    async def refresh(self) -> None:
        await self.load()

    async def _poll(self) -> None:
        """Refresh loop. Lives until close() cancels it."""
        while True:
            await asyncio.sleep(self.refresh_interval)
            try:
                await self.load()
            except Exception as e:
                log.error(f"[{self.name}] refresh tick failed: {e}")

    async def close(self) -> None:
        """Stops the refresh loop. Safe to call more than once."""
        self._closed = True
        self.loading = False
        task, self._task = self._task, None
        if task is None or task is asyncio.current_task():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def __aenter__(self) -> "DataLoader[T]":
        return await self.start()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
