import asyncio
import logging
from typing import Dict, List, Protocol

from bizup.core.config import DEFAULT_TAB

log = logging.getLogger("bizup.tabs.navigation")


class Tab(Protocol):
    tab_id: str
    label: str

    async def activate(self) -> None: ...

    async def deactivate(self) -> None: ...

    def view(self) -> dict: ...


class TabNavigation:
    """
    Owns the active-tab selector, the only state shared between tabs.
    Exactly one tab is active; switching tears the old one down before the new one loads.
    Switches are serialized, so concurrent requests never activate a tab twice.
    """

    def __init__(self, tabs: List[Tab], default: str = DEFAULT_TAB):
        self.tabs: Dict[str, Tab] = {tab.tab_id: tab for tab in tabs}
        if default not in self.tabs:
            raise ValueError(f"Unknown default tab: {default}")
        self.active_tab = default
        self._started = False
        self._lock = asyncio.Lock()

    @property
    def current(self) -> Tab:
        return self.tabs[self.active_tab]

    async def _start(self) -> None:
        if not self._started:
            await self.current.activate()
            self._started = True

    async def start(self) -> None:
        async with self._lock:
            await self._start()

    async def select(self, tab_id: str) -> Tab:
        if tab_id not in self.tabs:
            raise ValueError(f"Unknown tab: {tab_id}")

        async with self._lock:
            if tab_id == self.active_tab and self._started:
                return self.current

            if self._started:
                await self.current.deactivate()
            log.info(f"Switching tab: {self.active_tab} -> {tab_id}")
            self.active_tab = tab_id
            self._started = False
            await self._start()
            return self.current

    async def close(self) -> None:
        async with self._lock:
            if self._started:
                await self.current.deactivate()
                self._started = False

    def options(self) -> List[dict]:
        return [
            {"id": tab.tab_id, "label": tab.label, "active": tab.tab_id == self.active_tab}
            for tab in self.tabs.values()
        ]
