import logging
from pathlib import Path
from typing import List, Optional

from bizup.clients.menu import MenuApi
from bizup.core.config import ALLOWED_UPLOAD_EXTENSIONS, REFRESH_INTERVAL
from bizup.core.http_client import FileInput
from bizup.schemas.menu import MenuItem
from bizup.services.data_loader import DataLoader
from bizup.services.notifier import Notifier
from bizup.services.views import category_options, filter_items

log = logging.getLogger("bizup.tabs.menu")


def upload_filename(file: FileInput) -> str:
    return file[0] if isinstance(file, tuple) else Path(file).name


def is_allowed_upload(filename: str) -> bool:
    return Path(filename).suffix.lower() in ALLOWED_UPLOAD_EXTENSIONS


class MenuTab:
    """Menu catalogue, refreshed automatically while the tab is open."""

    tab_id = "menu"
    label = "메뉴 관리"

    def __init__(self, api: MenuApi, notifier: Notifier, refresh_interval: float = REFRESH_INTERVAL):
        self.api = api
        self.notifier = notifier
        self.refresh_interval = refresh_interval

        self.search_query = ""
        self.selected_category = ""
        self.selected_file: Optional[FileInput] = None
        self.uploading = False
        self.loader: Optional[DataLoader[List[MenuItem]]] = None

    async def activate(self) -> None:
        # Close loaders left over from an earlier activation
        await self.deactivate()
        self.loader = DataLoader(
            self._fetch,
            auto_refresh=True,
            refresh_interval=self.refresh_interval,
            on_error=lambda e: log.error(f"Error loading menus: {e}"),
            name="menus",
        )
        await self.loader.start()

    async def deactivate(self) -> None:
        if self.loader is not None:
            await self.loader.close()

    async def refresh(self) -> None:
        if self.loader is not None:
            await self.loader.refresh()

    async def _fetch(self) -> List[MenuItem]:
        # Filters are read at call time so timer ticks use whatever is selected now
        return await self.api.get_all(self.search_query or None, self.selected_category or None)

    @property
    def loading(self) -> bool:
        return bool(self.loader and self.loader.loading)

    @property
    def menus(self) -> List[MenuItem]:
        return (self.loader and self.loader.data) or []

    @property
    def filtered(self) -> List[MenuItem]:
        return filter_items(self.menus, self.search_query, self.selected_category)

    def view(self) -> dict:
        return {
            "search": self.search_query,
            "category": self.selected_category,
            "loading": self.loading,
            "uploading": self.uploading,
            "selected_file": upload_filename(self.selected_file) if self.selected_file else None,
            "categories": [option.model_dump() for option in category_options(self.menus)],
            "items": [{**menu.model_dump(), "status_label": menu.status.label} for menu in self.filtered],
        }

    async def set_search(self, query: str) -> None:
        if query != self.search_query:
            self.search_query = query
            await self.refresh()

    async def set_category(self, category: str) -> None:
        category = category or ""
        if category != self.selected_category:
            self.selected_category = category
            await self.refresh()

    def select_file(self, file: FileInput) -> bool:
        """Accepts only .csv/.xlsx/.xls. Nothing is sent until upload()."""
        if not is_allowed_upload(upload_filename(file)):
            self.notifier.error("CSV 또는 엑셀 파일만 업로드할 수 있어요.")
            return False
        self.selected_file = file
        return True

    async def upload(self) -> bool:
        if self.selected_file is None:
            self.notifier.error("파일을 선택해 주세요.")
            return False

        try:
            self.uploading = True
            result = await self.api.upload_csv(self.selected_file)
        except Exception as e:
            log.error(f"Error uploading menu file: {e}")
            self.notifier.error("파일 업로드 중 오류가 발생했어요. 잠시 후 다시 시도해 주세요.")
            return False
        finally:
            self.uploading = False

        if not result.success:
            self.notifier.error(result.message or "메뉴 등록에 실패했어요.")
            if result.errors:
                log.error(f"Menu upload rejected rows: {result.errors}")
            return False

        self.notifier.success(f"메뉴 등록 완료! 생성: {result.items_created}개, 업데이트: {result.items_updated}개")
        self.selected_file = None
        await self.refresh()
        return True
