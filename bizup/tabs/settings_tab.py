import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from bizup.clients.employees import EmployeeApi
from bizup.clients.notifications import NotificationApi
from bizup.clients.store import StoreApi
from bizup.core.exceptions import ValidationFailed
from bizup.schemas.employee import Employee, EmployeeCreate, EmployeeUpdate
from bizup.schemas.store import NOTIFICATION_KEYS, NotificationSettings, NotificationSettingsUpdate, StoreUpdate
from bizup.services.data_loader import DataLoader
from bizup.services.notifier import Notifier
from bizup.services.optimistic import Optimistic
from bizup.tabs.dialogs import FormDialog, missing_fields

log = logging.getLogger("bizup.tabs.settings")

EMPLOYEE_FIELDS = ("name", "role", "phone")


@dataclass
class EmployeeForm:
    name: str = ""
    role: str = ""
    phone: str = ""


@dataclass
class StoreForm:
    name: str = ""
    address: str = ""
    phone: str = ""


class SettingsTab:
    """Store details, staff list and notification toggles."""

    tab_id = "settings"
    label = "설정"

    def __init__(self, employees: EmployeeApi, store: StoreApi, notifications: NotificationApi, notifier: Notifier):
        self.employee_api = employees
        self.store_api = store
        self.notification_api = notifications
        self.notifier = notifier

        self.add_dialog: FormDialog[EmployeeForm] = FormDialog(EmployeeForm)
        self.edit_dialog: FormDialog[EmployeeForm] = FormDialog(EmployeeForm)
        self.editing_employee_id: Optional[int] = None
        self.store_form = StoreForm()
        self.saving = False
        self.notifications: Optional[Optimistic[NotificationSettings]] = None
        self.employees_loader: Optional[DataLoader[List[Employee]]] = None

    # --- lifecycle ---

    async def activate(self) -> None:
        # Close loaders left over from an earlier activation
        await self.deactivate()
        self.employees_loader = DataLoader(self.employee_api.get_all, on_error=self._on_employees_error, name="employees")
        await asyncio.gather(self.employees_loader.start(), self.load_store(), self.load_notifications())

    async def deactivate(self) -> None:
        if self.employees_loader is not None:
            await self.employees_loader.close()

    def _on_employees_error(self, error: Exception) -> None:
        log.error(f"Error loading employees: {error}")
        self.notifier.error("직원 목록 로딩 오류가 발생했습니다.")

    async def load_store(self) -> None:
        try:
            store = await self.store_api.get()
        except Exception as e:
            log.error(f"Error loading store: {e}")
            return
        self.store_form = StoreForm(name=store.name or "", address=store.address or "", phone=store.phone or "")

    async def load_notifications(self) -> None:
        try:
            settings = await self.notification_api.get()
        except Exception as e:
            log.error(f"Error loading notification settings: {e}")
            return
        self.notifications = Optimistic(settings)

    async def reload_employees(self) -> None:
        if self.employees_loader is not None:
            await self.employees_loader.refresh()

    # --- derived state ---

    @property
    def loading(self) -> bool:
        return bool(self.employees_loader and self.employees_loader.loading)

    @property
    def employees(self) -> List[Employee]:
        return (self.employees_loader and self.employees_loader.data) or []

    def view(self) -> dict:
        return {
            "loading": self.loading,
            "saving": self.saving,
            "store": vars(self.store_form),
            "employees": [employee.model_dump(mode="json") for employee in self.employees],
            "notifications": self.notifications.value.model_dump() if self.notifications else None,
            "add_dialog_open": self.add_dialog.open,
            "edit_dialog_open": self.edit_dialog.open,
        }

    # --- employees ---

    async def add_employee(self) -> bool:
        form = self.add_dialog.values
        if missing_fields(form, EMPLOYEE_FIELDS):
            self.notifier.error("모든 항목을 입력해주세요.")
            return False

        try:
            self.add_dialog.busy = True
            await self.employee_api.create(EmployeeCreate(
                name=form.name, role=form.role, phone=form.phone, join_date=date.today(),
            ))
        except Exception as e:
            log.error(f"Error adding employee: {e}")
            self.notifier.error("직원 추가 중 오류가 발생했습니다.")
            return False
        finally:
            self.add_dialog.busy = False

        self.notifier.success("직원이 추가되었습니다.")
        self.add_dialog.close()
        await self.reload_employees()
        return True

    def open_edit(self, employee: Employee) -> None:
        self.editing_employee_id = employee.id
        self.edit_dialog.show(EmployeeForm(name=employee.name, role=employee.role, phone=employee.phone))

    async def update_employee(self) -> bool:
        if self.editing_employee_id is None:
            return False
        form = self.edit_dialog.values
        if missing_fields(form, EMPLOYEE_FIELDS):
            self.notifier.error("모든 항목을 입력해주세요.")
            return False

        try:
            self.edit_dialog.busy = True
            await self.employee_api.update(
                self.editing_employee_id, EmployeeUpdate(name=form.name, role=form.role, phone=form.phone)
            )
        except Exception as e:
            log.error(f"Error updating employee {self.editing_employee_id}: {e}")
            self.notifier.error("직원 수정 중 오류가 발생했습니다.")
            return False
        finally:
            self.edit_dialog.busy = False

        self.notifier.success("직원 정보가 수정되었습니다.")
        self.edit_dialog.close()
        self.editing_employee_id = None
        await self.reload_employees()
        return True

    async def delete_employee(self, employee_id: int, confirm: bool = False) -> bool:
        if not confirm:
            return False
        try:
            await self.employee_api.delete(employee_id)
        except Exception as e:
            log.error(f"Error deleting employee {employee_id}: {e}")
            self.notifier.error("직원 삭제 중 오류가 발생했습니다.")
            return False

        self.notifier.success("직원이 삭제되었습니다.")
        await self.reload_employees()
        return True

    # --- store ---

    async def save_store(self) -> bool:
        try:
            self.saving = True
            await self.store_api.update(StoreUpdate(**vars(self.store_form)))
        except Exception as e:
            log.error(f"Error saving store: {e}")
            self.notifier.error("가게 정보 저장 중 오류가 발생했습니다.")
            return False
        finally:
            self.saving = False

        self.notifier.success("가게 정보가 저장되었습니다.")
        await self.load_store()
        return True

    # --- notifications ---

    async def set_notification(self, key: str, value: bool) -> bool:
        """Flips a toggle right away, then writes it; a failed write puts the old value back."""
        if key not in NOTIFICATION_KEYS:
            raise ValidationFailed(f"Unknown notification setting: {key}")
        if self.notifications is None:
            return False

        async def write(settings: NotificationSettings) -> NotificationSettings:
            return await self.notification_api.update(NotificationSettingsUpdate(
                **{name: getattr(settings, name) for name in NOTIFICATION_KEYS}
            ))

        try:
            await self.notifications.apply(lambda current: current.model_copy(update={key: value}), write)
        except Exception as e:
            log.error(f"Error saving notification setting '{key}': {e}")
            self.notifier.error("알림 설정 저장 중 오류가 발생했습니다.")
            return False
        return True
