import asyncio
from datetime import date

import pytest

from bizup.clients.employees import EmployeeApi
from bizup.clients.inventory import InventoryApi
from bizup.clients.menu import MenuApi
from bizup.clients.notifications import NotificationApi
from bizup.clients.orders import OrderApi
from bizup.clients.out_of_stock import OutOfStockApi
from bizup.clients.store import StoreApi
from bizup.core.exceptions import ValidationFailed
from bizup.services.dashboard import Dashboard
from bizup.tabs.inventory_tab import InventoryForm, InventoryTab
from bizup.tabs.menu_tab import MenuTab, is_allowed_upload
from bizup.tabs.order_tab import OrderRecommendationTab
from bizup.tabs.out_of_stock_tab import OutOfStockTab
from bizup.tabs.settings_tab import EmployeeForm, SettingsTab
from bizup.testing.fake_api import make_menu, make_out_of_stock, make_recommendation


def messages(notifier, level):
    return [n.message for n in notifier.notices if n.level == level]


class TestInventoryTab:

    @pytest.mark.asyncio
    async def test_activate_loads_list_and_stats(self, fake_api, api_client, notifier):
        fake_api.add_inventory("Milk", "Dairy", 5, min_quantity=10)
        fake_api.add_inventory("Beans", "Coffee", 0)
        tab = InventoryTab(InventoryApi(api_client), notifier)

        await tab.activate()

        view = tab.view()
        assert [i["name"] for i in view["items"]] == ["Milk", "Beans"]
        assert [i["status_label"] for i in view["items"]] == ["부족", "품절"]
        assert view["stats"] == {"total_items": 2, "low_stock_count": 1, "out_of_stock_count": 1}
        assert [c["value"] for c in view["categories"]] == ["", "Coffee", "Dairy"]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_reactivation_closes_both_loaders(self, fake_api, api_client, notifier):
        tab = InventoryTab(InventoryApi(api_client), notifier)

        await tab.activate()
        items_loader, stats_loader = tab.items_loader, tab.stats_loader
        await tab.activate()

        assert items_loader.closed and stats_loader.closed
        assert not tab.items_loader.closed
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_stats_fall_back_to_list_counts(self, fake_api, api_client, notifier):
        fake_api.add_inventory("Milk", "Dairy", 0)
        fake_api.fail("GET", "/inventory/stats", 500)
        tab = InventoryTab(InventoryApi(api_client), notifier)

        await tab.activate()

        assert tab.stats.out_of_stock_count == 1
        assert notifier.notices == []
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_load_failure_notifies(self, fake_api, api_client, notifier):
        fake_api.fail("GET", "/inventory", 500)
        tab = InventoryTab(InventoryApi(api_client), notifier)

        await tab.activate()

        assert tab.inventory == []
        assert messages(notifier, "error") == ["재고 목록 로딩 오류가 발생했습니다."]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_search_change_reloads_with_query(self, fake_api, api_client, notifier):
        fake_api.add_inventory("Milk", "Dairy", 5)
        fake_api.add_inventory("Beans", "Coffee", 5)
        tab = InventoryTab(InventoryApi(api_client), notifier)
        await tab.activate()

        await tab.set_search("milk")
        tab.set_category("Dairy")

        assert [i.name for i in tab.filtered] == ["Milk"]
        assert fake_api.calls.count(("GET", "/inventory")) == 2
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_add_item_success_closes_dialog_and_reloads(self, fake_api, api_client, notifier):
        tab = InventoryTab(InventoryApi(api_client), notifier)
        await tab.activate()

        tab.add_dialog.show(InventoryForm(name="Sugar", category="Dry", quantity=30, unit="kg", min_quantity=5, price=2000))
        assert await tab.add_item() is True

        assert tab.add_dialog.open is False
        assert tab.add_dialog.values == InventoryForm()
        assert [i.name for i in tab.inventory] == ["Sugar"]
        assert messages(notifier, "success") == ["재고 추가 성공"]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_add_item_with_blank_required_field_sends_nothing(self, fake_api, api_client, notifier):
        tab = InventoryTab(InventoryApi(api_client), notifier)
        await tab.activate()
        calls_before = len(fake_api.calls)

        tab.add_dialog.show(InventoryForm(name="Sugar", category="", unit="kg"))
        assert await tab.add_item() is False

        assert len(fake_api.calls) == calls_before
        assert tab.add_dialog.open is True
        assert messages(notifier, "error") == ["재고 추가 필수 정보가 누락되었습니다."]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_add_item_negative_quantity_rejected_locally(self, fake_api, api_client, notifier):
        tab = InventoryTab(InventoryApi(api_client), notifier)
        await tab.activate()

        tab.add_dialog.show(InventoryForm(name="Sugar", category="Dry", quantity=-1, unit="kg"))
        assert await tab.add_item() is False

        assert ("POST", "/inventory") not in fake_api.calls
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_failed_edit_keeps_dialog_and_values(self, fake_api, api_client, notifier):
        row = fake_api.add_inventory("Milk", "Dairy", 5)
        fake_api.fail("PUT", f"/inventory/{row['id']}", 400)
        tab = InventoryTab(InventoryApi(api_client), notifier)
        await tab.activate()

        tab.open_edit(tab.inventory[0])
        tab.edit_dialog.edit(quantity=8)
        assert await tab.update_item() is False

        assert tab.edit_dialog.open is True
        assert tab.edit_dialog.values.quantity == 8
        assert tab.edit_dialog.busy is False
        assert messages(notifier, "error") == ["재고 수정 중 오류가 발생했습니다."]
        assert fake_api.inventory[row["id"]]["quantity"] == 5
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_successful_edit(self, fake_api, api_client, notifier):
        row = fake_api.add_inventory("Milk", "Dairy", 5)
        tab = InventoryTab(InventoryApi(api_client), notifier)
        await tab.activate()

        tab.open_edit(tab.inventory[0])
        tab.edit_dialog.edit(quantity=8)
        assert await tab.update_item() is True

        assert tab.edit_dialog.open is False
        assert tab.inventory[0].quantity == 8
        assert fake_api.inventory[row["id"]]["quantity"] == 8
        assert messages(notifier, "success") == ["재고 정보가 수정되었습니다."]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_delete_requires_confirmation(self, fake_api, api_client, notifier):
        row = fake_api.add_inventory("Milk", "Dairy", 5)
        tab = InventoryTab(InventoryApi(api_client), notifier)
        await tab.activate()

        assert await tab.delete_item(row["id"]) is False
        assert row["id"] in fake_api.inventory

        assert await tab.delete_item(row["id"], confirm=True) is True
        assert fake_api.inventory == {}
        assert tab.inventory == []
        await tab.deactivate()


class TestMenuTab:

    def test_allowed_extensions(self):
        assert is_allowed_upload("menu.CSV")
        assert is_allowed_upload("menu.xlsx")
        assert is_allowed_upload("menu.xls")
        assert not is_allowed_upload("menu.pdf")
        assert not is_allowed_upload("menu")

    @pytest.mark.asyncio
    async def test_wrong_extension_is_refused_without_request(self, fake_api, api_client, notifier):
        tab = MenuTab(MenuApi(api_client), notifier)

        assert tab.select_file(("menu.pdf", b"%PDF")) is False

        assert tab.selected_file is None
        assert fake_api.calls == []
        assert messages(notifier, "error") == ["CSV 또는 엑셀 파일만 업로드할 수 있어요."]

    @pytest.mark.asyncio
    async def test_upload_without_file(self, fake_api, api_client, notifier):
        tab = MenuTab(MenuApi(api_client), notifier)

        assert await tab.upload() is False
        assert messages(notifier, "error") == ["파일을 선택해 주세요."]

    @pytest.mark.asyncio
    async def test_upload_success_reports_counts_and_refreshes(self, fake_api, api_client, notifier):
        fake_api.upload_result = {"success": True, "message": "ok", "items_created": 3, "items_updated": 1}
        tab = MenuTab(MenuApi(api_client), notifier, refresh_interval=60)
        await tab.activate()
        fake_api.menus.append(make_menu(1, "Latte", "Coffee"))

        assert tab.select_file(("menu.csv", b"name,category\nLatte,Coffee\n")) is True
        assert await tab.upload() is True

        assert b"Latte,Coffee" in fake_api.uploads[0]
        assert messages(notifier, "success") == ["메뉴 등록 완료! 생성: 3개, 업데이트: 1개"]
        assert tab.selected_file is None
        assert [m.name for m in tab.menus] == ["Latte"]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_rejected_upload_shows_server_message(self, fake_api, api_client, notifier):
        fake_api.upload_result = {"success": False, "message": "3행: 가격이 없습니다", "errors": ["row 3"]}
        tab = MenuTab(MenuApi(api_client), notifier)

        tab.select_file(("menu.csv", b"x"))
        assert await tab.upload() is False

        assert messages(notifier, "error") == ["3행: 가격이 없습니다"]
        assert tab.selected_file is not None

    @pytest.mark.asyncio
    async def test_upload_transport_failure(self, fake_api, api_client, notifier):
        fake_api.fail("POST", "/menus/upload", 500)
        tab = MenuTab(MenuApi(api_client), notifier)

        tab.select_file(("menu.xlsx", b"x"))
        assert await tab.upload() is False

        assert tab.uploading is False
        assert messages(notifier, "error") == ["파일 업로드 중 오류가 발생했어요. 잠시 후 다시 시도해 주세요."]

    @pytest.mark.asyncio
    async def test_filters_are_sent_and_auto_refresh_runs(self, fake_api, api_client, notifier):
        fake_api.menus += [make_menu(1, "Latte", "Coffee"), make_menu(2, "Bagel", "Bakery", status="low")]
        tab = MenuTab(MenuApi(api_client), notifier, refresh_interval=0.01)
        await tab.activate()

        await tab.set_category("Bakery")
        assert [m.name for m in tab.menus] == ["Bagel"]
        assert tab.view()["items"][0]["status_label"] == "부족"

        await asyncio.sleep(0.05)
        await tab.deactivate()
        assert fake_api.calls.count(("GET", "/menus")) >= 3

    @pytest.mark.asyncio
    async def test_repeated_activation_closes_previous_loader(self, fake_api, api_client, notifier):
        tab = MenuTab(MenuApi(api_client), notifier, refresh_interval=0.01)

        await tab.activate()
        first = tab.loader
        await tab.activate()
        await tab.deactivate()

        assert first is not tab.loader
        assert first.closed
        assert tab.loader.closed
        calls = fake_api.calls.count(("GET", "/menus"))
        await asyncio.sleep(0.05)
        assert fake_api.calls.count(("GET", "/menus")) == calls


class TestOrderRecommendationTab:

    @pytest.fixture
    def seeded(self, fake_api):
        fake_api.recommendations = [
            make_recommendation(1, "우유", 1000),
            make_recommendation(2, "원두", 2500, priority="medium"),
            make_recommendation(3, "설탕", 400, priority="low"),
        ]
        return fake_api

    @pytest.mark.asyncio
    async def test_summary_tracks_selection(self, seeded, api_client, notifier):
        tab = OrderRecommendationTab(OrderApi(api_client), notifier)
        await tab.activate()

        tab.toggle(1)
        tab.toggle(2)
        assert tab.summary() == {"high_count": 1, "medium_count": 1, "selected_count": 2, "total_cost": 3500}

        tab.toggle(1)
        assert tab.total_cost == 2500
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_order_selected_sends_one_order(self, seeded, api_client, notifier):
        tab = OrderRecommendationTab(OrderApi(api_client), notifier)
        await tab.activate()
        tab.toggle(1)
        tab.toggle(3)

        assert await tab.order_selected() is True

        assert seeded.orders == [{"items": [
            {"inventory_item_id": 1, "quantity": 20, "priority": "high"},
            {"inventory_item_id": 3, "quantity": 20, "priority": "low"},
        ]}]
        assert len(tab.selection) == 0
        assert [r.id for r in tab.recommendations] == [2]
        assert messages(notifier, "success") == ["2개의 상품을 발주했습니다."]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_failed_order_keeps_selection(self, seeded, api_client, notifier):
        seeded.fail("POST", "/orders", 500)
        tab = OrderRecommendationTab(OrderApi(api_client), notifier)
        await tab.activate()
        tab.toggle(2)

        assert await tab.order_selected() is False

        assert tab.selection.ids == [2]
        assert tab.ordering is False
        assert messages(notifier, "error") == ["발주 오류가 발생했습니다."]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_nothing_selected_sends_nothing(self, seeded, api_client, notifier):
        tab = OrderRecommendationTab(OrderApi(api_client), notifier)
        await tab.activate()

        assert await tab.order_selected() is False
        assert ("POST", "/orders") not in seeded.calls
        await tab.deactivate()


class TestOutOfStockTab:

    @pytest.mark.asyncio
    async def test_summary_rounds_half_up(self, fake_api, api_client, notifier):
        fake_api.out_of_stock = [make_out_of_stock(1, "우유", days=3, loss=10000), make_out_of_stock(2, "원두", days=4, loss=5000)]
        tab = OutOfStockTab(OutOfStockApi(api_client), notifier)
        await tab.activate()

        assert tab.summary() == {"count": 2, "average_days_out_of_stock": 4, "total_estimated_loss": 15000}
        assert tab.view()["items"][0]["status_label"] == "급한"
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_empty_summary(self, fake_api, api_client, notifier):
        tab = OutOfStockTab(OutOfStockApi(api_client), notifier)
        await tab.activate()

        assert tab.summary() == {"count": 0, "average_days_out_of_stock": 0, "total_estimated_loss": 0}
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_restock_uses_fixed_quantity_and_refreshes(self, fake_api, api_client, notifier):
        fake_api.out_of_stock = [make_out_of_stock(5, "우유")]
        tab = OutOfStockTab(OutOfStockApi(api_client), notifier)
        await tab.activate()

        assert await tab.restock(5) is True

        assert fake_api.inventory[5]["quantity"] == 50
        assert tab.items == []
        assert tab.restocking is None
        assert messages(notifier, "success") == ["재입고를 완료했어요."]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_restock_failure(self, fake_api, api_client, notifier):
        fake_api.out_of_stock = [make_out_of_stock(5, "우유")]
        fake_api.fail("POST", "/out-of-stock/5/restock", 500)
        tab = OutOfStockTab(OutOfStockApi(api_client), notifier)
        await tab.activate()

        assert await tab.restock(5) is False

        assert [i.id for i in tab.items] == [5]
        assert tab.restocking is None
        assert messages(notifier, "error") == ["재입고를 진행하지 못했어요. 잠시 후 다시 시도해 주세요."]
        await tab.deactivate()


class TestSettingsTab:

    @pytest.fixture
    def tab(self, api_client, notifier):
        return SettingsTab(EmployeeApi(api_client), StoreApi(api_client), NotificationApi(api_client), notifier)

    @pytest.mark.asyncio
    async def test_activate_loads_everything(self, fake_api, tab):
        fake_api.add_employee("김철수")

        await tab.activate()

        view = tab.view()
        assert view["store"] == {"name": "Bizup 카페", "address": "서울", "phone": "02-000-0000"}
        assert [e["name"] for e in view["employees"]] == ["김철수"]
        assert view["notifications"]["daily_report"] is False
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_add_employee_sets_join_date_today(self, fake_api, tab, notifier):
        await tab.activate()

        tab.add_dialog.show(EmployeeForm(name="이영희", role="바리스타", phone="010-1234-5678"))
        assert await tab.add_employee() is True

        created = list(fake_api.employees.values())[0]
        assert created["join_date"] == date.today().isoformat()
        assert [e.name for e in tab.employees] == ["이영희"]
        assert messages(notifier, "success") == ["직원이 추가되었습니다."]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_add_employee_missing_field(self, fake_api, tab, notifier):
        await tab.activate()

        tab.add_dialog.show(EmployeeForm(name="이영희", role="", phone="010"))
        assert await tab.add_employee() is False

        assert ("POST", "/employees") not in fake_api.calls
        assert messages(notifier, "error") == ["모든 항목을 입력해주세요."]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_delete_employee_requires_confirmation(self, fake_api, tab):
        row = fake_api.add_employee("김철수")
        await tab.activate()

        assert await tab.delete_employee(row["id"]) is False
        assert await tab.delete_employee(row["id"], confirm=True) is True
        assert tab.employees == []
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_save_store(self, fake_api, tab, notifier):
        await tab.activate()

        tab.store_form.address = "부산"
        assert await tab.save_store() is True

        assert fake_api.store["address"] == "부산"
        assert messages(notifier, "success") == ["가게 정보가 저장되었습니다."]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_notification_toggle_sends_full_state(self, fake_api, tab):
        await tab.activate()

        assert await tab.set_notification("daily_report", True) is True

        assert tab.notifications.value.daily_report is True
        assert fake_api.notifications["daily_report"] is True
        assert fake_api.notifications["low_stock"] is True
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_failed_notification_toggle_reverts(self, fake_api, tab, notifier):
        fake_api.fail("PUT", "/store/notifications", 500)
        await tab.activate()

        assert await tab.set_notification("daily_report", True) is False

        assert tab.notifications.value.daily_report is False
        assert messages(notifier, "error") == ["알림 설정 저장 중 오류가 발생했습니다."]
        await tab.deactivate()

    @pytest.mark.asyncio
    async def test_unknown_notification_key(self, tab):
        await tab.activate()

        with pytest.raises(ValidationFailed):
            await tab.set_notification("weekly_digest", True)
        await tab.deactivate()


class TestNavigation:

    @pytest.mark.asyncio
    async def test_default_tab_is_inventory_and_exclusive(self, fake_api, api_client):
        dashboard = Dashboard(api_client)

        await dashboard.navigation.start()
        options = dashboard.navigation.options()

        assert [o["id"] for o in options if o["active"]] == ["inventory"]
        assert ("GET", "/inventory") in fake_api.calls
        assert ("GET", "/orders/recommendations") not in fake_api.calls
        await dashboard.navigation.close()

    @pytest.mark.asyncio
    async def test_switching_tears_down_previous_tab(self, fake_api, api_client):
        dashboard = Dashboard(api_client)
        dashboard.menu.refresh_interval = 0.01

        await dashboard.open("menu")
        menu_loader = dashboard.menu.loader
        await dashboard.open("order")

        assert menu_loader.closed
        calls = fake_api.calls.count(("GET", "/menus"))
        await asyncio.sleep(0.05)
        assert fake_api.calls.count(("GET", "/menus")) == calls
        assert dashboard.navigation.active_tab == "order"
        await dashboard.navigation.close()

    @pytest.mark.asyncio
    async def test_reselecting_active_tab_does_not_reload(self, fake_api, api_client):
        dashboard = Dashboard(api_client)

        await dashboard.open("outofstock")
        await dashboard.open("outofstock")

        assert fake_api.calls.count(("GET", "/out-of-stock")) == 1
        await dashboard.navigation.close()

    @pytest.mark.asyncio
    async def test_concurrent_selects_activate_once(self, fake_api, api_client):
        dashboard = Dashboard(api_client)
        dashboard.menu.refresh_interval = 0.02

        first, second = await asyncio.gather(dashboard.open("menu"), dashboard.open("menu"))
        await dashboard.navigation.close()

        assert first is second is dashboard.menu
        assert dashboard.menu.loader.closed
        calls = fake_api.calls.count(("GET", "/menus"))
        await asyncio.sleep(0.1)
        assert fake_api.calls.count(("GET", "/menus")) == calls

    @pytest.mark.asyncio
    async def test_switch_waits_for_running_switch(self, fake_api, api_client):
        dashboard = Dashboard(api_client)

        await asyncio.gather(dashboard.open("order"), dashboard.open("outofstock"), dashboard.open("order"))

        assert dashboard.navigation.active_tab == "order"
        assert dashboard.out_of_stock.loader.closed
        assert not dashboard.order.loader.closed
        await dashboard.navigation.close()
        assert dashboard.order.loader.closed

    @pytest.mark.asyncio
    async def test_unknown_tab(self, api_client):
        dashboard = Dashboard(api_client)

        with pytest.raises(ValueError):
            await dashboard.open("reports")
