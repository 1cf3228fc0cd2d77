from typing import List

from bizup.core.http_client import ApiClient
from bizup.schemas.employee import Employee, EmployeeCreate, EmployeeUpdate


class EmployeeApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self) -> List[Employee]:
        rows = await self.client.get("/employees")
        return [Employee.model_validate(row) for row in rows]

    async def get_by_id(self, employee_id: int) -> Employee:
        return Employee.model_validate(await self.client.get(f"/employees/{employee_id}"))

    async def create(self, data: EmployeeCreate) -> Employee:
        return Employee.model_validate(await self.client.post("/employees", data.model_dump(mode="json")))

    async def update(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        row = await self.client.put(f"/employees/{employee_id}", data.model_dump(mode="json", exclude_none=True))
        return Employee.model_validate(row)

    async def delete(self, employee_id: int) -> None:
        await self.client.delete(f"/employees/{employee_id}")
