# Overview: Service-layer operations for the menu; validates admin product forms before they reach the API.

from __future__ import annotations

from typing import Any, List, Mapping, Union

from ..api.gateway import DecodeError
from ..computations import available_menu_items
from ..models import MENU_ITEM_WIRE_FIELDS, MenuItem, MenuItemForm
from ..validation import enforce_rules_menu_item
from .base import ResourceService


class MenuService(ResourceService):
    async def list(self) -> List[MenuItem]:
        data = await self.gateway.get("/menu")
        return self.records(MenuItem, data)

    async def list_available(self) -> List[MenuItem]:
        """Menu as offered on the public order form (unavailable items hidden)."""
        return available_menu_items(await self.list())

    async def get(self, item_id: str) -> MenuItem:
        data = await self.gateway.get(f"/menu/{item_id}")
        return self.record(MenuItem, data)

    async def create(self, form: MenuItemForm) -> MenuItem:
        form.validate()
        data = await self.gateway.post("/menu", form.to_dict())
        return self.record(MenuItem, data)

    async def update(self, item_id: str, changes: Union[MenuItemForm, Mapping[str, Any]]) -> MenuItem:
        """
        Partial update.

        A full MenuItemForm is validated like a create; a mapping of
        snake_case fields is validated only for the fields it carries.
        """
        if isinstance(changes, MenuItemForm):
            changes.validate()
            payload = changes.to_dict()
        else:
            payload = self.partial_payload(changes, enforce_rules_menu_item, MENU_ITEM_WIRE_FIELDS)
        data = await self.gateway.put(f"/menu/{item_id}", payload)
        return self.record(MenuItem, data)

    async def delete(self, item_id: str) -> None:
        await self.gateway.delete(f"/menu/{item_id}")

    async def categories(self) -> List[str]:
        data = await self.gateway.get("/menu/categories")
        if not isinstance(data, list):
            raise DecodeError(f"Expected a list of categories, got {type(data).__name__}")
        return [str(category) for category in data]
