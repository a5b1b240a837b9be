# Overview: Service-layer operations for raw products and purchases; stock arithmetic stays on the server.

from __future__ import annotations

from typing import Any, List, Mapping, Union

from ..computations import low_stock_products
from ..models import (
    RAW_PRODUCT_WIRE_FIELDS,
    Purchase,
    PurchaseForm,
    RawProduct,
    RawProductForm,
)
from ..validation import enforce_rules_raw_product, enforce_rules_stock_update
from .base import ResourceService


class RawProductsService(ResourceService):
    async def list(self) -> List[RawProduct]:
        data = await self.gateway.get("/raw-products")
        return self.records(RawProduct, data)

    async def list_low_stock(self) -> List[RawProduct]:
        return low_stock_products(await self.list())

    async def get(self, product_id: str) -> RawProduct:
        data = await self.gateway.get(f"/raw-products/{product_id}")
        return self.record(RawProduct, data)

    async def create(self, form: RawProductForm) -> RawProduct:
        form.validate()
        data = await self.gateway.post("/raw-products", form.to_dict())
        return self.record(RawProduct, data)

    async def update(self, product_id: str, changes: Union[RawProductForm, Mapping[str, Any]]) -> RawProduct:
        if isinstance(changes, RawProductForm):
            changes.validate()
            payload = changes.to_dict()
        else:
            payload = self.partial_payload(changes, enforce_rules_raw_product, RAW_PRODUCT_WIRE_FIELDS)
        data = await self.gateway.put(f"/raw-products/{product_id}", payload)
        return self.record(RawProduct, data)

    async def delete(self, product_id: str) -> None:
        await self.gateway.delete(f"/raw-products/{product_id}")

    async def update_stock(self, product_id: str, quantity: float, direction: str) -> RawProduct:
        """
        Move stock by `quantity` in `direction` ("add" or "subtract").

        The server applies the arithmetic and returns the updated record;
        quantity 0 is sent as-is and leaves currentStock unchanged.
        """
        enforce_rules_stock_update(quantity, direction)
        data = await self.gateway.patch(
            f"/raw-products/{product_id}/stock",
            {"quantity": quantity, "type": direction},
        )
        return self.record(RawProduct, data)


class PurchasesService(ResourceService):
    async def list(self) -> List[Purchase]:
        data = await self.gateway.get("/purchases")
        return self.records(Purchase, data)

    async def create(self, form: PurchaseForm) -> Purchase:
        form.validate()
        data = await self.gateway.post("/purchases", form.to_dict())
        return self.record(Purchase, data)

    async def delete(self, purchase_id: str) -> None:
        await self.gateway.delete(f"/purchases/{purchase_id}")
