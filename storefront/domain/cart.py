# storefront/domain/cart.py
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class CartLine:
    product_id: int
    unit_price: Decimal
    quantity: int = 1
    name: str = ""

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class Cart:
    """
    Session-scoped cart value.

    Holds at most one line per product, in order of first add. Prices are
    captured when a product is first added and are not refreshed from the
    catalog afterwards. Mutations on unknown product ids are no-ops so stale
    client state never turns into an error.
    """

    def __init__(self, lines: List[CartLine] | None = None):
        self._lines: List[CartLine] = []
        for line in lines or []:
            self._merge(line)

    def _index(self, product_id: int) -> int | None:
        for i, line in enumerate(self._lines):
            if line.product_id == product_id:
                return i
        return None

    def _merge(self, line: CartLine) -> None:
        idx = self._index(line.product_id)
        if idx is None:
            self._lines.append(replace(line, quantity=max(1, line.quantity)))
        else:
            existing = self._lines[idx]
            self._lines[idx] = replace(existing, quantity=existing.quantity + max(1, line.quantity))

    def add_item(self, product_id: int, unit_price: Decimal, name: str = "") -> CartLine:
        idx = self._index(product_id)
        if idx is None:
            line = CartLine(product_id=product_id, unit_price=Decimal(unit_price), quantity=1, name=name)
            self._lines.append(line)
            return line

        line = replace(self._lines[idx], quantity=self._lines[idx].quantity + 1)
        self._lines[idx] = line
        return line

    def set_quantity(self, product_id: int, quantity: int) -> None:
        idx = self._index(product_id)
        if idx is None:
            return
        # non-positive input is coerced, removal goes through remove_item
        self._lines[idx] = replace(self._lines[idx], quantity=quantity if quantity > 0 else 1)

    def remove_item(self, product_id: int) -> None:
        idx = self._index(product_id)
        if idx is not None:
            del self._lines[idx]

    def total(self) -> Decimal:
        return sum((line.subtotal for line in self._lines), Decimal("0.00"))

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def snapshot(self) -> Tuple[CartLine, ...]:
        return tuple(self._lines)

    def clear(self) -> None:
        self._lines.clear()

    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: int) -> bool:
        return self._index(product_id) is not None

    #storage (de)serialization, json-friendly values only
    def to_data(self) -> List[Dict[str, Any]]:
        return [
            {
                "product_id": line.product_id,
                "unit_price": str(line.unit_price),
                "quantity": line.quantity,
                "name": line.name,
            }
            for line in self._lines
        ]

    @classmethod
    def from_data(cls, data: List[Dict[str, Any]] | None) -> "Cart":
        return cls(
            [
                CartLine(
                    product_id=int(item["product_id"]),
                    unit_price=Decimal(str(item["unit_price"])),
                    quantity=int(item.get("quantity", 1)),
                    name=item.get("name", ""),
                )
                for item in data or []
            ]
        )
