"""Order-item matrix projection.

Flat portal items are grouped by style number; each group becomes a color x
size grid. Cells are addressed as "color|size"; combinations with no item are
simply absent from the matrix.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ProductGroup:
    """All items of one style, pivoted into a color x size grid."""

    style_number: str
    image_url: str | None = None
    price: float = 0.0
    delivery_date: str | None = None
    notes: str | None = None
    items: list[dict[str, Any]] = field(default_factory=list)
    colors: list[str | None] = field(default_factory=list)
    sizes: list[str | None] = field(default_factory=list)
    matrix: dict[str, dict[str, Any]] = field(default_factory=dict)
    total_quantity: int = 0
    total_amount: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "styleNumber": self.style_number,
            "imageUrl": self.image_url,
            "price": self.price,
            "deliveryDate": self.delivery_date,
            "notes": self.notes,
            "items": self.items,
            "colors": self.colors,
            "sizes": self.sizes,
            "matrix": self.matrix,
            "totalQuantity": self.total_quantity,
            "totalAmount": round(self.total_amount, 2),
        }


def matrix_key(color: str | None, size: str | None) -> str:
    return f"{color}|{size}"


def build_product_groups(items: list[dict[str, Any]]) -> list[ProductGroup]:
    """Group items by style number, preserving first-seen order everywhere.

    Each item needs style_number, attr_2 (color), size, quantity and price.
    Group-level image, price, delivery date and notes come from the first item
    of the style.
    """
    groups: dict[str, ProductGroup] = {}

    for item in items:
        style_number = item.get("style_number") or ""
        group = groups.get(style_number)
        if group is None:
            group = ProductGroup(
                style_number=style_number,
                image_url=item.get("image_url"),
                price=float(item.get("price") or 0),
                delivery_date=item.get("delivery_date"),
                notes=item.get("notes"),
            )
            groups[style_number] = group

        color = item.get("attr_2")
        size = item.get("size")
        quantity = int(item.get("quantity") or 0)

        group.items.append(item)
        if color not in group.colors:
            group.colors.append(color)
        if size not in group.sizes:
            group.sizes.append(size)
        group.matrix[matrix_key(color, size)] = item
        group.total_quantity += quantity
        group.total_amount += float(item.get("price") or 0) * quantity

    return list(groups.values())


def grand_total(groups: list[ProductGroup]) -> float:
    """Sum of all group amounts."""
    return sum(group.total_amount for group in groups)
