"""Product catalog models.

A product (style) owns up to 25 ordered images and a set of SKUs, one per
size x color variant. Images and SKUs are replaced wholesale on every product
sync, keyed by the ERP product_id.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tradeshow.stores.postgres import Base


class Product(Base):
    """Product (style) mirrored from the ERP."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True)

    product_id: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    style_number: Mapped[str] = mapped_column(String(100), index=True)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str | None] = mapped_column(String(100))
    price: Mapped[float] = mapped_column(default=0)
    content: Mapped[str | None] = mapped_column(Text)  # fabric content
    origin: Mapped[str | None] = mapped_column(String(100))

    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Product {self.product_id} {self.style_number}>"


class ProductImage(Base):
    """Image URL attached to a product, ordered by sort_order."""

    __tablename__ = "product_images"

    id: Mapped[int] = mapped_column(primary_key=True)
    product_id: Mapped[str] = mapped_column(
        ForeignKey("products.product_id", ondelete="CASCADE"),
        index=True,
    )
    image_url: Mapped[str] = mapped_column(Text)
    sort_order: Mapped[int] = mapped_column(default=0)


class ProductSku(Base):
    """Size x color variant with price and inventory quantities."""

    __tablename__ = "product_skus"

    id: Mapped[int] = mapped_column(primary_key=True)
    sku_id: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    product_id: Mapped[str] = mapped_column(
        ForeignKey("products.product_id", ondelete="CASCADE"),
        index=True,
    )
    style_number: Mapped[str | None] = mapped_column(String(100))

    attr_2: Mapped[str | None] = mapped_column(String(100))  # color
    size: Mapped[str | None] = mapped_column(String(50))
    price: Mapped[float] = mapped_column(default=0)

    # Inventory (refreshed by the inventory sync)
    qty_avail_sell: Mapped[float] = mapped_column(default=0)
    qty_inventory: Mapped[float] = mapped_column(default=0)
    qty_alloc: Mapped[float] = mapped_column(default=0)
    qty_avail_alloc: Mapped[float] = mapped_column(default=0)
    qty_open_po: Mapped[float] = mapped_column(default=0)
    qty_open_sales: Mapped[float] = mapped_column(default=0)
    qty_picked: Mapped[float] = mapped_column(default=0)
    cost: Mapped[float] = mapped_column(default=0)
    location: Mapped[str | None] = mapped_column(String(100))  # warehouse bin
    upc: Mapped[str | None] = mapped_column(String(50))
    is_active: Mapped[bool] = mapped_column(default=True)

    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
