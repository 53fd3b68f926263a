"""Sales order models mirrored from the ERP.

Dates are stored as text: the ERP sends M/D/YYYY which is reformatted to
YYYY-MM-DD, and anything else is kept verbatim.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tradeshow.stores.postgres import Base


class Order(Base):
    """Sales order header."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    apparel_magic_id: Mapped[str] = mapped_column(String(50), unique=True, index=True)

    customer_id: Mapped[int | None] = mapped_column(ForeignKey("customers.id", ondelete="SET NULL"), index=True)
    apparel_magic_customer_id: Mapped[str | None] = mapped_column(String(50))

    order_number: Mapped[str | None] = mapped_column(String(50), index=True)
    po_number: Mapped[str | None] = mapped_column(String(100))
    order_status: Mapped[str | None] = mapped_column(String(50))

    order_date: Mapped[str | None] = mapped_column(String(32))
    ship_date: Mapped[str | None] = mapped_column(String(32))
    cancel_date: Mapped[str | None] = mapped_column(String(32))

    # Amounts
    subtotal: Mapped[float] = mapped_column(default=0)
    discount_amount: Mapped[float] = mapped_column(default=0)
    shipping_amount: Mapped[float] = mapped_column(default=0)
    tax_amount: Mapped[float] = mapped_column(default=0)
    total_amount: Mapped[float] = mapped_column(default=0)

    # Ship-to
    ship_to_name: Mapped[str | None] = mapped_column(String(255))
    ship_to_address_1: Mapped[str | None] = mapped_column(String(255))
    ship_to_address_2: Mapped[str | None] = mapped_column(String(255))
    ship_to_city: Mapped[str | None] = mapped_column(String(100))
    ship_to_state: Mapped[str | None] = mapped_column(String(50))
    ship_to_zip: Mapped[str | None] = mapped_column(String(20))
    ship_to_country: Mapped[str | None] = mapped_column(String(50))

    shipping_method: Mapped[str | None] = mapped_column(String(100))
    trade_show: Mapped[str | None] = mapped_column(String(100))  # ERP season
    notes: Mapped[str | None] = mapped_column(Text)

    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Order {self.apparel_magic_id}>"


class OrderItem(Base):
    """Order line; replaced wholesale whenever its order is synced."""

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    apparel_magic_id: Mapped[str | None] = mapped_column(String(50))

    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id", ondelete="CASCADE"), index=True)
    apparel_magic_order_id: Mapped[str] = mapped_column(String(50), index=True)

    product_id: Mapped[str | None] = mapped_column(String(50))
    sku_id: Mapped[str | None] = mapped_column(String(50))
    style_number: Mapped[str | None] = mapped_column(String(100))
    color: Mapped[str | None] = mapped_column(String(100))
    size: Mapped[str | None] = mapped_column(String(50))

    quantity_ordered: Mapped[int] = mapped_column(default=0)
    quantity_shipped: Mapped[int] = mapped_column(default=0)
    quantity_cancelled: Mapped[int] = mapped_column(default=0)
    unit_price: Mapped[float] = mapped_column(default=0)
    line_total: Mapped[float] = mapped_column(default=0)
    line_status: Mapped[str] = mapped_column(String(20), default="open")

    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
