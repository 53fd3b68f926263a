"""Pick ticket model mirrored from the ERP."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tradeshow.stores.postgres import Base


class PickTicket(Base):
    """Warehouse pick ticket."""

    __tablename__ = "pick_tickets"

    id: Mapped[int] = mapped_column(primary_key=True)
    pick_ticket_id: Mapped[str] = mapped_column(String(50), unique=True, index=True)

    order_id: Mapped[int | None] = mapped_column(ForeignKey("orders.id", ondelete="SET NULL"), index=True)
    apparel_magic_order_id: Mapped[str | None] = mapped_column(String(50))
    customer_id: Mapped[int | None] = mapped_column(ForeignKey("customers.id", ondelete="SET NULL"), index=True)
    apparel_magic_customer_id: Mapped[str | None] = mapped_column(String(50))
    invoice_id: Mapped[str | None] = mapped_column(String(50))  # ERP invoice id

    pick_ticket_date: Mapped[str | None] = mapped_column(String(32))
    date_due: Mapped[str | None] = mapped_column(String(32))

    tracking_number: Mapped[str | None] = mapped_column(String(100))
    ship_via: Mapped[str | None] = mapped_column(String(100))
    ship_to_name: Mapped[str | None] = mapped_column(String(255))
    ship_to_address_1: Mapped[str | None] = mapped_column(String(255))
    ship_to_address_2: Mapped[str | None] = mapped_column(String(255))
    ship_to_city: Mapped[str | None] = mapped_column(String(100))
    ship_to_state: Mapped[str | None] = mapped_column(String(50))
    ship_to_zip: Mapped[str | None] = mapped_column(String(20))
    ship_to_country: Mapped[str | None] = mapped_column(String(50))

    qty: Mapped[float] = mapped_column(default=0)
    subtotal: Mapped[float] = mapped_column(default=0)
    discount_amount: Mapped[float] = mapped_column(default=0)
    tax_amount: Mapped[float] = mapped_column(default=0)
    freight_amount: Mapped[float] = mapped_column(default=0)
    total_amount: Mapped[float] = mapped_column(default=0)

    is_void: Mapped[bool] = mapped_column(default=False)
    has_error: Mapped[bool] = mapped_column(default=False)
    notes: Mapped[str | None] = mapped_column(Text)

    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
