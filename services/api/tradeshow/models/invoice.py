"""Invoice model mirrored from the ERP."""

from datetime import datetime
import enum

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tradeshow.stores.postgres import Base


class PaymentStatus(str, enum.Enum):
    PAID = "paid"
    PARTIAL = "partial"
    UNPAID = "unpaid"


class Invoice(Base):
    """Invoice linked to its order and customer by ERP id."""

    __tablename__ = "invoices"

    id: Mapped[int] = mapped_column(primary_key=True)
    apparel_magic_id: Mapped[str] = mapped_column(String(50), unique=True, index=True)

    order_id: Mapped[int | None] = mapped_column(ForeignKey("orders.id", ondelete="SET NULL"), index=True)
    customer_id: Mapped[int | None] = mapped_column(ForeignKey("customers.id", ondelete="SET NULL"), index=True)
    apparel_magic_order_id: Mapped[str | None] = mapped_column(String(50))
    apparel_magic_customer_id: Mapped[str | None] = mapped_column(String(50))

    invoice_number: Mapped[str | None] = mapped_column(String(50))
    invoice_date: Mapped[str | None] = mapped_column(String(32))
    due_date: Mapped[str | None] = mapped_column(String(32))

    subtotal: Mapped[float] = mapped_column(default=0)
    discount_amount: Mapped[float] = mapped_column(default=0)
    shipping_amount: Mapped[float] = mapped_column(default=0)
    tax_amount: Mapped[float] = mapped_column(default=0)
    total_amount: Mapped[float] = mapped_column(default=0)
    amount_paid: Mapped[float] = mapped_column(default=0)
    balance_due: Mapped[float] = mapped_column(default=0)

    payment_status: Mapped[str] = mapped_column(String(20), default=PaymentStatus.UNPAID.value)
    notes: Mapped[str | None] = mapped_column(Text)

    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
