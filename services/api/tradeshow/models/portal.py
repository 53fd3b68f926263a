"""Portal models.

A portal is a customer-specific order review page addressed by a random
12-character link. Customer and address details are snapshotted at creation
time so later customer syncs do not rewrite what the customer was shown.
"""

from datetime import datetime
import enum

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tradeshow.stores.postgres import Base


class PortalStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    CONFIRMED = "confirmed"


class Portal(Base):
    """Customer-facing order portal."""

    __tablename__ = "portals"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Public link (immutable after creation)
    unique_link: Mapped[str] = mapped_column(String(12), unique=True, index=True)

    customer_id: Mapped[int | None] = mapped_column(ForeignKey("customers.id", ondelete="SET NULL"), index=True)
    location_id: Mapped[int | None] = mapped_column(ForeignKey("customer_locations.id", ondelete="SET NULL"))

    # Customer snapshot
    customer_name: Mapped[str] = mapped_column(String(255), index=True)
    customer_email: Mapped[str | None] = mapped_column(String(255))
    customer_phone: Mapped[str | None] = mapped_column(String(50))
    location_name: Mapped[str | None] = mapped_column(String(255))
    shipping_address_1: Mapped[str | None] = mapped_column(String(255))
    shipping_address_2: Mapped[str | None] = mapped_column(String(255))
    shipping_city: Mapped[str | None] = mapped_column(String(100))
    shipping_state: Mapped[str | None] = mapped_column(String(50))
    shipping_postal_code: Mapped[str | None] = mapped_column(String(20))
    shipping_country: Mapped[str | None] = mapped_column(String(50))

    trade_show_name: Mapped[str | None] = mapped_column(String(255), index=True)
    ship_date: Mapped[str | None] = mapped_column(String(32))
    notes: Mapped[str | None] = mapped_column(Text)

    status: Mapped[str] = mapped_column(String(20), default=PortalStatus.ACTIVE.value, index=True)
    is_new_customer: Mapped[bool] = mapped_column(default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Portal {self.unique_link} ({self.status})>"


class PortalItem(Base):
    """Pre-populated order line shown on a portal."""

    __tablename__ = "portal_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    portal_id: Mapped[int] = mapped_column(ForeignKey("portals.id", ondelete="CASCADE"), index=True)

    product_id: Mapped[str | None] = mapped_column(String(50))
    sku_id: Mapped[str | None] = mapped_column(String(50))
    style_number: Mapped[str] = mapped_column(String(100))
    attr_2: Mapped[str | None] = mapped_column(String(100))  # color
    size: Mapped[str | None] = mapped_column(String(50))
    quantity: Mapped[int] = mapped_column(default=0)
    price: Mapped[float] = mapped_column(default=0)
    delivery_date: Mapped[str | None] = mapped_column(String(32))
    notes: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(Text)


class PortalAttachment(Base):
    """Uploaded document or photo attached to a portal."""

    __tablename__ = "portal_attachments"

    id: Mapped[int] = mapped_column(primary_key=True)
    portal_id: Mapped[int] = mapped_column(ForeignKey("portals.id", ondelete="CASCADE"), index=True)

    file_name: Mapped[str] = mapped_column(String(255))
    file_url: Mapped[str] = mapped_column(Text)
    file_type: Mapped[str] = mapped_column(String(20))  # photo | document
    file_size: Mapped[int] = mapped_column(default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
