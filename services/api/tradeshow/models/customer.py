"""Customer and customer location models.

Customers mirror ApparelMagic customer records keyed by am_customer_id.
Customers created locally during portal creation have no am_customer_id and
carry is_local_only=True until they exist in the ERP.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tradeshow.stores.postgres import Base


class Customer(Base):
    """Customer mirrored from the ERP (or created locally)."""

    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(primary_key=True)

    # ERP identity (NULL for local-only customers)
    am_customer_id: Mapped[str | None] = mapped_column(String(50), unique=True, index=True)

    customer_name: Mapped[str] = mapped_column(String(255), index=True)
    account_number: Mapped[str | None] = mapped_column(String(100))

    # Contact
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))

    # Address
    address_1: Mapped[str | None] = mapped_column(String(255))
    address_2: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(50))
    postal_code: Mapped[str | None] = mapped_column(String(20))
    country: Mapped[str | None] = mapped_column(String(50))

    # Account terms
    credit_limit: Mapped[float] = mapped_column(default=0)
    status: Mapped[str | None] = mapped_column(String(50))
    category: Mapped[str | None] = mapped_column(String(100))
    terms_id: Mapped[str | None] = mapped_column(String(50))
    division_id: Mapped[str | None] = mapped_column(String(50))
    price_group: Mapped[str | None] = mapped_column(String(50))
    notes: Mapped[str | None] = mapped_column(Text)

    is_active: Mapped[bool] = mapped_column(default=True)
    is_local_only: Mapped[bool] = mapped_column(default=False)

    # Timestamps
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
        return f"<Customer {self.am_customer_id or 'local'} {self.customer_name}>"


class CustomerLocation(Base):
    """Ship-to address belonging to a customer (read-only ERP mirror)."""

    __tablename__ = "customer_locations"

    id: Mapped[int] = mapped_column(primary_key=True)
    ship_to_id: Mapped[str | None] = mapped_column(String(50), unique=True, index=True)

    customer_id: Mapped[int | None] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), index=True)
    am_customer_id: Mapped[str | None] = mapped_column(String(50), index=True)

    location_name: Mapped[str] = mapped_column(String(255))
    address_1: Mapped[str | None] = mapped_column(String(255))
    address_2: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(50))
    postal_code: Mapped[str | None] = mapped_column(String(20))
    country: Mapped[str | None] = mapped_column(String(50))
    phone: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(255))
    store_number: Mapped[str | None] = mapped_column(String(50))

    is_main_location: Mapped[bool] = mapped_column(default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
