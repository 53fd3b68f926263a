"""Shipment model mirrored from ShipStation."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tradeshow.stores.postgres import Base


class Shipment(Base):
    """Carrier shipment (label) linked to an order by order number."""

    __tablename__ = "shipments"

    id: Mapped[int] = mapped_column(primary_key=True)
    shipstation_id: Mapped[str] = mapped_column(String(50), unique=True, index=True)

    order_id: Mapped[int | None] = mapped_column(ForeignKey("orders.id", ondelete="SET NULL"), index=True)
    shipstation_order_id: Mapped[str | None] = mapped_column(String(50))
    order_number: Mapped[str | None] = mapped_column(String(50), index=True)

    tracking_number: Mapped[str | None] = mapped_column(String(100))
    tracking_url: Mapped[str | None] = mapped_column(Text)
    carrier_code: Mapped[str | None] = mapped_column(String(50))
    carrier_name: Mapped[str | None] = mapped_column(String(100))
    service_code: Mapped[str | None] = mapped_column(String(100))
    service_name: Mapped[str | None] = mapped_column(String(255))
    shipment_status: Mapped[str] = mapped_column(String(20), default="shipped")  # shipped | voided

    ship_date: Mapped[str | None] = mapped_column(String(40))
    delivery_date: Mapped[str | None] = mapped_column(String(40))

    weight_oz: Mapped[float] = mapped_column(default=0)
    shipment_cost: Mapped[float] = mapped_column(default=0)
    insurance_cost: Mapped[float] = mapped_column(default=0)

    ship_to_name: Mapped[str | None] = mapped_column(String(255))
    ship_to_city: Mapped[str | None] = mapped_column(String(100))
    ship_to_state: Mapped[str | None] = mapped_column(String(50))
    ship_to_zip: Mapped[str | None] = mapped_column(String(20))
    ship_to_country: Mapped[str | None] = mapped_column(String(50))

    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
