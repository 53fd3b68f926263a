"""Schemas for the portal endpoints (/api/portals, /api/admin/portals).

Request bodies use the camelCase keys the admin UI sends.
"""

from pydantic import BaseModel, Field


class PortalItemIn(BaseModel):
    """A pre-populated order line supplied at portal creation."""

    style_number: str = Field(alias="styleNumber")
    product_id: str | None = Field(alias="productId", default=None)
    sku_id: str | None = Field(alias="skuId", default=None)
    color: str | None = Field(alias="color", default=None)
    size: str | None = None
    quantity: int = Field(default=0, ge=0)
    price: float = Field(default=0, ge=0)
    delivery_date: str | None = Field(alias="deliveryDate", default=None)
    notes: str | None = None
    image_url: str | None = Field(alias="imageUrl", default=None)

    model_config = {"populate_by_name": True}


class PortalCreateRequest(BaseModel):
    """Body of POST /api/portals/create."""

    customer_id: int | None = Field(alias="customerId", default=None)
    customer_name: str | None = Field(alias="customerName", default=None)
    customer_email: str | None = Field(alias="customerEmail", default=None)
    customer_phone: str | None = Field(alias="customerPhone", default=None)
    location_id: int | None = Field(alias="locationId", default=None)
    location_name: str | None = Field(alias="locationName", default=None)
    address_1: str | None = Field(alias="address1", default=None)
    address_2: str | None = Field(alias="address2", default=None)
    city: str | None = None
    state: str | None = None
    postal_code: str | None = Field(alias="postalCode", default=None)
    country: str | None = None
    trade_show_name: str | None = Field(alias="tradeShowName", default=None)
    ship_date: str | None = Field(alias="shipDate", default=None)
    notes: str | None = None
    is_new_customer: bool = Field(alias="isNewCustomer", default=False)
    items: list[PortalItemIn] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class PortalSummary(BaseModel):
    id: int
    unique_link: str = Field(alias="uniqueLink")
    customer_name: str = Field(alias="customerName")
    status: str

    model_config = {"populate_by_name": True}


class PortalCreateResponse(BaseModel):
    success: bool = True
    portal: PortalSummary
    message: str = "Portal created successfully"


class PortalStatusRequest(BaseModel):
    """Body of the status update endpoints."""

    portal_id: int | None = Field(alias="portalId", default=None)
    status: str | None = None

    model_config = {"populate_by_name": True}


class PortalIdRequest(BaseModel):
    """Body of the delete endpoints."""

    portal_id: int | None = Field(alias="portalId", default=None)

    model_config = {"populate_by_name": True}
