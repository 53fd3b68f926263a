"""Field mapping from ERP / carrier payloads to local table columns.

Every function here is pure: a raw record (dict decoded from JSON) goes in,
a dict of column values comes out. Conventions:
- Numeric fields parse like JS parseFloat/parseInt; anything absent or
  non-numeric becomes 0, never None or NaN.
- Optional text fields map "" and missing to None.
- ERP dates arrive as M/D/YYYY and are rewritten to YYYY-MM-DD; any other
  shape is passed through untouched.
- ERP boolean flags are the string "1".
"""

from dataclasses import dataclass, field
import math
import re
from typing import Any

from tradeshow.models.invoice import PaymentStatus

MAX_PRODUCT_IMAGES = 25

_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_RE = re.compile(r"^\s*([+-]?\d+)")

# Carrier code -> display name
CARRIER_NAMES = {
    "ups": "UPS",
    "ups_walleted": "UPS",
    "fedex": "FedEx",
    "usps": "USPS",
    "stamps_com": "USPS",
    "dhl_express": "DHL Express",
    "dhl_ecommerce": "DHL eCommerce",
    "ontrac": "OnTrac",
    "amazon_buy_shipping": "Amazon",
}

# Carrier code -> tracking page template
TRACKING_URL_TEMPLATES = {
    "ups": "https://www.ups.com/track?tracknum={number}",
    "ups_walleted": "https://www.ups.com/track?tracknum={number}",
    "fedex": "https://www.fedex.com/fedextrack/?trknbr={number}",
    "usps": "https://tools.usps.com/go/TrackConfirmAction?tLabels={number}",
    "stamps_com": "https://tools.usps.com/go/TrackConfirmAction?tLabels={number}",
    "dhl_express": "https://www.dhl.com/en/express/tracking.html?AWB={number}",
    "ontrac": "https://www.ontrac.com/tracking/?trackingnumber={number}",
}


@dataclass
class LookupMaps:
    """External id -> local primary key maps built once per sync run."""

    customers: dict[str, int] = field(default_factory=dict)
    orders: dict[str, int] = field(default_factory=dict)
    order_numbers: dict[str, int] = field(default_factory=dict)


# ============================================================
# Scalar coercion
# ============================================================


def parse_number(value: Any, default: float = 0.0) -> float:
    """Parse a leading decimal number, falling back to `default`.

    "12.50" -> 12.5, "3 units" -> 3.0, "" / None / "abc" / "NaN" -> default.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else default
    match = _NUMBER_RE.match(str(value))
    if not match:
        return default
    number = float(match.group(1))
    return number if math.isfinite(number) else default


def parse_int(value: Any, default: int = 0) -> int:
    """Parse a leading integer ("3.7" -> 3), falling back to `default`."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, int):
        return value
    match = _INT_RE.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def parse_date(value: Any) -> str | None:
    """Rewrite M/D/YYYY as YYYY-MM-DD; other formats pass through unchanged."""
    if not value:
        return None
    raw = str(value)
    parts = raw.split("/")
    if len(parts) == 3:
        month, day, year = parts
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"
    return raw


def parse_flag(value: Any) -> bool:
    """ERP flags are "1" for true."""
    return value is True or str(value) == "1"


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _ext_id(value: Any) -> str | None:
    """Normalize an external id (ERP ids may arrive as numbers)."""
    if value is None or value == "":
        return None
    return str(value)


# ============================================================
# Derived fields
# ============================================================


def payment_status(balance: float, amount_paid: float, total: float) -> str:
    """Derive invoice payment status from balance vs. paid vs. total."""
    if balance <= 0 or amount_paid >= total:
        return PaymentStatus.PAID.value
    if amount_paid > 0:
        return PaymentStatus.PARTIAL.value
    return PaymentStatus.UNPAID.value


def carrier_name(carrier_code: str | None) -> str:
    """Display name for a ShipStation carrier code (the code itself if unknown)."""
    return CARRIER_NAMES.get((carrier_code or "").lower()) or carrier_code or "Unknown"


def tracking_url(carrier_code: str | None, tracking_number: str | None) -> str | None:
    """Public tracking page URL, or None for unknown carriers / missing numbers."""
    if not tracking_number:
        return None
    template = TRACKING_URL_TEMPLATES.get((carrier_code or "").lower())
    if not template:
        return None
    return template.format(number=tracking_number)


def collect_product_images(product: dict[str, Any], colorway_urls: list[str]) -> list[str]:
    """Merge product-level and colorway image URLs.

    Product-level images come first, duplicates are dropped, and the result is
    capped at MAX_PRODUCT_IMAGES.
    """
    urls: list[str] = []
    seen: set[str] = set()
    product_urls = [img.get("img") for img in (product.get("images") or []) if isinstance(img, dict)]
    for url in [*product_urls, *colorway_urls]:
        if not url or url in seen:
            continue
        seen.add(url)
        urls.append(url)
        if len(urls) >= MAX_PRODUCT_IMAGES:
            break
    return urls


# ============================================================
# Per-entity mappers
# ============================================================


def map_customer(record: dict[str, Any], lookups: LookupMaps | None = None) -> dict[str, Any]:
    return {
        "am_customer_id": _ext_id(record.get("customer_id")),
        "customer_name": record.get("customer_name") or "Unknown",
        "account_number": _text(record.get("account_number")),
        "email": _text(record.get("email")),
        "phone": _text(record.get("phone")),
        "address_1": _text(record.get("address_1")),
        "address_2": _text(record.get("address_2")),
        "city": _text(record.get("city")),
        "state": _text(record.get("state")),
        "postal_code": _text(record.get("postal_code")),
        "country": _text(record.get("country")),
        "credit_limit": parse_number(record.get("credit_limit")),
        "status": _text(record.get("status")),
        "category": _text(record.get("category")),
        "terms_id": _text(record.get("terms_id")),
        "division_id": _text(record.get("division_id")),
        "price_group": _text(record.get("price_group")),
        "notes": _text(record.get("notes")),
        "is_active": parse_flag(record.get("is_active")),
    }


def map_product(record: dict[str, Any], lookups: LookupMaps | None = None) -> dict[str, Any]:
    return {
        "product_id": _ext_id(record.get("product_id")),
        "style_number": str(record.get("style_number") or ""),
        "description": _text(record.get("description")),
        "category": _text(record.get("category")),
        "price": parse_number(record.get("price")),
        "content": _text(record.get("content")),
        "origin": _text(record.get("origin")),
    }


def map_sku(record: dict[str, Any], product: dict[str, Any]) -> dict[str, Any]:
    """Map a SKU returned by /products/{id}/skus for the given product."""
    return {
        "sku_id": _ext_id(record.get("sku_id")),
        "product_id": _ext_id(product.get("product_id")),
        "style_number": _text(product.get("style_number")),
        "attr_2": _text(record.get("attr_2")),
        "size": _text(record.get("size")),
        "price": parse_number(record.get("price")),
        "qty_avail_sell": parse_int(record.get("qty_avail_sell")),
    }


def map_inventory(record: dict[str, Any], lookups: LookupMaps | None = None) -> dict[str, Any]:
    """Map an /inventory row onto the quantity columns of an existing SKU."""
    return {
        "sku_id": _ext_id(record.get("sku_id")),
        "qty_avail_sell": parse_number(record.get("qty_avail_sell")),
        "qty_inventory": parse_number(record.get("qty_inventory")),
        "qty_alloc": parse_number(record.get("qty_alloc")),
        "qty_avail_alloc": parse_number(record.get("qty_avail_alloc")),
        "qty_open_po": parse_number(record.get("qty_open_po")),
        "qty_open_sales": parse_number(record.get("qty_open_sales")),
        "qty_picked": parse_number(record.get("qty_picked")),
        "cost": parse_number(record.get("cost")),
        "location": _text(record.get("location")),
        "upc": _text(record.get("upc_display")),
        "is_active": parse_flag(record.get("active")),
    }


def map_order(record: dict[str, Any], lookups: LookupMaps) -> dict[str, Any]:
    am_customer_id = _ext_id(record.get("customer_id"))
    order_id = _ext_id(record.get("order_id"))
    status = record.get("status") or ("shipped" if parse_number(record.get("qty_shipped")) > 0 else "open")
    return {
        "apparel_magic_id": order_id,
        "customer_id": lookups.customers.get(am_customer_id) if am_customer_id else None,
        "apparel_magic_customer_id": am_customer_id,
        "order_number": order_id,
        "po_number": _text(record.get("customer_po")),
        "order_status": str(status),
        "order_date": parse_date(record.get("date")),
        "ship_date": parse_date(record.get("date_start")),
        "cancel_date": parse_date(record.get("date_due")),
        "subtotal": parse_number(record.get("amount_subtotal")),
        "discount_amount": parse_number(record.get("amount_discount")),
        "shipping_amount": parse_number(record.get("amount_freight")),
        "tax_amount": parse_number(record.get("amount_tax_total")),
        "total_amount": parse_number(record.get("amount")),
        "ship_to_name": _text(record.get("name") or record.get("customer_name")),
        "ship_to_address_1": _text(record.get("address_1")),
        "ship_to_address_2": _text(record.get("address_2")),
        "ship_to_city": _text(record.get("city")),
        "ship_to_state": _text(record.get("state")),
        "ship_to_zip": _text(record.get("postal_code")),
        "ship_to_country": _text(record.get("country")),
        "shipping_method": _text(record.get("ship_via")),
        "trade_show": _text(record.get("season")),
        "notes": _text(record.get("notes")),
    }


def map_order_item(record: dict[str, Any], order_pk: int, am_order_id: str) -> dict[str, Any]:
    qty_shipped = parse_int(record.get("qty_shipped"))
    return {
        "apparel_magic_id": _ext_id(record.get("id")),
        "order_id": order_pk,
        "apparel_magic_order_id": am_order_id,
        "product_id": _ext_id(record.get("product_id")),
        "sku_id": _ext_id(record.get("sku_id")),
        "style_number": _text(record.get("style_number")),
        "color": _text(record.get("attr_2")),
        "size": _text(record.get("size")),
        "quantity_ordered": parse_int(record.get("qty")),
        "quantity_shipped": qty_shipped,
        "quantity_cancelled": parse_int(record.get("qty_cxl")),
        "unit_price": parse_number(record.get("unit_price")),
        "line_total": parse_number(record.get("amount")),
        "line_status": "shipped" if qty_shipped > 0 else "open",
    }


def map_invoice(record: dict[str, Any], lookups: LookupMaps) -> dict[str, Any]:
    total = parse_number(record.get("amount"))
    amount_paid = parse_number(record.get("amount_paid"))
    balance = parse_number(record.get("balance"))
    am_order_id = _ext_id(record.get("order_id"))
    am_customer_id = _ext_id(record.get("customer_id"))
    invoice_id = _ext_id(record.get("invoice_id"))
    return {
        "apparel_magic_id": invoice_id,
        "order_id": lookups.orders.get(am_order_id) if am_order_id else None,
        "customer_id": lookups.customers.get(am_customer_id) if am_customer_id else None,
        "apparel_magic_order_id": am_order_id,
        "apparel_magic_customer_id": am_customer_id,
        "invoice_number": invoice_id,
        "invoice_date": parse_date(record.get("date")),
        "due_date": parse_date(record.get("date_due")),
        "subtotal": parse_number(record.get("amount_subtotal")),
        "discount_amount": parse_number(record.get("amount_discount")),
        "shipping_amount": parse_number(record.get("amount_freight")),
        "tax_amount": parse_number(record.get("amount_tax")),
        "total_amount": total,
        "amount_paid": amount_paid,
        "balance_due": balance,
        "payment_status": payment_status(balance, amount_paid, total),
        "notes": _text(record.get("notes")),
    }


def map_pick_ticket(record: dict[str, Any], lookups: LookupMaps) -> dict[str, Any]:
    am_order_id = _ext_id(record.get("order_id"))
    am_customer_id = _ext_id(record.get("customer_id"))
    return {
        "pick_ticket_id": _ext_id(record.get("pick_ticket_id")),
        "order_id": lookups.orders.get(am_order_id) if am_order_id else None,
        "apparel_magic_order_id": am_order_id,
        "customer_id": lookups.customers.get(am_customer_id) if am_customer_id else None,
        "apparel_magic_customer_id": am_customer_id,
        "invoice_id": _ext_id(record.get("invoice_id")),
        "pick_ticket_date": parse_date(record.get("date")),
        "date_due": parse_date(record.get("date_due")),
        "tracking_number": _text(record.get("tracking_number")),
        "ship_via": _text(record.get("ship_via")),
        "ship_to_name": _text(record.get("ship_to_name")),
        "ship_to_address_1": _text(record.get("address_1")),
        "ship_to_address_2": _text(record.get("address_2")),
        "ship_to_city": _text(record.get("city")),
        "ship_to_state": _text(record.get("state")),
        "ship_to_zip": _text(record.get("postal_code")),
        "ship_to_country": _text(record.get("country")),
        "qty": parse_number(record.get("qty")),
        "subtotal": parse_number(record.get("amount_subtotal")),
        "discount_amount": parse_number(record.get("amount_discount")),
        "tax_amount": parse_number(record.get("amount_tax")),
        "freight_amount": parse_number(record.get("amount_freight")),
        "total_amount": parse_number(record.get("amount")),
        "is_void": parse_flag(record.get("void")),
        "has_error": parse_flag(record.get("error")),
        "notes": _text(record.get("notes")),
    }


def map_shipment(record: dict[str, Any], lookups: LookupMaps) -> dict[str, Any]:
    order_number = _ext_id(record.get("orderNumber"))
    order_pk = None
    if order_number:
        order_pk = lookups.order_numbers.get(order_number) or lookups.orders.get(order_number)
    carrier_code = _text(record.get("carrierCode"))
    tracking_number = _text(record.get("trackingNumber"))
    ship_to = record.get("shipTo") or {}
    weight = record.get("weight") or {}
    return {
        "shipstation_id": _ext_id(record.get("shipmentId")),
        "order_id": order_pk,
        "shipstation_order_id": _ext_id(record.get("orderId")),
        "order_number": order_number,
        "tracking_number": tracking_number,
        "tracking_url": tracking_url(carrier_code, tracking_number),
        "carrier_code": carrier_code,
        "carrier_name": carrier_name(carrier_code),
        "service_code": _text(record.get("serviceCode")),
        "service_name": _text(record.get("serviceName")),
        "shipment_status": "voided" if record.get("voided") else "shipped",
        "ship_date": _text(record.get("shipDate")),
        "delivery_date": _text(record.get("deliveryDate")),
        "weight_oz": parse_number(weight.get("value") if isinstance(weight, dict) else None),
        "shipment_cost": parse_number(record.get("shipmentCost")),
        "insurance_cost": parse_number(record.get("insuranceCost")),
        "ship_to_name": _text(ship_to.get("name")),
        "ship_to_city": _text(ship_to.get("city")),
        "ship_to_state": _text(ship_to.get("state")),
        "ship_to_zip": _text(ship_to.get("postalCode")),
        "ship_to_country": _text(ship_to.get("country")),
    }
