import math

import pytest

from tradeshow.services.field_mapper import (
    MAX_PRODUCT_IMAGES,
    LookupMaps,
    carrier_name,
    collect_product_images,
    map_customer,
    map_inventory,
    map_invoice,
    map_order,
    map_order_item,
    map_pick_ticket,
    map_shipment,
    parse_date,
    parse_int,
    parse_number,
    payment_status,
    tracking_url,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("12.50", 12.5),
        ("3 units", 3.0),
        (7, 7.0),
        ("", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        ("NaN", 0.0),
        (float("nan"), 0.0),
    ],
)
def test_parse_number_defaults_to_zero(value, expected):
    """Unparseable numbers become zero."""
    result = parse_number(value)
    assert result == expected
    assert not math.isnan(result)


def test_parse_int_truncates_leading_integer():
    """Integers are read from the leading digits."""
    assert parse_int("3.7") == 3
    assert parse_int("12 pcs") == 12
    assert parse_int(None) == 0
    assert parse_int("x") == 0


def test_parse_date_reformats_us_dates():
    """M/D/YYYY becomes YYYY-MM-DD."""
    assert parse_date("3/5/2025") == "2025-03-05"
    assert parse_date("12/31/2024") == "2024-12-31"


def test_parse_date_passes_other_formats_through():
    """Other date formats are kept as given."""
    assert parse_date("2025-03-05") == "2025-03-05"
    assert parse_date("March 5") == "March 5"
    assert parse_date("") is None
    assert parse_date(None) is None


def test_payment_status_examples():
    """Payment status from balance, paid and total."""
    assert payment_status(balance=0, amount_paid=0, total=100) == "paid"
    assert payment_status(balance=50, amount_paid=50, total=100) == "partial"
    assert payment_status(balance=100, amount_paid=0, total=100) == "unpaid"
    assert payment_status(balance=10, amount_paid=100, total=100) == "paid"


def test_carrier_lookups():
    """Carrier names and tracking URLs."""
    assert carrier_name("UPS") == "UPS"
    assert carrier_name("stamps_com") == "USPS"
    assert carrier_name("acme_freight") == "acme_freight"
    assert carrier_name(None) == "Unknown"

    assert tracking_url("fedex", "123") == "https://www.fedex.com/fedextrack/?trknbr=123"
    assert tracking_url("acme_freight", "123") is None
    assert tracking_url("ups", None) is None


def test_collect_product_images_dedupes_and_caps():
    """Image merge drops duplicates and caps the list."""
    product = {"images": [{"img": "https://cdn/a.jpg"}, {"img": "https://cdn/b.jpg"}, {"img": ""}]}
    colorway = ["https://cdn/b.jpg"] + [f"https://cdn/c{i}.jpg" for i in range(40)]

    urls = collect_product_images(product, colorway)

    assert urls[:2] == ["https://cdn/a.jpg", "https://cdn/b.jpg"]
    assert len(urls) == MAX_PRODUCT_IMAGES
    assert len(set(urls)) == len(urls)


def test_map_customer_flags_and_blank_text():
    """Customer flags parse and blank text becomes None."""
    values = map_customer({"customer_id": 42, "customer_name": "Acme", "is_active": "1", "email": "", "credit_limit": ""})
    assert values["am_customer_id"] == "42"
    assert values["is_active"] is True
    assert values["email"] is None
    assert values["credit_limit"] == 0.0


def test_map_order_unresolved_customer_links_to_null():
    """Unknown customer ids leave the order unlinked."""
    values = map_order({"order_id": "1001", "customer_id": "C9", "date": "1/2/2025", "amount": "250.00"}, LookupMaps())
    assert values["customer_id"] is None
    assert values["apparel_magic_customer_id"] == "C9"
    assert values["order_date"] == "2025-01-02"
    assert values["total_amount"] == 250.0
    assert values["order_status"] == "open"


def test_map_order_resolves_customer_and_shipped_status():
    """Orders link to customers and pick up shipped status."""
    lookups = LookupMaps(customers={"C1": 7})
    values = map_order({"order_id": "1002", "customer_id": "C1", "qty_shipped": "4"}, lookups)
    assert values["customer_id"] == 7
    assert values["order_status"] == "shipped"


def test_map_order_item_line_status():
    """Order item line status mapping."""
    values = map_order_item({"id": "9", "qty": "5", "qty_shipped": "2", "unit_price": "10", "attr_2": "Red"}, 3, "1001")
    assert values["order_id"] == 3
    assert values["color"] == "Red"
    assert values["quantity_ordered"] == 5
    assert values["line_status"] == "shipped"


def test_map_invoice_derives_payment_status():
    """Invoices get a derived payment status."""
    lookups = LookupMaps(customers={"C1": 1}, orders={"1001": 5})
    values = map_invoice(
        {"invoice_id": "INV1", "order_id": "1001", "customer_id": "C1", "amount": "100", "amount_paid": "40", "balance": "60"},
        lookups,
    )
    assert values["order_id"] == 5
    assert values["customer_id"] == 1
    assert values["payment_status"] == "partial"


def test_map_pick_ticket_flags():
    """Pick ticket void and error flags."""
    values = map_pick_ticket({"pick_ticket_id": "PT1", "void": "1", "error": "0"}, LookupMaps())
    assert values["is_void"] is True
    assert values["has_error"] is False
    assert values["order_id"] is None


def test_map_inventory_numeric_defaults():
    """Inventory quantities default to zero."""
    values = map_inventory({"sku_id": "S1", "qty_avail_sell": "12", "qty_alloc": None, "active": "1"})
    assert values["qty_avail_sell"] == 12.0
    assert values["qty_alloc"] == 0.0
    assert values["is_active"] is True


def test_map_shipment_links_by_order_number_then_erp_id():
    """Shipments link by order number, then by ERP order id."""
    lookups = LookupMaps(orders={"2002": 11}, order_numbers={"1001": 10})
    by_number = map_shipment({"shipmentId": 1, "orderNumber": "1001", "carrierCode": "ups", "trackingNumber": "1Z"}, lookups)
    by_erp_id = map_shipment({"shipmentId": 2, "orderNumber": "2002", "voided": True}, lookups)
    unknown = map_shipment({"shipmentId": 3, "orderNumber": "9999"}, lookups)

    assert by_number["order_id"] == 10
    assert by_number["carrier_name"] == "UPS"
    assert by_number["tracking_url"] == "https://www.ups.com/track?tracknum=1Z"
    assert by_number["shipment_status"] == "shipped"
    assert by_erp_id["order_id"] == 11
    assert by_erp_id["shipment_status"] == "voided"
    assert unknown["order_id"] is None
