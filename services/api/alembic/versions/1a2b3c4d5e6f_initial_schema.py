"""initial_schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "1a2b3c4d5e6f"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False)


def _updated_at() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False)


def _last_synced_at() -> sa.Column:
    return sa.Column("last_synced_at", sa.DateTime(timezone=True), nullable=True)


def _money(name: str) -> sa.Column:
    return sa.Column(name, sa.Float(), nullable=False)


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("am_customer_id", sa.String(length=50), nullable=True),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("account_number", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("address_1", sa.String(length=255), nullable=True),
        sa.Column("address_2", sa.String(length=255), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("state", sa.String(length=50), nullable=True),
        sa.Column("postal_code", sa.String(length=20), nullable=True),
        sa.Column("country", sa.String(length=50), nullable=True),
        _money("credit_limit"),
        sa.Column("status", sa.String(length=50), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("terms_id", sa.String(length=50), nullable=True),
        sa.Column("division_id", sa.String(length=50), nullable=True),
        sa.Column("price_group", sa.String(length=50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_local_only", sa.Boolean(), nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_customers_am_customer_id", "customers", ["am_customer_id"], unique=True)
    op.create_index("ix_customers_customer_name", "customers", ["customer_name"])

    op.create_table(
        "customer_locations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("ship_to_id", sa.String(length=50), nullable=True),
        sa.Column("customer_id", sa.Integer(), nullable=True),
        sa.Column("am_customer_id", sa.String(length=50), nullable=True),
        sa.Column("location_name", sa.String(length=255), nullable=False),
        sa.Column("address_1", sa.String(length=255), nullable=True),
        sa.Column("address_2", sa.String(length=255), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("state", sa.String(length=50), nullable=True),
        sa.Column("postal_code", sa.String(length=20), nullable=True),
        sa.Column("country", sa.String(length=50), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("store_number", sa.String(length=50), nullable=True),
        sa.Column("is_main_location", sa.Boolean(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_customer_locations_ship_to_id", "customer_locations", ["ship_to_id"], unique=True)
    op.create_index("ix_customer_locations_customer_id", "customer_locations", ["customer_id"])
    op.create_index("ix_customer_locations_am_customer_id", "customer_locations", ["am_customer_id"])

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.String(length=50), nullable=False),
        sa.Column("style_number", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        _money("price"),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("origin", sa.String(length=100), nullable=True),
        _last_synced_at(),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_products_product_id", "products", ["product_id"], unique=True)
    op.create_index("ix_products_style_number", "products", ["style_number"])

    op.create_table(
        "product_images",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.String(length=50), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["product_id"], ["products.product_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_product_images_product_id", "product_images", ["product_id"])

    op.create_table(
        "product_skus",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("sku_id", sa.String(length=50), nullable=False),
        sa.Column("product_id", sa.String(length=50), nullable=False),
        sa.Column("style_number", sa.String(length=100), nullable=True),
        sa.Column("attr_2", sa.String(length=100), nullable=True),
        sa.Column("size", sa.String(length=50), nullable=True),
        _money("price"),
        _money("qty_avail_sell"),
        _money("qty_inventory"),
        _money("qty_alloc"),
        _money("qty_avail_alloc"),
        _money("qty_open_po"),
        _money("qty_open_sales"),
        _money("qty_picked"),
        _money("cost"),
        sa.Column("location", sa.String(length=100), nullable=True),
        sa.Column("upc", sa.String(length=50), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        _last_synced_at(),
        sa.ForeignKeyConstraint(["product_id"], ["products.product_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_product_skus_sku_id", "product_skus", ["sku_id"], unique=True)
    op.create_index("ix_product_skus_product_id", "product_skus", ["product_id"])

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("apparel_magic_id", sa.String(length=50), nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=True),
        sa.Column("apparel_magic_customer_id", sa.String(length=50), nullable=True),
        sa.Column("order_number", sa.String(length=50), nullable=True),
        sa.Column("po_number", sa.String(length=100), nullable=True),
        sa.Column("order_status", sa.String(length=50), nullable=True),
        sa.Column("order_date", sa.String(length=32), nullable=True),
        sa.Column("ship_date", sa.String(length=32), nullable=True),
        sa.Column("cancel_date", sa.String(length=32), nullable=True),
        _money("subtotal"),
        _money("discount_amount"),
        _money("shipping_amount"),
        _money("tax_amount"),
        _money("total_amount"),
        sa.Column("ship_to_name", sa.String(length=255), nullable=True),
        sa.Column("ship_to_address_1", sa.String(length=255), nullable=True),
        sa.Column("ship_to_address_2", sa.String(length=255), nullable=True),
        sa.Column("ship_to_city", sa.String(length=100), nullable=True),
        sa.Column("ship_to_state", sa.String(length=50), nullable=True),
        sa.Column("ship_to_zip", sa.String(length=20), nullable=True),
        sa.Column("ship_to_country", sa.String(length=50), nullable=True),
        sa.Column("shipping_method", sa.String(length=100), nullable=True),
        sa.Column("trade_show", sa.String(length=100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _last_synced_at(),
        _created_at(),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_orders_apparel_magic_id", "orders", ["apparel_magic_id"], unique=True)
    op.create_index("ix_orders_customer_id", "orders", ["customer_id"])
    op.create_index("ix_orders_order_number", "orders", ["order_number"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("apparel_magic_id", sa.String(length=50), nullable=True),
        sa.Column("order_id", sa.Integer(), nullable=False),
        sa.Column("apparel_magic_order_id", sa.String(length=50), nullable=False),
        sa.Column("product_id", sa.String(length=50), nullable=True),
        sa.Column("sku_id", sa.String(length=50), nullable=True),
        sa.Column("style_number", sa.String(length=100), nullable=True),
        sa.Column("color", sa.String(length=100), nullable=True),
        sa.Column("size", sa.String(length=50), nullable=True),
        sa.Column("quantity_ordered", sa.Integer(), nullable=False),
        sa.Column("quantity_shipped", sa.Integer(), nullable=False),
        sa.Column("quantity_cancelled", sa.Integer(), nullable=False),
        _money("unit_price"),
        _money("line_total"),
        sa.Column("line_status", sa.String(length=20), nullable=False),
        _last_synced_at(),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])
    op.create_index("ix_order_items_apparel_magic_order_id", "order_items", ["apparel_magic_order_id"])

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("apparel_magic_id", sa.String(length=50), nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=True),
        sa.Column("customer_id", sa.Integer(), nullable=True),
        sa.Column("apparel_magic_order_id", sa.String(length=50), nullable=True),
        sa.Column("apparel_magic_customer_id", sa.String(length=50), nullable=True),
        sa.Column("invoice_number", sa.String(length=50), nullable=True),
        sa.Column("invoice_date", sa.String(length=32), nullable=True),
        sa.Column("due_date", sa.String(length=32), nullable=True),
        _money("subtotal"),
        _money("discount_amount"),
        _money("shipping_amount"),
        _money("tax_amount"),
        _money("total_amount"),
        _money("amount_paid"),
        _money("balance_due"),
        sa.Column("payment_status", sa.String(length=20), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        _last_synced_at(),
        _created_at(),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_invoices_apparel_magic_id", "invoices", ["apparel_magic_id"], unique=True)
    op.create_index("ix_invoices_order_id", "invoices", ["order_id"])
    op.create_index("ix_invoices_customer_id", "invoices", ["customer_id"])

    op.create_table(
        "pick_tickets",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("pick_ticket_id", sa.String(length=50), nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=True),
        sa.Column("apparel_magic_order_id", sa.String(length=50), nullable=True),
        sa.Column("customer_id", sa.Integer(), nullable=True),
        sa.Column("apparel_magic_customer_id", sa.String(length=50), nullable=True),
        sa.Column("invoice_id", sa.String(length=50), nullable=True),
        sa.Column("pick_ticket_date", sa.String(length=32), nullable=True),
        sa.Column("date_due", sa.String(length=32), nullable=True),
        sa.Column("tracking_number", sa.String(length=100), nullable=True),
        sa.Column("ship_via", sa.String(length=100), nullable=True),
        sa.Column("ship_to_name", sa.String(length=255), nullable=True),
        sa.Column("ship_to_address_1", sa.String(length=255), nullable=True),
        sa.Column("ship_to_address_2", sa.String(length=255), nullable=True),
        sa.Column("ship_to_city", sa.String(length=100), nullable=True),
        sa.Column("ship_to_state", sa.String(length=50), nullable=True),
        sa.Column("ship_to_zip", sa.String(length=20), nullable=True),
        sa.Column("ship_to_country", sa.String(length=50), nullable=True),
        _money("qty"),
        _money("subtotal"),
        _money("discount_amount"),
        _money("tax_amount"),
        _money("freight_amount"),
        _money("total_amount"),
        sa.Column("is_void", sa.Boolean(), nullable=False),
        sa.Column("has_error", sa.Boolean(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        _last_synced_at(),
        _created_at(),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_pick_tickets_pick_ticket_id", "pick_tickets", ["pick_ticket_id"], unique=True)
    op.create_index("ix_pick_tickets_order_id", "pick_tickets", ["order_id"])
    op.create_index("ix_pick_tickets_customer_id", "pick_tickets", ["customer_id"])

    op.create_table(
        "shipments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("shipstation_id", sa.String(length=50), nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=True),
        sa.Column("shipstation_order_id", sa.String(length=50), nullable=True),
        sa.Column("order_number", sa.String(length=50), nullable=True),
        sa.Column("tracking_number", sa.String(length=100), nullable=True),
        sa.Column("tracking_url", sa.Text(), nullable=True),
        sa.Column("carrier_code", sa.String(length=50), nullable=True),
        sa.Column("carrier_name", sa.String(length=100), nullable=True),
        sa.Column("service_code", sa.String(length=100), nullable=True),
        sa.Column("service_name", sa.String(length=255), nullable=True),
        sa.Column("shipment_status", sa.String(length=20), nullable=False),
        sa.Column("ship_date", sa.String(length=40), nullable=True),
        sa.Column("delivery_date", sa.String(length=40), nullable=True),
        _money("weight_oz"),
        _money("shipment_cost"),
        _money("insurance_cost"),
        sa.Column("ship_to_name", sa.String(length=255), nullable=True),
        sa.Column("ship_to_city", sa.String(length=100), nullable=True),
        sa.Column("ship_to_state", sa.String(length=50), nullable=True),
        sa.Column("ship_to_zip", sa.String(length=20), nullable=True),
        sa.Column("ship_to_country", sa.String(length=50), nullable=True),
        _last_synced_at(),
        _created_at(),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_shipments_shipstation_id", "shipments", ["shipstation_id"], unique=True)
    op.create_index("ix_shipments_order_id", "shipments", ["order_id"])
    op.create_index("ix_shipments_order_number", "shipments", ["order_number"])

    op.create_table(
        "portals",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("unique_link", sa.String(length=12), nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=True),
        sa.Column("location_id", sa.Integer(), nullable=True),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_email", sa.String(length=255), nullable=True),
        sa.Column("customer_phone", sa.String(length=50), nullable=True),
        sa.Column("location_name", sa.String(length=255), nullable=True),
        sa.Column("shipping_address_1", sa.String(length=255), nullable=True),
        sa.Column("shipping_address_2", sa.String(length=255), nullable=True),
        sa.Column("shipping_city", sa.String(length=100), nullable=True),
        sa.Column("shipping_state", sa.String(length=50), nullable=True),
        sa.Column("shipping_postal_code", sa.String(length=20), nullable=True),
        sa.Column("shipping_country", sa.String(length=50), nullable=True),
        sa.Column("trade_show_name", sa.String(length=255), nullable=True),
        sa.Column("ship_date", sa.String(length=32), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("is_new_customer", sa.Boolean(), nullable=False),
        _created_at(),
        _updated_at(),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["location_id"], ["customer_locations.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_portals_unique_link", "portals", ["unique_link"], unique=True)
    op.create_index("ix_portals_customer_id", "portals", ["customer_id"])
    op.create_index("ix_portals_customer_name", "portals", ["customer_name"])
    op.create_index("ix_portals_trade_show_name", "portals", ["trade_show_name"])
    op.create_index("ix_portals_status", "portals", ["status"])

    op.create_table(
        "portal_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("portal_id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.String(length=50), nullable=True),
        sa.Column("sku_id", sa.String(length=50), nullable=True),
        sa.Column("style_number", sa.String(length=100), nullable=False),
        sa.Column("attr_2", sa.String(length=100), nullable=True),
        sa.Column("size", sa.String(length=50), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False),
        _money("price"),
        sa.Column("delivery_date", sa.String(length=32), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["portal_id"], ["portals.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_portal_items_portal_id", "portal_items", ["portal_id"])

    op.create_table(
        "portal_attachments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("portal_id", sa.Integer(), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("file_type", sa.String(length=20), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["portal_id"], ["portals.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_portal_attachments_portal_id", "portal_attachments", ["portal_id"])

    op.create_table(
        "sync_log",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("sync_type", sa.String(length=50), nullable=False),
        sa.Column("source", sa.String(length=50), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("records_processed", sa.Integer(), nullable=False),
        sa.Column("records_created", sa.Integer(), nullable=False),
        sa.Column("records_updated", sa.Integer(), nullable=False),
        sa.Column("errors", sa.Integer(), nullable=False),
        sa.Column("error_details_json", sa.Text(), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sync_log_sync_type", "sync_log", ["sync_type"])


def downgrade() -> None:
    op.drop_table("sync_log")
    op.drop_table("portal_attachments")
    op.drop_table("portal_items")
    op.drop_table("portals")
    op.drop_table("shipments")
    op.drop_table("pick_tickets")
    op.drop_table("invoices")
    op.drop_table("order_items")
    op.drop_table("orders")
    op.drop_table("product_skus")
    op.drop_table("product_images")
    op.drop_table("products")
    op.drop_table("customer_locations")
    op.drop_table("customers")
