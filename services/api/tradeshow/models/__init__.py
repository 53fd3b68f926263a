"""SQLAlchemy ORM models.

Models represent database tables:
- customers, customer_locations: ERP customer mirror (plus local-only customers)
- products, product_images, product_skus: catalog mirror
- orders, order_items, invoices, pick_tickets: ERP order flow mirror
- shipments: ShipStation mirror
- portals, portal_items, portal_attachments: locally owned order portals
- sync_log: audit trail of sync runs
"""

from tradeshow.models.customer import Customer, CustomerLocation
from tradeshow.models.invoice import Invoice, PaymentStatus
from tradeshow.models.order import Order, OrderItem
from tradeshow.models.pick_ticket import PickTicket
from tradeshow.models.portal import Portal, PortalAttachment, PortalItem, PortalStatus
from tradeshow.models.product import Product, ProductImage, ProductSku
from tradeshow.models.shipment import Shipment
from tradeshow.models.sync_log import SyncLog, SyncStatus

__all__ = [
    "Customer",
    "CustomerLocation",
    "Invoice",
    "Order",
    "OrderItem",
    "PaymentStatus",
    "PickTicket",
    "Portal",
    "PortalAttachment",
    "PortalItem",
    "PortalStatus",
    "Product",
    "ProductImage",
    "ProductSku",
    "Shipment",
    "SyncLog",
    "SyncStatus",
]
