"""InvoiceDesk: products, clients and invoices for a small business."""

__version__ = "0.3.0"
