"""Ordering bounded context: orders, line items, stock and delivery."""
