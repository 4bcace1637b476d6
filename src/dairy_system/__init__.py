"""Dairy cooperative management system.

Organized by feature modules (farmers, milk_collections, sales, payments, ...)
with a thin Flask controller layer over service and repository layers.
"""
