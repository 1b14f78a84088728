"""Routers package — HTTP endpoint definitions.

Files:
  product.py  — /product create + paginated list
"""
