"""Core business logic layer.

Subpackages:
- shopping: aggregating recipe demand into a shopping list, and the stored reference list
"""
__all__ = ["shopping"]
