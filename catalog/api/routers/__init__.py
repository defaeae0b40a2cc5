"""
API 라우터 모듈
"""

from . import auth, categories, inventory, pricing, products, variants

__all__ = ["auth", "categories", "inventory", "pricing", "products", "variants"]
