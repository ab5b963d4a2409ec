from storefront.main import Storefront, create_storefront

__all__ = [
    "Storefront",
    "create_storefront",
]
