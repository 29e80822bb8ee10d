from typing import Dict, List

from sqlalchemy.orm import Session

from inventory_api.models.product import Product
from inventory_api.models.user import ROLE_ADMIN, ROLE_USER
from inventory_api.repositories.product_repo import ProductRepository
from inventory_api.repositories.user_repo import UserRepository
from inventory_api.services import stock
from inventory_api.utils.time import as_utc, start_of_month

TOP_N = 5
RECENT_ACTIVITY = 10
CRITICAL_ITEMS = 5


def _user_ref(u):
    return {"id": u.id, "username": u.username} if u else None


def _iso(dt):
    return as_utc(dt).isoformat() if dt else None


def _newest_first(products: List[Product]) -> List[Product]:
    return sorted(products, key=lambda p: (as_utc(p.created_at), p.id), reverse=True)


class AnalyticsService:
    """
    Read-only reports over the product catalogue.

    Each public method loads the active products once and derives every
    figure from that single snapshot.
    """

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.users = UserRepository(db)

    def product_analytics(self) -> Dict:
        active = self.products.list_active()
        by_type = [
            {"type": g["type"], "count": g["count"]} for g in stock.group_by_category(active)
        ]
        return {
            "summary": {
                "totalProducts": len(active),
                "lowStockCount": len(stock.low_stock(active)),
                "outOfStockCount": len(stock.out_of_stock(active)),
            },
            "mostExpensive": [
                {"id": p.id, "name": p.name, "price": p.price, "sku": p.sku}
                for p in stock.top_by_price(active, TOP_N)
            ],
            "recentlyAdded": [
                {
                    "id": p.id,
                    "name": p.name,
                    "sku": p.sku,
                    "createdAt": _iso(p.created_at),
                    "createdBy": _user_ref(p.created_by),
                }
                for p in _newest_first(active)[:TOP_N]
            ],
            "productsByType": by_type,
        }

    def dashboard(self) -> Dict:
        month_start = start_of_month()
        active = self.products.list_active()
        low = stock.low_stock(active)
        out = stock.out_of_stock(active)
        total_products = len(active)
        total_value = stock.inventory_value(active)

        summary = {
            "users": {
                "total": self.users.count(),
                "admins": self.users.count(role=ROLE_ADMIN),
                "regular": self.users.count(role=ROLE_USER),
                "newThisMonth": self.users.count(since=month_start),
            },
            "products": {
                "total": total_products,
                "lowStock": len(low),
                "outOfStock": len(out),
                "newThisMonth": sum(1 for p in active if as_utc(p.created_at) >= month_start),
            },
            "inventory": {
                "totalValue": total_value,
                "averageProductValue": total_value / total_products if total_products else 0,
            },
        }

        charts = {
            "topProductsByValue": [
                {
                    "id": p.id,
                    "name": p.name,
                    "sku": p.sku,
                    "quantity": p.quantity,
                    "price": p.price,
                    "totalValue": stock.stock_value(p),
                }
                for p in stock.top_by_value(active, TOP_N)
            ],
            "productsByCategory": stock.group_by_category(active),
        }

        recent = [
            {
                "id": p.id,
                "name": p.name,
                "sku": p.sku,
                "createdAt": _iso(p.created_at),
                "createdBy": _user_ref(p.created_by),
            }
            for p in _newest_first(active)[:RECENT_ACTIVITY]
        ]

        alerts = {
            "lowStock": len(low),
            "outOfStock": len(out),
            "criticalItems": [
                {
                    "id": p.id,
                    "name": p.name,
                    "sku": p.sku,
                    "quantity": p.quantity,
                    "threshold": p.low_stock_threshold,
                }
                for p in low[:CRITICAL_ITEMS]
            ],
        }

        return {
            "summary": summary,
            "charts": charts,
            "recentActivity": recent,
            "stockAlerts": alerts,
        }
