"""
Stock status and inventory aggregates.

Everything here is a pure function over plain product records: any object
exposing ``quantity``, ``price``, ``low_stock_threshold`` and ``type``
(ORM rows, schemas, or simple namespaces in tests). Nothing is persisted.
"""
from typing import Dict, Iterable, List, Sequence

IN_STOCK = "in_stock"
LOW_STOCK = "low_stock"
OUT_OF_STOCK = "out_of_stock"


def is_low_stock(p) -> bool:
    return p.quantity <= p.low_stock_threshold


def is_out_of_stock(p) -> bool:
    return p.quantity == 0


def stock_status(p) -> str:
    if is_out_of_stock(p):
        return OUT_OF_STOCK
    if is_low_stock(p):
        return LOW_STOCK
    return IN_STOCK


def stock_value(p) -> float:
    return p.quantity * p.price


def low_stock(products: Iterable) -> List:
    # out-of-stock rows satisfy quantity <= threshold too and are kept
    return [p for p in products if is_low_stock(p)]


def out_of_stock(products: Iterable) -> List:
    return [p for p in products if is_out_of_stock(p)]


def inventory_value(products: Iterable) -> float:
    return sum(stock_value(p) for p in products)


def top_by_value(products: Sequence, n: int) -> List:
    # sorted() is stable, so equal values keep their incoming order
    return sorted(products, key=stock_value, reverse=True)[:n]


def top_by_price(products: Sequence, n: int) -> List:
    return sorted(products, key=lambda p: p.price, reverse=True)[:n]


def group_by_category(products: Iterable) -> List[Dict]:
    """
    One entry per distinct ``type``: count, total stock value and mean
    price, ordered by count descending. Groups with equal counts stay in
    the order their type was first seen.
    """
    groups: Dict[str, Dict] = {}
    for p in products:
        g = groups.setdefault(p.type, {"type": p.type, "count": 0, "totalValue": 0, "priceSum": 0})
        g["count"] += 1
        g["totalValue"] += stock_value(p)
        g["priceSum"] += p.price

    result = []
    for g in groups.values():
        result.append(
            {
                "type": g["type"],
                "count": g["count"],
                "totalValue": g["totalValue"],
                "avgPrice": g["priceSum"] / g["count"],
            }
        )
    result.sort(key=lambda g: g["count"], reverse=True)
    return result
