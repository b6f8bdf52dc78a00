"""Restaurant/menu catalog lookups used by order placement."""

from typing import Dict, Iterable, Optional

from .models import FoodItem, Restaurant


def get_restaurant(restaurant_id: int) -> Optional[Restaurant]:
    """Return the restaurant or None if it does not exist."""
    return Restaurant.objects.filter(id=restaurant_id).first()


def accepts_orders(restaurant: Restaurant) -> bool:
    """Only open restaurants take new orders; pending, busy, closed and rejected ones do not."""
    return restaurant.status == Restaurant.Status.OPEN


def food_items_for(restaurant_id: int, ids: Iterable[int]) -> Dict[int, FoodItem]:
    """Return the requested food items of one restaurant keyed by id.

    Ids that do not exist or belong to another restaurant are simply absent
    from the result.
    """
    return {
        item.id: item
        for item in FoodItem.objects.filter(restaurant_id=restaurant_id, id__in=set(ids))
    }
