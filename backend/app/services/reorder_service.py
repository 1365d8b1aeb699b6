"""
Itinerary reorder flow.

A drag gesture moves one item inside the client-held list. The new list is
then walked and every item whose stored ``order`` differs from its new index
is updated on its own. A successful update is recorded on the local item so the
next gesture compares against what the server holds. Updates are independent:
a failed update is logged and skipped, leaving that item's local order stale.
The stored order can then be partially applied while the client keeps showing
the full reorder until it refetches.

The batched alternative, ``apply_order``, writes all positions in a single
transaction.
"""
import logging
from typing import Callable, Dict, List, Sequence
from sqlalchemy.orm import Session
from app.models.itinerary import ItineraryItem

logger = logging.getLogger(__name__)


def sort_by_order(items: Sequence[Dict]) -> List[Dict]:
    """Sort items as the client displays them. Missing orders count as 0."""
    return sorted(items, key=lambda item: item.get("order") or 0)


def move_item(items: Sequence[Dict], source_index: int, destination_index: int) -> List[Dict]:
    """Return a copy of items with the item at source_index moved to destination_index."""
    reordered = list(items)
    moved = reordered.pop(source_index)
    reordered.insert(destination_index, moved)
    return reordered


def persist_order(items: Sequence[Dict], update_order: Callable[[int, int], None]) -> List[int]:
    """
    Issue one update per item whose stored order differs from its position.

    Items updated successfully get their "order" set to the new position.

    Args:
        items: Items in their new display order
        update_order: Called as update_order(item_id, new_order)

    Returns:
        Ids of items whose update failed
    """
    failed = []
    for index, item in enumerate(items):
        if item.get("order") == index:
            continue
        try:
            update_order(item["id"], index)
            item["order"] = index
        except Exception as e:
            logger.error(f"Failed to update order of itinerary item {item['id']}: {e}")
            failed.append(item["id"])
    if failed:
        logger.warning(f"Reorder partially applied, {len(failed)} of {len(items)} items not updated")
    return failed


def apply_order(trip_id: int, item_ids: List[int], db: Session) -> List[ItineraryItem]:
    """
    Set order = position for every item of a trip in one transaction.

    item_ids must contain each of the trip's item ids exactly once.
    """
    items = db.query(ItineraryItem).filter(ItineraryItem.trip_id == trip_id).all()
    item_dict = {item.id: item for item in items}
    if len(item_ids) != len(item_dict) or set(item_ids) != set(item_dict):
        raise ValueError(
            f"Item ids must match the {len(item_dict)} itinerary items of trip {trip_id}"
        )

    for index, item_id in enumerate(item_ids):
        item_dict[item_id].order = index
    db.commit()

    return [item_dict[item_id] for item_id in item_ids]
