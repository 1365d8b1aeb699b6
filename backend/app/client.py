"""
HTTP client for the Wayfarer API.

Holds the itinerary list the way the web client does, so a drag gesture can
be applied locally first and then written back item by item.
"""
import logging
from typing import Dict, List, Optional
import httpx
from app.services import reorder_service

logger = logging.getLogger(__name__)


class TripPlannerClient:
    """Thin wrapper around the REST API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0
    ):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.headers = {"Authorization": f"Bearer {token}"} if token else {}
        # trip_id -> items in display order
        self.itineraries: Dict[int, List[Dict]] = {}

    def _request(self, method: str, path: str, **kwargs):
        response = self.http.request(method, f"/api{path}", headers=self.headers, **kwargs)
        response.raise_for_status()
        return response.json()

    def sync_user(self, name: str = "", email: Optional[str] = None) -> Dict:
        payload = {"name": name}
        if email:
            payload["email"] = email
        return self._request("POST", "/users/sync", json=payload)

    def create_trip(self, name: str, start_date: str, end_date: str, **fields) -> Dict:
        payload = {"name": name, "start_date": start_date, "end_date": end_date, **fields}
        return self._request("POST", "/trips", json=payload)

    def create_itinerary_item(self, trip_id: int, date: str, title: str, **fields) -> Dict:
        payload = {"trip_id": trip_id, "date": date, "title": title, **fields}
        return self._request("POST", "/itinerary", json=payload)

    def update_itinerary_item(self, item_id: int, **fields) -> Dict:
        return self._request("PATCH", f"/itinerary/{item_id}", json=fields)

    def load_itinerary(self, trip_id: int) -> List[Dict]:
        """Fetch a trip's items and keep them as the local display list."""
        items = self._request("GET", f"/itinerary/trip/{trip_id}")
        self.itineraries[trip_id] = reorder_service.sort_by_order(items)
        return self.itineraries[trip_id]

    def move_itinerary_item(self, trip_id: int, source_index: int, destination_index: int) -> List[Dict]:
        """
        Apply a drag gesture and persist the new positions.

        The local list is updated before anything is written. Each changed item
        is then updated on its own; failed updates are logged and the local
        list is kept as is, so it may differ from the server until reloaded.
        """
        if trip_id not in self.itineraries:
            self.load_itinerary(trip_id)

        reordered = reorder_service.move_item(self.itineraries[trip_id], source_index, destination_index)
        self.itineraries[trip_id] = reordered

        def update_order(item_id: int, order: int):
            self.update_itinerary_item(item_id, order=order)

        failed = reorder_service.persist_order(reordered, update_order)
        if failed:
            logger.warning(f"Itinerary of trip {trip_id} is only partially saved")
        return reordered

    def reorder_itinerary(self, trip_id: int, item_ids: List[int]) -> List[Dict]:
        """Write the full order in one request and adopt the server's answer."""
        items = self._request("PUT", f"/itinerary/trip/{trip_id}/reorder", json=item_ids)
        self.itineraries[trip_id] = items
        return items

    def close(self):
        self.http.close()
