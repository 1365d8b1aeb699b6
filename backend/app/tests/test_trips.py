"""
Tests for trip endpoints.
"""
from app.models.destination import Destination


def test_create_trip_with_seed_destination(client, alice_headers):
    """Test that a destination name on creation seeds the first destination."""
    response = client.post(
        "/api/trips",
        json={
            "name": "Island hopping",
            "start_date": "2024-07-01",
            "end_date": "2024-07-10",
            "destination": "  Crete  "
        },
        headers=alice_headers
    )
    assert response.status_code == 201
    trip = response.json()
    assert trip["collaborator_ids"] == []
    
    destinations = client.get(f"/api/destinations/trip/{trip['id']}", headers=alice_headers).json()
    assert len(destinations) == 1
    assert destinations[0]["name"] == "Crete"
    assert destinations[0]["location"] == "Crete"
    assert destinations[0]["arrival_date"] == "2024-07-01"
    assert destinations[0]["departure_date"] == "2024-07-10"


def test_dates_are_not_validated(client, alice_headers):
    """Test that an end date before the start date is accepted as is."""
    response = client.post(
        "/api/trips",
        json={"name": "Backwards", "start_date": "2024-05-10", "end_date": "2024-05-01"},
        headers=alice_headers
    )
    assert response.status_code == 201
    assert response.json()["end_date"] == "2024-05-01"


def test_list_trips_includes_collaborations(client, alice_headers, bob_headers, trip):
    """Test that collaborators see shared trips and others do not."""
    bob = client.get("/api/users/me", headers=bob_headers).json()
    assert client.get("/api/trips", headers=bob_headers).json() == []
    
    response = client.post(
        f"/api/trips/{trip['id']}/collaborators",
        json={"user_id": bob["id"]},
        headers=alice_headers
    )
    assert response.status_code == 201
    assert response.json()["collaborator_ids"] == [bob["id"]]
    
    bob_trips = client.get("/api/trips", headers=bob_headers).json()
    assert [t["id"] for t in bob_trips] == [trip["id"]]


def test_adding_collaborator_twice_is_noop(client, alice_headers, bob_headers, trip):
    """Test that a collaborator is listed only once."""
    bob = client.get("/api/users/me", headers=bob_headers).json()
    for _ in range(2):
        client.post(f"/api/trips/{trip['id']}/collaborators", json={"user_id": bob["id"]}, headers=alice_headers)
    
    response = client.get(f"/api/trips/{trip['id']}", headers=alice_headers)
    assert response.json()["collaborator_ids"] == [bob["id"]]


def test_remove_collaborator(client, alice_headers, bob_headers, trip):
    """Test removing a collaborator."""
    bob = client.get("/api/users/me", headers=bob_headers).json()
    client.post(f"/api/trips/{trip['id']}/collaborators", json={"user_id": bob["id"]}, headers=alice_headers)
    
    response = client.delete(f"/api/trips/{trip['id']}/collaborators/{bob['id']}", headers=alice_headers)
    assert response.status_code == 200
    assert response.json()["collaborator_ids"] == []


def test_collaborator_on_missing_trip_returns_404(client, alice_headers):
    """Test that collaborator changes need an existing trip."""
    response = client.post("/api/trips/999/collaborators", json={"user_id": 1}, headers=alice_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Trip not found"


def test_update_trip_patches_supplied_fields(client, alice_headers, trip):
    """Test partial trip update."""
    response = client.patch(
        f"/api/trips/{trip['id']}",
        json={"name": "Summer in France"},
        headers=alice_headers
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Summer in France"
    assert response.json()["start_date"] == trip["start_date"]
    assert response.json()["description"] == trip["description"]


def test_get_missing_trip_returns_404(client, alice_headers):
    """Test trip lookup by a missing ID."""
    response = client.get("/api/trips/999", headers=alice_headers)
    assert response.status_code == 404


def test_delete_trip_does_not_cascade(client, alice_headers, db_session):
    """Test that a trip's destination survives the trip's deletion."""
    trip = client.post(
        "/api/trips",
        json={"name": "Day trip", "start_date": "2024-03-01", "end_date": "2024-03-01", "destination": "Bruges"},
        headers=alice_headers
    ).json()
    destination = client.get(f"/api/destinations/trip/{trip['id']}", headers=alice_headers).json()[0]
    
    response = client.delete(f"/api/trips/{trip['id']}", headers=alice_headers)
    assert response.status_code == 200
    assert client.get(f"/api/trips/{trip['id']}", headers=alice_headers).status_code == 404
    
    response = client.get(f"/api/destinations/{destination['id']}", headers=alice_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Bruges"
    assert db_session.query(Destination).filter(Destination.trip_id == trip["id"]).count() == 1


def test_delete_missing_trip_succeeds(client, alice_headers):
    """Test that deleting an unknown trip is not an error."""
    response = client.delete("/api/trips/999", headers=alice_headers)
    assert response.status_code == 200


def test_detect_trip_type(client, alice_headers, trip):
    """Test trip type detection from keywords and description."""
    response = client.get(f"/api/trips/{trip['id']}/trip-type", headers=alice_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "food"
    assert body["confidence"] == 80
    assert isinstance(body["confidence"], int)
    assert body["suggestions"]


def test_weather_suggestions_need_a_destination(client, alice_headers, trip):
    """Test weather suggestions without a destination or location."""
    response = client.get(f"/api/trips/{trip['id']}/weather", headers=alice_headers)
    assert response.status_code == 400


def test_weather_suggestions_for_first_destination(client, alice_headers, trip):
    """Test weather suggestions default to the first destination and trip start."""
    client.post(
        "/api/destinations",
        json={
            "trip_id": trip["id"],
            "name": "Nice",
            "location": "Nice coast",
            "arrival_date": "2024-04-01",
            "departure_date": "2024-04-05"
        },
        headers=alice_headers
    )
    response = client.get(f"/api/trips/{trip['id']}/weather", headers=alice_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["location"] == "Nice coast"
    assert body["season"] == "spring"
    assert "Swimwear and beach towel" in body["suggestions"]


def test_trip_summary(client, alice_headers, trip):
    """Test the markdown trip overview."""
    response = client.get(f"/api/trips/{trip['id']}/summary", headers=alice_headers)
    assert response.status_code == 200
    summary = response.json()["summary"]
    assert summary.startswith("# Spring in France")
    assert "(5 days)" in summary
    assert "No destinations added yet" in summary
