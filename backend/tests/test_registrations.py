"""
Tests for registration endpoints, error mapping and CSV export.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_register(client: AsyncClient, test_event, registration_payload):
    """Successful registration returns the row and the updated event."""
    response = await client.post(
        "/api/registrations",
        json=registration_payload(test_event.id, tickets=2, comments="Vegetarian"),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Registration successful"
    registration = data["registration"]
    assert registration["event_id"] == test_event.id
    assert registration["first_name"] == "Ada"
    assert registration["tickets"] == 2
    assert registration["comments"] == "Vegetarian"
    assert registration["registration_date"] is not None
    assert data["event"]["attendees"] == 2

    event_response = await client.get(f"/api/events/{test_event.id}")
    assert event_response.json()["attendees"] == 2


@pytest.mark.asyncio
async def test_register_missing_fields(client: AsyncClient, test_event, registration_payload):
    body = registration_payload(test_event.id)
    del body["phone"]
    del body["firstName"]
    response = await client.post("/api/registrations", json=body)
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "All required fields must be filled"
    assert data["code"] == "VALIDATION_FAILED"
    assert set(data["fields"]) == {"phone", "firstName"}


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["[1, 2]", "not json", ""])
async def test_register_body_not_an_object(client: AsyncClient, content):
    response = await client.post(
        "/api/registrations",
        content=content,
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "All required fields must be filled"
    assert data["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_register_malformed_event_id(client: AsyncClient, registration_payload):
    response = await client.post("/api/registrations", json=registration_payload("abc"))
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid value for eventId"
    assert data["fields"] == ["eventId"]


@pytest.mark.asyncio
async def test_register_malformed_email(client: AsyncClient, test_event, registration_payload):
    response = await client.post(
        "/api/registrations",
        json=registration_payload(test_event.id, email="not-an-email"),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_register_unknown_event(client: AsyncClient, registration_payload):
    response = await client.post("/api/registrations", json=registration_payload(99999))
    assert response.status_code == 404
    assert response.json()["code"] == "EVENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_register_over_capacity(client: AsyncClient, test_event, registration_payload):
    """Capacity errors report how many tickets are left."""
    first = await client.post("/api/registrations", json=registration_payload(test_event.id, tickets=7))
    assert first.status_code == 201

    response = await client.post("/api/registrations", json=registration_payload(test_event.id, tickets=4))
    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "CAPACITY_EXCEEDED"
    assert data["error"] == "Only 3 tickets available for this event"
    assert data["remaining"] == 3
    assert data["requested"] == 4


@pytest.mark.asyncio
async def test_register_exact_remaining(client: AsyncClient, test_event, registration_payload):
    response = await client.post("/api/registrations", json=registration_payload(test_event.id, tickets=10))
    assert response.status_code == 201
    assert response.json()["event"]["attendees"] == 10


@pytest.mark.asyncio
async def test_list_registrations(client: AsyncClient, test_event, registration_payload):
    await client.post("/api/registrations", json=registration_payload(test_event.id, tickets=1))
    await client.post(
        "/api/registrations",
        json=registration_payload(test_event.id, tickets=2, firstName="Grace", lastName="Hopper"),
    )

    response = await client.get(f"/api/events/{test_event.id}/registrations")
    assert response.status_code == 200
    data = response.json()
    assert [r["first_name"] for r in data] == ["Ada", "Grace"]
    assert sum(r["tickets"] for r in data) == 3


@pytest.mark.asyncio
async def test_export_registrations_csv(client: AsyncClient, test_event, registration_payload):
    await client.post(
        "/api/registrations",
        json=registration_payload(test_event.id, tickets=2, comments="Front row, please"),
    )

    response = await client.get(f"/api/events/{test_event.id}/export")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == (
        f'attachment; filename="event-{test_event.id}-registrations.csv"'
    )

    lines = response.text.splitlines()
    assert lines[0] == "Event: Python Meetup"
    assert lines[1] == "Date: 2026-11-20 18:30"
    assert lines[3] == "Total Registrations: 1"
    assert lines[5] == "First Name,Last Name,Email,Phone,Tickets,Registration Date,Comments"
    assert lines[6].startswith('"Ada","Lovelace","ada@example.com","+91 98765 43210",2,')
    assert lines[6].endswith('"Front row, please"')
    # Timestamp cell is written bare, like the ticket count
    assert not lines[6].split(",")[5].startswith('"')


@pytest.mark.asyncio
async def test_export_unknown_event(client: AsyncClient):
    response = await client.get("/api/events/99999/export")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_metrics_count_registration_outcomes(client: AsyncClient, test_event, registration_payload):
    await client.post("/api/registrations", json=registration_payload(test_event.id, tickets=1))

    response = await client.get("/metrics")
    assert response.status_code == 200
    assert 'registration_attempts_total{outcome="success"}' in response.text
