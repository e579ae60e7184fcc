"""Tests for the service catalog routes.

Covers:
- POST /services ignores client createdAt / applicationCount
- GET /services/{id} distinguishes malformed (400) from unknown (404)
- search, price sort and page-based pagination on GET /services
- GET /services-count
- PUT /services/{id} allow-list, no-op and ownership
- DELETE /services/{id}
"""

import pytest

from conftest import APPLICANT, PROVIDER
from repairhub.config import settings
from repairhub.services.id_generator import SERVICE_PREFIX, generate_id


# ---------------------------------------------------------------------------
# Create / read
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_service_sets_server_owned_fields(client, make_service):
    created = await make_service(applicationCount=42, createdAt="1999-01-01T00:00:00")
    assert created["id"].startswith(SERVICE_PREFIX)
    assert created["applicationCount"] == 0
    assert not created["createdAt"].startswith("1999")

    r = await client.get(f"/services/{created['id']}")
    assert r.status_code == 200
    data = r.json()
    assert data["applicationCount"] == 0
    assert data["serviceName"] == "Leak Fix"
    assert data["providerEmail"] == PROVIDER
    assert data["createdAt"]


@pytest.mark.asyncio
async def test_create_service_requires_session(client):
    r = await client.post(
        "/services", json={"providerEmail": PROVIDER, "serviceName": "Leak Fix", "price": 10}
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_create_service_for_another_provider_is_forbidden(client, auth_headers):
    r = await client.post(
        "/services",
        json={"providerEmail": PROVIDER, "serviceName": "Leak Fix", "price": 10},
        headers=auth_headers("someone@else.com"),
    )
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "AUTHORIZATION_ERROR"


@pytest.mark.asyncio
async def test_create_service_missing_name_is_400(client, auth_headers):
    r = await client.post(
        "/services", json={"providerEmail": PROVIDER, "price": 10}, headers=auth_headers(PROVIDER)
    )
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_get_service_malformed_id_is_400(client):
    r = await client.get("/services/not-an-id")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_get_service_unknown_id_is_404(client):
    r = await client.get(f"/services/{generate_id(SERVICE_PREFIX)}")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_search_is_case_insensitive_over_name_and_area(client, make_service):
    area_match = await make_service(serviceName="Pipe Repair", serviceArea="Downtown Leaks")
    name_match = await make_service(serviceName="LEAK detection", serviceArea="Uptown")
    await make_service(serviceName="Lawn Mowing", serviceArea="Suburbs")

    r = await client.get("/services", params={"search": "leak"})
    assert r.status_code == 200
    ids = {s["id"] for s in r.json()["items"]}
    assert ids == {area_match["id"], name_match["id"]}
    assert r.json()["total"] == 2


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(client, make_service):
    await make_service(serviceName="Roof Repair")
    r = await client.get("/services", params={"search": "%"})
    assert r.json()["items"] == []


@pytest.mark.asyncio
async def test_pagination_returns_requested_page(client, make_service):
    for price in range(10, 110, 10):
        await make_service(serviceName=f"Job {price}", price=price)

    r = await client.get("/services", params={"sort": "asc", "page": 2, "limit": 4})
    assert r.status_code == 200
    body = r.json()
    assert [s["price"] for s in body["items"]] == [50, 60, 70, 80]
    assert body["total"] == 10
    assert body["page"] == 2
    assert body["limit"] == 4


@pytest.mark.asyncio
async def test_page_one_equals_unspecified_and_nonpositive_page(client, make_service):
    for price in (30, 10, 20):
        await make_service(price=price)

    unspecified = await client.get("/services", params={"sort": "asc", "limit": 2})
    first = await client.get("/services", params={"sort": "asc", "limit": 2, "page": 1})
    zero = await client.get("/services", params={"sort": "asc", "limit": 2, "page": 0})
    negative = await client.get("/services", params={"sort": "asc", "limit": 2, "page": -3})

    assert unspecified.json()["items"] == first.json()["items"]
    assert zero.json()["items"] == first.json()["items"]
    assert negative.json()["page"] == 1
    assert [s["price"] for s in first.json()["items"]] == [10, 20]


@pytest.mark.asyncio
async def test_page_beyond_bound_is_rejected(client, make_service):
    await make_service()
    r = await client.get("/services", params={"page": 10**19, "limit": 4})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"

    r = await client.get("/services", params={"page": settings.max_page, "limit": 4})
    assert r.status_code == 200
    assert r.json()["items"] == []
    assert r.json()["total"] == 1


@pytest.mark.asyncio
async def test_nonpositive_limit_is_rejected(client):
    r = await client.get("/services", params={"limit": 0})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_unknown_sort_falls_back_to_newest(client, make_service):
    cheap_old = await make_service(price=10)
    pricey_new = await make_service(price=90)
    r = await client.get("/services", params={"sort": "desc"})
    assert [s["id"] for s in r.json()["items"]] == [pricey_new["id"], cheap_old["id"]]


@pytest.mark.asyncio
async def test_default_sort_is_newest_first(client, make_service):
    older = await make_service(serviceName="Older")
    newer = await make_service(serviceName="Newer")
    r = await client.get("/services")
    assert [s["id"] for s in r.json()["items"]] == [newer["id"], older["id"]]


@pytest.mark.asyncio
async def test_filter_by_provider(client, make_service):
    mine = await make_service()
    await make_service(providerEmail="other@fixit.com")
    r = await client.get("/services", params={"providerEmail": PROVIDER})
    assert [s["id"] for s in r.json()["items"]] == [mine["id"]]


@pytest.mark.asyncio
async def test_filter_by_provider_ignores_email_case(client, make_service):
    mine = await make_service(providerEmail="Pat@FixIt.com")
    assert mine["providerEmail"] == "pat@fixit.com"
    r = await client.get("/services", params={"providerEmail": "PAT@FIXIT.COM"})
    assert [s["id"] for s in r.json()["items"]] == [mine["id"]]


@pytest.mark.asyncio
async def test_provider_dashboard_filter_only_with_applications(
    client, make_service, make_application, monkeypatch
):
    applied = await make_service(serviceName="Applied")
    await make_service(serviceName="Quiet")
    await make_application(applied["id"])

    r = await client.get(
        "/services", params={"providerEmail": PROVIDER, "withApplications": "true"}
    )
    assert [s["id"] for s in r.json()["items"]] == [applied["id"]]

    # Off by default, switchable through configuration
    r = await client.get("/services", params={"providerEmail": PROVIDER})
    assert r.json()["total"] == 2
    monkeypatch.setattr(settings, "provider_dashboard_only_with_applications", True)
    r = await client.get("/services", params={"providerEmail": PROVIDER})
    assert r.json()["total"] == 1


@pytest.mark.asyncio
async def test_services_count_uses_search(client, make_service):
    await make_service(serviceName="Leak Fix")
    await make_service(serviceName="Drain Cleaning", serviceArea="Leaky Heights")
    await make_service(serviceName="Painting")

    assert (await client.get("/services-count")).json() == {"count": 3}
    assert (await client.get("/services-count", params={"search": "LEAK"})).json() == {"count": 2}


@pytest.mark.asyncio
async def test_popular_services_ordered_by_application_count(
    client, make_service, make_application
):
    one = await make_service(serviceName="One")
    two = await make_service(serviceName="Two")
    await make_service(serviceName="None")
    await make_application(one["id"])
    await make_application(two["id"])
    await make_application(two["id"], applicant="second@home.com")

    r = await client.get("/services/popular")
    assert r.status_code == 200
    assert [(s["id"], s["applicationCount"]) for s in r.json()] == [(two["id"], 2), (one["id"], 1)]


# ---------------------------------------------------------------------------
# Update / delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_applies_allow_listed_fields_only(
    client, auth_headers, make_service, make_application
):
    service = await make_service()
    await make_application(service["id"])

    r = await client.put(
        f"/services/{service['id']}",
        json={
            "serviceArea": "Hillside",
            "applicationDate": "2026-11-01",
            "applicationCount": 99,
            "createdAt": "1999-01-01T00:00:00",
            "providerEmail": "thief@x.com",
        },
        headers=auth_headers(PROVIDER),
    )
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["serviceArea"] == "Hillside"
    assert data["applicationDate"] == "2026-11-01"
    assert data["applicationCount"] == 1
    assert data["createdAt"] == service["createdAt"]
    assert data["providerEmail"] == PROVIDER
    assert data["updatedAt"] is not None


@pytest.mark.asyncio
async def test_noop_update_is_reported_distinctly(client, auth_headers, make_service):
    service = await make_service()
    r = await client.put(
        f"/services/{service['id']}",
        json={"serviceArea": service["serviceArea"]},
        headers=auth_headers(PROVIDER),
    )
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_MODIFIED"

    missing = await client.put(
        f"/services/{generate_id(SERVICE_PREFIX)}",
        json={"serviceArea": "Hillside"},
        headers=auth_headers(PROVIDER),
    )
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_update_by_non_owner_is_forbidden(client, auth_headers, make_service):
    service = await make_service()
    r = await client.put(
        f"/services/{service['id']}",
        json={"serviceArea": "Hillside"},
        headers=auth_headers(APPLICANT),
    )
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_admin_may_delete_any_service(client, auth_headers, make_service, monkeypatch):
    monkeypatch.setattr(settings, "admin_emails", ["admin@repairhub.io"])
    service = await make_service()
    r = await client.delete(f"/services/{service['id']}", headers=auth_headers("admin@repairhub.io"))
    assert r.status_code == 204


@pytest.mark.asyncio
async def test_delete_service(client, auth_headers, make_service):
    service = await make_service()
    r = await client.delete(f"/services/{service['id']}", headers=auth_headers(PROVIDER))
    assert r.status_code == 204

    r = await client.get(f"/services/{service['id']}")
    assert r.status_code == 404
