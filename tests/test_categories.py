import pytest

from leaderboard_api.models import UserRole

from .conftest import auth_headers


def _category_payload(**overrides):
    payload = {
        "name": "Any%",
        "slug": "any_percent",
        "info": "Beat the game",
        "sortDirection": "Ascending",
        "runType": "Time",
    }
    payload.update(overrides)
    return payload


def test_admin_creates_category(client, leaderboard, admin_headers):
    response = client.post(
        f"/leaderboard/{leaderboard.id}/categories/create",
        json=_category_payload(),
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["leaderboardId"] == leaderboard.id
    assert body["slug"] == "any_percent"
    assert body["type"] == "Time"
    assert body["sortDirection"] == "Ascending"
    assert response.headers["Location"].endswith(f"/api/category/{body['id']}")

    fetched = client.get(response.headers["Location"])
    assert fetched.json() == body


@pytest.mark.parametrize("role", [UserRole.REGISTERED, UserRole.CONFIRMED])
def test_only_admins_create_categories(client, leaderboard, make_user, role):
    response = client.post(
        f"/leaderboard/{leaderboard.id}/categories/create",
        json=_category_payload(),
        headers=auth_headers(make_user(role)),
    )

    assert response.status_code == 403


def test_create_category_requires_authentication(client, leaderboard):
    response = client.post(
        f"/leaderboard/{leaderboard.id}/categories/create", json=_category_payload()
    )

    assert response.status_code == 401


def test_create_category_on_unknown_leaderboard(client, admin_headers):
    response = client.post(
        "/leaderboard/999/categories/create",
        json=_category_payload(),
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Leaderboard Not Found"


def test_create_category_slug_conflict(client, leaderboard, timed_category, admin_headers):
    response = client.post(
        f"/leaderboard/{leaderboard.id}/categories/create",
        json=_category_payload(slug=timed_category.slug),
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["conflicting"]["id"] == timed_category.id


def test_deleted_slug_can_be_reused(client, leaderboard, make_category, admin_headers):
    retired = make_category(slug="retired", deleted=True)

    response = client.post(
        f"/leaderboard/{leaderboard.id}/categories/create",
        json=_category_payload(slug=retired.slug),
        headers=admin_headers,
    )

    assert response.status_code == 201


@pytest.mark.parametrize(
    "overrides",
    [
        {"slug": "has spaces"},
        {"slug": "x"},
        {"name": ""},
        {"runType": "Distance"},
        {"sortDirection": "Sideways"},
        {"unexpected": True},
    ],
)
def test_create_category_rejects_bad_data(client, leaderboard, admin_headers, overrides):
    response = client.post(
        f"/leaderboard/{leaderboard.id}/categories/create",
        json=_category_payload(**overrides),
        headers=admin_headers,
    )

    assert response.status_code == 422


def test_get_category_includes_deleted(client, make_category):
    category = make_category(deleted=True)

    response = client.get(f"/api/category/{category.id}")

    assert response.status_code == 200
    assert response.json()["deletedAt"] is not None


def test_get_unknown_category(client):
    response = client.get("/api/category/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Category Not Found"


def test_get_category_by_slug_skips_deleted(client, leaderboard, make_category):
    live = make_category(slug="live")
    make_category(slug="gone", deleted=True)

    found = client.get(f"/api/leaderboard/{leaderboard.id}/category", params={"slug": "live"})
    missing = client.get(
        f"/api/leaderboard/{leaderboard.id}/category", params={"slug": "gone"}
    )

    assert found.status_code == 200
    assert found.json()["id"] == live.id
    assert missing.status_code == 404


def test_update_category(client, timed_category, admin_headers):
    response = client.patch(
        f"/category/{timed_category.id}",
        json={"name": "All Stars", "sortDirection": "Descending"},
        headers=admin_headers,
    )

    assert response.status_code == 204
    fetched = client.get(f"/api/category/{timed_category.id}").json()
    assert fetched["name"] == "All Stars"
    assert fetched["sortDirection"] == "Descending"
    assert fetched["slug"] == timed_category.slug
    assert fetched["type"] == "Time"
    assert fetched["updatedAt"] is not None


def test_update_category_cannot_change_run_type(client, timed_category, admin_headers):
    response = client.patch(
        f"/category/{timed_category.id}", json={"runType": "Score"}, headers=admin_headers
    )

    assert response.status_code == 422


def test_update_category_slug_conflict(client, make_category, admin_headers):
    first = make_category(slug="first")
    second = make_category(slug="second")

    response = client.patch(
        f"/category/{second.id}", json={"slug": first.slug}, headers=admin_headers
    )

    assert response.status_code == 409


def test_delete_and_restore_category(client, timed_category, admin_headers):
    deleted = client.delete(f"/category/{timed_category.id}", headers=admin_headers)
    again = client.delete(f"/category/{timed_category.id}", headers=admin_headers)

    assert deleted.status_code == 204
    assert again.status_code == 404
    assert again.json()["detail"] == "Category Is Already Deleted"
    assert client.get(f"/api/category/{timed_category.id}").json()["deletedAt"]

    restored = client.put(f"/category/{timed_category.id}/restore", headers=admin_headers)
    assert restored.status_code == 200
    assert restored.json()["deletedAt"] is None

    never = client.put(f"/category/{timed_category.id}/restore", headers=admin_headers)
    assert never.status_code == 404
    assert never.json()["detail"] == "Category Was Not Deleted"


def test_restore_blocked_by_live_slug(client, make_category, admin_headers):
    retired = make_category(slug="shared", deleted=True)
    make_category(slug="shared")

    response = client.put(f"/category/{retired.id}/restore", headers=admin_headers)

    assert response.status_code == 409


def test_deleting_unknown_category(client, admin_headers):
    response = client.delete("/category/999", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Category Not Found"
