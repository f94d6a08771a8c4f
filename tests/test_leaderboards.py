from leaderboard_api.models import UserRole

from .conftest import auth_headers


def test_list_leaderboards(client, leaderboard):
    response = client.get("/api/leaderboards")

    assert response.status_code == 200
    assert [board["slug"] for board in response.json()] == ["super_mario_64"]


def test_get_leaderboard_by_id_and_slug(client, leaderboard):
    by_id = client.get(f"/api/leaderboard/{leaderboard.id}")
    by_slug = client.get("/api/leaderboard", params={"slug": leaderboard.slug})

    assert by_id.status_code == 200
    assert by_id.json() == by_slug.json()
    assert by_id.json()["name"] == "Super Mario 64"


def test_unknown_leaderboard(client):
    assert client.get("/api/leaderboard/999").status_code == 404
    assert client.get("/api/leaderboard", params={"slug": "nope"}).status_code == 404


def test_admin_creates_leaderboard(client, admin_headers):
    response = client.post(
        "/leaderboards/create",
        json={"name": "Celeste", "slug": "celeste", "info": "Climb"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "celeste"
    assert body["info"] == "Climb"
    assert response.headers["Location"].endswith(f"/api/leaderboard/{body['id']}")


def test_create_leaderboard_slug_conflict(client, leaderboard, admin_headers):
    response = client.post(
        "/leaderboards/create",
        json={"name": "Copy", "slug": leaderboard.slug},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["conflicting"]["id"] == leaderboard.id


def test_create_leaderboard_forbidden_for_confirmed_user(client, make_user):
    response = client.post(
        "/leaderboards/create",
        json={"name": "Celeste", "slug": "celeste"},
        headers=auth_headers(make_user(UserRole.CONFIRMED)),
    )

    assert response.status_code == 403
