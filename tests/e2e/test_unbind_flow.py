"""End-to-end tests for unbind endpoints."""

import pytest
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from together.interface.api.app import create_app
from together.util.di.container import setup_di
from tests.di import build_test_container
from tests.harness import auth_headers, new_user_id


@pytest.fixture
def client():
    """Create test client with test container."""
    app_instance = create_app()
    test_container = build_test_container(set(), FastapiProvider())
    setup_di(app_instance, test_container)
    return TestClient(app_instance)


def pair(client):
    owner, partner = new_user_id(), new_user_id()
    space = client.post(
        "/spaces",
        json={"anniversary_date": "2023-02-14"},
        headers=auth_headers(owner),
    ).json()
    client.post(
        "/spaces/join",
        json={"invite_code": space["invite_code"]},
        headers=auth_headers(partner),
    )
    return space["id"], owner, partner


class TestUnbindFlow:
    def test_request_and_cancel(self, client):
        space_id, owner, partner = pair(client)
        url = f"/spaces/{space_id}/unbind"

        requested = client.post(url, headers=auth_headers(owner))
        assert requested.status_code == 200
        request = requested.json()
        assert request["status"] == "pending"
        assert request["requested_by"] == str(owner)

        # Asking again returns the same pending request
        again = client.post(url, headers=auth_headers(partner))
        assert again.json()["id"] == request["id"]

        status = client.get(url, headers=auth_headers(partner))
        assert status.json()["id"] == request["id"]

        cancelled = client.delete(url, headers=auth_headers(partner))
        assert cancelled.status_code == 204

        status = client.get(url, headers=auth_headers(owner))
        assert status.json()["status"] == "cancelled"
        assert status.json()["resolved_by"] == str(partner)

        missing = client.delete(url, headers=auth_headers(owner))
        assert missing.status_code == 404
        assert missing.json()["code"] == "NO_PENDING_REQUEST"

    def test_no_request_yet(self, client):
        space_id, owner, _ = pair(client)

        response = client.get(f"/spaces/{space_id}/unbind", headers=auth_headers(owner))

        assert response.status_code == 200
        assert response.json() is None

    def test_unpaired_space(self, client):
        owner = new_user_id()
        space = client.post(
            "/spaces",
            json={"anniversary_date": "2023-02-14"},
            headers=auth_headers(owner),
        ).json()

        response = client.post(
            f"/spaces/{space['id']}/unbind", headers=auth_headers(owner)
        )

        assert response.status_code == 409
        assert response.json()["code"] == "NOT_PAIRED"

    def test_outsider(self, client):
        space_id, _, _ = pair(client)

        response = client.post(
            f"/spaces/{space_id}/unbind", headers=auth_headers(new_user_id())
        )

        assert response.status_code == 403
        assert response.json()["code"] == "NOT_SPACE_MEMBER"

    def test_unauthenticated(self, client):
        space_id, _, _ = pair(client)

        response = client.post(f"/spaces/{space_id}/unbind")

        assert response.status_code == 401
