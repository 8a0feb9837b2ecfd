"""Tests for the content and health routes."""

import pytest
from fastapi.testclient import TestClient

from tests.conftest import comment_thing, listing, post_thing, post_view
from tests.di import RedditStub, build_test_container
from urlsum.interface.api.app import create_app

POST_URL = "https://www.reddit.com/r/python/comments/abc123/title/"
POST_PATH = "/r/python/comments/abc123/title/.json"


@pytest.fixture
def stub() -> RedditStub:
    return RedditStub()


@pytest.fixture
def client(stub):
    """Create test client with test container."""
    app_instance = create_app(container=build_test_container(stub=stub), instrument=False)
    with TestClient(app_instance) as test_client:
        yield test_client


class TestContentEndpoint:
    """Tests for GET /content."""

    def test_post_transcript(self, client, stub):
        """Should return the transcript and extracted comment count."""
        # Arrange
        stub.add(POST_PATH, json=post_view([comment_thing("c1", body="Hello there")]))

        # Act
        response = client.get("/content", params={"url": POST_URL})

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["url"] == POST_URL
        assert data["comment_count"] == 1
        assert "u/alice: Hello there [1 points]" in data["content"]
        assert data["more_requests"] == 0
        assert data["truncated"] is False

    def test_listing_comment_count_is_null(self, client, stub):
        stub.add("/r/python.json", json=listing([post_thing("p1")]))

        response = client.get("/content", params={"url": "https://www.reddit.com/r/python"})

        assert response.status_code == 200
        assert response.json()["comment_count"] is None

    def test_invalid_url(self, client):
        """Should answer 400 with the error body."""
        response = client.get("/content", params={"url": "not a url"})

        assert response.status_code == 400
        assert response.json() == {
            "error": "invalid_url",
            "message": "The Reddit URL provided is not valid",
            "recovery": "Try again or contact support if the problem persists",
            "retryable": False,
        }

    def test_post_not_found(self, client):
        response = client.get("/content", params={"url": POST_URL})

        assert response.status_code == 404
        assert response.json()["error"] == "post_not_found"
        assert response.json()["recovery"] == "Check the URL and try again"

    def test_private_subreddit(self, client, stub):
        stub.add("/r/secret.json", status_code=403, text="private")

        response = client.get("/content", params={"url": "https://www.reddit.com/r/secret"})

        assert response.status_code == 403
        assert response.json()["error"] == "private_subreddit"

    def test_rate_limited_sets_retry_after(self, client, stub):
        stub.add(POST_PATH, status_code=429, headers={"Retry-After": "30"}, text="")

        response = client.get("/content", params={"url": POST_URL})

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "30"
        assert response.json()["retryable"] is True

    def test_bad_gateway_on_parse_error(self, client, stub):
        stub.add(POST_PATH, text="<html>")

        response = client.get("/content", params={"url": POST_URL})

        assert response.status_code == 502
        assert response.json()["error"] == "parse_error"

    def test_url_required(self, client):
        response = client.get("/content")

        assert response.status_code == 422


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"
