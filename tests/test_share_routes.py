"""Tests for the crawler-aware share endpoint."""

import pytest
from fastapi.testclient import TestClient

from portfolio_api.main import app

SHARE_PATH = "/api/share-maic-workflow"
BROWSER_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_4) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.4 Safari/605.1.15"
)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_crawler_gets_metadata_html(client: TestClient) -> None:
    response = client.get(
        SHARE_PATH,
        headers={"User-Agent": "Mozilla/5.0 (compatible; Googlebot/2.1)", "Host": "mattheneus.com"},
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert 'property="og:title"' in response.text
    assert 'content="https://mattheneus.com/maic-workflow-og.jpg?v=1"' in response.text
    assert "<body></body>" in response.text


def test_browser_is_redirected(client: TestClient) -> None:
    response = client.get(
        SHARE_PATH,
        headers={"User-Agent": BROWSER_UA, "Host": "mattheneus.com"},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "https://mattheneus.com/maic-workflow"


def test_redirect_honours_forwarded_proto(client: TestClient) -> None:
    response = client.get(
        SHARE_PATH,
        headers={"User-Agent": BROWSER_UA, "Host": "localhost:5000", "X-Forwarded-Proto": "http"},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "http://localhost:5000/maic-workflow"


def test_missing_user_agent_is_redirected(client: TestClient) -> None:
    response = client.get(SHARE_PATH, headers={"User-Agent": ""}, follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"].endswith("/maic-workflow")


def test_response_varies_on_user_agent(client: TestClient) -> None:
    crawler = client.get(SHARE_PATH, headers={"User-Agent": "Twitterbot/1.0"})
    browser = client.get(SHARE_PATH, headers={"User-Agent": BROWSER_UA}, follow_redirects=False)

    assert crawler.headers["vary"] == "User-Agent"
    assert browser.headers["vary"] == "User-Agent"


def test_head_request_is_supported(client: TestClient) -> None:
    response = client.head(SHARE_PATH, headers={"User-Agent": "facebookexternalhit/1.1"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")


def test_no_cors_headers_on_share_endpoint(client: TestClient) -> None:
    response = client.get(
        SHARE_PATH,
        headers={"User-Agent": "Twitterbot/1.0", "Origin": "https://mattheneus.com"},
    )

    assert "access-control-allow-methods" not in response.headers
