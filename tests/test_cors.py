import pytest

from snaphub.utils.cors import is_origin_allowed


def test_no_origin_is_allowed():
    assert is_origin_allowed(None, ["https://a.example"])
    assert is_origin_allowed("", [])


def test_wildcard_allows_anything():
    assert is_origin_allowed("https://evil.example", ["*"])


def test_listed_origin():
    allowlist = ["https://a.example", "https://b.example"]
    assert is_origin_allowed("https://b.example", allowlist)
    assert not is_origin_allowed("https://c.example", allowlist)


@pytest.mark.asyncio
async def test_allowed_origin_gets_header(client):
    response = await client.get("/health", headers={"Origin": "https://snaphub.example"})

    assert response.headers["access-control-allow-origin"] == "https://snaphub.example"


@pytest.mark.asyncio
async def test_blocked_origin_gets_no_header(client):
    response = await client.get("/health", headers={"Origin": "https://other.example"})

    assert "access-control-allow-origin" not in response.headers


@pytest.mark.asyncio
async def test_preflight_blocked_origin(client):
    response = await client.options(
        "/api/photos",
        headers={
            "Origin": "https://other.example",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 400
