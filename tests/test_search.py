import pytest

import snaphub.services.photo_service as photo_service_mod


async def _upload(client, **fields):
    response = await client.post(
        "/api/photos",
        files={"file": ("test.jpg", b"\xff\xd8\xff\xe0", "image/jpeg")},
        data=fields,
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_list_newest_first(client, monkeypatch):
    stamps = iter([
        "2024-05-01T10:00:00.000Z",
        "2024-05-02T10:00:00.000Z",
        "2024-05-03T10:00:00.000Z",
    ])
    monkeypatch.setattr(photo_service_mod, "utc_now_iso", lambda: next(stamps))

    t1 = await _upload(client, title="first")
    t2 = await _upload(client, title="second")
    t3 = await _upload(client, title="third")

    response = await client.get("/api/photos")

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [t3["id"], t2["id"], t1["id"]]


@pytest.mark.asyncio
async def test_list_empty(client):
    response = await client.get("/api/photos")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("q", ["paris", "PARIS", "is tr", "  Paris Trip  "])
async def test_search_case_insensitive_substring(client, q):
    paris = await _upload(client, title="Paris Trip")
    await _upload(client, title="Lake")

    response = await client.get("/api/photos", params={"q": q})

    assert [p["id"] for p in response.json()] == [paris["id"]]


@pytest.mark.asyncio
async def test_search_no_match(client):
    await _upload(client, title="Paris Trip")

    response = await client.get("/api/photos", params={"q": "texas"})

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_search_covers_caption_location_and_people(client):
    by_caption = await _upload(client, caption="Sunset over the bay")
    by_location = await _upload(client, location="Lisbon")
    by_people = await _upload(client, people="Marta, Joao")

    for q, expected in [("sunset", by_caption), ("lisbon", by_location), ("joao", by_people)]:
        response = await client.get("/api/photos", params={"q": q})
        assert [p["id"] for p in response.json()] == [expected["id"]]


@pytest.mark.asyncio
async def test_blank_query_returns_everything(client):
    await _upload(client, title="one")
    await _upload(client, title="two")

    response = await client.get("/api/photos", params={"q": "   "})

    assert len(response.json()) == 2
