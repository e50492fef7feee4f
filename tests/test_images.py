from typing import Any

import pytest
from sqlalchemy import func, select

from imageservice.models import Image, Slideshow

INVALID_IMAGE_DETAIL = "Invalid image URL. The URL does not contain a valid image."


async def _count_images(api: Any) -> int:
    async with api.session_factory() as session:
        return await session.scalar(select(func.count()).select_from(Image))


@pytest.mark.asyncio
async def test_add_image_persists_verified_url(api: Any) -> None:
    url = "https://cdn.example.com/cats/1.jpg"

    response = await api.client.post("/api/addImage", json={"url": url, "duration": 5})

    assert response.status_code == 200
    body = response.json()
    assert body["url"] == url
    assert body["duration"] == 5
    assert body["slideshow_id"] is None
    assert body["created_at"]
    assert api.verifier.calls == [url]
    assert api.events == [f"Image added: {body['id']}"]

    async with api.session_factory() as session:
        image = await session.get(Image, body["id"])
    assert image is not None
    assert image.url == url


@pytest.mark.asyncio
async def test_add_image_rejects_invalid_image(api: Any) -> None:
    url = "https://cdn.example.com/page.html"
    api.verifier.verdicts[url] = False

    response = await api.client.post("/api/addImage", json={"url": url, "duration": 5})

    assert response.status_code == 400
    assert response.json() == {"detail": INVALID_IMAGE_DETAIL}
    assert await _count_images(api) == 0
    assert api.events == []


@pytest.mark.asyncio
async def test_add_image_malformed_url_is_bad_request(api: Any) -> None:
    response = await api.client.post(
        "/api/addImage", json={"url": "ftp://cdn.example.com/a.jpg", "duration": 5}
    )

    assert response.status_code == 400
    assert response.json()["detail"].startswith(
        "Bad Request: Failed to create connection"
    )
    assert await _count_images(api) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"url": "https://cdn.example.com/a.jpg", "duration": 0},
        {"url": "https://cdn.example.com/a.jpg"},
        {"duration": 3},
        {"url": "", "duration": 3},
    ],
)
async def test_add_image_validates_payload(api: Any, payload: dict) -> None:
    response = await api.client.post("/api/addImage", json=payload)

    assert response.status_code == 422
    assert api.verifier.calls == []


@pytest.mark.asyncio
async def test_add_image_duplicate_url_conflicts(api: Any) -> None:
    payload = {"url": "https://cdn.example.com/dup.png", "duration": 4}

    first = await api.client.post("/api/addImage", json=payload)
    second = await api.client.post("/api/addImage", json=payload)

    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json()["detail"].startswith("Conflict")
    assert await _count_images(api) == 1


@pytest.mark.asyncio
async def test_delete_image(api: Any) -> None:
    async with api.session_factory() as session:
        image = Image(url="https://cdn.example.com/delete-me.png", duration=3)
        session.add(image)
        await session.commit()
        image_id = image.id

    response = await api.client.delete(f"/api/deleteImage/{image_id}")
    assert response.status_code == 204
    assert api.events == [f"Image deleted: {image_id}"]
    assert await _count_images(api) == 0

    again = await api.client.delete(f"/api/deleteImage/{image_id}")
    assert again.status_code == 404
    assert again.json() == {"detail": "Image not found."}


@pytest.mark.asyncio
async def test_search_images_by_url_and_duration(api: Any) -> None:
    async with api.session_factory() as session:
        session.add_all(
            [
                Image(url="https://cdn.example.com/cats/1.png", duration=5),
                Image(url="https://cdn.example.com/cats/2.png", duration=10),
                Image(url="https://cdn.example.com/dogs/1.png", duration=5),
            ]
        )
        await session.commit()

    response = await api.client.get("/api/images/search", params={"query": "cats"})
    assert response.status_code == 200
    assert [item["url"] for item in response.json()] == [
        "https://cdn.example.com/cats/1.png",
        "https://cdn.example.com/cats/2.png",
    ]

    response = await api.client.get(
        "/api/images/search", params={"query": "cats", "duration": 10}
    )
    assert [item["url"] for item in response.json()] == [
        "https://cdn.example.com/cats/2.png"
    ]

    response = await api.client.get(
        "/api/images/search", params={"query": "1.png", "duration": 0}
    )
    assert len(response.json()) == 2

    # LIKE wildcards in the query are matched literally.
    response = await api.client.get("/api/images/search", params={"query": "%"})
    assert response.json() == []


@pytest.mark.asyncio
async def test_search_images_requires_query(api: Any) -> None:
    response = await api.client.get("/api/images/search")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_slideshows_containing_image(api: Any) -> None:
    async with api.session_factory() as session:
        slideshow = Slideshow(
            images=[Image(url="https://cdn.example.com/show/1.png", duration=2)]
        )
        loose = Image(url="https://cdn.example.com/loose.png", duration=2)
        session.add_all([slideshow, loose])
        await session.commit()
        slideshow_id = slideshow.id
        member_id = slideshow.images[0].id
        loose_id = loose.id

    response = await api.client.get(f"/api/images/{member_id}/slideshows")
    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [slideshow_id]

    response = await api.client.get(f"/api/images/{loose_id}/slideshows")
    assert response.json() == []
