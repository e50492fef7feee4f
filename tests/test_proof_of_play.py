from typing import Any

import pytest
from sqlalchemy import func, select

from imageservice.models import Image, ProofOfPlay, Slideshow


async def _seed(api: Any) -> dict[str, int]:
    async with api.session_factory() as session:
        first = Slideshow(
            images=[
                Image(url="https://cdn.example.com/first/1.png", duration=3),
                Image(url="https://cdn.example.com/first/2.png", duration=3),
            ]
        )
        second = Slideshow(
            images=[Image(url="https://cdn.example.com/second/1.png", duration=3)]
        )
        loose = Image(url="https://cdn.example.com/loose.png", duration=3)
        session.add_all([first, second, loose])
        await session.commit()
        return {
            "first": first.id,
            "first_image": first.images[0].id,
            "first_image_2": first.images[1].id,
            "second": second.id,
            "second_image": second.images[0].id,
            "loose_image": loose.id,
        }


@pytest.mark.asyncio
async def test_record_proof_of_play(api: Any) -> None:
    ids = await _seed(api)

    response = await api.client.post(
        f"/api/slideShow/{ids['first']}/proof-of-play/{ids['first_image']}"
    )

    assert response.status_code == 200
    body = response.json()
    assert body["slideshow_id"] == ids["first"]
    assert body["image_id"] == ids["first_image"]
    assert body["played_at"]
    assert api.events == [
        f"Proof of Play recorded: Slideshow ID {ids['first']}, "
        f"Image ID {ids['first_image']}"
    ]


@pytest.mark.asyncio
async def test_record_proof_of_play_missing_slideshow(api: Any) -> None:
    ids = await _seed(api)

    response = await api.client.post(
        f"/api/slideShow/999/proof-of-play/{ids['first_image']}"
    )

    assert response.status_code == 404
    assert response.json() == {"detail": "Slideshow with ID 999 not found."}


@pytest.mark.asyncio
async def test_record_proof_of_play_missing_image(api: Any) -> None:
    ids = await _seed(api)

    response = await api.client.post(f"/api/slideShow/{ids['first']}/proof-of-play/999")

    assert response.status_code == 404
    assert response.json() == {"detail": "Image with ID 999 not found."}


@pytest.mark.asyncio
@pytest.mark.parametrize("image_key", ["second_image", "loose_image"])
async def test_record_proof_of_play_image_outside_slideshow(
    api: Any, image_key: str
) -> None:
    ids = await _seed(api)

    response = await api.client.post(
        f"/api/slideShow/{ids['first']}/proof-of-play/{ids[image_key]}"
    )

    assert response.status_code == 400
    assert response.json() == {
        "detail": f"Image ID {ids[image_key]} is not part of Slideshow ID {ids['first']}"
    }
    assert api.events == []


@pytest.mark.asyncio
async def test_record_proof_of_play_twice_conflicts(api: Any) -> None:
    ids = await _seed(api)
    path = f"/api/slideShow/{ids['first']}/proof-of-play/{ids['first_image']}"

    assert (await api.client.post(path)).status_code == 200
    second = await api.client.post(path)

    assert second.status_code == 409
    async with api.session_factory() as session:
        count = await session.scalar(select(func.count()).select_from(ProofOfPlay))
    assert count == 1


@pytest.mark.asyncio
async def test_list_plays_by_slideshow_and_image(api: Any) -> None:
    ids = await _seed(api)
    for image_key in ("first_image", "first_image_2"):
        response = await api.client.post(
            f"/api/slideShow/{ids['first']}/proof-of-play/{ids[image_key]}"
        )
        assert response.status_code == 200

    by_slideshow = await api.client.get(f"/api/slideShow/{ids['first']}/proof-of-play")
    assert by_slideshow.status_code == 200
    assert [play["image_id"] for play in by_slideshow.json()] == [
        ids["first_image"],
        ids["first_image_2"],
    ]

    by_image = await api.client.get(f"/api/images/{ids['first_image_2']}/proof-of-play")
    assert [play["slideshow_id"] for play in by_image.json()] == [ids["first"]]

    missing = await api.client.get("/api/slideShow/999/proof-of-play")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_deleting_image_removes_its_plays(api: Any) -> None:
    ids = await _seed(api)
    await api.client.post(
        f"/api/slideShow/{ids['first']}/proof-of-play/{ids['first_image']}"
    )

    response = await api.client.delete(f"/api/deleteImage/{ids['first_image']}")
    assert response.status_code == 204

    plays = await api.client.get(f"/api/slideShow/{ids['first']}/proof-of-play")
    assert plays.json() == []
    order = await api.client.get(f"/api/slideShow/{ids['first']}/slideshowOrder")
    assert [image["id"] for image in order.json()] == [ids["first_image_2"]]
