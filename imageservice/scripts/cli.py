"""CLI tool for the image service."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from sqlalchemy import select

from imageservice.database import AsyncSessionLocal, init_db
from imageservice.logging_config import configure_logging
from imageservice.models import Image, Slideshow
from imageservice.verification import ConnectionSetupError, ImageVerifier


def verify_url(
    url: str,
    *,
    connect_timeout_ms: int | None = None,
    read_timeout_ms: int | None = None,
) -> bool:
    """Verify a single URL and print the verdict."""
    verifier = ImageVerifier(
        connect_timeout_ms=connect_timeout_ms,
        read_timeout_ms=read_timeout_ms,
        max_workers=1,
    )
    try:
        connection = verifier.create_connection(url)
        is_valid = verifier.is_valid_image_url(connection).result()
    finally:
        verifier.shutdown()

    print(f"{'valid' if is_valid else 'invalid'}: {url}")
    return is_valid


async def list_images(as_json: bool = False) -> None:
    """List all images."""
    await init_db()
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Image).order_by(Image.id))
        images = result.scalars().all()

    if as_json:
        payload = [
            {
                "id": image.id,
                "url": image.url,
                "duration": image.duration,
                "slideshow_id": image.slideshow_id,
                "created_at": image.created_at.isoformat(),
            }
            for image in images
        ]
        print(json.dumps(payload, indent=2))
        return

    for image in images:
        slideshow = image.slideshow_id if image.slideshow_id is not None else "-"
        print(
            f"ID: {image.id}, Duration: {image.duration}s, "
            f"Slideshow: {slideshow}, URL: {image.url}"
        )


async def list_slideshows() -> None:
    """List slideshows with their image order."""
    await init_db()
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Slideshow).order_by(Slideshow.id))
        slideshows = result.scalars().all()

    for slideshow in slideshows:
        order = ", ".join(str(image.id) for image in slideshow.images) or "-"
        print(f"ID: {slideshow.id}, Images: {order}")


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Image service CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    verify_parser = subparsers.add_parser(
        "verify-url", help="Check whether a URL serves a valid image"
    )
    verify_parser.add_argument("url", help="Image URL")
    verify_parser.add_argument(
        "--connect-timeout-ms", type=int, default=None, help="Connect timeout"
    )
    verify_parser.add_argument(
        "--read-timeout-ms", type=int, default=None, help="Read timeout"
    )

    images_parser = subparsers.add_parser("list-images", help="List images")
    images_parser.add_argument("--json", action="store_true", help="Output JSON")

    subparsers.add_parser("list-slideshows", help="List slideshows")

    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "verify-url":
        try:
            is_valid = verify_url(
                args.url,
                connect_timeout_ms=args.connect_timeout_ms,
                read_timeout_ms=args.read_timeout_ms,
            )
        except ConnectionSetupError as exc:
            print(str(exc), file=sys.stderr)
            sys.exit(2)
        sys.exit(0 if is_valid else 1)
    elif args.command == "list-images":
        asyncio.run(list_images(as_json=args.json))
    elif args.command == "list-slideshows":
        asyncio.run(list_slideshows())


if __name__ == "__main__":
    main()
