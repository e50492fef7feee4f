import logging

import pytest

from imageservice.services.events import EventPublisher


def test_publish_calls_subscribers_in_order() -> None:
    publisher = EventPublisher()
    seen: list[tuple[str, str]] = []
    publisher.subscribe(lambda message: seen.append(("first", message)))
    publisher.subscribe(lambda message: seen.append(("second", message)))

    publisher.publish("Image added: 1")

    assert seen == [("first", "Image added: 1"), ("second", "Image added: 1")]


def test_unsubscribe_stops_delivery() -> None:
    publisher = EventPublisher()
    seen: list[str] = []
    unsubscribe = publisher.subscribe(seen.append)

    publisher.publish("Image added: 1")
    unsubscribe()
    unsubscribe()
    publisher.publish("Image added: 2")

    assert seen == ["Image added: 1"]


def test_failing_subscriber_is_logged_not_raised(
    caplog: pytest.LogCaptureFixture,
) -> None:
    publisher = EventPublisher()
    seen: list[str] = []

    def broken(message: str) -> None:
        raise RuntimeError("listener down")

    publisher.subscribe(broken)
    publisher.subscribe(seen.append)

    logger = logging.getLogger("imageservice.events")
    logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="imageservice.events"):
            publisher.publish("Slideshow deleted: 4")
    finally:
        logger.removeHandler(caplog.handler)

    assert seen == ["Slideshow deleted: 4"]
    assert "Slideshow deleted: 4" in caplog.text
    assert "listener down" in caplog.text
