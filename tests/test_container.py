"""Tests for container wiring."""

import asyncio

from pantry_tracker.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.confirmation_service is not None
    assert container.recipe_suggestion_service.max_count == 10
    asyncio.run(container.close_resources())
