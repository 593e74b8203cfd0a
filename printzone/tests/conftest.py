"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from printzone.api.main import create_app
from printzone.dsl.schema import Delimitation, ImageElement, TextElement, Viewport


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the FastAPI app."""
    with TestClient(create_app()) as client:
        yield client


@pytest.fixture
def viewport() -> Viewport:
    """200x200 viewport matching the reference space (scale 1:1)."""
    return Viewport(width=200, height=200)


@pytest.fixture
def region() -> Delimitation:
    """Full 200x200 printable region in a 200x200 reference space."""
    return Delimitation(
        x=0,
        y=0,
        width=200,
        height=200,
        reference_width=200,
        reference_height=200,
    )


@pytest.fixture
def band_region() -> Delimitation:
    """Wide, short region: 200x40 band centered vertically."""
    return Delimitation(
        x=0,
        y=80,
        width=200,
        height=40,
        reference_width=200,
        reference_height=200,
    )


@pytest.fixture
def square() -> ImageElement:
    """40x40 unrotated image centered in the viewport."""
    return ImageElement(
        id="square",
        x=0.5,
        y=0.5,
        width=40,
        height=40,
        image_url="https://cdn.example.com/designs/square.png",
        natural_width=400,
        natural_height=400,
    )


@pytest.fixture
def text() -> TextElement:
    """150x40 straight text centered in the viewport."""
    return TextElement(
        id="text",
        text="Hello",
        x=0.5,
        y=0.5,
        width=150,
        height=40,
        font_size=24,
        base_font_size=24,
        base_width=150,
    )
