"""Shared test fixtures and configuration.

Provides slides, sessions and image sources for testing the carousel editor.
Image sources are PNG data URLs generated with Pillow so no test touches the
network; remote fetching is exercised through httpx.MockTransport.
"""

from __future__ import annotations

import base64
import sys
from io import BytesIO
from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock

import pytest
from PIL import Image
from tenacity import wait_none

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from carousel_studio.config import EditorConfig, StorageSettings
from carousel_studio.editor import EditorSession
from carousel_studio.elements import (
    create_image_element,
    create_shape_element,
    create_text_element,
)
from carousel_studio.export import AssetLoader
from carousel_studio.services import DraftStore
from carousel_studio.slides import Slide


def make_png(color: str = "#ff0000", size: tuple[int, int] = (40, 30)) -> bytes:
    """Encode a solid-color PNG."""
    output = BytesIO()
    Image.new("RGB", size, color).save(output, format="PNG")
    return output.getvalue()


def make_data_url(color: str = "#ff0000", size: tuple[int, int] = (40, 30)) -> str:
    """Solid-color PNG as a base64 data URL."""
    return "data:image/png;base64," + base64.b64encode(make_png(color, size)).decode("ascii")


@pytest.fixture
def png_data_url() -> Callable[..., str]:
    """Factory for PNG data URLs.

    Usage:
        def test_something(png_data_url):
            src = png_data_url("#00ff00", (64, 48))
    """
    return make_data_url


@pytest.fixture
def text_slide() -> Slide:
    """Slide with one text element and one rectangle."""
    return Slide(
        background_color="#ffffff",
        elements=[
            create_text_element(text="Hook", x=100, y=100, width=400, height=80, font_size=48),
            create_shape_element(x=600, y=600, width=200, height=120, fill="#3b82f6"),
        ],
    )


@pytest.fixture
def sample_slides(png_data_url) -> list[Slide]:
    """Three slides covering every element variant."""
    return [
        Slide(
            background_color="#0a0a0f",
            elements=[
                create_text_element(text="Title", x=140, y=380, width=800, height=120, fill="#ffffff"),
            ],
        ),
        Slide(
            background_color="#ffffff",
            elements=[
                create_shape_element(shape_type="rect", x=80, y=80, width=300, height=200, corner_radius=24),
                create_shape_element(shape_type="circle", x=500, y=500, width=160, height=160, fill="#10b981"),
                create_shape_element(shape_type="line", x=100, y=900, width=880, height=20, fill="#000000"),
            ],
        ),
        Slide(
            background_color="#1e3a5f",
            elements=[
                create_image_element(png_data_url("#ff0000", (40, 30)), 40, 30, x=200, y=200),
            ],
        ),
    ]


@pytest.fixture
def draft_path(tmp_path: Path) -> Path:
    """Path for a draft file inside the test's temp directory.

    Returns:
        Path that does not exist yet.
    """
    return tmp_path / "drafts" / "carousel-draft.json"


@pytest.fixture
def editor_config(draft_path: Path) -> EditorConfig:
    """Default configuration with the draft stored under tmp_path."""
    return EditorConfig(storage=StorageSettings(draft_path=draft_path))


@pytest.fixture
def asset_loader() -> AssetLoader:
    """Asset loader that retries without waiting."""
    return AssetLoader(max_retries=3, retry_wait=wait_none())


@pytest.fixture
def session(editor_config: EditorConfig, draft_path: Path, asset_loader: AssetLoader) -> EditorSession:
    """Editor session with one empty slide and a temp draft store.

    Returns:
        Fresh EditorSession.
    """
    return EditorSession(
        config=editor_config,
        store=DraftStore(draft_path),
        loader=asset_loader,
    )


@pytest.fixture
def mock_progress_callback() -> AsyncMock:
    """Create a mock export progress callback.

    Returns:
        AsyncMock that records ExportProgress updates.
    """
    return AsyncMock()
