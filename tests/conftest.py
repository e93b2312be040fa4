"""Shared pytest fixtures for Mockup Studio tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from mockup_studio.core.config import MockupConfig
from mockup_studio.core.credit_store import CreditStore
from mockup_studio.core.credits import CreditState
from mockup_studio.core.images import ImageData
from mockup_studio.core.products import ModelType, Product, Subject
from mockup_studio.core.selection import Selection
from mockup_studio.ui.models import SessionState


def make_png(color: str = "red", size: tuple[int, int] = (4, 4)) -> bytes:
    """Return the bytes of a tiny PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> MockupConfig:
    """Create a test configuration with temporary directories.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        MockupConfig instance for testing
    """
    return MockupConfig(
        gemini_api_key="test-key",  # Never used: tests inject a fake client
        data_dir=temp_dir / "data",
        downloads_dir=temp_dir / "downloads",
        initial_credits=3,
    )


@pytest.fixture
def credit_store(test_config: MockupConfig) -> CreditStore:
    """Credit store backed by a file in the temporary data directory."""
    return CreditStore(test_config.store_path, test_config.initial_credits)


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def design_image() -> ImageData:
    return ImageData(data=make_png("blue"), mime_type="image/png")


@pytest.fixture
def model_image() -> ImageData:
    return ImageData(data=make_png("green"), mime_type="image/png")


@pytest.fixture
def t_shirt_selection(design_image: ImageData) -> Selection:
    """T-shirt on an AI model with a design uploaded."""
    return Selection(product=Product.T_SHIRT, subject=Subject.HUMAN, design_image=design_image)


@pytest.fixture
def custom_model_selection(design_image: ImageData, model_image: ImageData) -> Selection:
    """T-shirt on an uploaded model photo."""
    return Selection(
        product=Product.T_SHIRT,
        model_type=ModelType.CUSTOM,
        subject=Subject.HUMAN,
        design_image=design_image,
        custom_model_image=model_image,
    )


@pytest.fixture
def credits() -> CreditState:
    return CreditState(credits=3, device_id="abc123")


@pytest.fixture
def ready_state(t_shirt_selection: Selection, credits: CreditState) -> SessionState:
    """Session state from which generation may start."""
    return SessionState(selection=t_shirt_selection, credits=credits)
