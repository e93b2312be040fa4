"""Product, model and sticker selection handlers."""

import logging

from mockup_studio.core.errors import ImageDataError
from mockup_studio.core.images import ImageData
from mockup_studio.core.products import ModelType, Product, StickerPlacement, StickerType, Subject

from ..models import SessionState
from ..state import (
    choose_model_type,
    choose_placement,
    choose_product,
    choose_sticker_type,
    choose_subject,
    initialize_session_state,
    set_custom_model_image,
    set_design_image,
    show_error,
)

logger = logging.getLogger(__name__)


def select_product_handler(value: str, state: SessionState) -> SessionState:
    """Handle a click in the product picker.

    Args:
        value: Product id from the radio (e.g. ``"phone case"``)
        state: UI state

    Returns:
        Updated state with dependent selections reset
    """
    state = initialize_session_state(state)
    if not value:
        return state
    logger.info(f"Product selected: {value}")
    return choose_product(state, Product(value))


def select_model_type_handler(value: str, state: SessionState) -> SessionState:
    if not value:
        return state
    return choose_model_type(state, ModelType(value))


def select_subject_handler(value: str, state: SessionState) -> SessionState:
    """Handle the human, vehicle and car-type subject pickers."""
    if not value:
        return state
    return choose_subject(state, Subject(value))


def select_sticker_type_handler(value: str, state: SessionState) -> SessionState:
    if not value:
        return state
    return choose_sticker_type(state, StickerType(value))


def select_placement_handler(value: str, state: SessionState) -> SessionState:
    if not value:
        return state
    return choose_placement(state, StickerPlacement(value))


def _load_upload(path: str | None) -> ImageData | None:
    if not path:
        return None
    return ImageData.from_path(path)


def upload_design_handler(path: str | None, state: SessionState) -> SessionState:
    """Read the uploaded design (or cleared upload) into the selection.

    An unreadable file clears the design and is reported as an error.
    """
    try:
        image = _load_upload(path)
    except ImageDataError as e:
        logger.warning(f"Design upload rejected: {e}")
        state = set_design_image(state, None)
        return show_error(state, str(e))
    return set_design_image(state, image)


def upload_custom_model_handler(path: str | None, state: SessionState) -> SessionState:
    """Read the uploaded model/vehicle photo into the selection."""
    try:
        image = _load_upload(path)
    except ImageDataError as e:
        logger.warning(f"Model upload rejected: {e}")
        state = set_custom_model_image(state, None)
        return show_error(state, str(e))
    return set_custom_model_image(state, image)
