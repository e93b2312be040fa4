"""State management utilities for the Mockup Studio UI.

Every UI event is a transition: it takes the current
:class:`~mockup_studio.ui.models.SessionState` and returns the next one.
Apart from :func:`initialize_session_state`, which reads the credit store,
the transitions here are pure functions.
"""

import logging
from dataclasses import replace

from mockup_studio.core.config import config
from mockup_studio.core.credit_store import CreditStore
from mockup_studio.core.credits import CreditState
from mockup_studio.core.dispatcher import GeneratedImage
from mockup_studio.core.images import ImageData
from mockup_studio.core.products import (
    ModelType,
    Product,
    StickerPlacement,
    StickerType,
    Subject,
)
from mockup_studio.core.selection import select_product

from .models import KeyStatus, SessionState
from .validation import validate_generation

logger = logging.getLogger(__name__)

_credit_store: CreditStore | None = None


def get_credit_store() -> CreditStore:
    """Return the process-wide credit store, creating it on first use."""
    global _credit_store
    if _credit_store is None:
        _credit_store = CreditStore(config.store_path, config.initial_credits)
        logger.info(f"Using credit store at {config.store_path}")
    return _credit_store


def initialize_session_state(
    state: SessionState | None = None, store: CreditStore | None = None
) -> SessionState:
    """Create a session state and load its credits if not loaded yet.

    Args:
        state: Existing SessionState or None
        store: Credit store to read from (default: the process-wide store)

    Returns:
        SessionState with credits loaded
    """
    if state is None:
        logger.info("Creating new SessionState")
        state = SessionState()

    if state.credits is not None:
        return state

    store = store or get_credit_store()
    credits = store.load()
    logger.info(f"Loaded {credits.credits} credits for device {credits.device_id}")
    return replace(state, credits=credits)


# ---------------------------------------------------------------------------
# Selection transitions.
# ---------------------------------------------------------------------------


def choose_product(state: SessionState, product: Product) -> SessionState:
    return replace(state, selection=select_product(state.selection, product))


def choose_model_type(state: SessionState, model_type: ModelType) -> SessionState:
    return replace(state, selection=replace(state.selection, model_type=model_type))


def choose_subject(state: SessionState, subject: Subject) -> SessionState:
    """Select a subject; the generic ``car`` choice means the default sedan side view."""
    if subject is Subject.CAR:
        subject = Subject.SEDAN_SIDE
    return replace(state, selection=replace(state.selection, subject=subject))


def choose_sticker_type(state: SessionState, sticker_type: StickerType) -> SessionState:
    return replace(state, selection=replace(state.selection, sticker_type=sticker_type))


def choose_placement(state: SessionState, placement: StickerPlacement) -> SessionState:
    return replace(state, selection=replace(state.selection, sticker_placement=placement))


def set_design_image(state: SessionState, image: ImageData | None) -> SessionState:
    return replace(state, selection=replace(state.selection, design_image=image))


def set_custom_model_image(state: SessionState, image: ImageData | None) -> SessionState:
    return replace(state, selection=replace(state.selection, custom_model_image=image))


def show_error(state: SessionState, message: str) -> SessionState:
    return replace(state, error=message)


# ---------------------------------------------------------------------------
# Generation transitions.
# ---------------------------------------------------------------------------


def begin_generation(state: SessionState) -> SessionState:
    """Enter the loading state.

    Raises:
        ValidationError: If generation is blocked (already loading, missing
            input, or no credits).
    """
    validate_generation(state)
    return replace(
        state,
        is_loading=True,
        dispatch_pending=True,
        error=None,
        generated_image=None,
        download_path=None,
    )


def refuse_generation(state: SessionState) -> SessionState:
    """Mark a blocked start so the chained dispatch step does nothing."""
    return replace(state, dispatch_pending=False)


def complete_generation(
    state: SessionState,
    image: GeneratedImage,
    credits: CreditState,
    download_path: str | None = None,
) -> SessionState:
    return replace(
        state,
        is_loading=False,
        dispatch_pending=False,
        generated_image=image,
        download_path=download_path,
        credits=credits,
    )


def fail_generation(
    state: SessionState, message: str, credits: CreditState | None = None
) -> SessionState:
    """Return to idle with *message*; *credits* replaces the cached balance if given."""
    return replace(
        state,
        is_loading=False,
        dispatch_pending=False,
        error=message,
        credits=credits if credits is not None else state.credits,
    )


# ---------------------------------------------------------------------------
# Unlock key transitions.
# ---------------------------------------------------------------------------


def edit_key_input(state: SessionState, text: str) -> SessionState:
    """Track the typed key; typing clears the previous status message."""
    return replace(state, key_input=text, key_status=None)


def accept_key(state: SessionState, credits: CreditState, added: int) -> SessionState:
    """Record the redeemed key; *added* is the amount the key granted."""
    return replace(
        state,
        credits=credits,
        key_input="",
        key_status=KeyStatus("success", f"{added} credits added successfully!"),
    )


def reject_key(state: SessionState, message: str) -> SessionState:
    """Show the rejection reason and leave the typed key in place."""
    return replace(state, key_status=KeyStatus("error", message))
