"""Credit loading and unlock key handlers."""

import logging

from mockup_studio.core.credits import apply_unlock_key
from mockup_studio.core.errors import UnlockKeyError

from ..models import SessionState
from ..state import accept_key, edit_key_input, get_credit_store, initialize_session_state, reject_key

logger = logging.getLogger(__name__)


def load_session(state: SessionState) -> SessionState:
    """Load the stored credits when a browser session opens."""
    return initialize_session_state(state)


def edit_key_handler(text: str, state: SessionState) -> SessionState:
    return edit_key_input(state, text or "")


def apply_key_handler(state: SessionState) -> tuple[str, SessionState]:
    """Redeem the typed unlock key and persist the new balance.

    Args:
        state: UI state holding the typed key

    Returns:
        Tuple of (key_box_value, updated_state).  The key box is cleared on
        success and left intact on failure so the user can correct it.
    """
    state = initialize_session_state(state)
    store = get_credit_store()

    try:
        # Start from the stored balance so other sessions' changes are kept.
        stored = store.load()
        credits = apply_unlock_key(state.key_input, stored)
    except UnlockKeyError as e:
        logger.warning(f"Unlock key rejected: {e}")
        return state.key_input, reject_key(state, str(e))

    store.save(credits)
    new_state = accept_key(state, credits, credits.credits - stored.credits)
    logger.info(f"Credits now {credits.credits}")
    return "", new_state
