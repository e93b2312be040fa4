"""Mockup generation handlers."""

import logging
import uuid
from pathlib import Path

from mockup_studio.core.config import config
from mockup_studio.core.credits import consume_credit
from mockup_studio.core.dispatcher import GeneratedImage, MockupDispatcher
from mockup_studio.core.errors import MockupError, OutOfCreditsError
from mockup_studio.core.products import Product
from mockup_studio.core.prompt_builder import build_request

from ..models import SessionState
from ..state import (
    begin_generation,
    complete_generation,
    fail_generation,
    get_credit_store,
    initialize_session_state,
    refuse_generation,
)
from ..validation import ValidationError

logger = logging.getLogger(__name__)

_dispatcher: MockupDispatcher | None = None


def get_dispatcher() -> MockupDispatcher:
    """Return the process-wide dispatcher, creating it on first use."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = MockupDispatcher(config)
    return _dispatcher


def save_download(image: GeneratedImage, product: Product | None, downloads_dir: Path) -> Path:
    """Write *image* under a unique folder so its file name stays readable.

    Returns:
        Path of the written file, e.g. ``downloads/<uuid>/cap-mockup.png``
    """
    target_dir = downloads_dir / uuid.uuid4().hex
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / image.download_filename(product)
    path.write_bytes(image.data)
    return path


def start_generation(state: SessionState) -> SessionState:
    """Put the session into the loading state before the remote call.

    A blocked request (missing input, no credits, already loading) is
    marked so that the chained :func:`run_generation` does not dispatch.
    The generate button is disabled in those cases, so reaching this branch
    means a stale click.
    """
    state = initialize_session_state(state)
    try:
        return begin_generation(state)
    except ValidationError as e:
        logger.warning(f"Generation blocked: {e}")
        return refuse_generation(state)


async def run_generation(state: SessionState) -> SessionState:
    """Build the request, call the image model and spend one credit.

    Args:
        state: UI state from :func:`start_generation`

    Returns:
        Updated state with either the generated image or an error message.
        A state whose start was refused is returned unchanged.
    """
    if not (state.is_loading and state.dispatch_pending):
        return state

    selection = state.selection
    try:
        request = build_request(selection)
        image = await get_dispatcher().generate(request)

        # Another session may have changed the stored balance meanwhile.
        store = get_credit_store()
        stored = store.load()
        try:
            credits = consume_credit(stored)
        except OutOfCreditsError as e:
            logger.warning("Credits were used up while the mockup was generating")
            return fail_generation(state, str(e), stored)
        store.save(credits)

        download_path = save_download(image, selection.product, config.downloads_dir)
        logger.info(f"Mockup saved to {download_path} ({credits.credits} credits left)")
        return complete_generation(state, image, credits, str(download_path))

    except MockupError as e:
        logger.warning(f"Generation failed: {e}")
        return fail_generation(state, f"An error occurred during generation: {e}")

    except Exception as e:
        logger.error(f"Error generating mockup: {e}", exc_info=True)
        return fail_generation(state, f"An error occurred during generation: {e}")
