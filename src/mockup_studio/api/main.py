"""Mockup Studio: FastAPI Application.

This module defines the FastAPI ``app`` instance, all REST API routes, and
the ``main()`` CLI function that launches the uvicorn server.

Architecture
------------
- **Prompt construction** is delegated to
  :func:`~mockup_studio.core.prompt_builder.build_request`, a pure function
  of the submitted selection.
- **Image generation** is performed by
  :class:`~mockup_studio.core.dispatcher.MockupDispatcher`, created once at
  startup and stored on ``app.state``.
- **Credits** are persisted by
  :class:`~mockup_studio.core.credit_store.CreditStore` in the configured
  data directory, one credit balance per installation.
- **Re-entrancy**: an ``asyncio.Lock`` on ``app.state`` allows one
  generation in flight at a time; a concurrent request is refused with 409.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
GET       ``/api/config``               Products, subjects, sticker options
POST      ``/api/prompt/compile``       Preview the request for a selection
POST      ``/api/generate``             Generate a mockup (costs 1 credit)
GET       ``/api/credits``              Credit balance and device ID
POST      ``/api/credits/apply``        Redeem an unlock key
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    mockup-studio-api

Direct invocation::

    python -m mockup_studio.api.main
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from mockup_studio import __version__
from mockup_studio.api.models import (
    ApplyKeyRequest,
    CompiledPromptResponse,
    CreditsResponse,
    GenerateResponse,
    PartSummary,
    SelectionRequest,
)
from mockup_studio.core.config import config
from mockup_studio.core.credit_store import CreditStore
from mockup_studio.core.credits import apply_unlock_key, consume_credit
from mockup_studio.core.dispatcher import MockupDispatcher
from mockup_studio.core.errors import (
    GenerationError,
    ImageDataError,
    MissingInputError,
    OutOfCreditsError,
    UnlockKeyError,
)
from mockup_studio.core.products import (
    CAR_SUBTYPE_LABELS,
    MODEL_TYPE_LABELS,
    PLACEMENT_LABELS,
    STICKER_TYPE_LABELS,
    Product,
    Subject,
    category_of,
    default_subject,
    has_model_selection,
)
from mockup_studio.core.prompt_builder import ImagePart, MockupRequest, build_request

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the dispatcher, credit store and generation lock on startup.

    No Gemini client is created here; the dispatcher creates it lazily on
    the first ``POST /api/generate`` call.
    """
    app.state.dispatcher = MockupDispatcher(config)
    app.state.credit_store = CreditStore(config.store_path, config.initial_credits)
    app.state.generation_lock = asyncio.Lock()

    credits = app.state.credit_store.load()
    logger.info(f"Credit store ready at {config.store_path} ({credits.credits} credits)")

    yield


app = FastAPI(
    title="Mockup Studio",
    description="Product mockups generated from an uploaded design.",
    version=__version__,
    lifespan=lifespan,
)

# Allow cross-origin requests so a browser front-end can be served from a
# different port during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Helpers.
# ---------------------------------------------------------------------------


def _build(req: SelectionRequest) -> tuple[Product | None, MockupRequest]:
    """Decode the selection and build its request, mapping errors to 400."""
    try:
        selection = req.to_selection()
        return selection.product, build_request(selection)
    except (MissingInputError, ImageDataError) as e:
        logger.warning(f"Rejected selection: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e


def _summarise_parts(request: MockupRequest) -> list[PartSummary]:
    return [
        PartSummary(kind="image", mime_type=part.mime_type)
        if isinstance(part, ImagePart)
        else PartSummary(kind="text")
        for part in request.parts
    ]


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/config")
async def get_config() -> dict:
    """Return the selection vocabularies for the frontend.

    Returns:
        Dictionary with ``version``, ``model``, ``products``, ``subjects``,
        ``car_subtypes``, ``model_types``, ``sticker_types`` and
        ``sticker_placements``.
    """
    return {
        "version": __version__,
        "model": config.gemini_model,
        "products": [
            {
                "id": product.value,
                "label": product.label,
                "category": category_of(product).value,
                "model_selection": has_model_selection(product),
                "default_subject": (
                    default_subject(product).value if default_subject(product) else None
                ),
            }
            for product in Product
        ],
        "subjects": [subject.value for subject in Subject],
        "car_subtypes": [
            {"id": subject.value, "label": label} for subject, label in CAR_SUBTYPE_LABELS.items()
        ],
        "model_types": [{"id": m.value, "label": label} for m, label in MODEL_TYPE_LABELS.items()],
        "sticker_types": [
            {"id": s.value, "label": label} for s, label in STICKER_TYPE_LABELS.items()
        ],
        "sticker_placements": [
            {"id": p.value, "label": label} for p, label in PLACEMENT_LABELS.items()
        ],
    }


@app.post("/api/prompt/compile")
async def compile_prompt(req: SelectionRequest) -> CompiledPromptResponse:
    """Preview the instruction and part layout without generating."""
    _, request = _build(req)
    return CompiledPromptResponse(prompt_text=request.prompt_text, parts=_summarise_parts(request))


@app.post("/api/generate")
async def generate_mockup(req: SelectionRequest) -> GenerateResponse:
    """Generate a mockup and spend one credit.

    This endpoint:

    1. Refuses to start while another generation is in flight (409).
    2. Builds the request from the selection (400 on missing input).
    3. Checks that a credit is available (402).
    4. Dispatches the request to the image model (502 on failure).
    5. Consumes exactly one credit and persists the new balance (402 if
       the stored balance ran out during the call).

    Raises:
        HTTPException: 400, 402, 409 or 502 with a plain-language detail.
    """
    lock: asyncio.Lock = app.state.generation_lock
    if lock.locked():
        raise HTTPException(status_code=409, detail="A generation is already in progress.")

    async with lock:
        product, request = _build(req)

        store: CreditStore = app.state.credit_store
        credit_state = store.load()
        if not credit_state.has_credits:
            raise HTTPException(status_code=402, detail="You're out of credits!")

        dispatcher: MockupDispatcher = app.state.dispatcher
        try:
            image = await dispatcher.generate(request)
        except GenerationError as e:
            logger.error(f"Generation failed: {e}")
            raise HTTPException(
                status_code=502,
                detail=f"An error occurred during generation: {e}",
            ) from e

        # Re-read in case the balance changed while the call was in flight.
        try:
            credit_state = consume_credit(store.load())
        except OutOfCreditsError as e:
            logger.warning("Credits were used up while the mockup was generating")
            raise HTTPException(status_code=402, detail=str(e)) from e
        store.save(credit_state)

    return GenerateResponse(
        image=image.to_data_url(),
        mime_type=image.mime_type,
        filename=image.download_filename(product),
        prompt_text=request.prompt_text,
        credits=credit_state.credits,
    )


@app.get("/api/credits")
async def get_credits() -> CreditsResponse:
    """Return the credit balance and the device ID used for unlock keys."""
    state = app.state.credit_store.load()
    return CreditsResponse(credits=state.credits, device_id=state.device_id)


@app.post("/api/credits/apply")
async def apply_key(req: ApplyKeyRequest) -> CreditsResponse:
    """Redeem an unlock key.

    Raises:
        HTTPException: 400 with the plain-language reason the key was
            rejected.
    """
    store: CreditStore = app.state.credit_store
    state = store.load()
    try:
        new_state = apply_unlock_key(req.key, state)
    except UnlockKeyError as e:
        logger.warning(f"Unlock key rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e

    store.save(new_state)
    added = new_state.credits - state.credits
    return CreditsResponse(
        credits=new_state.credits,
        device_id=new_state.device_id,
        message=f"{added} credits added successfully!",
    )


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~mockup_studio.core.config.config`
    (``MOCKUP_SERVER_HOST`` / ``MOCKUP_SERVER_PORT``).
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "mockup_studio.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
