"""Remote mockup generation through the Gemini image model.

This module provides :class:`MockupDispatcher`, the single point of contact
with the external image-generation API.  It takes a
:class:`~mockup_studio.core.prompt_builder.MockupRequest`, sends it as one
``generate_content`` call restricted to image output, and returns the first
inline image found in the response.

Key Responsibilities
--------------------
- **Lazy client creation**: the ``google.genai.Client`` is only created on
  the first call to :meth:`MockupDispatcher.generate`, so the application
  starts without an API key configured.
- **Request translation**: image parts become ``Part.from_bytes`` and the
  instruction becomes ``Part.from_text``, in request order.
- **Response interpretation**: only the first candidate is inspected; its
  parts are scanned in order for inline image bytes.
- **Error wrapping**: any lower-level failure is re-raised as
  :class:`~mockup_studio.core.errors.TransportError`.  Nothing is retried.

Crediting the user for a generation is the caller's responsibility.

Usage
-----
::

    from mockup_studio.core.config import config
    from mockup_studio.core.dispatcher import MockupDispatcher

    dispatcher = MockupDispatcher(config)
    image = await dispatcher.generate(build_request(selection))
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from google import genai
from google.genai import types

from .config import MockupConfig
from .errors import NoImageReturnedError, TransportError
from .images import ImageData
from .prompt_builder import ImagePart, MockupRequest
from .products import Product

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME = "image/png"


@dataclass(frozen=True)
class GeneratedImage(ImageData):
    """Image bytes returned by the generation API."""

    def download_filename(self, product: Product | None) -> str:
        """Suggested file name, e.g. ``"phone-case-mockup.png"``."""
        if product is None:
            return "generated-mockup.png"
        return f"{product.value.replace(' ', '-', 1)}-mockup.png"


def _to_genai_part(part) -> types.Part:
    if isinstance(part, ImagePart):
        return types.Part.from_bytes(data=part.data, mime_type=part.mime_type)
    return types.Part.from_text(text=part.text)


def extract_image(response: types.GenerateContentResponse) -> GeneratedImage:
    """Return the first inline image in the response's first candidate.

    Raises:
        NoImageReturnedError: If the response has no candidate, no content,
            or no part carrying image bytes.
    """
    if not response.candidates:
        raise NoImageReturnedError()

    content = response.candidates[0].content
    if content is None or not content.parts:
        raise NoImageReturnedError()

    for part in content.parts:
        inline = part.inline_data
        if inline is not None and inline.data:
            return GeneratedImage(data=inline.data, mime_type=inline.mime_type or DEFAULT_IMAGE_MIME)

    raise NoImageReturnedError()


class MockupDispatcher:
    """Sends mockup requests to the image model and returns the image.

    Attributes:
        _config (MockupConfig):
            Application configuration: API key and model identifier.
        _client (genai.Client | None):
            The SDK client, created on first use unless injected.
    """

    def __init__(self, config: MockupConfig, client: genai.Client | None = None) -> None:
        self._config = config
        self._client = client

    @property
    def model(self) -> str:
        return self._config.gemini_model

    def _get_client(self) -> genai.Client:
        if self._client is None:
            logger.info("Creating Gemini client")
            # An empty key lets the SDK fall back to GOOGLE_API_KEY / GEMINI_API_KEY.
            self._client = genai.Client(api_key=self._config.gemini_api_key or None)
        return self._client

    async def generate(self, request: MockupRequest) -> GeneratedImage:
        """Generate a mockup image for *request*.

        Args:
            request: Ordered parts ending with the instruction text.

        Returns:
            The first inline image returned by the model.

        Raises:
            NoImageReturnedError: If the response carries no image.
            TransportError: On any failure creating the client or performing
                the call (network, authentication, quota).
        """
        contents = [
            types.Content(role="user", parts=[_to_genai_part(part) for part in request.parts])
        ]
        generate_config = types.GenerateContentConfig(response_modalities=["IMAGE"])

        logger.info(
            f"Generation START | model={self.model} | images={len(request.image_parts)} | "
            f"prompt={request.prompt_text[:80]!r}"
        )
        t0 = time.time()

        try:
            client = self._get_client()
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=generate_config,
            )
        except Exception as e:
            logger.error(f"Generation FAILED | {time.time() - t0:.2f}s | {e}")
            raise TransportError(str(e) or e.__class__.__name__) from e

        logger.info(f"Generation END | {time.time() - t0:.2f}s")
        image = extract_image(response)
        logger.info(f"Received {image.mime_type} image ({len(image.data)} bytes)")
        return image
