"""Core functionality for mockup generation.

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with MOCKUP_ in .env files

2. **Selection Layer** (products.py, selection.py, images.py):
   - Product, subject and sticker vocabularies and their categories
   - Immutable user selection and its transitions
   - Uploaded images as bytes + MIME, data URL conversion

3. **Request Layer** (prompt_builder.py, dispatcher.py):
   - Pure decision-table construction of the multi-part request
   - Gemini call restricted to image output, response parsing

4. **Credit Layer** (credits.py, credit_store.py):
   - Unlock key validation, issuing and credit consumption
   - File-backed key-value persistence

Usage Example
-------------
    from mockup_studio.core import MockupDispatcher, Selection, build_request, config

    request = build_request(selection)
    image = await MockupDispatcher(config).generate(request)
"""

from mockup_studio.core.config import MockupConfig, config
from mockup_studio.core.credit_store import CreditStore
from mockup_studio.core.credits import CreditState, apply_unlock_key, consume_credit
from mockup_studio.core.dispatcher import GeneratedImage, MockupDispatcher
from mockup_studio.core.images import ImageData
from mockup_studio.core.prompt_builder import MockupRequest, build_request
from mockup_studio.core.selection import Selection

__all__ = [
    "CreditState",
    "CreditStore",
    "GeneratedImage",
    "ImageData",
    "MockupConfig",
    "MockupDispatcher",
    "MockupRequest",
    "Selection",
    "apply_unlock_key",
    "build_request",
    "config",
    "consume_credit",
]
