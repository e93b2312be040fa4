"""Multi-part request construction for mockup generation.

The prompt builder turns a :class:`~mockup_studio.core.selection.Selection`
into a :class:`MockupRequest`: an ordered list of reference images followed
by a single natural-language instruction.  It is a pure function with no I/O
and no randomness, so the same selection always yields the same request.

Part Ordering
-------------
=====================================  ======================================
Situation                              Parts
=====================================  ======================================
AI-generated model / scene             ``[design, instruction]``
Custom model or vehicle photo          ``[custom photo, design, instruction]``
=====================================  ======================================

Instruction Selection
---------------------
Instructions are looked up in explicit tables rather than nested
conditionals:

- ``_CUSTOM_MODEL_TEMPLATES``: custom photo supplied, keyed by category
  (try-on and apparel); every other category uses ``_OVERLAY_TEMPLATE``,
  which pastes the design onto the supplied photo.
- ``_AI_PRODUCT_TEMPLATES``: AI path, keyed by product.  Products without
  an entry fall back to ``_FALLBACK_TEMPLATE``.
- ``_VEHICLE_TEMPLATES``: AI path for vehicle stickers, keyed by
  ``(vehicle, sticker type, placement)``.  Placement is only part of the key
  for a car with a sticker; for every other combination it is ``None``.

Templates are ``str.format`` strings.  Available fields are ``product``,
``product_description``, ``action``, ``vehicle_type`` and ``vehicle_angle``.

Usage
-----
::

    request = build_request(selection)
    request.prompt_text      # the instruction
    request.parts            # images first, instruction last
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import MissingInputError
from .images import ImageData
from .products import (
    Category,
    Product,
    StickerPlacement,
    StickerType,
    Vehicle,
    car_body_style,
    car_view_angle,
    category_of,
    vehicle_for,
)
from .selection import Selection

# ---------------------------------------------------------------------------
# Request parts.
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ImagePart:
    data: bytes
    mime_type: str

    @classmethod
    def from_image(cls, image: ImageData) -> ImagePart:
        return cls(data=image.data, mime_type=image.mime_type)


@dataclass(frozen=True)
class TextPart:
    text: str


RequestPart = ImagePart | TextPart


@dataclass(frozen=True)
class MockupRequest:
    """An ordered multi-part generation request.

    The final part is always the :class:`TextPart` carrying the instruction.
    """

    parts: tuple[RequestPart, ...]

    @property
    def prompt_text(self) -> str:
        return self.parts[-1].text

    @property
    def image_parts(self) -> tuple[ImagePart, ...]:
        return tuple(part for part in self.parts if isinstance(part, ImagePart))


# ---------------------------------------------------------------------------
# Custom model / vehicle photo instructions.
# ---------------------------------------------------------------------------

_CUSTOM_MODEL_TEMPLATES: dict[Category, str] = {
    Category.TRY_ON: (
        "First, analyze the human model in the provided base image to understand their unique "
        "features, ethnicity, and appearance. Then, generate a completely new 4-panel "
        "photorealistic mockup collage. Each panel must feature the exact same model from the "
        "base image, but in a different realistic pose and camera angle. For each panel, the "
        "model should be wearing the provided {product} from the second image. The {product} "
        "must be fitted realistically to the model, conforming to their pose, lighting, and "
        "perspective. Use minimalist, clean studio backdrops for a professional look."
    ),
    Category.APPAREL: (
        "First, analyze the human model in the provided base image to understand their unique "
        "features, ethnicity, and appearance. Then, generate a completely new 4-panel "
        "photorealistic mockup collage. Each panel must feature the exact same model from the "
        "base image, but in a different realistic pose and camera angle (e.g., front view, side "
        "view, close-up). For each panel, the model should be {action} {product_description} "
        "with the provided design applied to it. The design must conform realistically to the "
        "item's texture, folds, and lighting. Use minimalist, clean studio backdrops for a "
        "professional look."
    ),
}

_OVERLAY_TEMPLATE = (
    "Using the first image as the base, place the second image (the design) onto the {product}. "
    "The design should follow the contours, shadows, and texture of the item for a realistic "
    "effect. Do not alter the base image otherwise."
)

# ---------------------------------------------------------------------------
# AI-generated scene instructions, per product.
# ---------------------------------------------------------------------------

_TRY_ON_AI_TEMPLATE = (
    "Generate a 4-panel photorealistic mockup collage. Each panel should feature a diverse model "
    "wearing the provided {product} from the image. Showcase different poses, angles (like a "
    "front view, side view, and a close-up on the product), and minimalist studio backdrops to "
    "create a professional and varied presentation. The {product} must be integrated "
    "realistically, matching the model's pose, lighting, and perspective."
)

_APPAREL_AI_TEMPLATE = (
    "Generate a 4-panel photorealistic mockup collage. Each panel should feature a diverse model "
    "wearing a plain white {product} with the provided design applied. Showcase different poses, "
    "angles (like a front view, side view, and a close-up on the design), and minimalist studio "
    "backdrops to create a professional and varied presentation."
)

_AI_PRODUCT_TEMPLATES: dict[Product, str] = {
    Product.SHOES: _TRY_ON_AI_TEMPLATE,
    Product.UNDERGARMENTS: _TRY_ON_AI_TEMPLATE,
    Product.SUNGLASSES: _TRY_ON_AI_TEMPLATE,
    Product.T_SHIRT: _APPAREL_AI_TEMPLATE,
    Product.PANTS: _APPAREL_AI_TEMPLATE,
    Product.CAP: _APPAREL_AI_TEMPLATE,
    Product.BAG_MOCKUP: (
        "Generate a 4-panel photorealistic mockup collage. Each panel should feature a diverse "
        "model holding or wearing a plain white tote bag with the provided design applied. "
        "Showcase the bag from different angles and in different lifestyle settings (e.g., at a "
        "cafe, over the shoulder, close-up on the design) to create a professional and varied "
        "presentation."
    ),
    Product.PHONE_CASE: (
        "Generate a clean, professional 8-panel grid showcasing a phone case with the provided "
        "design. Each panel should feature a different modern smartphone model or a different "
        "angle (front, back, angled view). The background for all panels should be a neutral, "
        "minimalist surface. Do not include any people."
    ),
    Product.TABLET_EBOOK: (
        "Generate a clean, professional 6-panel grid showcasing the provided design on the "
        "screen of a modern tablet or e-book reader. Each panel should show the device from a "
        "different angle or in a different minimalist setting (e.g., on a coffee table, held in "
        "hands). The background should be clean and unobtrusive."
    ),
    Product.FRIDGE_MAGNET: (
        "Generate a 4-panel photorealistic mockup collage. Each panel should showcase the "
        "provided design as a magnet on a refrigerator. Include a variety of shots: a "
        "straight-on view on a stainless steel fridge, an angled view, a close-up on the "
        "magnet's texture, and the fridge in a modern kitchen setting to provide context."
    ),
    Product.BIG_BOTTLE: (
        "Generate a 4-panel photorealistic mockup collage. Each panel should showcase the "
        "provided design as a label on a large, reusable water bottle (hydro flask style). "
        "Include a variety of shots: a clean studio shot of the bottle, the bottle in a "
        "lifestyle setting (like a gym or on a desk), a close-up on the design label, and an "
        "angled view."
    ),
}

_FALLBACK_TEMPLATE = (
    "Generate a 4-panel photorealistic mockup collage of the provided design on a white "
    "{product} in various minimalist studio settings and angles."
)

# ---------------------------------------------------------------------------
# Vehicle sticker decision table.
# ---------------------------------------------------------------------------

VehicleKey = tuple[Vehicle, StickerType, StickerPlacement | None]

_VEHICLE_TEMPLATES: dict[VehicleKey, str] = {
    (Vehicle.BUS, StickerType.WRAP, None): (
        "Generate a 4-panel photorealistic collage showcasing a standard city bus with a full "
        "vehicle wrap using the provided design. Each panel should display the bus from a "
        "different angle (e.g., side profile, front three-quarter, rear three-quarter) in a "
        "clean, urban setting. The wrap must conform realistically to the bus's shape, including "
        "indentations for windows and wheel wells. Ensure lighting, shadows, and reflections on "
        "the wrap match the bus's environment perfectly for a seamless look."
    ),
    (Vehicle.BUS, StickerType.STICKER, None): (
        "Generate a 4-panel photorealistic collage showcasing a standard city bus with a "
        "high-quality vinyl sticker of the provided design. Each panel should display the bus "
        "from a different angle (e.g., side profile, close-up on sticker) in a clean, urban "
        "setting. The sticker must realistically follow the bus's contours. Ensure the sticker's "
        "lighting, shadows, and reflections perfectly match the bus's paint finish."
    ),
    (Vehicle.TRAIN, StickerType.WRAP, None): (
        "Generate a 4-panel photorealistic collage showcasing a modern passenger train car with "
        "a full vehicle wrap from the provided design. Each panel should display the train from "
        "a different perspective (e.g., full side view at a station, angled shot in motion) to "
        "highlight the wrap. The wrap must conform realistically to the train's shape, including "
        "around windows and doors. Ensure lighting and reflections are consistent with a modern "
        "station platform environment."
    ),
    (Vehicle.TRAIN, StickerType.STICKER, None): (
        "Generate a 4-panel photorealistic collage showcasing a modern passenger train car with "
        "a high-quality vinyl sticker of the provided design. Each panel should feature the "
        "train from a different angle, including a close-up on the sticker application. The "
        "sticker must realistically follow the train's contours and have lighting/reflections "
        "appropriate for a clean, modern station platform."
    ),
    (Vehicle.MOTORCYCLE, StickerType.WRAP, None): (
        "Generate a 4-panel photorealistic collage showcasing a modern motorcycle with a full "
        "vehicle wrap using the provided design. Each panel should feature the bike from a "
        "different dynamic angle or in a different setting (city street, scenic road) to "
        "highlight the wrap's appearance. The wrap must realistically follow the bike's contours "
        "and curves, with lighting and reflections matching the environment."
    ),
    (Vehicle.MOTORCYCLE, StickerType.STICKER, None): (
        "Generate a 4-panel photorealistic collage showcasing a modern motorcycle with a "
        "high-quality vinyl sticker of the provided design. Each panel should feature the bike "
        "from a different dynamic angle, including a close-up on the sticker. The sticker must "
        "realistically wrap around the vehicle's contours, and its lighting and reflections must "
        "match the bike's glossy paint finish."
    ),
    (Vehicle.CAR, StickerType.WRAP, None): (
        "Generate a 4-panel photorealistic collage showcasing a clean, modern Indian "
        "{vehicle_type} with a full vehicle wrap using the provided design. Each panel should "
        "feature the car from a different angle (e.g., {vehicle_angle}, three-quarter view, "
        "close-up) or in a different realistic setting (city street, showroom). The wrap must "
        "realistically follow the vehicle's contours, with lighting and reflections matching "
        "for a seamless look."
    ),
    (Vehicle.CAR, StickerType.STICKER, StickerPlacement.WINDOW): (
        "Generate a 4-panel photorealistic collage showcasing a **die-cut vinyl sticker** of the "
        "provided design on the rear window of a modern Indian {vehicle_type}. The sticker must "
        "be **cut out precisely along the design's edges** (no rectangular background). Each "
        "panel should show the car from a different angle ({vehicle_angle}, close-up on "
        "sticker) or in a different well-lit, realistic setting. The sticker should appear "
        "semi-translucent, adhering to the glass with realistic reflections."
    ),
    (Vehicle.CAR, StickerType.STICKER, StickerPlacement.BODY): (
        "Generate a 4-panel photorealistic collage showcasing a high-quality vinyl sticker of "
        "the provided design on a clean, modern Indian {vehicle_type}. Each panel should feature "
        "the car from a different angle (e.g., {vehicle_angle}, three-quarter view, close-up on "
        "sticker) to highlight the application. The sticker must realistically wrap around "
        "contours, with lighting and reflections matching the vehicle's glossy paint finish."
    ),
}


def vehicle_key(
    vehicle: Vehicle, sticker_type: StickerType, placement: StickerPlacement
) -> VehicleKey:
    """Build the decision table key, dropping placement where it is irrelevant."""
    if vehicle is Vehicle.CAR and sticker_type is StickerType.STICKER:
        return (vehicle, sticker_type, placement)
    return (vehicle, sticker_type, None)


# ---------------------------------------------------------------------------
# Instruction selection.
# ---------------------------------------------------------------------------


def _custom_model_instruction(selection: Selection) -> str:
    product = selection.product
    template = _CUSTOM_MODEL_TEMPLATES.get(category_of(product), _OVERLAY_TEMPLATE)

    if product is Product.BAG_MOCKUP:
        product_description = "a plain white tote bag"
        action = "naturally holding or wearing"
    else:
        product_description = f"a plain white {product.value}"
        action = "wearing"

    return template.format(
        product=product.value,
        product_description=product_description,
        action=action,
    )


def _vehicle_instruction(selection: Selection) -> str:
    vehicle = vehicle_for(selection.subject)
    key = vehicle_key(vehicle, selection.sticker_type, selection.sticker_placement)
    return _VEHICLE_TEMPLATES[key].format(
        vehicle_type=car_body_style(selection.subject),
        vehicle_angle=car_view_angle(selection.subject),
    )


def _ai_instruction(selection: Selection) -> str:
    product = selection.product
    if category_of(product) is Category.VEHICLE_STICKER:
        return _vehicle_instruction(selection)
    template = _AI_PRODUCT_TEMPLATES.get(product, _FALLBACK_TEMPLATE)
    return template.format(product=product.value)


def build_instruction(selection: Selection) -> str:
    """Return the natural-language instruction for *selection*.

    Assumes a product is selected; :func:`build_request` checks this.
    """
    if selection.uses_custom_model:
        return _custom_model_instruction(selection)
    return _ai_instruction(selection)


def build_request(selection: Selection) -> MockupRequest:
    """Build the ordered multi-part generation request for a selection.

    Args:
        selection: The user's current choices.

    Returns:
        A :class:`MockupRequest` whose parts are the custom photo (when one
        is used), then the design, then the instruction text.

    Raises:
        MissingInputError: If no product or no design image is selected, or
            if no instruction could be produced.
    """
    if selection.product is None or selection.design_image is None:
        raise MissingInputError("Select a product and upload a design to generate a mockup.")

    prompt_text = build_instruction(selection)
    if not prompt_text:
        raise MissingInputError()

    parts: list[RequestPart] = []
    if selection.uses_custom_model:
        parts.append(ImagePart.from_image(selection.custom_model_image))
    parts.append(ImagePart.from_image(selection.design_image))
    parts.append(TextPart(text=prompt_text))

    return MockupRequest(parts=tuple(parts))
