"""The user's current mockup choices as plain, immutable data.

A :class:`Selection` is the sole input of the prompt builder.  It is never
mutated: UI events produce a new selection through the transition helpers
below, which keeps every transition deterministic and unit-testable.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .images import ImageData
from .products import ModelType, Product, StickerPlacement, StickerType, Subject, default_subject


@dataclass(frozen=True)
class Selection:
    """Current product, model and sticker choices plus uploaded images.

    Attributes:
        product: Selected product, or ``None`` before the first pick.
        model_type: AI-generated model or an uploaded custom model photo.
        subject: Model/vehicle context; only meaningful for products that
            need one.
        sticker_type: Sticker or full wrap; vehicle stickers only.
        sticker_placement: Body panel or rear window; car stickers only.
        design_image: The uploaded design (or product photo for try-on).
        custom_model_image: The uploaded model or vehicle photo.
    """

    product: Product | None = None
    model_type: ModelType = ModelType.AI
    subject: Subject | None = None
    sticker_type: StickerType = StickerType.STICKER
    sticker_placement: StickerPlacement = StickerPlacement.BODY
    design_image: ImageData | None = None
    custom_model_image: ImageData | None = None

    @property
    def uses_custom_model(self) -> bool:
        """True when a custom model was chosen and its photo is present."""
        return self.model_type is ModelType.CUSTOM and self.custom_model_image is not None


def select_product(selection: Selection, product: Product) -> Selection:
    """Switch product and reset the fields that depend on it.

    The subject default is recomputed, the model type returns to AI and the
    sticker fields return to their defaults.  Uploaded images are kept.
    """
    return replace(
        selection,
        product=product,
        subject=default_subject(product),
        model_type=ModelType.AI,
        sticker_type=StickerType.STICKER,
        sticker_placement=StickerPlacement.BODY,
    )
