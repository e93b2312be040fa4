"""Pydantic request and response models for the Mockup Studio API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.

Models
------
SelectionRequest
    Payload for ``POST /api/prompt/compile`` and ``POST /api/generate``:
    the user's product, model and sticker choices plus uploaded images as
    data URLs.
CompiledPromptResponse
    Result of ``POST /api/prompt/compile``.
GenerateResponse
    Result of ``POST /api/generate``.
ApplyKeyRequest
    Payload for ``POST /api/credits/apply``.
CreditsResponse
    Credit balance and device identifier.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from mockup_studio.core.images import ImageData
from mockup_studio.core.products import (
    ModelType,
    Product,
    StickerPlacement,
    StickerType,
    Subject,
    default_subject,
)
from mockup_studio.core.selection import Selection


class SelectionRequest(BaseModel):
    """Request body describing a mockup selection.

    Attributes:
        product: Product to mock up.  ``None`` is accepted so that the
            builder can report the missing input in plain language.
        model_type: ``"ai"`` or ``"custom"``.
        subject: Model/vehicle context; defaults to the product's default
            subject when omitted.
        sticker_type: ``"sticker"`` or ``"wrap"`` (vehicle stickers only).
        sticker_placement: ``"body"`` or ``"window"`` (car stickers only).
        design_image: Design as a ``data:<mime>;base64,...`` URL.
        custom_model_image: Custom model/vehicle photo as a data URL.
    """

    product: Product | None = Field(default=None, description="Product to mock up.")
    model_type: ModelType = Field(default=ModelType.AI, description="'ai' or 'custom'.")
    subject: Subject | None = Field(
        default=None,
        description="Model/vehicle context.  None = the product's default subject.",
    )
    sticker_type: StickerType = Field(default=StickerType.STICKER)
    sticker_placement: StickerPlacement = Field(default=StickerPlacement.BODY)
    design_image: str | None = Field(
        default=None,
        description="Design image as a base64 data URL.",
    )
    custom_model_image: str | None = Field(
        default=None,
        description="Custom model or vehicle photo as a base64 data URL.",
    )

    def to_selection(self) -> Selection:
        """Convert to a :class:`Selection`, decoding the data URLs.

        Raises:
            ImageDataError: If an image is not a valid base64 data URL.
        """
        subject = self.subject if self.subject is not None else default_subject(self.product)
        return Selection(
            product=self.product,
            model_type=self.model_type,
            subject=subject,
            sticker_type=self.sticker_type,
            sticker_placement=self.sticker_placement,
            design_image=ImageData.from_data_url(self.design_image) if self.design_image else None,
            custom_model_image=(
                ImageData.from_data_url(self.custom_model_image)
                if self.custom_model_image
                else None
            ),
        )


class PartSummary(BaseModel):
    """Description of one request part without its payload."""

    kind: str = Field(..., description="'image' or 'text'.")
    mime_type: str | None = Field(default=None, description="MIME type of an image part.")


class CompiledPromptResponse(BaseModel):
    prompt_text: str
    parts: list[PartSummary]


class GenerateResponse(BaseModel):
    """Response body for ``POST /api/generate``.

    Attributes:
        image: The generated mockup as a data URL.
        mime_type: MIME type declared by the model.
        filename: Suggested download file name.
        prompt_text: Instruction that was sent.
        credits: Credits left after this generation.
    """

    image: str
    mime_type: str
    filename: str
    prompt_text: str
    credits: int


class ApplyKeyRequest(BaseModel):
    key: str = Field(..., description="Unlock key, e.g. 'UNLOCK-5-321CBA'.")


class CreditsResponse(BaseModel):
    credits: int
    device_id: str
    message: str | None = None
