"""Validation and visibility rules for Mockup Studio UI inputs.

Everything here is a pure function of :class:`~mockup_studio.ui.models.SessionState`.
:func:`build_view` decides which controls are visible and whether the
generate button is enabled; the Gradio layer only translates the resulting
:class:`MockupView` into component updates.
"""

import logging
from dataclasses import dataclass

from mockup_studio.core.products import (
    CAR_SUBJECTS,
    VEHICLE_SUBJECTS,
    ModelType,
    Product,
    StickerType,
    has_model_selection,
    is_try_on,
    is_vehicle_sticker,
)

from .models import KeyStatus, SessionState

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """User-friendly validation error.

    The message is intended to be displayed directly to the user.
    """

    pass


def shows_model_selection(product: Product | None) -> bool:
    """True when the "Choose Model/Surface" group applies to *product*."""
    return has_model_selection(product) or is_vehicle_sticker(product)


def validate_generation(state: SessionState) -> None:
    """Check that a generation may start.

    Raises:
        ValidationError: With the first reason generation is blocked.
    """
    selection = state.selection

    if state.is_loading:
        raise ValidationError("A mockup is already being generated.")
    if selection.product is None:
        raise ValidationError("Please choose a product.")
    if selection.design_image is None:
        raise ValidationError("Please upload a design.")
    if (
        shows_model_selection(selection.product)
        and selection.model_type is ModelType.CUSTOM
        and selection.custom_model_image is None
    ):
        raise ValidationError("Please upload a model image or choose an AI model.")
    if state.credit_count <= 0:
        raise ValidationError("You're out of credits!")


def can_generate(state: SessionState) -> bool:
    try:
        validate_generation(state)
    except ValidationError:
        return False
    return True


@dataclass(frozen=True)
class MockupView:
    """Everything the UI renders that depends on session state."""

    credits_text: str
    upload_title: str
    upload_label: str
    show_model_selection: bool
    show_human_subjects: bool
    show_vehicle_subjects: bool
    show_car_types: bool
    show_sticker_types: bool
    show_placement: bool
    show_custom_upload: bool
    show_likeness_note: bool
    generate_enabled: bool
    generate_label: str
    show_out_of_credits: bool
    device_id: str
    key_status: KeyStatus | None
    error: str | None
    show_result: bool


def build_view(state: SessionState) -> MockupView:
    """Derive the rendered view from the session state."""
    selection = state.selection
    product = selection.product
    subject = selection.subject

    model_selection = shows_model_selection(product)
    ai_subjects = model_selection and selection.model_type is ModelType.AI
    vehicle_subject = subject is not None and subject in VEHICLE_SUBJECTS

    try_on = is_try_on(product)
    credits = state.credit_count

    return MockupView(
        credits_text=f"Credits: {credits}",
        upload_title="2. Upload Product Image" if try_on else "2. Upload Design",
        upload_label="Select Product File" if try_on else "Select Design File",
        show_model_selection=model_selection,
        show_human_subjects=ai_subjects and has_model_selection(product),
        show_vehicle_subjects=ai_subjects and is_vehicle_sticker(product),
        show_car_types=(
            ai_subjects
            and is_vehicle_sticker(product)
            and subject is not None
            and subject in CAR_SUBJECTS
        ),
        show_sticker_types=ai_subjects and is_vehicle_sticker(product) and vehicle_subject,
        show_placement=(
            ai_subjects
            and product is Product.CAR_STICKER
            and selection.sticker_type is StickerType.STICKER
        ),
        show_custom_upload=model_selection and selection.model_type is ModelType.CUSTOM,
        show_likeness_note=(
            has_model_selection(product) and selection.model_type is ModelType.CUSTOM
        ),
        generate_enabled=can_generate(state),
        generate_label="Generating..." if state.is_loading else "Generate Mockup",
        show_out_of_credits=state.credits is not None and credits <= 0,
        device_id=state.credits.device_id if state.credits is not None else "",
        key_status=state.key_status,
        error=state.error if credits > 0 else None,
        show_result=state.generated_image is not None and not state.is_loading,
    )
