"""Reusable UI components for the Mockup Studio Gradio interface."""

from typing import Any

import gradio as gr

from mockup_studio.core.products import (
    CAR_SUBJECTS,
    CAR_SUBTYPE_LABELS,
    MODEL_TYPE_LABELS,
    PLACEMENT_LABELS,
    STICKER_TYPE_LABELS,
    ModelType,
    Product,
    StickerPlacement,
    StickerType,
    Subject,
)

from .models import (
    HUMAN_CHOICES,
    LIKENESS_NOTE,
    LOADING_TEXT,
    PLACEHOLDER_TEXT,
    VEHICLE_CHOICES,
    KeyStatus,
    SessionState,
)
from .validation import MockupView, build_view

PRODUCT_CHOICES = [(product.label, product.value) for product in Product]
MODEL_TYPE_CHOICES = [(label, model_type.value) for model_type, label in MODEL_TYPE_LABELS.items()]
CAR_TYPE_CHOICES = [(label, subject.value) for subject, label in CAR_SUBTYPE_LABELS.items()]
STICKER_TYPE_CHOICES = [
    (label, sticker_type.value) for sticker_type, label in STICKER_TYPE_LABELS.items()
]
PLACEMENT_CHOICES = [(label, placement.value) for placement, label in PLACEMENT_LABELS.items()]


def format_key_status(status: KeyStatus | None) -> str:
    """Format the unlock key outcome as coloured markdown."""
    if status is None:
        return ""
    colour = "#22c55e" if status.kind == "success" else "#ef4444"
    return f'<span style="color: {colour}">{status.text}</span>'


def vehicle_choice(subject: Subject | None) -> str | None:
    """Value of the vehicle radio for *subject*; every car subtype shows as ``car``."""
    if subject is None:
        return None
    if subject in CAR_SUBJECTS:
        return "car"
    return subject.value


class MockupControls:
    """All Gradio components whose content depends on the session state.

    The layout is built in the constructor, inside the caller's ``gr.Blocks``
    context.  :meth:`render` turns a :class:`SessionState` into one
    ``gr.update()`` per component in :attr:`outputs`, so every event can be
    chained with ``.then(controls.render, ...)``.
    """

    def __init__(self):
        self.credits = gr.Markdown("Credits: 0")

        with gr.Row():
            with gr.Column(scale=1):
                # 1. Product
                with gr.Group():
                    gr.Markdown("### 1. Choose Product")
                    self.product = gr.Radio(
                        choices=PRODUCT_CHOICES, value=None, label="Product", show_label=False
                    )

                # 2. Design upload
                with gr.Group():
                    self.upload_title = gr.Markdown("### 2. Upload Design")
                    self.design_image = gr.Image(
                        label="Select Design File", type="filepath", sources=["upload"]
                    )

                # 3. Model / surface
                with gr.Group(visible=False) as self.model_group:
                    gr.Markdown("### 3. Choose Model/Surface")
                    self.model_type = gr.Radio(
                        choices=MODEL_TYPE_CHOICES,
                        value=ModelType.AI.value,
                        show_label=False,
                    )
                    self.human_subject = gr.Radio(
                        choices=HUMAN_CHOICES, label="Model", visible=False
                    )
                    self.vehicle_subject = gr.Radio(
                        choices=VEHICLE_CHOICES, label="Vehicle", visible=False
                    )
                    self.car_type = gr.Radio(
                        choices=CAR_TYPE_CHOICES, label="Car Type", visible=False
                    )
                    self.sticker_type = gr.Radio(
                        choices=STICKER_TYPE_CHOICES,
                        value=StickerType.STICKER.value,
                        label="Application Type",
                        visible=False,
                    )
                    self.placement = gr.Radio(
                        choices=PLACEMENT_CHOICES,
                        value=StickerPlacement.BODY.value,
                        label="Sticker Placement",
                        visible=False,
                    )
                    self.custom_image = gr.Image(
                        label="Upload Model Image",
                        type="filepath",
                        sources=["upload"],
                        visible=False,
                    )
                    self.likeness_note = gr.Markdown(f"*{LIKENESS_NOTE}*", visible=False)

                # 4. Generate
                self.generate_btn = gr.Button(
                    "Generate Mockup", variant="primary", interactive=False
                )

                # 5. Out of credits
                with gr.Group(visible=False) as self.out_of_credits:
                    gr.Markdown(
                        "### You're out of credits!\n"
                        "Send your device ID to get an unlock key."
                    )
                    self.device_id = gr.Textbox(label="Device ID", interactive=False)
                    with gr.Row():
                        self.key_input = gr.Textbox(
                            label="Unlock Key", placeholder="UNLOCK-AMOUNT-HASH", scale=3
                        )
                        self.apply_btn = gr.Button("Apply", scale=1)
                    self.key_status = gr.Markdown("", visible=False)

                # 6. Errors
                self.error = gr.Markdown("", visible=False)

            with gr.Column(scale=1):
                # 7. Result
                self.placeholder = gr.Markdown(PLACEHOLDER_TEXT)
                self.result_image = gr.Image(
                    label="Generated Mockup", type="pil", interactive=False, visible=False
                )
                self.download = gr.File(label="Download", interactive=False, visible=False)

    @property
    def outputs(self) -> list[gr.components.Component]:
        """Components updated by :meth:`render`, in order."""
        return [
            self.credits,
            self.upload_title,
            self.design_image,
            self.model_group,
            self.model_type,
            self.human_subject,
            self.vehicle_subject,
            self.car_type,
            self.sticker_type,
            self.placement,
            self.custom_image,
            self.likeness_note,
            self.generate_btn,
            self.out_of_credits,
            self.device_id,
            self.key_status,
            self.error,
            self.placeholder,
            self.result_image,
            self.download,
        ]

    @staticmethod
    def render(state: SessionState) -> list[dict[str, Any]]:
        """Translate *state* into component updates (see :attr:`outputs`)."""
        view: MockupView = build_view(state)
        selection = state.selection
        subject = selection.subject

        if state.is_loading:
            placeholder = LOADING_TEXT
        else:
            placeholder = PLACEHOLDER_TEXT
        result = state.generated_image.to_pil() if view.show_result else None

        return [
            gr.update(value=view.credits_text),
            gr.update(value=f"### {view.upload_title}"),
            gr.update(label=view.upload_label),
            gr.update(visible=view.show_model_selection),
            gr.update(value=selection.model_type.value),
            gr.update(
                visible=view.show_human_subjects,
                value=subject.value if subject is Subject.HUMAN else None,
            ),
            gr.update(visible=view.show_vehicle_subjects, value=vehicle_choice(subject)),
            gr.update(
                visible=view.show_car_types,
                value=subject.value if subject in CAR_SUBJECTS else None,
            ),
            gr.update(visible=view.show_sticker_types, value=selection.sticker_type.value),
            gr.update(visible=view.show_placement, value=selection.sticker_placement.value),
            gr.update(visible=view.show_custom_upload),
            gr.update(visible=view.show_likeness_note),
            gr.update(value=view.generate_label, interactive=view.generate_enabled),
            gr.update(visible=view.show_out_of_credits),
            gr.update(value=view.device_id),
            gr.update(
                value=format_key_status(view.key_status), visible=view.key_status is not None
            ),
            gr.update(value=f"**{view.error}**" if view.error else "", visible=bool(view.error)),
            gr.update(value=placeholder, visible=not view.show_result),
            gr.update(value=result, visible=view.show_result),
            gr.update(
                value=state.download_path if view.show_result else None,
                visible=view.show_result and state.download_path is not None,
            ),
        ]
