"""Data models for the Mockup Studio UI session."""

import logging
from dataclasses import dataclass, field
from typing import Literal

from mockup_studio.core.credits import CreditState
from mockup_studio.core.dispatcher import GeneratedImage
from mockup_studio.core.products import Subject
from mockup_studio.core.selection import Selection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyStatus:
    """Outcome message shown under the unlock key input."""

    kind: Literal["success", "error"]
    text: str


@dataclass(frozen=True)
class SessionState:
    """Session state for the Gradio UI.

    One instance per browser session, owned by a ``gr.State``.  It is never
    mutated in place: every event handler receives the current state and
    returns the next one (see :mod:`mockup_studio.ui.state`).

    Attributes
    ----------
    selection : Selection
        Current product, model and sticker choices plus uploaded images
    credits : CreditState | None
        Credit balance, redeemed keys and device id; ``None`` until loaded
        from the credit store
    is_loading : bool
        True while a generation request is in flight
    dispatch_pending : bool
        True between a successful start and the remote call; only the
        start that set it may dispatch
    generated_image : GeneratedImage | None
        Last successfully generated mockup
    download_path : str | None
        File written for the last mockup, offered as a download
    error : str | None
        Last generation error, in plain language
    key_input : str
        Text currently typed into the unlock key box
    key_status : KeyStatus | None
        Result of the last unlock key attempt
    """

    selection: Selection = field(default_factory=Selection)
    credits: CreditState | None = None
    is_loading: bool = False
    dispatch_pending: bool = False
    generated_image: GeneratedImage | None = None
    download_path: str | None = None
    error: str | None = None
    key_input: str = ""
    key_status: KeyStatus | None = None

    @property
    def credit_count(self) -> int:
        return self.credits.credits if self.credits is not None else 0

    def __repr__(self) -> str:
        """String representation for debugging."""
        product = self.selection.product.value if self.selection.product else None
        return (
            f"SessionState(product={product}, credits={self.credit_count}, "
            f"loading={self.is_loading})"
        )


# UI constants
VEHICLE_CHOICES = [
    ("Car", "car"),
    ("Bike", Subject.BIKE.value),
    ("Bus", Subject.BUS.value),
    ("Train", Subject.TRAIN.value),
]

HUMAN_CHOICES = [("Human", Subject.HUMAN.value)]

PLACEHOLDER_TEXT = "### Your generated mockup will appear here"
LOADING_TEXT = "### Generating your mockup..."
LIKENESS_NOTE = (
    "Note: The AI will use your model's likeness to generate a new 4-panel collage "
    "with different poses."
)
