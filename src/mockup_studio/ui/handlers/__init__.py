"""UI event handlers organized by feature area.

- selection: product, model, sticker choices and image uploads
- generation: mockup generation and download files
- credits: credit loading and unlock keys
"""

from .credits import (
    apply_key_handler,
    edit_key_handler,
    load_session,
)
from .generation import (
    get_dispatcher,
    run_generation,
    save_download,
    start_generation,
)
from .selection import (
    select_model_type_handler,
    select_placement_handler,
    select_product_handler,
    select_sticker_type_handler,
    select_subject_handler,
    upload_custom_model_handler,
    upload_design_handler,
)

__all__ = [
    # Selection handlers
    "select_model_type_handler",
    "select_placement_handler",
    "select_product_handler",
    "select_sticker_type_handler",
    "select_subject_handler",
    "upload_custom_model_handler",
    "upload_design_handler",
    # Generation handlers
    "get_dispatcher",
    "run_generation",
    "save_download",
    "start_generation",
    # Credit handlers
    "apply_key_handler",
    "edit_key_handler",
    "load_session",
]
