"""Gradio UI for Mockup Studio."""

import logging

import gradio as gr

from mockup_studio import __version__
from mockup_studio.core.config import config

from .components import MockupControls
from .handlers import (
    apply_key_handler,
    edit_key_handler,
    load_session,
    run_generation,
    select_model_type_handler,
    select_placement_handler,
    select_product_handler,
    select_sticker_type_handler,
    select_subject_handler,
    start_generation,
    upload_custom_model_handler,
    upload_design_handler,
)
from .models import SessionState

logger = logging.getLogger(__name__)


def create_ui() -> gr.Blocks:
    """Create the Gradio UI.

    Returns:
        Gradio Blocks app
    """
    app = gr.Blocks(title="Mockup Studio")

    with app:
        # Session state - one instance per user
        session = gr.State(SessionState())

        gr.Markdown(
            """
            # Mockup Studio
            ### Put your design on products with AI
            """
        )

        controls = MockupControls()
        render = {"fn": controls.render, "inputs": [session], "outputs": controls.outputs}

        app.load(fn=load_session, inputs=[session], outputs=[session]).then(**render)

        # Selection events use .input so programmatic updates from render()
        # don't fire them again.
        for radio, handler in [
            (controls.product, select_product_handler),
            (controls.model_type, select_model_type_handler),
            (controls.human_subject, select_subject_handler),
            (controls.vehicle_subject, select_subject_handler),
            (controls.car_type, select_subject_handler),
            (controls.sticker_type, select_sticker_type_handler),
            (controls.placement, select_placement_handler),
        ]:
            radio.input(fn=handler, inputs=[radio, session], outputs=[session]).then(**render)

        for image, handler in [
            (controls.design_image, upload_design_handler),
            (controls.custom_image, upload_custom_model_handler),
        ]:
            image.upload(fn=handler, inputs=[image, session], outputs=[session]).then(**render)
            image.clear(
                fn=lambda state, handler=handler: handler(None, state),
                inputs=[session],
                outputs=[session],
            ).then(**render)

        controls.generate_btn.click(
            fn=start_generation, inputs=[session], outputs=[session]
        ).then(**render).then(
            fn=run_generation, inputs=[session], outputs=[session]
        ).then(**render)

        controls.key_input.input(
            fn=edit_key_handler, inputs=[controls.key_input, session], outputs=[session]
        ).then(**render)

        controls.apply_btn.click(
            fn=apply_key_handler, inputs=[session], outputs=[controls.key_input, session]
        ).then(**render)

    return app


def main():
    """Main entry point for the application."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Starting Mockup Studio {__version__}...")
    logger.info(f"Configuration: {config.model_dump(exclude={'gemini_api_key'})}")

    if not config.gemini_api_key:
        logger.warning("MOCKUP_GEMINI_API_KEY is not set; generation will fail")

    app = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.queue().launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        allowed_paths=[str(config.downloads_dir)],
    )


if __name__ == "__main__":
    main()
