"""Gradio browser UI for Mockup Studio."""
