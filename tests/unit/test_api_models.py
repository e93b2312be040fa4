"""Unit tests for the API request/response models."""

import pytest
from pydantic import ValidationError

from mockup_studio.api.models import SelectionRequest
from mockup_studio.core.errors import ImageDataError
from mockup_studio.core.products import ModelType, Product, Subject


class TestSelectionRequest:
    """Tests for SelectionRequest."""

    def test_defaults(self):
        req = SelectionRequest()
        assert req.product is None
        assert req.model_type is ModelType.AI

    def test_subject_defaults_from_product(self):
        selection = SelectionRequest(product="car sticker").to_selection()
        assert selection.product is Product.CAR_STICKER
        assert selection.subject is Subject.SEDAN_SIDE

    def test_explicit_subject_kept(self):
        selection = SelectionRequest(product="car sticker", subject="bus").to_selection()
        assert selection.subject is Subject.BUS

    def test_decodes_images(self, design_image, model_image):
        selection = SelectionRequest(
            product="cap",
            model_type="custom",
            design_image=design_image.to_data_url(),
            custom_model_image=model_image.to_data_url(),
        ).to_selection()
        assert selection.design_image == design_image
        assert selection.uses_custom_model

    def test_unknown_product(self):
        with pytest.raises(ValidationError):
            SelectionRequest(product="hoodie")

    def test_bad_data_url(self):
        with pytest.raises(ImageDataError):
            SelectionRequest(product="cap", design_image="nope").to_selection()
