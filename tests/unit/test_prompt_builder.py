"""Unit tests for multi-part request construction."""

from dataclasses import replace
from itertools import product as cartesian

import pytest

from mockup_studio.core import prompt_builder
from mockup_studio.core.errors import MissingInputError
from mockup_studio.core.prompt_builder import (
    ImagePart,
    TextPart,
    build_instruction,
    build_request,
    vehicle_key,
)
from mockup_studio.core.products import (
    VEHICLE_SUBJECTS,
    ModelType,
    Product,
    StickerPlacement,
    StickerType,
    Subject,
    Vehicle,
    default_subject,
)
from mockup_studio.core.selection import Selection


def _selection(product, design_image, **kwargs) -> Selection:
    kwargs.setdefault("subject", default_subject(product))
    return Selection(product=product, design_image=design_image, **kwargs)


OTHER_FIELDS = list(
    cartesian(ModelType, [None, *Subject], StickerType, StickerPlacement, [False, True])
)


def _with_fields(selection, fields, model_image) -> Selection:
    model_type, subject, sticker_type, placement, with_photo = fields
    return replace(
        selection,
        model_type=model_type,
        subject=subject,
        sticker_type=sticker_type,
        sticker_placement=placement,
        custom_model_image=model_image if with_photo else None,
    )


class TestMissingInput:
    """Tests for the inputs a request cannot be built without."""

    @pytest.mark.parametrize("fields", OTHER_FIELDS)
    def test_no_product(self, design_image, model_image, fields):
        selection = _with_fields(Selection(design_image=design_image), fields, model_image)
        with pytest.raises(MissingInputError):
            build_request(selection)

    @pytest.mark.parametrize("fields", OTHER_FIELDS)
    def test_no_design(self, model_image, fields):
        for product in Product:
            selection = _with_fields(Selection(product=product), fields, model_image)
            with pytest.raises(MissingInputError):
                build_request(selection)

    @pytest.mark.parametrize("fields", OTHER_FIELDS)
    def test_product_and_design_always_build(self, design_image, model_image, fields):
        for product in Product:
            selection = _with_fields(
                Selection(product=product, design_image=design_image), fields, model_image
            )
            assert build_request(selection).prompt_text

    @pytest.mark.parametrize("product", list(Product))
    def test_every_product_builds(self, product, design_image):
        """Any product with a design yields a non-empty instruction."""
        request = build_request(_selection(product, design_image))
        assert request.prompt_text

    def test_empty_instruction_is_missing_input(self, t_shirt_selection, monkeypatch):
        monkeypatch.setitem(prompt_builder._AI_PRODUCT_TEMPLATES, Product.T_SHIRT, "")
        with pytest.raises(MissingInputError) as exc_info:
            build_request(t_shirt_selection)
        assert str(exc_info.value) == "Could not generate a prompt for the selected options."


class TestPartOrdering:
    """Tests for the order of image and text parts."""

    def test_ai_path_is_design_then_text(self, t_shirt_selection, design_image):
        request = build_request(t_shirt_selection)
        assert len(request.parts) == 2
        assert request.parts[0] == ImagePart(design_image.data, design_image.mime_type)
        assert isinstance(request.parts[1], TextPart)

    def test_custom_path_is_photo_then_design_then_text(
        self, custom_model_selection, design_image, model_image
    ):
        request = build_request(custom_model_selection)
        assert request.parts[0].data == model_image.data
        assert request.parts[1].data == design_image.data
        assert request.prompt_text == request.parts[2].text
        assert len(request.image_parts) == 2

    def test_custom_without_photo_uses_ai_path(self, t_shirt_selection):
        selection = replace(t_shirt_selection, model_type=ModelType.CUSTOM)
        request = build_request(selection)
        assert len(request.image_parts) == 1
        assert request.prompt_text == build_instruction(replace(selection, model_type=ModelType.AI))


class TestCustomModelInstructions:
    """Tests for instructions written around an uploaded photo."""

    def test_try_on_mentions_product(self, design_image, model_image):
        selection = _selection(
            Product.SUNGLASSES,
            design_image,
            model_type=ModelType.CUSTOM,
            custom_model_image=model_image,
        )
        text = build_instruction(selection)
        assert "wearing the provided sunglasses from the second image" in text

    def test_apparel_uses_plain_white_item(self, custom_model_selection):
        text = build_instruction(custom_model_selection)
        assert "wearing a plain white t-shirt with the provided design" in text

    def test_bag_is_held_tote(self, design_image, model_image):
        selection = _selection(
            Product.BAG_MOCKUP,
            design_image,
            model_type=ModelType.CUSTOM,
            custom_model_image=model_image,
        )
        text = build_instruction(selection)
        assert "naturally holding or wearing a plain white tote bag" in text

    def test_vehicle_photo_gets_overlay(self, design_image, model_image):
        selection = _selection(
            Product.CAR_STICKER,
            design_image,
            model_type=ModelType.CUSTOM,
            custom_model_image=model_image,
        )
        text = build_instruction(selection)
        assert text.startswith("Using the first image as the base")
        assert "onto the car sticker" in text


class TestAiInstructions:
    """Tests for AI-generated scene instructions."""

    def test_phone_case_has_no_people(self, design_image):
        text = build_instruction(_selection(Product.PHONE_CASE, design_image))
        assert "8-panel grid" in text
        assert "Do not include any people" in text

    def test_try_on_product_is_named(self, design_image):
        text = build_instruction(_selection(Product.SHOES, design_image))
        assert "wearing the provided shoes from the image" in text

    def test_missing_entry_uses_fallback(self, design_image, monkeypatch):
        monkeypatch.delitem(prompt_builder._AI_PRODUCT_TEMPLATES, Product.BIG_BOTTLE)
        text = build_instruction(_selection(Product.BIG_BOTTLE, design_image))
        assert text == (
            "Generate a 4-panel photorealistic mockup collage of the provided design on a white "
            "big bottle in various minimalist studio settings and angles."
        )


class TestVehicleInstructions:
    """Tests for the vehicle sticker decision table."""

    def test_table_covers_every_key(self):
        """Every reachable key has a template."""
        for vehicle, sticker_type, placement in cartesian(Vehicle, StickerType, StickerPlacement):
            assert vehicle_key(vehicle, sticker_type, placement) in prompt_builder._VEHICLE_TEMPLATES

    @pytest.mark.parametrize(
        "product,subject,sticker_type,placement",
        list(
            cartesian(
                [Product.CAR_STICKER, Product.BIKE_STICKER],
                VEHICLE_SUBJECTS,
                StickerType,
                StickerPlacement,
            )
        ),
    )
    def test_wrap_iff_wrap_selected(
        self, design_image, product, subject, sticker_type, placement
    ):
        selection = _selection(
            product,
            design_image,
            subject=subject,
            sticker_type=sticker_type,
            sticker_placement=placement,
        )
        text = build_instruction(selection)
        # Sticker texts say the sticker should "wrap around" contours.
        assert ("full vehicle wrap" in text) == (sticker_type is StickerType.WRAP)
        assert ("vinyl sticker" in text) == (sticker_type is StickerType.STICKER)

    def test_rear_window_sticker(self, design_image):
        selection = _selection(
            Product.CAR_STICKER,
            design_image,
            subject=Subject.SUV_BACK,
            sticker_placement=StickerPlacement.WINDOW,
        )
        text = build_instruction(selection)
        assert "rear window of a modern Indian SUV" in text
        assert "(from the rear, close-up on sticker)" in text

    def test_body_sticker_uses_angle(self, design_image):
        selection = _selection(Product.CAR_STICKER, design_image, subject=Subject.HATCHBACK_SIDE)
        text = build_instruction(selection)
        assert "clean, modern Indian hatchback car" in text
        assert "e.g., from the side" in text

    def test_placement_ignored_off_cars(self, design_image):
        body = _selection(Product.BIKE_STICKER, design_image)
        window = replace(body, sticker_placement=StickerPlacement.WINDOW)
        assert build_instruction(body) == build_instruction(window)
        assert "motorcycle" in build_instruction(body)

    @pytest.mark.parametrize("subject,word", [(Subject.BUS, "bus"), (Subject.TRAIN, "train")])
    def test_bus_and_train(self, design_image, subject, word):
        selection = _selection(
            Product.CAR_STICKER, design_image, subject=subject, sticker_type=StickerType.WRAP
        )
        text = build_instruction(selection)
        assert word in text
        assert "full vehicle wrap" in text

    def test_deterministic(self, design_image):
        selection = _selection(Product.CAR_STICKER, design_image)
        assert build_request(selection) == build_request(selection)
