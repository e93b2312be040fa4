"""Unit tests for the Gemini dispatcher.

The SDK client is replaced by a mock whose ``aio.models.generate_content``
returns real ``google.genai`` response objects, so no network call is made.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.genai import types

from mockup_studio.core.dispatcher import GeneratedImage, MockupDispatcher, extract_image
from mockup_studio.core.errors import NoImageReturnedError, TransportError
from mockup_studio.core.products import Product
from mockup_studio.core.prompt_builder import build_request


def _response(*parts: types.Part) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))]
    )


def _fake_client(response=None, error=None) -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=error)
    return client


class TestExtractImage:
    """Tests for response interpretation."""

    def test_first_inline_image(self):
        response = _response(
            types.Part.from_text(text="Here is your mockup"),
            types.Part.from_bytes(data=b"first", mime_type="image/jpeg"),
            types.Part.from_bytes(data=b"second", mime_type="image/png"),
        )
        image = extract_image(response)
        assert image == GeneratedImage(data=b"first", mime_type="image/jpeg")

    def test_text_only(self):
        with pytest.raises(NoImageReturnedError):
            extract_image(_response(types.Part.from_text(text="Sorry")))

    def test_no_candidates(self):
        with pytest.raises(NoImageReturnedError) as exc_info:
            extract_image(types.GenerateContentResponse(candidates=[]))
        assert "did not return an image" in str(exc_info.value)

    def test_missing_mime_defaults_to_png(self):
        part = types.Part(inline_data=types.Blob(data=b"img"))
        assert extract_image(_response(part)).mime_type == "image/png"


class TestMockupDispatcher:
    """Tests for MockupDispatcher.generate."""

    def test_sends_parts_in_order(self, test_config, custom_model_selection, model_image):
        client = _fake_client(_response(types.Part.from_bytes(data=b"out", mime_type="image/png")))
        dispatcher = MockupDispatcher(test_config, client=client)
        request = build_request(custom_model_selection)

        image = asyncio.run(dispatcher.generate(request))

        assert image.data == b"out"
        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == test_config.gemini_model
        assert kwargs["config"].response_modalities == ["IMAGE"]
        parts = kwargs["contents"][0].parts
        assert parts[0].inline_data.data == model_image.data
        assert parts[-1].text == request.prompt_text
        assert len(parts) == 3

    def test_transport_error_wraps_cause(self, test_config, t_shirt_selection):
        cause = ConnectionError("network down")
        dispatcher = MockupDispatcher(test_config, client=_fake_client(error=cause))

        with pytest.raises(TransportError) as exc_info:
            asyncio.run(dispatcher.generate(build_request(t_shirt_selection)))

        assert str(exc_info.value) == "network down"
        assert exc_info.value.__cause__ is cause

    def test_no_image(self, test_config, t_shirt_selection):
        client = _fake_client(_response(types.Part.from_text(text="no")))
        dispatcher = MockupDispatcher(test_config, client=client)
        with pytest.raises(NoImageReturnedError):
            asyncio.run(dispatcher.generate(build_request(t_shirt_selection)))

    def test_client_is_lazy(self, test_config):
        with patch("mockup_studio.core.dispatcher.genai.Client") as MockClient:
            dispatcher = MockupDispatcher(test_config)
            MockClient.assert_not_called()
            assert dispatcher._get_client() is MockClient.return_value
            MockClient.assert_called_once_with(api_key="test-key")

    def test_client_creation_failure_is_transport_error(self, test_config, t_shirt_selection):
        with patch(
            "mockup_studio.core.dispatcher.genai.Client", side_effect=ValueError("no key")
        ):
            dispatcher = MockupDispatcher(test_config)
            with pytest.raises(TransportError):
                asyncio.run(dispatcher.generate(build_request(t_shirt_selection)))


class TestDownloadFilename:
    """Tests for GeneratedImage.download_filename."""

    @pytest.mark.parametrize(
        "product,name",
        [
            (Product.PHONE_CASE, "phone-case-mockup.png"),
            (Product.T_SHIRT, "t-shirt-mockup.png"),
            (Product.CAP, "cap-mockup.png"),
            (None, "generated-mockup.png"),
        ],
    )
    def test_names(self, product, name):
        assert GeneratedImage(b"", "image/jpeg").download_filename(product) == name
