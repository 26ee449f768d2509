"""Tests for the model registry and image input helpers."""

import base64

import pytest

from dual_ai_chat.agent_service.common.errors import ImageConversionError
from dual_ai_chat.agent_service.common.types.llm_outputs.invocation_outputs import (
    InvocationErrorKind,
    InvocationResult,
)
from dual_ai_chat.common.services.llm_service.model_registry import (
    DEFAULT_MODEL_API_NAME,
    MODELS,
    find_model,
    resolve_model,
)
from dual_ai_chat.common.services.media.image_inputs import ImageHandleStore, ImageUpload, to_inline_image


class TestModelRegistry:
    def test_first_model_is_default(self):
        assert DEFAULT_MODEL_API_NAME == MODELS[0].api_name
        assert MODELS[0].supports_thinking_budget is True
        assert MODELS[1].supports_thinking_budget is False

    def test_lookup(self):
        assert find_model(MODELS[1].api_name) == MODELS[1]
        assert find_model("missing") is None
        assert resolve_model("missing") == MODELS[0]


class TestInvocationResult:
    def test_success_has_no_error_kind(self):
        result = InvocationResult(text="hi", elapsed_ms=3)
        assert not result.failed
        assert result.error_kind is None

    def test_free_text_credentials_signature_is_classified(self):
        result = InvocationResult(text="bad key", error="400 INVALID_ARGUMENT. API key not valid. Please pass a valid API key.")
        assert result.credentials_invalid

    def test_other_errors_are_request_failures(self):
        result = InvocationResult(text="boom", error="503 UNAVAILABLE")
        assert result.error_kind == InvocationErrorKind.REQUEST_FAILED
        assert not result.credentials_invalid


class TestImageInputs:
    def test_inline_image_is_base64(self):
        upload = ImageUpload(filename="cat.png", mime_type="image/png", data=b"\x89PNGdata")
        inline = to_inline_image(upload)
        assert inline.mime_type == "image/png"
        assert base64.b64decode(inline.data) == b"\x89PNGdata"

    def test_non_image_is_rejected(self):
        with pytest.raises(ImageConversionError):
            to_inline_image(ImageUpload(filename="notes.txt", mime_type="text/plain", data=b"hello"))

    def test_empty_image_is_rejected(self):
        with pytest.raises(ImageConversionError):
            to_inline_image(ImageUpload(filename="empty.png", mime_type="image/png", data=b""))

    def test_handles_are_released(self):
        store = ImageHandleStore()
        attachment = store.register(ImageUpload(filename="cat.png", mime_type="image/png", data=b"x"))
        assert attachment.display_url.startswith("blob:")
        assert attachment.name == "cat.png"
        assert store.get(attachment.display_url).filename == "cat.png"
        store.release(attachment.display_url)
        assert len(store) == 0
        with pytest.raises(KeyError):
            store.get(attachment.display_url)
