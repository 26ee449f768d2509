"""Utilities to turn uploaded images into model inputs and display handles."""

import base64
from dataclasses import dataclass
from uuid import uuid4

from dual_ai_chat.agent_service.common.errors import ImageConversionError
from dual_ai_chat.agent_service.common.types.llm_outputs.invocation_outputs import InlineImage
from dual_ai_chat.agent_service.common.types.messages import ImageAttachment
from dual_ai_chat.common.logging.logger import logger

@dataclass(frozen=True)
class ImageUpload:
    """A single image the user attached to a query."""
    filename: str
    mime_type: str
    data: bytes

def to_inline_image(upload: ImageUpload) -> InlineImage:
    """Base64-encode an upload for the model request."""
    if not upload.mime_type or not upload.mime_type.startswith("image/"):
        raise ImageConversionError(f"Unsupported image type '{upload.mime_type}' for {upload.filename}")
    if not upload.data:
        raise ImageConversionError(f"Image {upload.filename} is empty")
    try:
        encoded = base64.b64encode(upload.data).decode("ascii")
    except (TypeError, ValueError) as exc:
        raise ImageConversionError(f"Could not encode image {upload.filename}") from exc
    return InlineImage(mime_type=upload.mime_type, data=encoded)

class ImageHandleStore:
    """
    Short-lived display handles for uploaded images.
    A handle lives only while its discussion runs and must be released on every exit path.
    """

    def __init__(self) -> None:
        self._uploads: dict[str, ImageUpload] = {}

    def register(self, upload: ImageUpload) -> ImageAttachment:
        handle = f"blob:{uuid4().hex}"
        self._uploads[handle] = upload
        return ImageAttachment(display_url=handle, name=upload.filename, mime_type=upload.mime_type)

    def get(self, handle: str) -> ImageUpload:
        """Return the upload behind a live handle or raise KeyError if it was released."""
        upload = self._uploads.get(handle)
        if upload is None:
            raise KeyError(f"Image handle {handle} not found")
        return upload

    def release(self, handle: str) -> None:
        if self._uploads.pop(handle, None) is not None:
            logger.debug(f"Released image handle {handle}")

    def __len__(self) -> int:
        return len(self._uploads)
