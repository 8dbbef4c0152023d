r"""Machine Translation API methods.

Each method turns its parameters into a JSON payload, then runs the call
through the client's ExecutionEngine. Methods return the raw response
body, or the result of ``parser`` applied to it, e.g.
``tc3client.utils.decode_response``.
"""

from __future__ import annotations

__all__ = ["TranslateMethods"]

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from tc3client.exceptions import MissingFieldError
from tc3client.utils.encoding import encode_payload, read_attachment, to_base64

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from tc3client.client import TencentClient
    from tc3client.observer import Observer

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


def _require(**fields: Any) -> None:
    for name, value in fields.items():
        if value is None or (isinstance(value, (str, list, tuple)) and not value):
            raise MissingFieldError(name)


class TranslateMethods:
    """Machine Translation actions bound to a client.

    Args:
        client: The client used to execute the calls.
    """

    def __init__(self, client: TencentClient) -> None:
        self.client = client

    async def _call(
        self,
        action: str,
        operation_id: str,
        payload: dict[str, Any],
        *,
        region: str | None,
        observer: Observer | None,
        parser: Callable[[bytes], T] | None,
    ) -> T | bytes:
        body = await self.client.execute(
            action,
            operation_id,
            encode_payload(payload),
            region=region,
            observer=observer,
        )
        if parser is None:
            return body
        return parser(body)

    async def text_translate(
        self,
        *,
        source: str,
        target: str,
        source_text: str,
        project_id: int,
        region: str,
        untranslated_text: str | None = None,
        observer: Observer | None = None,
        parser: Callable[[bytes], T] | None = None,
    ) -> T | bytes:
        """Translate a text.

        Args:
            source: The source language, e.g. ``"en"`` or ``"auto"``.
            target: The target language.
            source_text: The text to translate.
            project_id: The project id.
            region: The region, sent as ``X-TC-Region``.
            untranslated_text: Optional text to keep untranslated.
            observer: Optional observer controlling retries.
            parser: Optional function applied to the response body.
        """
        _require(source=source, target=target, source_text=source_text, region=region)
        payload = {
            "ProjectId": project_id,
            "Source": source,
            "Target": target,
            "SourceText": source_text,
            "UntranslatedText": untranslated_text,
        }
        return await self._call(
            "TextTranslate",
            "tmt.TextTranslate",
            payload,
            region=region,
            observer=observer,
            parser=parser,
        )

    async def text_translate_batch(
        self,
        *,
        source: str,
        target: str,
        source_text_list: Sequence[str],
        project_id: int,
        region: str,
        observer: Observer | None = None,
        parser: Callable[[bytes], T] | None = None,
    ) -> T | bytes:
        """Translate several texts in one signed request.

        The texts are sent together as ``SourceTextList`` and the
        translations come back in the same order.
        """
        _require(source=source, target=target, source_text_list=source_text_list, region=region)
        payload = {
            "ProjectId": project_id,
            "Source": source,
            "Target": target,
            "SourceTextList": list(source_text_list),
        }
        return await self._call(
            "TextTranslateBatch",
            "tmt.TextTranslateBatch",
            payload,
            region=region,
            observer=observer,
            parser=parser,
        )

    async def language_detect(
        self,
        *,
        text: str,
        project_id: int,
        region: str,
        observer: Observer | None = None,
        parser: Callable[[bytes], T] | None = None,
    ) -> T | bytes:
        """Detect the language of a text."""
        _require(text=text, region=region)
        payload = {"ProjectId": project_id, "Text": text}
        return await self._call(
            "LanguageDetect",
            "tmt.LanguageDetect",
            payload,
            region=region,
            observer=observer,
            parser=parser,
        )

    async def file_translate(
        self,
        *,
        source: str,
        target: str,
        document_type: str,
        source_type: int | None = None,
        basic_document_type: str | None = None,
        url: str | None = None,
        callback_url: str | None = None,
        data: str | None = None,
        observer: Observer | None = None,
        parser: Callable[[bytes], T] | None = None,
    ) -> T | bytes:
        """Submit a document translation task.

        The document is given either by ``url`` or as base64 ``data``.
        The result is fetched later with ``get_file_translate_data``.
        """
        _require(source=source, target=target, document_type=document_type)
        payload = {
            "Source": source,
            "Target": target,
            "DocumentType": document_type,
            "BasicDocumentType": basic_document_type,
            "SourceType": source_type,
            "Url": url,
            "CallbackUrl": callback_url,
            "Data": data,
        }
        return await self._call(
            "FileTranslate",
            "tmt.FileTranslate",
            payload,
            region=None,
            observer=observer,
            parser=parser,
        )

    async def get_file_translate_data(
        self,
        *,
        task_id: str,
        observer: Observer | None = None,
        parser: Callable[[bytes], T] | None = None,
    ) -> T | bytes:
        """Fetch the result of a document translation task."""
        _require(task_id=task_id)
        return await self._call(
            "GetFileTranslate",
            "tmt.getFileTranslateData",
            {"TaskId": task_id},
            region=None,
            observer=observer,
            parser=parser,
        )

    async def image_translate(
        self,
        *,
        image_path: str | Path,
        source: str,
        target: str,
        session_uuid: str,
        scene: str,
        project_id: int,
        region: str,
        observer: Observer | None = None,
        parser: Callable[[bytes], T] | None = None,
    ) -> T | bytes:
        """Translate the text found in an image.

        Raises:
            SizeLimitExceededError: If the image is 4 MiB or larger. No
                request is made and the observer is not notified.
        """
        _require(source=source, target=target, session_uuid=session_uuid, region=region)
        data = read_attachment(image_path)
        payload = {
            "ProjectId": project_id,
            "Source": source,
            "Target": target,
            "SessionUuid": session_uuid,
            "Scene": scene,
            "Data": to_base64(data),
        }
        return await self._call(
            "ImageTranslate",
            "tmt.ImageTranslate",
            payload,
            region=region,
            observer=observer,
            parser=parser,
        )

    async def speech_translate(
        self,
        *,
        audio_path: str | Path,
        source: str,
        target: str,
        session_uuid: str,
        audio_format: int,
        seq: int,
        is_end: int,
        region: str,
        project_id: int | None = None,
        observer: Observer | None = None,
        parser: Callable[[bytes], T] | None = None,
    ) -> T | bytes:
        """Translate one chunk of an audio stream.

        Raises:
            SizeLimitExceededError: If the audio chunk is 4 MiB or larger.
        """
        _require(source=source, target=target, session_uuid=session_uuid, region=region)
        data = read_attachment(audio_path)
        payload = {
            "ProjectId": project_id,
            "Source": source,
            "Target": target,
            "SessionUuid": session_uuid,
            "Data": to_base64(data),
            "AudioFormat": audio_format,
            "Seq": seq,
            "IsEnd": is_end,
        }
        return await self._call(
            "SpeechTranslate",
            "tmt.SpeechTranslate",
            payload,
            region=region,
            observer=observer,
            parser=parser,
        )
