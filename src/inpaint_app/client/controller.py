"""
Controlador de envío del cliente

Es dueño de todo el estado mutable de una petición de inpainting y lo lleva
por un ciclo de vida lineal en cada intento:

    IDLE -> VALIDATING -> SUBMITTING -> SUCCEEDED | FAILED

Responsabilidades:
- Guardar las ranuras de subida (Image, Mask), el prompt y las dimensiones
- Validar antes de tocar la red (ninguna petición si falta algo)
- Construir el payload multipart y enviarlo al proxy
- Traducir la respuesta a un resultado y avisar al usuario mediante el notifier
- Guardar localmente el resultado con un nombre fijo

Limitación conocida: la llamada al proxy es un único intento sin cancelación;
sin timeout, un backend colgado mantiene el estado SUBMITTING.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

import requests

from inpaint_app.client.uploads import (IMAGE_SLOT, MASK_SLOT, FileSelector,
                                        UploadedFile, UploadSlot)
from inpaint_app.config import (ACCEPTED_UPLOAD_TYPES, DEFAULT_CONTENT_TYPE,
                                DEFAULT_PROXY_URL, DOWNLOAD_FILENAME,
                                PROXY_INPAINT_PATH)
from inpaint_app.errors import (DownloadUnavailableError,
                                SubmissionValidationError)
from inpaint_app.schemas import (HEIGHT_FIELD, IMAGE_FIELD, MASK_FIELD,
                                 TEXT_FIELD, WIDTH_FIELD, PromptSpec)
from inpaint_app.utils import build_data_uri

logger = logging.getLogger(__name__)

MISSING_UPLOADS_NOTICE = "Please upload both image and mask files"
MISSING_PROMPT_NOTICE = "Please enter a text prompt"
BUSY_NOTICE = "A generation is already in progress"
SUCCESS_NOTICE = "Image generated successfully!"
FAILURE_NOTICE = "Failed to process image. Please try again."


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier that reports to the log; a UI replaces it with toasts."""

    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.error(message)


@dataclass(frozen=True)
class RequestPayload:
    image: UploadedFile
    mask: UploadedFile
    text: str
    width: str
    height: str

    def files(self) -> dict:
        return {
            IMAGE_FIELD: (self.image.filename, self.image.content, self.image.content_type),
            MASK_FIELD: (self.mask.filename, self.mask.content, self.mask.content_type),
        }

    def data(self) -> dict:
        return {TEXT_FIELD: self.text, WIDTH_FIELD: self.width, HEIGHT_FIELD: self.height}


@dataclass(frozen=True)
class GenerationResult:
    content: bytes | None = None
    content_type: str | None = None
    message: str | None = None
    http_status: int | None = None

    @property
    def ok(self) -> bool:
        return self.content is not None

    @property
    def data_uri(self) -> str | None:
        """Displayable reference to the generated image."""
        if not self.ok:
            return None
        return build_data_uri(self.content, self.content_type or DEFAULT_CONTENT_TYPE)


class SubmissionController:

    def __init__(
        self,
        proxy_url: str = DEFAULT_PROXY_URL,
        notifier: Notifier | None = None,
        timeout: float | None = None,
    ):
        self.endpoint = f"{proxy_url.rstrip('/')}{PROXY_INPAINT_PATH}"
        self.notifier = notifier or LoggingNotifier()
        self.timeout = timeout
        self.slots = {IMAGE_SLOT: UploadSlot(IMAGE_SLOT), MASK_SLOT: UploadSlot(MASK_SLOT)}
        self.prompt = PromptSpec()
        self.state = SubmissionState.IDLE
        self.result: GenerationResult | None = None

    # -- inputs ------------------------------------------------------------

    def set_upload(self, slot: str, file: UploadedFile | None) -> None:
        self.slots[slot].set_file(file)

    def select_file(self, slot: str, selector: FileSelector) -> UploadedFile | None:
        """
        Ask the selector for one file and store the outcome; cancelling clears the slot.
        """
        file = selector(ACCEPTED_UPLOAD_TYPES)
        self.set_upload(slot, file)
        return file

    def set_prompt(self, text: str) -> None:
        self.prompt = self.prompt.model_copy(update={"text": text})

    def set_dimensions(self, width: str, height: str) -> None:
        self.prompt = self.prompt.model_copy(update={"width": width, "height": height})

    @property
    def can_submit(self) -> bool:
        return (
            self.state is not SubmissionState.SUBMITTING
            and not any(slot.is_empty for slot in self.slots.values())
            and self.prompt.has_text()
        )

    # -- lifecycle ---------------------------------------------------------

    def _transition(self, state: SubmissionState) -> None:
        logger.debug("Submission state %s -> %s", self.state.value, state.value)
        self.state = state

    def validate(self) -> None:
        if self.state is SubmissionState.SUBMITTING:
            raise SubmissionValidationError(BUSY_NOTICE)
        if any(slot.is_empty for slot in self.slots.values()):
            raise SubmissionValidationError(MISSING_UPLOADS_NOTICE)
        if not self.prompt.has_text():
            raise SubmissionValidationError(MISSING_PROMPT_NOTICE)

        invalid = self.prompt.out_of_range_dimensions()
        if invalid:
            # The backend decides what to do with these; they are sent as typed
            logger.warning(
                "Dimensions outside the suggested range were left unchanged: %s",
                ", ".join(invalid),
            )

    def build_payload(self) -> RequestPayload:
        return RequestPayload(
            image=self.slots[IMAGE_SLOT].file,
            mask=self.slots[MASK_SLOT].file,
            text=self.prompt.text,
            width=self.prompt.width,
            height=self.prompt.height,
        )

    def submit(self) -> GenerationResult | None:
        """
        Validate, send the payload to the proxy and record the outcome.

        Returns None when validation fails; no request is issued in that case.
        """
        previous = self.state
        if previous is not SubmissionState.SUBMITTING:
            self._transition(SubmissionState.VALIDATING)
        try:
            self.validate()
        except SubmissionValidationError as e:
            self._transition(previous)
            self.notifier.error(str(e))
            return None

        self.result = None
        self._transition(SubmissionState.SUBMITTING)
        payload = self.build_payload()

        try:
            resp = requests.post(
                self.endpoint,
                files=payload.files(),
                data=payload.data(),
                timeout=self.timeout,
            )
            if not 200 <= resp.status_code < 300:
                logger.error(
                    "Proxy returned %s: %s", resp.status_code, resp.text[:500]
                )
                self._fail(resp.status_code)
            else:
                self.result = GenerationResult(
                    content=resp.content,
                    content_type=resp.headers.get("Content-Type"),
                )
                self._transition(SubmissionState.SUCCEEDED)
                self.notifier.success(SUCCESS_NOTICE)
        except Exception as e:
            logger.exception("Error submitting inpaint request: %s", e)
            self._fail(None)

        return self.result

    def _fail(self, http_status: int | None) -> None:
        self.result = GenerationResult(message=FAILURE_NOTICE, http_status=http_status)
        self._transition(SubmissionState.FAILED)
        self.notifier.error(FAILURE_NOTICE)

    def download(self, directory: str | Path = ".") -> Path:
        """
        Save the held result as DOWNLOAD_FILENAME in `directory`.
        """
        if self.state is not SubmissionState.SUCCEEDED or not self.result or not self.result.ok:
            raise DownloadUnavailableError("There is no generated image to download")

        target = Path(directory) / DOWNLOAD_FILENAME
        target.write_bytes(self.result.content)
        return target
