"""
Cliente para la interacción con el backend de inferencia.

Este módulo contiene toda la comunicación con el servicio externo de inpainting.
El cuerpo multipart recibido del navegador se reenvía tal cual, sin volver a
codificarlo.

Responsabilidades:
- Construir la URL del endpoint a partir de la URL base configurada
- Reenviar el cuerpo y su Content-Type (con boundary) mediante POST
- Devolver la imagen generada o señalar un estado no 2xx con UpstreamError
"""

import logging
from dataclasses import dataclass

import requests

from inpaint_app.config import BACKEND_INPAINT_PATH, DEFAULT_CONTENT_TYPE
from inpaint_app.errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedImage:
    content: bytes
    content_type: str


class InpaintForwarder:

    def __init__(self, base_url: str, timeout: float | None = None):
        self.base_url = base_url.rstrip("/")
        self.inpaint_url = f"{self.base_url}{BACKEND_INPAINT_PATH}"
        # None keeps the call open until the backend answers
        self.timeout = timeout

    def forward(self, body: bytes, content_type: str) -> GeneratedImage:
        """
        POST the multipart body unchanged to the backend inpaint endpoint.

        Raises UpstreamError for non-2xx answers, redirects included; network
        failures surface as requests.RequestException.
        """
        resp = requests.post(
            self.inpaint_url,
            data=body,
            headers={"Content-Type": content_type},
            timeout=self.timeout,
            # a 3xx is reported as an upstream failure, not followed
            allow_redirects=False,
        )
        if not 200 <= resp.status_code < 300:
            logger.warning(
                "Inference backend error: %s - %s", resp.status_code, resp.text[:500]
            )
            raise UpstreamError(resp.status_code)

        return GeneratedImage(
            content=resp.content,
            content_type=resp.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE,
        )
