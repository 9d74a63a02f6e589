"""
Servicio de reenvío de peticiones de inpainting

Implementa la lógica del proxy entre los endpoints de la API y el backend de
inferencia. No interpreta el contenido: solo transporta y normaliza errores.

Responsabilidades:
- Leer el cuerpo de la petición entrante una única vez
- Reenviarlo sin bloquear el event loop
- Traducir el resultado a una respuesta binaria o a un sobre JSON de error
"""

import logging

from fastapi import Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from inpaint_app.config import DEFAULT_CONTENT_TYPE
from inpaint_app.errors import (INTERNAL_ERROR_MESSAGE,
                                UPSTREAM_FAILURE_MESSAGE, UpstreamError)
from inpaint_app.inference import InpaintForwarder

logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)


async def forward_inpaint_request(
    request: Request, forwarder: InpaintForwarder
) -> Response:
    try:
        # Multipart bodies are not replayable: read once, reuse the bytes
        body = await request.body()
        content_type = request.headers.get("content-type", DEFAULT_CONTENT_TYPE)

        image = await run_in_threadpool(forwarder.forward, body, content_type)
        return Response(content=image.content, media_type=image.content_type)

    except UpstreamError as e:
        return error_response(UPSTREAM_FAILURE_MESSAGE, e.status_code)
    except Exception as e:
        logger.exception("Error forwarding inpaint request: %s", e)
        return error_response(INTERNAL_ERROR_MESSAGE, 500)
