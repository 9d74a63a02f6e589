"""
Errores de la aplicación

Define las excepciones que cruzan las fronteras entre el proxy, el cliente
y la configuración, junto con los mensajes estables que ve el usuario.
"""

# Error envelopes returned by the proxy
UPSTREAM_FAILURE_MESSAGE = "Failed to process image"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class ConfigurationError(RuntimeError):
    """Required configuration is missing or invalid."""


class UpstreamError(Exception):
    """The inference backend answered with a non-2xx status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Inference backend returned {status_code}")


class SubmissionValidationError(ValueError):
    """Client-side input check failed; no request was issued."""


class DownloadUnavailableError(RuntimeError):
    """There is no successful result to save."""
