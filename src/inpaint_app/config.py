"""Este módulo contiene las variables de configuración de la aplicación.

La URL del backend de inferencia es el único valor que llega del entorno
(INPAINT_API_URL). El resto son constantes compartidas por el proxy y el cliente.
"""

from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from inpaint_app.errors import ConfigurationError

# Proxy
BACKEND_INPAINT_PATH: str = "/api/inpaint/"
DEFAULT_CONTENT_TYPE: str = "application/octet-stream"

# Client
DEFAULT_PROXY_URL: str = "http://127.0.0.1:8000"
PROXY_INPAINT_PATH: str = "/api/inpaint"
DOWNLOAD_FILENAME: str = "inpainted-image.png"
ACCEPTED_UPLOAD_TYPES: str = "image/*"
DEFAULT_DIMENSION: str = "512"
MIN_DIMENSION: int = 64
MAX_DIMENSION: int = 1024


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
    )

    inpaint_api_url: str = Field(
        min_length=1, description="Base URL of the external inpainting backend"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once. A missing INPAINT_API_URL is a deployment error.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(
            "INPAINT_API_URL must be set before the proxy can serve requests"
        ) from e
