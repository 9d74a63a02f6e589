"""
Modelos de datos y validación

Define los esquemas Pydantic utilizados para:
- Validar los datos de entrada del cliente antes de enviar la petición
- Documentar automáticamente la API con OpenAPI (sobre de error del proxy)

Los nombres de los campos multipart son fijos y deben coincidir con los que
espera el backend de inferencia.
"""

from pydantic import BaseModel

from inpaint_app.config import DEFAULT_DIMENSION, MAX_DIMENSION, MIN_DIMENSION

IMAGE_FIELD = "image"
MASK_FIELD = "mask"
TEXT_FIELD = "text"
WIDTH_FIELD = "width"
HEIGHT_FIELD = "height"


class ErrorEnvelope(BaseModel):
    error: str


class PromptSpec(BaseModel):
    text: str = ""
    width: str = DEFAULT_DIMENSION
    height: str = DEFAULT_DIMENSION

    def has_text(self) -> bool:
        return bool(self.text.strip())

    def out_of_range_dimensions(self) -> list[str]:
        """
        Names of the dimensions that are not integers in [MIN_DIMENSION, MAX_DIMENSION].
        """
        invalid = []
        for name, value in ((WIDTH_FIELD, self.width), (HEIGHT_FIELD, self.height)):
            try:
                number = int(value.strip())
            except ValueError:
                invalid.append(name)
                continue
            if not MIN_DIMENSION <= number <= MAX_DIMENSION:
                invalid.append(name)
        return invalid
