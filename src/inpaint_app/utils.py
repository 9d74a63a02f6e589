import base64
import mimetypes

from inpaint_app.config import DEFAULT_CONTENT_TYPE


def guess_content_type(filename: str) -> str:
    """
    Guess a MIME type from the file name, falling back to a generic binary type.
    """
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or DEFAULT_CONTENT_TYPE


def build_data_uri(content: bytes, content_type: str) -> str:
    """
    Build a data URI that a UI can display directly.
    """
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
