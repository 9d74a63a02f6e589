from fastapi import APIRouter, Depends, Request

from inpaint_app.deps import get_forwarder
from inpaint_app.inference import InpaintForwarder
from inpaint_app.schemas import ErrorEnvelope
from inpaint_app.services.forwarding import forward_inpaint_request

router = APIRouter()


@router.post(
    "/inpaint",
    responses={
        200: {"content": {"image/png": {}}, "description": "Generated image"},
        "4XX": {"model": ErrorEnvelope},
        "5XX": {"model": ErrorEnvelope},
    },
)
async def inpaint(
    request: Request, forwarder: InpaintForwarder = Depends(get_forwarder)
):
    """Relay the multipart payload (image, mask, text, width, height) to the backend."""
    return await forward_inpaint_request(request, forwarder)


def get_router():
    return router
