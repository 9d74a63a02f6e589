import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import inpaint_app.routers.api as inpaint_router
from inpaint_app.config import Settings, get_settings
from inpaint_app.inference import InpaintForwarder

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    # Fails here, before serving anything, when INPAINT_API_URL is missing
    settings = settings or get_settings()

    app = FastAPI(title="Image Inpainting Proxy")
    app.state.forwarder = InpaintForwarder(settings.inpaint_api_url)
    logger.info("Forwarding inpaint requests to %s", app.state.forwarder.inpaint_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(inpaint_router.get_router(), prefix="/api")
    return app


# uvicorn inpaint_app.main:create_app --factory
if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
