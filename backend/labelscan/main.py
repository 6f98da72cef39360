from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from labelscan.api.routes import router as api_router
from labelscan.config import settings
from labelscan.errors import LabelScanError
from labelscan.logging import configure_logging, get_logger
from labelscan.services.reference.store import get_reference_store

app = FastAPI(title="Labelscan API")
logger = get_logger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    configure_logging()
    logger.info("startup: loading reference store")
    get_reference_store()
    if settings.use_llm_research:
        from labelscan.services.llm.dspy_client import configure_dspy

        configure_dspy()


@app.exception_handler(LabelScanError)
async def labelscan_error_handler(request: Request, exc: LabelScanError) -> JSONResponse:
    logger.info("request.failed path=%s error=%s", request.url.path, exc.code)
    return JSONResponse(status_code=422, content={"error": exc.code, "detail": str(exc)})


app.include_router(api_router)
