import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.health import router as health_router
from app.api.register import router as register_router
from app.api.root import router as root_router
from app.core.config import settings
from app.core.logging_config import setup_logging
from app.core.validation import RequestValidationFailed
from app.schemas.validation import ValidationErrorResponse

logger = logging.getLogger(__name__)

app = FastAPI(title="Registration Service")

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationFailed)
async def request_validation_failed_handler(request: Request, exc: RequestValidationFailed):
    body = ValidationErrorResponse(errors=exc.errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


app.include_router(root_router)
app.include_router(health_router)
app.include_router(register_router)


def run():
    import uvicorn

    setup_logging(settings.LOG_LEVEL)
    logger.info("Server is running on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
