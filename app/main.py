# app/main.py
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging

from dotenv import load_dotenv
load_dotenv()

from app.config import settings
from app.errors import ActionHistoryError, ReplayFailed
from app.schemas.common import ErrorResponse
from app.routers.v1 import action_history_router

logger = logging.getLogger("uvicorn.error")

app = FastAPI(
    title="Action History API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

origins = settings.CORS_ALLOW_ORIGINS.split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in origins if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(action_history_router)
logger.info(f"Action history enabled (retention={settings.ACTION_HISTORY_RETENTION_LIMIT}/user).")

@app.get("/health", tags=["meta"])
def health():
    return {"ok": True, "service": "action-history-api"}

@app.exception_handler(HTTPException)
async def custom_http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)

@app.exception_handler(ActionHistoryError)
async def action_history_exception_handler(request: Request, exc: ActionHistoryError):
    detail = exc.detail
    cause = exc.__cause__
    if isinstance(exc, ReplayFailed) and cause is not None:
        # replay failures keep their cause for the logs only
        if settings.EXPOSE_ERROR_DETAIL:
            detail = {**(detail or {}), "cause": repr(cause)}
        else:
            detail = None
    body = ErrorResponse(code=exc.code, message=exc.message, detail=detail)
    return JSONResponse(body.model_dump(), status_code=exc.status_code)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
