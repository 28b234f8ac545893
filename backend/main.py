"""
Squad Formation - FastAPI Backend
Proposes squads for an event's pending signups from the SQLite signup store.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from matching.errors import MalformedInputError
from routers import squads

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Squad Formation API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(squads.router)


# ── Errors ──────────────────────────────────────────────────────────────────

@app.exception_handler(MalformedInputError)
async def malformed_input(request: Request, exc: MalformedInputError):
    logger.error("Malformed input for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception):
    logger.exception("Error in %s", request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


@app.get("/api/health")
def health():
    return {"status": "ok"}
