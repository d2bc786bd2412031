# roadside_dispatch/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import CORS_ORIGINS, DATABASE_URL, LOG_LEVEL, UPLOAD_DIR
from .errors import DispatchError
from .routers import admins, assignments, contacts, requests, users
from .store import get_store
from .uploads import ensure_upload_dir

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


# ────────────────────────────── LIFESPAN ──────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    get_store()
    logging.info("Dispatch store ready at %s", DATABASE_URL)
    yield
    logging.info("Shutting down server...")


app = FastAPI(
    title="Roadside Dispatch",
    description="Roadside-assistance request intake and dispatch tracking",
    version="1.0.0",
    lifespan=lifespan,
)

# ────────────────────────────── CORS ──────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ────────────────────────────── ERRORS ──────────────────────────────
# Routes turn NotFoundError into 404 themselves; anything else from the store is a 500

@app.exception_handler(DispatchError)
async def dispatch_error_handler(request: Request, exc: DispatchError):
    logging.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"Internal server error: {exc}"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logging.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Something went wrong!"},
    )


# ────────────────────────────── ROUTES ──────────────────────────────

@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}


app.include_router(requests.router)
app.include_router(contacts.router)
app.include_router(users.router)
app.include_router(admins.router)
app.include_router(assignments.router)

app.mount("/uploads", StaticFiles(directory=ensure_upload_dir(UPLOAD_DIR)), name="uploads")
