import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.db_connection import db_connection, ensure_indexes
from app.core.errors import AppError, Unauthorized
from app.core.logger import logs
from app.routes.auth_route import router as auth_router
from app.routes.directions_route import router as directions_router
from app.routes.places_route import router as places_router
from app.routes.saved_places_route import router as saved_places_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    logs.log(logging.INFO, f"Starting Family Places API (storage: {settings.STORAGE_MODE})")
    if settings.STORAGE_MODE == "mongodb":
        await ensure_indexes(db_connection.get_database())
    yield
    db_connection.close()

app = FastAPI(title="Family Places API", version="1.0.0", lifespan=lifespan)

# The Streamlit frontend runs on its own port
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(places_router)
app.include_router(directions_router)
app.include_router(saved_places_router)
app.include_router(auth_router)

# --- Error Handlers ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logs.log(level, f"{request.method} {request.url.path} -> {exc.status_code} {type(exc).__name__}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report the first invalid field as {"message", "field"} with a 400."""
    first = exc.errors()[0]
    # Drop the "body"/"query"/"path" prefix from the location
    field = ".".join(str(part) for part in first["loc"][1:]) or str(first["loc"][0])
    return JSONResponse(status_code=400, content={"message": first["msg"], "field": field})

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Welcome to Family Places API",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "search": "/api/places/search",
            "categories": "/api/places/categories",
            "directions": "/api/directions",
            "saved_places": "/api/saved-places",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "Family Places API", "storage": settings.STORAGE_MODE}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
