from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
import logging, uuid

from .config import settings
from .logging_conf import configure_logging, request_id_var

configure_logging(settings.log_level)
log = logging.getLogger(__name__)

app = FastAPI(title="Lensmatch Prescription Pricing")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.allow_origin] if settings.allow_origin != "*" else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response

app.add_middleware(RequestIdMiddleware)

# Include routers
from .routes.match import router as match_router
from .routes.catalog import router as catalog_router
from .routes.prescription import router as prescription_router
app.include_router(match_router, prefix="/match", tags=["match"])
app.include_router(catalog_router, prefix="/catalog", tags=["catalog"])
app.include_router(prescription_router, prefix="/prescription", tags=["prescription"])

@app.get("/")
def root():
    return {"ok": True, "service": "lensmatch", "catalog_path": settings.catalog_path}

@app.get("/health")
def health_check():
    return {"status": "healthy", "service": "lensmatch", "version": "1.0.0"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
