from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from routes import medications, doses, history, assistant
import logging
from db.base import Base
from db.session import engine
from db.migrations import ensure_medications_schema, ensure_dose_logs_schema
from core.config import settings
from services.tracker_store import ReadOnlySnapshotError

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Cuidador v1.0")

allow_origins = list(settings.ALLOWED_ORIGINS or [])

logging.info(f"Allowed CORS origins: {allow_origins}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logging.exception("Unhandled server error")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"}
    )

@app.exception_handler(ReadOnlySnapshotError)
async def read_only_snapshot_handler(request: Request, exc: ReadOnlySnapshotError):
    logging.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"error": str(exc)}
    )

app.include_router(medications.router, prefix="/medications", tags=["medications"])
app.include_router(doses.router, prefix="/doses", tags=["doses"])
app.include_router(history.router, prefix="/history", tags=["history"])
app.include_router(assistant.router, prefix="/assistant", tags=["assistant"])

@app.on_event("startup")
def startup_event():
    logging.info("Creating database tables (if not exist)...")
    ensure_medications_schema(engine)
    ensure_dose_logs_schema(engine)
    Base.metadata.create_all(bind=engine)

@app.get("/")
def read_root():
    return {"text": "Cuidador backend running"}

@app.get('/health')
def health_check():
    return {"status": "healthy"}
