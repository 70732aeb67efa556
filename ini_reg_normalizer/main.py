from typing import Optional

from fastapi import FastAPI, UploadFile, File, HTTPException, Query
from .exceptions import UnsupportedDialectError
from .formatter import format_document
from .logging_config import get_logger, setup_logging
from .models import FormatResponse, FormatTextRequest, FormatTextResponse, HealthResponse
from .normalize import dialect_for_filename, format_bytes

setup_logging()
logger = get_logger("api")

app = FastAPI(
    title="ini-reg-normalizer",
    description="Deterministic INI and Windows Registry file formatting",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/format", response_model=FormatResponse)
async def format_file(
    file: UploadFile = File(...),
    dialect: Optional[str] = Query(default=None, description="ini or reg; inferred from the file extension when omitted"),
):
    if not dialect and dialect_for_filename(file.filename) is None:
        raise HTTPException(status_code=422, detail="Only .ini, .inf, .cfg and .reg files are supported")

    raw = await file.read()
    try:
        return format_bytes(raw, filename=file.filename, dialect=dialect or None)
    except UnsupportedDialectError as e:
        logger.error("Rejected %s: %s", file.filename, e)
        raise HTTPException(status_code=422, detail=str(e))

@app.post("/format/text", response_model=FormatTextResponse)
def format_text(request: FormatTextRequest):
    return {"dialect": request.dialect, "text": format_document(request.dialect, request.text)}
