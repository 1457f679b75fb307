"""FastAPI web application."""

import logging
from datetime import date
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from wxdecode.config import AppConfig
from wxdecode.context import DecodeContext
from wxdecode.decoder import METAR, TAF, Message, decode, report_kind
from wxdecode.metar_parser import decode_metar
from wxdecode.segmenter import tokenize
from wxdecode.taf_parser import decode_taf

logger = logging.getLogger(__name__)

# In-memory log storage for the /api/logs endpoint
log_buffer = []
MAX_LOG_ENTRIES = 1000


class WebLogHandler(logging.Handler):
    """Custom log handler that stores logs in memory."""
    def emit(self, record):
        log_entry = {
            'timestamp': record.created * 1000,  # Convert to milliseconds
            'level': record.levelname,
            'message': self.format(record),
        }
        log_buffer.append(log_entry)
        # Keep only last MAX_LOG_ENTRIES
        if len(log_buffer) > MAX_LOG_ENTRIES:
            log_buffer.pop(0)


web_log_handler = WebLogHandler()
web_log_handler.setFormatter(logging.Formatter('%(name)s: %(message)s'))
logging.getLogger().addHandler(web_log_handler)

app = FastAPI(title="wxdecode")


# Global exception handler to ensure JSON errors
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Handle all exceptions and return JSON."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    if isinstance(exc, HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "error": True}
        )
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "error": True}
    )


# Global state
config: Optional[AppConfig] = None


class DecodeRequest(BaseModel):
    """Report text to decode, with an optional reference date."""
    raw: str
    reference_date: Optional[date] = None


@app.on_event("startup")
async def startup():
    """Load configuration unless one was installed already."""
    global config
    if config is None:
        config = AppConfig.load()
    logger.info(f"Decoder ready (reference date: {config.decoder.reference_date or 'today'})")


def _current_config() -> AppConfig:
    return config if config is not None else AppConfig()


def _context_for(request: DecodeRequest) -> DecodeContext:
    if request.reference_date is not None:
        return DecodeContext.from_date(request.reference_date)
    return _current_config().decode_context()


def _decode_response(request: DecodeRequest, decoder: Callable[[str, DecodeContext], Message],
                     kind: str) -> Dict[str, Any]:
    if not request.raw.strip():
        raise HTTPException(status_code=400, detail="Report text is empty")
    message = decoder(request.raw, _context_for(request))
    result = message.to_dict()
    result["kind"] = kind
    if message.not_decoded_tokens:
        logger.info(f"{message.station or '?'}: not decoded: {' '.join(message.not_decoded_tokens)}")
    return result


@app.get("/api/status")
async def api_status():
    """Get current status."""
    current = _current_config()
    return {
        "service": "wxdecode",
        "reference_date": current.decode_context().as_date().isoformat(),
        "fixed_reference_date": current.decoder.reference_date is not None,
        "default_report_type": current.decoder.default_report_type,
    }


@app.post("/api/decode")
async def decode_report(request: DecodeRequest):
    """Decode a METAR, SPECI or TAF, picking the kind from the leading keyword."""
    default_type = _current_config().decoder.default_report_type
    kind = report_kind(tokenize(request.raw), default_type)
    return _decode_response(request, lambda raw, context: decode(raw, context, default_type), kind)


@app.post("/api/decode/metar")
async def decode_metar_report(request: DecodeRequest):
    """Decode the text as a METAR/SPECI."""
    return _decode_response(request, decode_metar, METAR)


@app.post("/api/decode/taf")
async def decode_taf_report(request: DecodeRequest):
    """Decode the text as a TAF."""
    return _decode_response(request, decode_taf, TAF)


@app.get("/api/logs")
async def get_logs(limit: int = 100):
    """Get recent log entries."""
    return {"logs": log_buffer[-limit:]}
