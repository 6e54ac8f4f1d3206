import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

_LOGGER_NAME = "assistant_file_logger"
_LOG_DIR = os.getenv("LLM_LOG_DIR") or os.path.join(os.path.dirname(os.path.dirname(__file__)), 'logs')
_LOG_FILE = os.path.join(_LOG_DIR, 'llm.log')


def _ensure_logger() -> logging.Logger:
    os.makedirs(_LOG_DIR, exist_ok=True)
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.FileHandler(_LOG_FILE, encoding='utf-8')
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        # Keep assistant transcripts out of the console log
        logger.propagate = False
    return logger


def log_llm_event(event: str, payload: Optional[Dict[str, Any]] = None) -> None:
    """Append one JSON line: timestamp, event type and payload.

    event: short label, e.g. 'assistant.request', 'assistant.response', 'assistant.error'
    payload: JSON-serializable dict

    Failures to write the event log are reported on the root logger and
    otherwise ignored; they must not break the assistant call.
    """
    try:
        logger = _ensure_logger()
        line = {
            "ts": datetime.utcnow().isoformat() + 'Z',
            "event": event,
            "payload": payload or {},
        }
        logger.info(json.dumps(line, ensure_ascii=False, default=str))
    except (OSError, TypeError, ValueError):
        logging.warning("Could not write LLM event %s", event, exc_info=True)
