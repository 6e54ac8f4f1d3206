import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple
from urllib.parse import urlencode, urlparse, parse_qsl, urlunparse

import requests

from core.config import settings
from schemas.medication import Medication
from utils.context import medications_to_context
from utils.llm_logger import log_llm_event
from utils.prompts import render_prompt

APOLOGY_REPLY = "Ops! Tive um probleminha para pensar. Tente novamente em um instante."
EMPTY_REPLY = "Desculpe, não consegui entender agora. Pode repetir?"

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

_FALLBACK_PROMPT = (
    "You are a kind assistant helping a caregiver with medications.\n"
    "Current medications:\n${MEDICATIONS}\n\n"
    "Question: \"${QUESTION}\"\n"
    "Answer in Brazilian Portuguese, simply, and recommend consulting a doctor about serious side effects."
)


class AssistantConfigError(Exception):
    pass


@dataclass
class AssistantReply:
    text: str
    ok: bool
    provider: str
    model: Optional[str] = None
    status_code: Optional[int] = None
    duration_ms: Optional[int] = None


def build_prompt(question: str, medications: Iterable[Medication]) -> str:
    mapping = {
        "MEDICATIONS": medications_to_context(medications),
        "QUESTION": question.strip(),
    }
    return render_prompt("assistant.txt", mapping, default=_FALLBACK_PROMPT) or question


def _build_request(prompt: str) -> Tuple[str, Dict[str, Any], Dict[str, str], Optional[str]]:
    """Return (url, json payload, headers, model) for the configured provider."""
    provider = (settings.LLM_PROVIDER or "gemini").lower()
    model = settings.LLM_MODEL
    api_key = settings.LLM_API_KEY
    llm_url = settings.LLM_API_URL

    if provider == 'gemini':
        model = model or DEFAULT_GEMINI_MODEL
        if not llm_url:
            llm_url = f"https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
        if not api_key:
            raise AssistantConfigError("LLM API key not configured for Gemini")
        parsed = urlparse(llm_url)
        q = dict(parse_qsl(parsed.query))
        q['key'] = api_key
        llm_url = urlunparse(parsed._replace(query=urlencode(q)))
        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]}
            ],
            "generationConfig": {
                "temperature": float(settings.LLM_TEMPERATURE),
                "maxOutputTokens": int(settings.LLM_MAX_TOKENS),
            },
        }
        return llm_url, payload, {}, model

    # OpenAI-style chat completions endpoint
    if not llm_url:
        raise AssistantConfigError("LLM API URL not configured")
    payload = {
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": int(settings.LLM_MAX_TOKENS),
        "temperature": float(settings.LLM_TEMPERATURE),
    }
    if model:
        payload["model"] = model
    headers = {}
    if api_key:
        headers['Authorization'] = f'Bearer {api_key}'
    return llm_url, payload, headers, model


def _text_or_none(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _extract_reply(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    cands = data.get('candidates')
    if isinstance(cands, list) and cands:
        first = cands[0] if isinstance(cands[0], dict) else {}
        content = first.get('content')
        parts = content.get('parts') if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return None
        texts = [p['text'] for p in parts if isinstance(p, dict) and isinstance(p.get('text'), str)]
        return _text_or_none("".join(texts))
    choices = data.get('choices')
    if isinstance(choices, list) and choices:
        first = choices[0] if isinstance(choices[0], dict) else {}
        if isinstance(first.get('message'), dict):
            return _text_or_none(first['message'].get('content'))
        return _text_or_none(first.get('text'))
    return None


def ask_with_meta(question: str, medications: Iterable[Medication]) -> AssistantReply:
    """Ask the language model a question about the current medications.

    Never raises: configuration, network and payload errors all come back
    as APOLOGY_REPLY with ok=False.
    """
    provider = settings.LLM_PROVIDER or "gemini"
    prompt = build_prompt(question, list(medications))
    started = time.monotonic()
    model = settings.LLM_MODEL
    status_code = None
    try:
        url, payload, headers, model = _build_request(prompt)
        log_llm_event("assistant.request", {"provider": provider, "model": model, "question": question})
        resp = requests.post(url, json=payload, headers=headers or None, timeout=settings.LLM_TIMEOUT_SECONDS)
        status_code = resp.status_code
        resp.raise_for_status()
        data = resp.json()
    except AssistantConfigError as e:
        logging.error("Assistant not configured: %s", e)
        log_llm_event("assistant.error", {"provider": provider, "error": str(e)})
        return AssistantReply(text=APOLOGY_REPLY, ok=False, provider=provider, model=model)
    except requests.exceptions.Timeout:
        logging.error("Assistant request timed out")
        log_llm_event("assistant.error", {"provider": provider, "error": "timeout"})
        return AssistantReply(text=APOLOGY_REPLY, ok=False, provider=provider, model=model,
                              duration_ms=int((time.monotonic() - started) * 1000))
    except (requests.exceptions.RequestException, ValueError) as e:
        logging.exception("Assistant request failed")
        log_llm_event("assistant.error", {"provider": provider, "status_code": status_code, "error": str(e)})
        return AssistantReply(text=APOLOGY_REPLY, ok=False, provider=provider, model=model,
                              status_code=status_code, duration_ms=int((time.monotonic() - started) * 1000))

    duration_ms = int((time.monotonic() - started) * 1000)
    reply = _extract_reply(data)
    if not reply:
        logging.warning(f"Unexpected response format from LLM: {data}")
        reply = EMPTY_REPLY
    log_llm_event("assistant.response", {"provider": provider, "model": model, "duration_ms": duration_ms, "reply": reply})
    return AssistantReply(text=reply, ok=True, provider=provider, model=model,
                          status_code=status_code, duration_ms=duration_ms)


def ask(question: str, medications: Iterable[Medication]) -> str:
    return ask_with_meta(question, medications).text
