import logging
import os
from string import Template


def _prompts_dir() -> str:
    here = os.path.dirname(os.path.abspath(__file__))
    return os.path.normpath(os.path.join(here, '..', 'prompts'))


def get_prompt_text(name: str) -> str | None:
    """Return the raw prompt text from backend/prompts/<name>, or None if missing."""
    path = os.path.join(_prompts_dir(), name)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError:
        logging.warning("Prompt template %s not found in %s", name, _prompts_dir())
        return None


def render_prompt(name: str, mapping: dict[str, str], default: str | None = None) -> str | None:
    """Render a prompt template with ${VARS} using safe substitution.

    Falls back to rendering `default` when the template file is missing;
    returns None when neither is available.
    """
    raw = get_prompt_text(name)
    if raw is None:
        raw = default
    if raw is None:
        return None
    return Template(raw).safe_substitute(mapping or {})
