"""
Sensitive Value Detection and Masking

Values read from or written to env files pass through mask_value before
they reach the logger.
"""
import os
import re
from typing import Any, Dict, Mapping

from .constants import ENV_ENVKIT_LOG_MASK

SENSITIVE_KEY_PATTERNS = [
    re.compile(r'KEY', re.IGNORECASE),
    re.compile(r'SECRET', re.IGNORECASE),
    re.compile(r'PASSWORD', re.IGNORECASE),
    re.compile(r'PASSWD', re.IGNORECASE),
    re.compile(r'TOKEN', re.IGNORECASE),
    re.compile(r'CREDENTIAL', re.IGNORECASE),
    re.compile(r'AUTH', re.IGNORECASE),
    re.compile(r'PRIVATE', re.IGNORECASE),
    re.compile(r'DSN', re.IGNORECASE),
]

SENSITIVE_VALUE_PREFIXES = [
    'sk-', 'pk-', 'ghp_', 'xoxb-', 'Bearer ', 'Basic ', 'eyJ'
]

REDACTED = '[REDACTED]'

_log_mask = True
if os.getenv(ENV_ENVKIT_LOG_MASK, '').lower() == 'false':
    _log_mask = False

def set_log_mask(enabled: bool) -> None:
    global _log_mask
    _log_mask = enabled

def is_sensitive_key(key: str) -> bool:
    return any(p.search(key) for p in SENSITIVE_KEY_PATTERNS)

def is_sensitive_value(value: str) -> bool:
    if not value:
        return False
    return any(value.startswith(p) for p in SENSITIVE_VALUE_PREFIXES)

def mask_value(key: str, value: Any) -> str:
    if not _log_mask:
        return str(value)

    val_str = str(value)
    if not val_str:
        return val_str

    if is_sensitive_key(key) or is_sensitive_value(val_str):
        return REDACTED

    return val_str

def mask_mapping(values: Mapping[str, Any]) -> Dict[str, str]:
    """Mask every value of a mapping, keyed by its own name."""
    return {key: mask_value(key, value) for key, value in values.items()}
