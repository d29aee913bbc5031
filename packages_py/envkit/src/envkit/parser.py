"""
Dotenv text codec.

The accepted format is deliberately small: one KEY=VALUE pair per line,
`#` comment lines, and an optional single layer of matching single or
double quotes around the value. There are no escape sequences and no
multiline values. serialize_env never re-adds quotes, so a value that
only survives parsing when quoted (leading/trailing spaces, a wrapping
pair of quotes) does not round-trip.
"""
from typing import Dict, Mapping

QUOTE_CHARS = ('"', "'")


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_env_text(text: str) -> Dict[str, str]:
    """Parse dotenv content into an ordered key/value mapping.

    Malformed lines (no `=`, or nothing before it) are skipped. When a key
    appears more than once the last line wins.
    """
    result: Dict[str, str] = {}

    # Only '\n' ends a line; a trailing '\r' goes with strip()
    for line in text.split('\n'):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue

        key, sep, value = stripped.partition('=')
        if not sep:
            continue

        key = key.strip()
        if not key:
            continue

        result[key] = _strip_quotes(value.strip())

    return result


def serialize_env(values: Mapping[str, str]) -> str:
    """Serialize a mapping as KEY=VALUE lines in mapping order."""
    if not values:
        return ""
    return "\n".join(f"{key}={value}" for key, value in values.items()) + "\n"
