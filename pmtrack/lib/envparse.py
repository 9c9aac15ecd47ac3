"""
KEY=value config file parser.

Reads simple env-style files without evaluating anything. Accepts comments,
blank lines, single or double quoted values and an optional `export `
prefix so the same file can be sourced by a shell.
"""

import re
from pathlib import Path

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def parse_lines(lines: list[str], source: str = "<string>") -> dict[str, str]:
    """
    Parse env lines into a dict. Later keys override earlier ones.

    Raises:
        ValueError: on a line without '=' or with an invalid key
    """
    result = {}
    for lineno, raw in enumerate(lines, 1):
        line = raw.strip()
        if not line or line.startswith('#'):
            continue

        if line.startswith('export '):
            line = line[len('export '):].lstrip()

        if '=' not in line:
            raise ValueError(f"{source}:{lineno}: expected KEY=value")

        key, _, value = line.partition('=')
        key = key.strip()
        value = value.strip()

        if not KEY_PATTERN.match(key):
            raise ValueError(f"{source}:{lineno}: invalid key '{key}'")

        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]
        elif ' #' in value:
            # Trailing comment on an unquoted value
            value = value.split(' #', 1)[0].rstrip()

        result[key] = value

    return result


def load_env(filepath) -> dict[str, str]:
    """
    Parse an env file, return dict.

    Raises:
        FileNotFoundError: if file doesn't exist
        ValueError: if a line is malformed
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")
    return parse_lines(path.read_text().splitlines(), source=str(path))


def parse_bool(value: str) -> bool:
    """Interpret a config string as a boolean.

    Raises:
        ValueError: if the string is not a recognized boolean
    """
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")
