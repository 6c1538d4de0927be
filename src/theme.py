"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disabled automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable; the CLI can also switch color off.
- Supports palette overrides via environment or a .env file in the
  working directory (TASKS_PRIMARY, TASKS_HIGH, TASKS_MEDIUM, TASKS_LOW).
"""
from __future__ import annotations
import logging
import os, sys
from pathlib import Path

logger = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

PALETTE_KEYS = ('TASKS_PRIMARY', 'TASKS_HIGH', 'TASKS_MEDIUM', 'TASKS_LOW')


def set_enabled(enabled: bool) -> None:
    """Turn colored output on or off for the rest of the process."""
    global _ENABLE
    _ENABLE = enabled and not _NO_COLOR


def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m"

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)

def _valid_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_HIGH_DEFAULT = '#E5534B'
HEX_MEDIUM_DEFAULT = '#F6D365'
HEX_LOW_DEFAULT = '#48B3AF'
HEX_COMPLETED = '#A7E399'


def _read_env_file(env_path: Path) -> dict[str, str]:
    overrides: dict[str, str] = {}
    try:
        text = env_path.read_text()
    except OSError as exc:
        logger.warning("Could not read %s: %s", env_path, exc)
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip()
        if k in PALETTE_KEYS and _valid_hex(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides


_env_path = Path.cwd() / '.env'
_ENV_OVERRIDES: dict[str, str] = _read_env_file(_env_path) if _env_path.exists() else {}


def _resolve(key: str, default: str) -> str:
    """Priority: real env var > .env override > default."""
    value = os.environ.get(key)
    if value and _valid_hex(value):
        return '#' + value.lstrip('#')
    return _ENV_OVERRIDES.get(key, default)


PRIMARY = _from_hex(_resolve('TASKS_PRIMARY', HEX_PRIMARY_DEFAULT))
C_HIGH = _from_hex(_resolve('TASKS_HIGH', HEX_HIGH_DEFAULT))
C_MEDIUM = _from_hex(_resolve('TASKS_MEDIUM', HEX_MEDIUM_DEFAULT))
C_LOW = _from_hex(_resolve('TASKS_LOW', HEX_LOW_DEFAULT))

PRIORITY_COLOR = {
    'High': C_HIGH + BOLD,
    'Medium': C_MEDIUM,
    'Low': C_LOW,
}

HEADER_COLOR = PRIMARY + BOLD
ID_COLOR = PRIMARY
COMPLETED_COLOR = _from_hex(HEX_COMPLETED)
PENDING_COLOR = ''
EMPTY_COLOR = DIM + PRIMARY
ERROR_COLOR = C_HIGH


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','set_enabled','RESET','BOLD','DIM','PRIORITY_COLOR','HEADER_COLOR',
    'ID_COLOR','COMPLETED_COLOR','PENDING_COLOR','EMPTY_COLOR','ERROR_COLOR',
]
