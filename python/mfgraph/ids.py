"""Identifier derivation for graph nodes."""

from typing import Tuple

EXTERNAL_PREFIX = "external-"
SHARED_PREFIX = "shared-"

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_int32(value: int) -> int:
    """Wrap an integer to a signed 32-bit value."""
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return ''.join(reversed(digits))


def hash_path(path: str) -> str:
    """
    Create a short, stable hash of a root path.

    Rolling hash h = h * 31 + c over the UTF-16 code units of the path,
    kept in signed 32-bit range, then the absolute value in base 36,
    truncated to 8 characters.
    """
    data = path.encode('utf-16-le')
    hash_value = 0
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        hash_value = _to_int32((hash_value << 5) - hash_value + code_unit)
    return _to_base36(abs(hash_value))[:8]


def make_app_id(root_path: str, name: str, config_type: str) -> str:
    """Build the id of a local application node."""
    return f"{hash_path(root_path)}-{name}-{config_type}"


def external_remote_id(name: str) -> str:
    return f"{EXTERNAL_PREFIX}{name}"


def exposed_module_id(app_id: str, module_name: str) -> str:
    return f"{app_id}-module-{module_name}"


def shared_dependency_id(name: str) -> str:
    return f"{SHARED_PREFIX}{name}"


def pair_key(first_id: str, second_id: str) -> Tuple[str, str]:
    """Canonical key for an unordered pair of node ids (smaller id first)."""
    if first_id < second_id:
        return first_id, second_id
    return second_id, first_id
