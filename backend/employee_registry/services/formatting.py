from __future__ import annotations

import math

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(num_bytes: int) -> str:
    if num_bytes <= 0:
        return "0 B"
    exponent = min(int(math.floor(math.log(num_bytes, 1024))), len(_SIZE_UNITS) - 1)
    # log() can land just off an exact power of 1024
    if exponent + 1 < len(_SIZE_UNITS) and num_bytes >= 1024 ** (exponent + 1):
        exponent += 1
    elif exponent > 0 and num_bytes < 1024**exponent:
        exponent -= 1
    value = num_bytes / 1024**exponent
    decimals = 0 if value >= 10 or exponent == 0 else 1
    text = f"{value:.{decimals}f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text} {_SIZE_UNITS[exponent]}"


def initials(name: str | None) -> str:
    tokens = (name or "").split()[:2]
    return "".join(token[0].upper() for token in tokens)
