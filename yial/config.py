from __future__ import annotations
import os

DEFAULT_MAX_EVAL_DEPTH = 10000
DEFAULT_PROMPT = ">_ "


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def get_max_eval_depth() -> int:
    return int_from_env('YIAL_MAX_EVAL_DEPTH', DEFAULT_MAX_EVAL_DEPTH)


def get_prompt() -> str:
    return os.environ.get('YIAL_PROMPT', DEFAULT_PROMPT)
