from __future__ import annotations
import os

# Namespaces provided by the package itself
CORE_NAMESPACE = "synquote.core"
LOG_NAMESPACE = "synquote.log"

# A symbol spelled `name#` inside a template is renamed per expansion
AUTO_GENSYM_MARKER = "#"
GENSYM_SUFFIX = "__auto__"

# Defaults
_DEFAULT_MAX_EXPANSION_DEPTH = 100
_DEFAULT_MAX_TEMPLATE_NESTING = 8
_DEFAULT_NAMESPACE = "user"


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def get_max_expansion_depth() -> int:
    return int_from_env('SYNQUOTE_MAX_EXPANSION_DEPTH', _DEFAULT_MAX_EXPANSION_DEPTH)


def get_max_template_nesting() -> int:
    return int_from_env('SYNQUOTE_MAX_TEMPLATE_NESTING', _DEFAULT_MAX_TEMPLATE_NESTING)


def get_default_namespace() -> str:
    raw = os.environ.get('SYNQUOTE_NAMESPACE')
    return raw.strip() if raw and raw.strip() else _DEFAULT_NAMESPACE
