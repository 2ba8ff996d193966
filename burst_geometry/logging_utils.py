from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, MutableMapping, Optional, Sequence, Tuple, TypeVar, cast

import numpy as np
import sympy

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxlist = 10
_repr.maxtuple = 10

_EXACT_TEXT_LIMIT = 48


def _brackets(value: Sequence[Any]) -> Tuple[str, str]:
    if isinstance(value, tuple):
        return "(", ")"
    return "[", "]"


def _scalar_repr(value: sympy.Basic) -> str:
    text = sympy.sstr(value)
    if len(text) <= _EXACT_TEXT_LIMIT:
        return text
    try:
        return f"~{float(value):.12g}"
    except TypeError:
        return text[:_EXACT_TEXT_LIMIT] + "..."


def _array_repr(value: np.ndarray, max_items: int) -> str:
    parts = [f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"]
    if value.size == 0:
        return parts[0]
    if value.size <= max_items:
        parts.append(f"values={_repr.repr(value.tolist())}")
    elif np.issubdtype(value.dtype, np.number):
        parts.append(f"min={float(value.min()):.6g}")
        parts.append(f"max={float(value.max()):.6g}")
    return ", ".join(parts)


def _safe_repr(value: Any, *, max_items: int = 5, max_length: int = 400) -> str:
    """Compact rendering of call arguments; exact coordinates can be very long."""

    if isinstance(value, np.ndarray):
        return _array_repr(value, max_items)

    if isinstance(value, sympy.Basic):
        return _scalar_repr(value)

    coords = getattr(value, "x", None), getattr(value, "y", None)
    if all(isinstance(c, sympy.Basic) for c in coords):
        return f"{type(value).__name__}({_scalar_repr(coords[0])}, {_scalar_repr(coords[1])})"

    pieces = getattr(value, "pieces", None)
    if isinstance(pieces, tuple):
        return f"{type(value).__name__}(pieces={len(pieces)})"

    if isinstance(value, (list, tuple)):
        open_br, close_br = _brackets(value)
        items = []
        for idx, item in enumerate(value):
            if idx >= max_items:
                items.append("...")
                break
            items.append(_safe_repr(item))
        return f"{open_br}{', '.join(items)}{close_br}"

    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover - repr of foreign objects
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = []
    if args:
        parts.append("args=[" + ", ".join(_safe_repr(arg) for arg in args) + "]")
    if kwargs:
        parts.append("kwargs={" + ", ".join(f"{k}={_safe_repr(v)}" for k, v in kwargs.items()) + "}")
    return ", ".join(parts) if parts else "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that emits DEBUG entry/exit records for a callable."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("Entering %s (%s)", qualname, _format_arguments(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("Exception in %s", qualname)
                raise
            if log_result:
                logger.debug("Exiting %s -> %s", qualname, _safe_repr(result))
            else:
                logger.debug("Exiting %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def _traced(owner: type, attr: str, wrap: Callable[[F], F]) -> Any:
    raw = owner.__dict__.get(attr)
    if isinstance(raw, staticmethod):
        return staticmethod(wrap(raw.__func__))
    if inspect.isfunction(raw):
        return wrap(raw)
    raise TypeError(f"{owner.__name__}.{attr} is not a plain or static method")


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *names: str,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Trace the named callables of a module namespace at DEBUG level.

    ``names`` are module-level function names or ``Class.method`` paths;
    properties and cached values are never traced. Unknown names raise
    ``KeyError``.
    """

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(module_name if isinstance(module_name, str) else __name__)

    for name in names:
        owner_name, _, attr = name.rpartition(".")
        wrap = debug_log_call(logger, name=name)
        if not owner_name:
            if not inspect.isfunction(namespace[name]):
                raise TypeError(f"{name} is not a function")
            namespace[name] = wrap(namespace[name])
            continue
        owner = namespace[owner_name]
        if attr not in owner.__dict__:
            raise KeyError(name)
        setattr(owner, attr, _traced(owner, attr, wrap))


__all__ = ["apply_debug_logging", "debug_log_call"]
