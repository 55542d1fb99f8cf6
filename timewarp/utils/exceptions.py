"""Exception hierarchy for timewarp.

Every error raised by the package derives from ``TimeWarpError`` and carries
a ``context`` dict describing what went wrong (parameter names, offending
shapes, table cells), which is folded into ``str(error)``.

- ValidationError: invalid sequences or alignment parameters
- ComputationError: a cost that cannot be ordered (NaN)
- MemoryError: dense cost tables larger than the configured limit
- ConfigurationError: invalid ``TimeWarpAligner`` settings

Errors raised inside a user supplied distance function are never wrapped;
they reach the caller unchanged.
"""

from typing import Any, Dict, Optional

_MAX_CONTEXT_VALUE_LENGTH = 1000


def _build_context(base: Optional[Dict[str, Any]], **fields: Any) -> Dict[str, Any]:
    """Copy ``base`` and add every field that was actually given."""
    context = dict(base or {})
    context.update((key, value) for key, value in fields.items() if value is not None)
    return context


class TimeWarpError(Exception):
    """Base exception for all timewarp errors.

    Attributes:
        message: Error message without context
        context: Details of the failure, keyed by string
        recoverable: Whether retrying with different input can succeed
    """

    recoverable_default = False

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        recoverable: Optional[bool] = None
    ):
        super().__init__(message)
        self.message = message
        self.context = self._validate_context(context or {})
        self.recoverable = self.recoverable_default if recoverable is None else recoverable

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} (Context: {details})"

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form of the error."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "context": self.context,
            "recoverable": self.recoverable,
        }

    @staticmethod
    def _validate_context(context: Any) -> Dict[str, Any]:
        # String keys only; oversized values are replaced by a truncated repr
        if not isinstance(context, dict):
            return {"invalid_context": f"Context must be dict, got {type(context).__name__}"}

        validated = {}
        for key, value in context.items():
            try:
                text = str(value)
            except Exception:
                validated[str(key)] = f"<{type(value).__name__} object>"
                continue

            if len(text) > _MAX_CONTEXT_VALUE_LENGTH:
                value = text[:_MAX_CONTEXT_VALUE_LENGTH - 3] + "..."
            validated[str(key)] = value

        return validated


class ValidationError(TimeWarpError):
    """Raised when a sequence or parameter cannot be aligned.

    Raised before any cost is computed, e.g. for an empty time axis,
    frames a built-in distance cannot compare, a non-positive sampling
    rate or a negative link count.
    """

    recoverable_default = True

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        expected: Optional[Any] = None,
        actual: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Args:
            message: Error message
            parameter: Name of the offending argument
            expected: What the argument should have been
            actual: What was received
            context: Extra details, e.g. the table cell being filled
        """
        super().__init__(
            message,
            _build_context(context, parameter=parameter or None, expected=expected, actual=actual)
        )


class ComputationError(TimeWarpError):
    """Raised when the accumulated cost cannot be computed."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        values: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        context = _build_context(context, operation=operation or None)
        context.update(values or {})
        super().__init__(message, context)


class MemoryError(TimeWarpError):
    """Raised when the dense cost tables would exceed the memory limit.

    The check happens before allocation, so nothing is partially computed.
    """

    recoverable_default = True

    def __init__(
        self,
        message: str,
        memory_used_mb: Optional[float] = None,
        memory_limit_mb: Optional[float] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message,
            _build_context(context, memory_used_mb=memory_used_mb, memory_limit_mb=memory_limit_mb)
        )


class ConfigurationError(TimeWarpError):
    """Raised when an aligner is configured with invalid settings."""

    recoverable_default = True

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message,
            _build_context(context, config_key=config_key or None, config_value=config_value)
        )


def check_memory_limit(memory_mb: float, limit_mb: float, operation: str = "operation") -> None:
    """Raise ``MemoryError`` if an estimate of ``memory_mb`` exceeds ``limit_mb``."""
    if memory_mb > limit_mb:
        raise MemoryError(
            f"{operation} would exceed memory limit of {limit_mb:.2f}MB "
            f"(estimated {memory_mb:.2f}MB)",
            memory_used_mb=memory_mb,
            memory_limit_mb=limit_mb
        )
