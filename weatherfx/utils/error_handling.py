"""
Error Handling Utilities for weatherfx

Weather lookups fail in a few predictable ways (no network, provider errors,
unusable payloads, no API key) and the dashboard refreshes on a timer, so the
same failure tends to repeat. This module:
1. Gives each failure a category and severity
2. Logs one detailed record per kind of failure per window, and a one-liner
   for repeats
3. Retries transient failures with exponential backoff

USAGE:
    from weatherfx.utils.error_handling import (
        ErrorCategory,
        safe_execute,
        with_error_handling,
    )

    @with_error_handling(category=ErrorCategory.NETWORK, retry_count=2, reraise=True)
    def fetch(url):
        ...

    with safe_execute("refreshing weather", ErrorCategory.PROVIDER) as result:
        result.value = source.get_report(city)
    if not result.success:
        show(result.error.error)
"""

import functools
import logging
import threading
import time
import traceback
from collections import Counter, deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ErrorCategory(Enum):
    """Where an error came from."""
    NETWORK = "network"          # DNS, refused connections, timeouts
    PROVIDER = "provider"        # Weather API answered with something unusable
    CONFIG = "configuration"     # Missing API key, bad environment values
    RENDER = "render"            # Drawing surface / terminal
    FILESYSTEM = "filesystem"    # Log files, exported animations
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """How bad an error is for the running app."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def log_level(self) -> int:
        return {
            ErrorSeverity.INFO: logging.INFO,
            ErrorSeverity.WARNING: logging.WARNING,
            ErrorSeverity.ERROR: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL,
        }[self]


@dataclass
class ErrorContext:
    """One handled error and what was going on when it happened."""
    error: Exception
    category: ErrorCategory
    severity: ErrorSeverity
    operation: str
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    thread_name: str = field(default_factory=lambda: threading.current_thread().name)
    stack_trace: str = ""
    additional_context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.stack_trace:
            trace = traceback.format_exc()
            # format_exc() outside an except block
            self.stack_trace = "" if trace.strip() == "NoneType: None" else trace

    @property
    def key(self) -> str:
        """Identity used for deduplication."""
        return f"{self.category.value}:{type(self.error).__name__}:{self.operation}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'error_type': type(self.error).__name__,
            'error_message': str(self.error),
            'category': self.category.value,
            'severity': self.severity.value,
            'operation': self.operation,
            'timestamp': self.timestamp,
            'thread_name': self.thread_name,
            'stack_trace': self.stack_trace,
            'additional_context': dict(self.additional_context),
        }

    def format_log_message(self) -> str:
        """Multi-line log record: headline, context, then the trace."""
        lines = [
            f"{self.severity.value.upper()} in {self.operation} "
            f"[{self.category.value}] {type(self.error).__name__}: {self.error}",
        ]
        lines.extend(f"    {key}: {value}" for key, value in self.additional_context.items())
        if self.stack_trace.strip():
            lines.append("  Traceback:")
            lines.extend(f"    {line}" for line in self.stack_trace.rstrip().splitlines())
        return '\n'.join(lines)


class ErrorAggregator:
    """
    Thread-safe store of recent errors.

    A failure with the same key inside the dedup window is only counted, so a
    provider outage produces one detailed record per window rather than one per
    refresh.
    """

    def __init__(self, max_errors: int = 200, dedup_window_seconds: float = 60):
        self._errors: Deque[ErrorContext] = deque(maxlen=max_errors)
        self._counts: Counter = Counter()
        self._last_seen: Dict[str, float] = {}
        self._dedup_window = dedup_window_seconds
        self._lock = threading.Lock()

    def add_error(self, context: ErrorContext) -> bool:
        """Record an error. Returns False when it was a duplicate."""
        now = time.time()
        with self._lock:
            self._counts[context.key] += 1
            last = self._last_seen.get(context.key)
            if last is not None and now - last < self._dedup_window:
                return False
            self._last_seen[context.key] = now
            self._errors.append(context)
            return True

    def get_error_summary(self) -> Dict[str, Any]:
        with self._lock:
            return {
                'total_errors': len(self._errors),
                'by_category': dict(Counter(e.category.value for e in self._errors)),
                'by_severity': dict(Counter(e.severity.value for e in self._errors)),
                'deduplicated_counts': dict(self._counts),
            }

    def get_recent_errors(self, count: int = 10) -> List[Dict[str, Any]]:
        with self._lock:
            return [e.to_dict() for e in list(self._errors)[-count:]]

    def clear(self):
        with self._lock:
            self._errors.clear()
            self._counts.clear()
            self._last_seen.clear()


_global_aggregator = ErrorAggregator()


def get_error_aggregator() -> ErrorAggregator:
    """The process-wide aggregator used by handle_error()."""
    return _global_aggregator


def determine_severity(error: BaseException, category: ErrorCategory) -> ErrorSeverity:
    """Severity from the error type and category."""
    if isinstance(error, (SystemExit, KeyboardInterrupt)):
        return ErrorSeverity.CRITICAL
    # Missing configuration means demo data, not a broken app
    if category == ErrorCategory.CONFIG:
        return ErrorSeverity.WARNING
    if isinstance(error, (TimeoutError, FileNotFoundError)):
        return ErrorSeverity.WARNING
    if 'timeout' in str(error).lower() or 'timed out' in str(error).lower():
        return ErrorSeverity.WARNING
    return ErrorSeverity.ERROR


def handle_error(
    error: Exception,
    operation: str,
    category: ErrorCategory = ErrorCategory.UNKNOWN,
    severity: Optional[ErrorSeverity] = None,
    additional_context: Optional[Dict[str, Any]] = None,
    reraise: bool = False,
    log_level: Optional[int] = None,
) -> ErrorContext:
    """
    Log and record an error.

    Args:
        error: The exception that occurred
        operation: What was being attempted ("refreshing weather")
        category: Category of the error
        severity: Severity (derived from the error when omitted)
        additional_context: Extra key/value details for the log record
        reraise: Raise the error again after recording it
        log_level: Override the level derived from severity

    Returns:
        The recorded ErrorContext
    """
    context = ErrorContext(
        error=error,
        category=category,
        severity=severity or determine_severity(error, category),
        operation=operation,
        additional_context=additional_context or {},
    )
    level = log_level if log_level is not None else context.severity.log_level

    if _global_aggregator.add_error(context):
        logger.log(level, context.format_log_message())
    else:
        logger.log(level, f"[repeat] {operation}: {type(error).__name__}: {error}")

    if reraise:
        raise error
    return context


class ExecutionResult:
    """Outcome of a safe_execute() block."""

    def __init__(self, default: Any = None):
        self.value = default
        self.error: Optional[ErrorContext] = None
        self.success = True


@contextmanager
def safe_execute(
    operation: str,
    category: ErrorCategory = ErrorCategory.UNKNOWN,
    default_return: Any = None,
    reraise: bool = False,
    additional_context: Optional[Dict[str, Any]] = None,
):
    """
    Run a block, recording instead of propagating any exception.

    The yielded ExecutionResult carries `value` (set it inside the block),
    `success`, and `error` (the ErrorContext on failure).
    """
    result = ExecutionResult(default_return)
    try:
        yield result
    except Exception as e:
        result.success = False
        result.value = default_return
        result.error = handle_error(e, operation, category=category,
                                    additional_context=additional_context, reraise=reraise)


def with_error_handling(
    category: ErrorCategory = ErrorCategory.UNKNOWN,
    operation: Optional[str] = None,
    default_return: Any = None,
    reraise: bool = False,
    log_args: bool = False,
    retry_count: int = 0,
    retry_delay: float = 1.0,
    retry_backoff: float = 2.0,
    retry_exceptions: Optional[Tuple[Type[Exception], ...]] = None,
):
    """
    Decorator that records failures and optionally retries.

    Args:
        category: Error category for this function
        operation: Operation name (defaults to the function name)
        default_return: Returned when the call fails and reraise is False
        reraise: Raise the last error once retries are used up
        log_args: Include the call arguments in the log record
        retry_count: Extra attempts after the first
        retry_delay: Seconds before the first retry
        retry_backoff: Multiplier applied to the delay after each retry
        retry_exceptions: Only these exception types are retried (all when None)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        op_name = operation or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            delay = retry_delay
            max_attempts = retry_count + 1
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    retryable = retry_exceptions is None or isinstance(e, retry_exceptions)
                    will_retry = retryable and attempt < max_attempts

                    details: Dict[str, Any] = {
                        'attempt': f"{attempt}/{max_attempts}",
                        'will_retry': will_retry,
                    }
                    if log_args:
                        details['args'] = repr(args)[:500]
                        details['kwargs'] = repr(kwargs)[:500]
                    handle_error(e, op_name, category=category, additional_context=details)

                    if not will_retry:
                        if reraise:
                            raise
                        return default_return

                    logger.info(f"Retrying {op_name} in {delay:.1f}s")
                    time.sleep(delay)
                    delay *= retry_backoff
            return default_return

        return wrapper
    return decorator


def log_filesystem_error(error: Exception, operation: str, **context) -> ErrorContext:
    """Record a filesystem error (log files, exports)."""
    return handle_error(error, operation, category=ErrorCategory.FILESYSTEM,
                        additional_context=context)


__all__ = [
    'ErrorCategory',
    'ErrorSeverity',
    'ErrorContext',
    'ErrorAggregator',
    'ExecutionResult',
    'get_error_aggregator',
    'determine_severity',
    'handle_error',
    'safe_execute',
    'with_error_handling',
    'log_filesystem_error',
]
