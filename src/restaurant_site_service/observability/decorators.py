"""OpenTelemetry tracing decorators."""

import asyncio
import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span

from restaurant_site_service.observability.config import SERVICE_NAME

F = TypeVar("F", bound=Callable[..., Any])


@contextmanager
def _operation_span(
    tracer: trace.Tracer, name: str, func_name: str, service_name: str
) -> Iterator[Span]:
    with tracer.start_as_current_span(name) as span:
        span.set_attribute("service.name", service_name)
        span.set_attribute("function.name", func_name)
        try:
            yield span
        except Exception as e:
            span.set_attribute("success", False)
            span.set_attribute("error.type", type(e).__name__)
            span.record_exception(e)
            raise
        span.set_attribute("success", True)


def traced(span_name: str | None = None, service_name: str = SERVICE_NAME) -> Callable[[F], F]:
    """Decorator that runs a function inside its own OpenTelemetry span.

    Exceptions are recorded on the span and re-raised. Coroutine functions
    get an async wrapper.

    Args:
        span_name: Name for the span (defaults to the function name)
        service_name: Service name for span attributes

    Returns:
        Decorated function with tracing

    Example:
        @traced("reservations.available_time_slots")
        async def get_available_time_slots(self, reservation_date: date) -> list[TimeSlot]:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        tracer = trace.get_tracer(service_name)

        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _operation_span(tracer, name, func.__name__, service_name):
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _operation_span(tracer, name, func.__name__, service_name):
                return func(*args, **kwargs)

        return sync_wrapper  # type: ignore

    return decorator
