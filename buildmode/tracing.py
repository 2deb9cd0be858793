"""
OpenTelemetry Tracing Setup
===========================
Optional distributed tracing for dispatcher runs.

One span covers the selected pipeline and one child span covers each step.
Disabled unless ENABLE_TRACING=true; a disabled tracer is the OpenTelemetry
no-op tracer, so instrumented code paths stay the same.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

import atexit
from typing import Any, Mapping, Optional

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME

from buildmode.config import TRACING

SERVICE_NAME_VALUE = TRACING.SERVICE_NAME
OTLP_ENDPOINT = TRACING.OTLP_ENDPOINT
ENABLE_TRACING = TRACING.ENABLED

_provider: Optional[TracerProvider] = None
_tracer = None


def _cleanup_tracing() -> None:
    """Flush pending spans on exit."""
    if _provider is not None:
        try:
            _provider.shutdown()
        except Exception:
            pass  # Best effort cleanup


def setup_tracing(service_name: str = SERVICE_NAME_VALUE) -> trace.Tracer:
    """
    Install a tracer provider that exports spans over OTLP/HTTP.

    Args:
        service_name: Name of the service for trace identification

    Returns:
        Configured tracer instance
    """
    global _provider

    _provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))
    _provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=OTLP_ENDPOINT)))
    trace.set_tracer_provider(_provider)

    atexit.register(_cleanup_tracing)

    return trace.get_tracer(service_name)


def get_tracer(name: str = SERVICE_NAME_VALUE) -> trace.Tracer:
    return trace.get_tracer(name)


def init_tracing() -> trace.Tracer:
    """
    Initialize tracing if not already done.

    Returns:
        The global tracer instance (or NoOp tracer if disabled)
    """
    global _tracer
    if _tracer is None:
        if ENABLE_TRACING:
            _tracer = setup_tracing()
        else:
            _tracer = trace.get_tracer(SERVICE_NAME_VALUE)
    return _tracer


def safe_set_span_attributes(span: Any, attributes: Mapping[str, Any]) -> None:
    """Best-effort attribute setter.

    Scalars are set as-is, sequences as lists of strings, anything else as its
    string form. Never raises.
    """

    setter = getattr(span, "set_attribute", None)
    if not callable(setter):
        return

    for key, value in attributes.items():
        if not isinstance(key, str) or not key or value is None:
            continue
        try:
            if isinstance(value, (bool, int, float)):
                setter(key, value)
            elif isinstance(value, str):
                setter(key, value[:2048])
            elif isinstance(value, (list, tuple)):
                setter(key, [str(x)[:256] for x in list(value)[:25]])
            else:
                setter(key, str(value)[:2048])
        except Exception:
            # Never break a build due to tracing.
            continue
