from opentelemetry import propagate
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator


def test_tracecontext_propagator_installed(app):
    assert isinstance(propagate.get_global_textmap(), TraceContextTextMapPropagator)


def test_no_traceparent_without_tracing(client):
    resp = client.get('/__ok')
    assert resp.status_code == 200
    assert 'traceparent' not in resp.headers
