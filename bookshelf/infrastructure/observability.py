# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time

from flask import Flask, g, request
from prometheus_client import Counter, Histogram, make_wsgi_app
from werkzeug.middleware.dispatcher import DispatcherMiddleware

REQUEST_LATENCY = Histogram(
    "bookshelf_request_latency_seconds",
    "Request latency",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_COUNTER = Counter(
    "bookshelf_requests_total",
    "Number of processed requests",
    labelnames=("endpoint", "status"),
)
LOGIN_COUNTER = Counter(
    "bookshelf_logins_total",
    "Login attempts by outcome",
    labelnames=("outcome",),
)
SESSION_REJECTIONS = Counter(
    "bookshelf_session_rejections_total",
    "Requests refused by the session check",
    labelnames=("reason",),
)


def install_metrics(app: Flask, *, path: str = "/metrics") -> None:
    """Record per-request metrics and serve them at ``path``.

    The exporter is mounted next to the Flask app, so scrapes never pass
    through the session check.
    """

    @app.before_request
    def _start_timer() -> None:
        g.metrics_started_at = time.perf_counter()

    @app.after_request
    def _observe(response):
        started = getattr(g, "metrics_started_at", None)
        if started is not None:
            REQUEST_LATENCY.observe(time.perf_counter() - started)
        endpoint = request.url_rule.rule if request.url_rule else "unmatched"
        REQUEST_COUNTER.labels(endpoint=endpoint, status=str(response.status_code)).inc()
        return response

    app.wsgi_app = DispatcherMiddleware(app.wsgi_app, {path: make_wsgi_app()})


__all__ = [
    "LOGIN_COUNTER",
    "REQUEST_COUNTER",
    "REQUEST_LATENCY",
    "SESSION_REJECTIONS",
    "install_metrics",
]
