"""
Metrics instrumentation.

All application metrics are registered once, at import time, on the
default Prometheus registry.
"""
from functools import wraps
import time

from prometheus_client import Counter, Histogram


class MetricsRegistry:
    """
    Central metrics registry for the Rx API.

    Provides typed access to all application metrics.
    """

    def __init__(self):
        """Initialize metrics registry."""
        self._setup_metrics()

    def _setup_metrics(self):
        """Setup all application metrics."""

        # ===================================================================
        # HTTP Metrics
        # ===================================================================
        self.http_requests_total = Counter(
            'rx_http_requests_total',
            'Total HTTP requests',
            ['method', 'status']
        )

        self.http_request_duration_seconds = Histogram(
            'rx_http_request_duration_seconds',
            'HTTP request duration in seconds',
            ['method'],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
        )

        self.exceptions_total = Counter(
            'rx_exceptions_total',
            'Total exceptions',
            ['exception_type', 'location']
        )

        # ===================================================================
        # Prescription Metrics
        # ===================================================================
        self.prescriptions_created_total = Counter(
            'rx_prescriptions_created_total',
            'Prescriptions created',
            ['patient_source']  # existing | inline
        )

        self.prescriptions_failed_total = Counter(
            'rx_prescriptions_failed_total',
            'Prescription authoring failures (rolled back)',
            ['reason']  # doctor_not_found, patient_not_found, error
        )

        self.prescription_lines_total = Counter(
            'rx_prescription_lines_total',
            'Prescription line items written',
            ['kind']  # medicine | investigation
        )

        self.prescription_create_duration_seconds = Histogram(
            'rx_prescription_create_duration_seconds',
            'Duration of the prescription authoring transaction',
            buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
        )

        self.identifier_collisions_total = Counter(
            'rx_identifier_collisions_total',
            'Human-readable identifier collisions retried',
            ['prefix']
        )

        # ===================================================================
        # Document Metrics
        # ===================================================================
        self.documents_rendered_total = Counter(
            'rx_documents_rendered_total',
            'Documents rendered',
            ['kind', 'result']  # kind: prescription|certificate
        )

        self.document_render_duration_seconds = Histogram(
            'rx_document_render_duration_seconds',
            'PDF render duration',
            ['kind'],
            buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
        )

        self.documents_shared_total = Counter(
            'rx_documents_shared_total',
            'Documents shared',
            ['channel', 'result']  # channel: email|link
        )

        self.share_links_purged_total = Counter(
            'rx_share_links_purged_total',
            'Expired share links removed'
        )

        # ===================================================================
        # Catalog Metrics
        # ===================================================================
        self.external_medicine_lookups_total = Counter(
            'rx_external_medicine_lookups_total',
            'External medicine catalog lookups',
            ['result']  # success | fallback
        )

    def track_duration(self, histogram_metric):
        """
        Decorator to track function duration.

        Usage:
            @metrics.track_duration(metrics.prescription_create_duration_seconds)
            def create_prescription(...):
                ...
        """
        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start_time = time.time()
                try:
                    return func(*args, **kwargs)
                finally:
                    histogram_metric.observe(time.time() - start_time)
            return wrapper
        return decorator


# Global metrics instance
metrics = MetricsRegistry()
