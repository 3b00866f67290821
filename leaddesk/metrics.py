"""Prometheus metrics."""

from prometheus_client import Counter, Histogram

api_requests_total = Counter('api_requests_total', 'Total API requests', ['method', 'endpoint', 'status'])
api_request_duration = Histogram('api_request_duration_seconds', 'API request duration')
leads_created = Counter('leads_created_total', 'Total leads created locally')
remote_syncs = Counter('remote_lead_syncs_total', 'Remote lead list syncs', ['outcome'])
remote_write_failures = Counter('remote_lead_write_failures_total', 'Lead writes the scoring backend did not accept')
