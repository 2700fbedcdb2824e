from prometheus_client import Counter, Histogram, generate_latest
from fastapi import Response

# Метрики для HTTP запросов
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# Доменные метрики
accounts_registered_total = Counter(
    'accounts_registered_total',
    'Accounts registered',
    ['role']
)
logins_total = Counter(
    'logins_total',
    'Login attempts',
    ['role', 'outcome']
)
progress_entries_total = Counter('progress_entries_total', 'Progress entries recorded')

def metrics_endpoint():
    """Endpoint для Prometheus метрик"""
    return Response(content=generate_latest(), media_type="text/plain")
