from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
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

# Метрики регистрации и входа
account_registrations_total = Counter(
    'account_registrations_total',
    'Account registration attempts',
    ['outcome']
)
account_authentications_total = Counter(
    'account_authentications_total',
    'Account authentication attempts',
    ['outcome']
)

# Время вычисления дайджестов паролей
password_digest_seconds = Histogram(
    'password_digest_seconds',
    'Time spent computing password digests'
)

def metrics_endpoint():
    """Endpoint для Prometheus метрик"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
