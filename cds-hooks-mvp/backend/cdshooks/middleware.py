"""
CORS 兜底。

CorsMiddleware 只处理带 Origin 的请求；EHR 的服务端调用、curl、裸 OPTIONS
不带 Origin，也要拿到同一套 CORS 头。这里用 settings 里的 CORS_* 补上，
Allow-Origin 固定为 "*"。
"""

from django.conf import settings


class StaticCorsHeadersMiddleware:
    """Adds the configured CORS header set to responses for requests without an Origin header."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        if 'origin' in request.headers:
            # 交给 CorsMiddleware
            return response

        response['Access-Control-Allow-Origin'] = '*'
        response['Access-Control-Allow-Methods'] = ', '.join(settings.CORS_ALLOW_METHODS)
        response['Access-Control-Allow-Headers'] = ', '.join(settings.CORS_ALLOW_HEADERS)
        if settings.CORS_ALLOW_CREDENTIALS:
            response['Access-Control-Allow-Credentials'] = 'true'
        if settings.CORS_EXPOSE_HEADERS:
            response['Access-Control-Expose-Headers'] = ', '.join(settings.CORS_EXPOSE_HEADERS)
        return response
