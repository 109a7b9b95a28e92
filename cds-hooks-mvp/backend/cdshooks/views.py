"""
CDS Hooks endpoints.

GET  /cds-services          → DiscoveryView
POST /cds-services/<id>     → HookServiceView

View 层只负责：拿到 request.data → 交给 hook handler → 序列化。
认证由 DRF authentication/permission 完成，异常由 exception_handler 统一格式化。
"""

import logging

from django.http import JsonResponse
from rest_framework.views import APIView

from .catalog import SERVICES, get_service
from .exception_handler import JSON_DUMPS_PARAMS, error_response
from .hooks import get_handler
from .serializers import serialize_card_response, serialize_discovery

logger = logging.getLogger(__name__)


class DiscoveryView(APIView):
    """GET /cds-services - List every CDS Service this endpoint offers"""

    def get(self, request):
        logger.info("[Discovery] advertising %d service(s)", len(SERVICES))
        return JsonResponse(serialize_discovery(SERVICES), json_dumps_params=JSON_DUMPS_PARAMS)


class HookServiceView(APIView):
    """POST /cds-services/<service_id> - Invoke a hook, respond with cards"""

    def post(self, request, service_id):
        service = get_service(service_id)
        handler = get_handler(service, request.data)
        response = handler.process()
        return JsonResponse(serialize_card_response(response), json_dumps_params=JSON_DUMPS_PARAMS)


def not_found(request, exception=None):
    """handler404: unadvertised paths get the unified error body instead of Django's HTML page."""
    logger.info("[Discovery] no CDS service at %s %s", request.method, request.path)
    return error_response(
        'not_found',
        'UNKNOWN_SERVICE',
        f"No CDS service at {request.path!r}.",
        detail={'known_services': [s.id for s in SERVICES]},
        status=404,
    )
