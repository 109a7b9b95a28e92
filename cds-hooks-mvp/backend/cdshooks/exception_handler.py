"""
统一异常处理器。

挂到 DRF 的 EXCEPTION_HANDLER setting 上。
EHR 端可以用同一套逻辑判断响应：
  body.type 存在 → 出问题了
  body.cards / body.services 存在 → 成功

统一错误响应格式：
{
    "type":    "validation_error" | "not_found" | "error",
    "code":    "MALFORMED_CONTEXT",
    "message": "Hook context is missing required fields.",
    "detail":  { ... }  // 可选
}

Authentication failures are the one exception to the format: the CDS Hooks
trust model answers them with an empty 401 plus a WWW-Authenticate challenge.
"""

import logging

from django.http import HttpResponse, JsonResponse
from rest_framework import exceptions as drf_exceptions
from rest_framework.views import exception_handler as drf_default_handler

from .exceptions import BaseAppException

logger = logging.getLogger(__name__)

JSON_DUMPS_PARAMS = {'indent': 2}


def error_response(exc_type, code, message, detail=None, status=400):
    body = {
        'type': exc_type,
        'code': code,
        'message': message,
    }
    if detail is not None:
        body['detail'] = detail
    return JsonResponse(body, status=status, json_dumps_params=JSON_DUMPS_PARAMS)


def unified_exception_handler(exc, context):
    """
    DRF exception handler entry point.

    优先级：
    1. 认证失败 → 空 body 的 401 + WWW-Authenticate
    2. BaseAppException 及其子类 → 统一格式
    3. DRF 自带的 ParseError / ValidationError / MethodNotAllowed → 转成统一格式
    4. 其他异常 → 交给 DRF 默认处理
    """

    # --- 1. Authorization gate rejections ---
    if isinstance(exc, (drf_exceptions.AuthenticationFailed, drf_exceptions.NotAuthenticated)):
        auth_header = getattr(exc, 'auth_header', None)
        if auth_header is None:
            # DRF already downgraded this to 403 because no authenticator
            # could produce a challenge.
            response = HttpResponse(status=exc.status_code)
        else:
            response = HttpResponse(status=401)
            response['WWW-Authenticate'] = auth_header
        # body 为空，不声明 Content-Type
        del response['Content-Type']
        return response

    # --- 2. 我们自己的异常体系 ---
    if isinstance(exc, BaseAppException):
        return error_response(exc.type, exc.code, exc.message, exc.detail, exc.http_status)

    # --- 3. DRF 自带的异常 ---
    if isinstance(exc, drf_exceptions.ParseError):
        return error_response('validation_error', 'INVALID_JSON', 'Request body is not valid JSON.',
                              detail=str(exc.detail), status=400)

    if isinstance(exc, drf_exceptions.ValidationError):
        return error_response('validation_error', 'VALIDATION_ERROR', 'Request validation failed',
                              detail=exc.detail, status=400)

    if isinstance(exc, drf_exceptions.MethodNotAllowed):
        return error_response('error', 'METHOD_NOT_ALLOWED', str(exc.detail), status=405)

    # --- 4. 其他的交给 DRF 默认处理 ---
    logger.debug("[ExceptionHandler] falling back to DRF default for %s", type(exc).__name__)
    return drf_default_handler(exc, context)
