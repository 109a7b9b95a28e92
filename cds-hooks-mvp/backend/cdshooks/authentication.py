"""
Authorization Gate: DRF authentication + permission classes.

CDS Hooks 的 EHR 调用时带 `Authorization: Bearer <JWT>`。
这里只做 scheme 检查；token 的签名 / audience / exp / issuer 校验交给
CDS_HOOKS['TOKEN_VERIFIER'] 指向的函数，默认实现全部放行。

OPTIONS 永远放行：带 Access-Control-Request-Method 的 pre-flight 在
CorsMiddleware 就返回了，走到 view 的裸 OPTIONS 在这里跳过认证。
"""

import logging

from django.utils.module_loading import import_string
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import BasePermission

from .conf import hooks_setting

logger = logging.getLogger(__name__)

ERROR_DESCRIPTION = 'The access token is missing, malformed or was rejected'


class HookClient:
    """The calling EHR, identified only by the bearer token it presented."""

    is_authenticated = True

    def __init__(self, token):
        self.token = token

    def __repr__(self):
        return f"HookClient(token={self.token[:8]!r}...)"


def accept_any_token(token, audience):
    """
    Reference verifier: accepts every token.

    A real deployment points CDS_HOOKS['TOKEN_VERIFIER'] at a function that
    checks the JWT signature against the EHR's trusted issuers, that `aud`
    equals ``audience`` (the service URL), and that it has not expired.
    """
    return True


def get_token_verifier():
    return import_string(hooks_setting('TOKEN_VERIFIER'))


class BearerTokenAuthentication(BaseAuthentication):
    keyword = 'Bearer'

    def authenticate(self, request):
        if request.method == 'OPTIONS':
            return None

        if 'HTTP_AUTHORIZATION' in request.META:
            header = request.META['HTTP_AUTHORIZATION']
        else:
            if hooks_setting('REQUIRE_AUTH'):
                logger.warning("[Auth] rejected %s %s: no Authorization header", request.method, request.path)
                raise AuthenticationFailed('Authorization header is required.')
            logger.debug("[Auth] no Authorization header on %s, using default credential", request.path)
            header = hooks_setting('DEFAULT_CREDENTIAL')

        parts = header.split(' ', 1)
        if parts[0] != self.keyword or len(parts) != 2 or not parts[1].strip():
            logger.warning("[Auth] rejected %s %s: not a Bearer credential", request.method, request.path)
            raise AuthenticationFailed('Authorization header must use the Bearer scheme.')

        token = parts[1].strip()
        verify = get_token_verifier()
        if not verify(token, audience=request.build_absolute_uri()):
            logger.warning("[Auth] rejected %s %s: token failed verification", request.method, request.path)
            raise AuthenticationFailed('Access token was rejected.')

        return HookClient(token), token

    def authenticate_header(self, request):
        return (
            f'{self.keyword} realm="{request.get_host()}", '
            f'error="invalid_token", '
            f'error_description="{ERROR_DESCRIPTION}"'
        )


class IsHookClient(BasePermission):
    """OPTIONS 放行，其余请求必须经过 BearerTokenAuthentication。"""

    def has_permission(self, request, view):
        if request.method == 'OPTIONS':
            return True
        return request.auth is not None
