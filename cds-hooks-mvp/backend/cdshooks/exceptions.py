"""
统一异常体系。

所有业务异常继承 BaseAppException，包含：
- type:        错误类型标识（validation_error / not_found / error）
- code:        业务错误码（MALFORMED_CONTEXT / HOOK_MISMATCH / UNKNOWN_SERVICE / ...）
- message:     人类可读的描述
- detail:      可选的附加信息（dict / list / None）
- http_status: HTTP 状态码

View 和 hook handler 只需 raise，exception_handler 统一捕获并格式化响应。
Authentication failures are not part of this hierarchy: they use DRF's
AuthenticationFailed so DRF attaches the WWW-Authenticate challenge.
"""


class BaseAppException(Exception):
    """所有业务异常的基类。"""

    type = 'error'
    code = 'UNKNOWN_ERROR'
    http_status = 500

    def __init__(self, message, code=None, detail=None, http_status=None):
        self.message = message
        if code is not None:
            self.code = code
        if http_status is not None:
            self.http_status = http_status
        self.detail = detail
        super().__init__(message)


class ValidationError(BaseAppException):
    """Request body failed validation (the protocol's BadRequest). 400."""

    type = 'validation_error'
    code = 'VALIDATION_ERROR'
    http_status = 400


class MalformedContextError(ValidationError):
    """
    Hook payload is missing the context / prefetch fields the hook requires.

    detail 固定为 {"errors": [{"field": ..., "message": ...}, ...]}。
    """

    code = 'MALFORMED_CONTEXT'


class UnknownServiceError(BaseAppException):
    """POST to a service id that is not in the discovery catalog. 404."""

    type = 'not_found'
    code = 'UNKNOWN_SERVICE'
    http_status = 404
