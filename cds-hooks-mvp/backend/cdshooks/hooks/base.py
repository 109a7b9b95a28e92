"""
BaseHookHandler: 所有 hook handler 的抽象基类。

每个新 hook 只需：
1. 继承 BaseHookHandler
2. 声明 hooks（接受的 hook 名）并实现 extract() 和 evaluate()
3. 在 factory.py 的 _build_registry() 注册一行

views.py 不需要任何改动。
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from ..catalog import ServiceDescriptor
from ..exceptions import MalformedContextError, ValidationError
from .types import CardResponse, HookRequest

logger = logging.getLogger(__name__)


class BaseHookHandler(ABC):
    """
    三步流水线：parse → extract → evaluate

    parse() 提供通用的 HookRequest 解析；
    子类必须实现 extract()（校验并取出 hook 专属上下文）和 evaluate()（调用 Card Generator）。
    """

    # 子类声明自己能处理的 hook 名（与 ServiceDescriptor.hook 对应）
    hooks: tuple[str, ...] = ()

    def __init__(self, service: ServiceDescriptor, payload: Any):
        self.service = service
        self._payload = payload
        self.request: HookRequest | None = None

    # ── 提供默认实现，子类可 override ──────────────────────────────────────

    def parse(self) -> HookRequest:
        """原始 JSON (dict) → HookRequest。"""
        raw = self._payload
        if not isinstance(raw, dict):
            raise ValidationError(
                message="Hook request body must be a JSON object.",
                code='INVALID_HOOK_REQUEST',
            )

        hook = raw.get('hook') or self.service.hook
        if hook not in self.hooks:
            raise ValidationError(
                message=f"Service {self.service.id!r} does not handle hook {hook!r}.",
                code='HOOK_MISMATCH',
                detail={'service': self.service.id, 'accepted_hooks': list(self.hooks)},
            )

        prefetch = raw.get('prefetch') or {}
        if not isinstance(prefetch, dict):
            raise MalformedContextError(
                message="Hook prefetch must be a JSON object.",
                detail={'errors': [{'field': 'prefetch', 'message': 'Expected an object.'}]},
            )

        self.request = HookRequest(
            hook=hook,
            hook_instance=str(raw.get('hookInstance') or ''),
            fhir_server=str(raw.get('fhirServer') or ''),
            fhir_authorization=raw.get('fhirAuthorization'),
            user=str(raw.get('user') or ''),
            context=raw.get('context'),
            prefetch=prefetch,
            raw_payload=raw,
        )
        return self.request

    # ── 必须实现 ───────────────────────────────────────────────────────────

    @abstractmethod
    def extract(self, request: HookRequest) -> Any:
        """
        从 HookRequest 取出 Card Generator 需要的上下文。

        结构不对时抛 MalformedContextError；
        结构正确但与本服务无关时返回 None（→ 空 cards）。
        """

    @abstractmethod
    def evaluate(self, extracted: Any) -> CardResponse:
        """把 extract() 的结果交给 Card Generator。"""

    # ── 对外统一入口 ───────────────────────────────────────────────────────

    def process(self) -> CardResponse:
        """parse → extract → evaluate，返回 CardResponse。"""
        request = self.parse()
        logger.info("[Hook][%s] hook=%s hookInstance=%s",
                    self.service.id, request.hook, request.hook_instance or '-')

        extracted = self.extract(request)
        if extracted is None:
            logger.info("[Hook][%s] no applicable context, returning no cards", self.service.id)
            return CardResponse(cards=[])

        response = self.evaluate(extracted)
        logger.info("[Hook][%s] returning %d card(s)", self.service.id, len(response.cards))
        return response

    # ── 共用工具 ───────────────────────────────────────────────────────────

    @staticmethod
    def malformed(errors: list[dict]) -> MalformedContextError:
        logger.warning("[Hook] malformed context: %s", errors)
        return MalformedContextError(
            message="Hook context is missing required fields.",
            detail={'errors': errors},
        )

    @staticmethod
    def first(value: Any) -> Any:
        """FHIR 里很多字段既可能是 list 也可能是标量（DSTU2 vs STU3），统一取第一个。"""
        if isinstance(value, list):
            return value[0] if value else None
        return value
