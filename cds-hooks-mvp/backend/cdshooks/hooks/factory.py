"""
工厂函数：根据 ServiceDescriptor.hook 返回对应 handler。

新增 hook 只需：
  1. 在 handlers.py 新建 Handler 类
  2. 在此处 _build_registry() 加一行
  不需要修改任何 view 代码。
"""

from typing import Any

from ..catalog import ServiceDescriptor
from ..exceptions import UnknownServiceError
from .base import BaseHookHandler


# ── 注册表 ──────────────────────────────────────────────────────────────────
# key: hook 名（ServiceDescriptor.hook）
# value: Handler 类（未实例化）
def _build_registry() -> dict[str, type[BaseHookHandler]]:
    # 延迟导入，避免循环依赖
    from .handlers import MedicationPrescribeHandler, PatientViewHandler

    return {
        "patient-view":         PatientViewHandler,
        "medication-prescribe": MedicationPrescribeHandler,
        "order-select":         MedicationPrescribeHandler,
    }


def get_handler(service: ServiceDescriptor, payload: Any) -> BaseHookHandler:
    """
    根据 service.hook 返回已实例化的 handler。

    Args:
        service: catalog 中的 ServiceDescriptor
        payload: 已解析的请求体（通常是 dict）

    Raises:
        UnknownServiceError: catalog 里声明了 hook，但没有注册 handler
    """
    registry = _build_registry()
    handler_cls = registry.get(service.hook)

    if handler_cls is None:
        raise UnknownServiceError(
            message=f"No handler registered for hook {service.hook!r}.",
            code="UNKNOWN_HOOK",
            detail={"known_hooks": list(registry.keys())},
        )

    return handler_cls(service=service, payload=payload)
