"""
Discovery catalog: 本服务对外声明的全部 CDS Service。

进程启动时构建一次，之后只读；所有请求共享同一份 SERVICES。
新增服务：在 SERVICES 加一个 ServiceDescriptor，并在 hooks/factory.py
为它的 hook 注册 handler。urls.py 会自动为它生成 POST 路由。
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from .exceptions import UnknownServiceError


@dataclass(frozen=True)
class ServiceDescriptor:
    hook: str
    id: str
    title: str
    description: str
    prefetch: Optional[Mapping[str, str]] = None

    def __post_init__(self):
        # frozen 只挡住属性赋值，prefetch 本身也要只读
        if self.prefetch is not None:
            object.__setattr__(self, 'prefetch', MappingProxyType(dict(self.prefetch)))


PATIENT_VIEW_EXAMPLE = ServiceDescriptor(
    hook='patient-view',
    id='patient-view-example',
    title='Example patient-view CDS Service',
    description='Displays the name and gender of the patient',
    # EHR fills out the template for the patient in context
    prefetch={'requestedPatient': 'Patient/{{Patient.id}}'},
)

MEDICATION_PRESCRIBE_EXAMPLE = ServiceDescriptor(
    hook='medication-prescribe',
    id='medication-prescribe-example',
    title='Example medication-prescribe CDS Service',
    description='Suggests prescribing Aspirin 81 MG Oral Tablets',
)

SERVICES: tuple[ServiceDescriptor, ...] = (
    PATIENT_VIEW_EXAMPLE,
    MEDICATION_PRESCRIBE_EXAMPLE,
)


def get_service(service_id: str) -> ServiceDescriptor:
    """
    按 id 查找 ServiceDescriptor。

    Raises:
        UnknownServiceError: id 不在 catalog 里
    """
    for service in SERVICES:
        if service.id == service_id:
            return service
    raise UnknownServiceError(
        message=f"Unknown CDS service: {service_id!r}.",
        detail={'known_services': [s.id for s in SERVICES]},
    )
