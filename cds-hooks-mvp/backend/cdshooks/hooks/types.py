"""
CDS Hooks 的标准数据结构。

HookRequest 是 handler 唯一认识的请求格式；Card / CardResponse 是 Card
Generator 唯一产出的格式。业务层永远不直接拼 JSON，序列化统一在
serializers.py。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Indicator(str, Enum):
    INFO = 'info'
    WARNING = 'warning'
    CRITICAL = 'critical'


class ActionType(str, Enum):
    CREATE = 'create'
    UPDATE = 'update'
    DELETE = 'delete'


@dataclass
class HookRequest:
    """
    一次 hook 调用的请求体。

    context   hook 相关的临床状态；1.x 是 dict，早期草案是 [resource, ...]。
    prefetch  key 与 ServiceDescriptor.prefetch 模板的 key 一致。
    """

    hook: str
    hook_instance: str = ""
    fhir_server: str = ""
    fhir_authorization: Optional[dict] = None
    user: str = ""
    context: Any = None
    prefetch: dict = field(default_factory=dict)
    raw_payload: Any = field(default=None, repr=False)


@dataclass(frozen=True)
class Coding:
    display: str
    system: str
    code: str


@dataclass(frozen=True)
class MedicationConcept:
    text: str
    coding: tuple[Coding, ...]


@dataclass
class Link:
    label: str
    url: str
    type: str = 'absolute'


@dataclass
class Source:
    label: str
    url: str = ""


@dataclass
class Action:
    type: ActionType
    resource: dict
    description: str = ""


@dataclass
class Suggestion:
    label: str
    actions: list[Action] = field(default_factory=list)


@dataclass
class Card:
    summary: str
    indicator: Indicator = Indicator.INFO
    source: Optional[Source] = None
    links: list[Link] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)


@dataclass
class CardResponse:
    cards: list[Card] = field(default_factory=list)
