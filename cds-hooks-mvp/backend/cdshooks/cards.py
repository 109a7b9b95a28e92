"""
Card Generator: 纯函数，输入已提取的临床上下文，输出 CardResponse。

不碰 HTTP、不碰原始 payload 的解析；handler 负责把 payload 变成这里需要的参数。
"""

import copy

from .hooks.types import (
    Action,
    ActionType,
    Card,
    CardResponse,
    Coding,
    Indicator,
    Link,
    MedicationConcept,
    Source,
    Suggestion,
)

RXNORM_SYSTEM = 'http://www.nlm.nih.gov/research/umls/rxnorm'

# Aspirin 81 MG Oral Tablet
LOW_DOSE_ASPIRIN = MedicationConcept(
    text='Aspirin 81 MG Oral Tablet',
    coding=(
        Coding(
            display='Aspirin 81 MG Oral Tablet',
            system=RXNORM_SYSTEM,
            code='243670',
        ),
    ),
)

CDS_HOOKS_LINK = Link(label='Learn more about CDS Hooks', url='http://cds-hooks.org', type='absolute')
SUGGESTIONS_SOURCE = Source(
    label='Learn more about Suggestions',
    url='http://cds-hooks.org/#cds-service-response',
)


def concept_to_fhir(concept: MedicationConcept) -> dict:
    return {
        'text': concept.text,
        'coding': [
            {'display': c.display, 'system': c.system, 'code': c.code}
            for c in concept.coding
        ],
    }


def patient_greeting(given: str, family: str) -> CardResponse:
    """patient-view: one info card naming the patient in context."""
    return CardResponse(cards=[
        Card(
            summary=f"Now seeing: {given} {family}",
            indicator=Indicator.INFO,
            links=[CDS_HOOKS_LINK],
        ),
    ])


def recommended_order(draft_order: dict, concept: MedicationConcept = LOW_DOSE_ASPIRIN) -> dict:
    """Copy of the draft order with its medication swapped for ``concept``. Input is left untouched."""
    order = copy.deepcopy(draft_order)
    order['medicationCodeableConcept'] = concept_to_fhir(concept)
    return order


def medication_recommendation(draft_order: dict, ordered_code: str) -> CardResponse:
    """
    medication-prescribe / order-select 规则：

    - 已经在开 81 MG Aspirin → info 卡片，不给 suggestion
    - 其他药物 → warning 卡片 + 一个 "create" action，资源是替换成 Aspirin 的 order 副本
    """
    target_code = LOW_DOSE_ASPIRIN.coding[0].code

    if ordered_code == target_code:
        return CardResponse(cards=[
            Card(
                summary='Currently prescribing a low-dose Aspirin',
                indicator=Indicator.INFO,
            ),
        ])

    return CardResponse(cards=[
        Card(
            summary='Reduce cardiovascular risks, prescribe daily 81 MG Aspirin',
            indicator=Indicator.WARNING,
            suggestions=[
                Suggestion(
                    label='Switch to low-dose Aspirin',
                    actions=[
                        Action(
                            type=ActionType.CREATE,
                            resource=recommended_order(draft_order),
                        ),
                    ],
                ),
            ],
            source=SUGGESTIONS_SOURCE,
        ),
    ])
