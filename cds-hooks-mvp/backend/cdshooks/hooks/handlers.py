"""
具体 hook handler 实现。

新增 hook：在此文件添加一个类，然后在 factory.py 注册即可。

已注册 hook：
  patient-view          PatientViewHandler         (prefetch.requestedPatient)
  medication-prescribe  MedicationPrescribeHandler (context 中的 draft order)
  order-select          MedicationPrescribeHandler (draftOrders + selections)
"""

from typing import Any, Optional

from .. import cards
from .base import BaseHookHandler
from .types import CardResponse, HookRequest

ORDER_RESOURCE_TYPES = ('MedicationOrder', 'MedicationRequest')


# ── PatientViewHandler ─────────────────────────────────────────────────────
#
# 请求示例：
# {
#   "hook": "patient-view",
#   "hookInstance": "d1577c69-dfbe-44ad-ba6d-3e05e953b2ea",
#   "context": { "patientId": "1288992" },
#   "prefetch": {
#     "requestedPatient": {
#       "response": { "status": "200 OK" },
#       "resource": {
#         "resourceType": "Patient",
#         "name": [{ "given": ["Ana"], "family": ["Lee"] }]
#       }
#     }
#   }
# }
#
# 1.x 的 EHR 直接把 resource 放在 prefetch key 下（没有 response/resource 包装），两种都接受。

class PatientViewHandler(BaseHookHandler):
    hooks = ('patient-view',)
    prefetch_key = 'requestedPatient'

    def _patient_resource(self, request: HookRequest) -> Any:
        entry = request.prefetch.get(self.prefetch_key)
        if isinstance(entry, dict) and 'resourceType' not in entry and 'resource' in entry:
            return entry['resource']
        return entry

    def extract(self, request: HookRequest) -> tuple[str, str]:
        path = f"prefetch.{self.prefetch_key}.resource"
        patient = self._patient_resource(request)
        if not isinstance(patient, dict):
            raise self.malformed([{'field': path, 'message': 'Patient resource is required.'}])

        name = self.first(patient.get('name'))
        if not isinstance(name, dict):
            raise self.malformed([{'field': f"{path}.name", 'message': 'At least one name entry is required.'}])

        errors = []
        given = self.first(name.get('given'))
        family = self.first(name.get('family'))
        if not isinstance(given, str) or not given.strip():
            errors.append({'field': f"{path}.name[0].given", 'message': 'Given name must be non-empty.'})
        if not isinstance(family, str) or not family.strip():
            errors.append({'field': f"{path}.name[0].family", 'message': 'Family name must be non-empty.'})
        if errors:
            raise self.malformed(errors)

        return given, family

    def evaluate(self, extracted: tuple[str, str]) -> CardResponse:
        given, family = extracted
        return cards.patient_greeting(given, family)


# ── MedicationPrescribeHandler ─────────────────────────────────────────────
#
# draft order 在 context 里的位置随 CDS Hooks 版本变化：
#
#   草案版:          "context": [ { "resourceType": "MedicationOrder", ... } ]
#   1.0 medication-prescribe:
#                    "context": { "medications": [ {...} ] }           ← list 或 Bundle
#   order-select:    "context": {
#                      "selections": [ "MedicationRequest/abc" ],
#                      "draftOrders": { "resourceType": "Bundle", "entry": [ { "resource": {...} } ] }
#                    }
#
# order-select 只看 selections 里列出的那一条；不在 selections 里的 draft 一律忽略。

class MedicationPrescribeHandler(BaseHookHandler):
    hooks = ('medication-prescribe', 'order-select')

    @staticmethod
    def _unwrap(item: Any) -> Any:
        # Bundle.entry 形式：{"resource": {...}}
        if isinstance(item, dict) and 'resourceType' not in item and 'resource' in item:
            return item['resource']
        return item

    def _resources(self, container: Any, field: str) -> list:
        if isinstance(container, dict) and container.get('resourceType') == 'Bundle':
            container = container.get('entry') or []
        if not isinstance(container, list):
            raise self.malformed([{'field': field, 'message': 'Expected a list of resources or a Bundle.'}])
        return [self._unwrap(item) for item in container]

    def _selected_order(self, context: dict) -> Optional[dict]:
        selections = context.get('selections')
        if not isinstance(selections, list):
            raise self.malformed([{'field': 'context.selections', 'message': 'Selections list is required.'}])

        for resource in self._resources(context.get('draftOrders'), 'context.draftOrders'):
            if not isinstance(resource, dict):
                continue
            reference = f"{resource.get('resourceType')}/{resource.get('id')}"
            if reference in selections:
                return resource
        return None

    def _draft_order(self, request: HookRequest) -> Any:
        context = request.context

        if isinstance(context, list):
            return self._unwrap(self.first(context))

        if not isinstance(context, dict):
            raise self.malformed([{'field': 'context', 'message': 'Hook context is required.'}])

        if 'draftOrders' in context or request.hook == 'order-select':
            return self._selected_order(context)

        if 'medications' in context:
            return self.first(self._resources(context['medications'], 'context.medications'))

        raise self.malformed([{'field': 'context.medications', 'message': 'Draft medication order is required.'}])

    def extract(self, request: HookRequest) -> Optional[tuple[dict, str]]:
        draft = self._draft_order(request)
        if draft is None:
            return None
        if not isinstance(draft, dict):
            raise self.malformed([{'field': 'context', 'message': 'Draft order must be a FHIR resource object.'}])

        if draft.get('resourceType') not in ORDER_RESOURCE_TYPES:
            return None

        concept = draft.get('medicationCodeableConcept')
        if not concept:
            return None

        coding = self.first(concept.get('coding')) if isinstance(concept, dict) else None
        code = coding.get('code') if isinstance(coding, dict) else None
        if not isinstance(code, str) or not code:
            raise self.malformed([{
                'field': 'medicationCodeableConcept.coding[0].code',
                'message': 'Medication coding must carry a code.',
            }])

        return draft, code

    def evaluate(self, extracted: tuple[dict, str]) -> CardResponse:
        draft, code = extracted
        return cards.medication_recommendation(draft, code)
