"""
Shared fixtures for all tests.

factory-boy factories live here so both unit/ and integration/ can import them.
FHIR resources 都是 dict，所以用 DictFactory 而不是 DjangoModelFactory。
"""
import pytest
from django.test import Client

import factory

RXNORM = 'http://www.nlm.nih.gov/research/umls/rxnorm'
ASPIRIN_81_CODE = '243670'
AUTH_HEADER = {'HTTP_AUTHORIZATION': 'Bearer test-token'}
EHR_ORIGIN = 'http://ehr.example.org'


def medication_concept(code, text):
    return {
        'text': text,
        'coding': [{'display': text, 'system': RXNORM, 'code': code}],
    }


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

class PatientResourceFactory(factory.DictFactory):
    class Params:
        given = 'Ana'
        family = 'Lee'

    resourceType = 'Patient'
    id = factory.Sequence(lambda n: f'{1288992 + n}')
    gender = 'female'
    birthDate = '1970-08-09'
    name = factory.LazyAttribute(
        lambda o: [{'use': 'official', 'given': [o.given], 'family': [o.family]}]
    )


class MedicationOrderFactory(factory.DictFactory):
    class Params:
        code = '999999'
        drug = 'Acetaminophen 325 MG Oral Tablet'

    resourceType = 'MedicationOrder'
    id = factory.Sequence(lambda n: f'order-{n}')
    status = 'draft'
    dateWritten = '2017-05-05'
    patient = factory.LazyFunction(lambda: {'reference': 'Patient/1288992'})
    medicationCodeableConcept = factory.LazyAttribute(lambda o: medication_concept(o.code, o.drug))
    dosageInstruction = factory.LazyFunction(lambda: [{'text': 'one tablet by mouth daily'}])


class MedicationRequestFactory(MedicationOrderFactory):
    resourceType = 'MedicationRequest'
    intent = 'proposal'
    subject = factory.LazyFunction(lambda: {'reference': 'Patient/1288992'})


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------

def patient_view_body(patient=None, wrapped=True):
    patient = patient if patient is not None else PatientResourceFactory()
    entry = {'response': {'status': '200 OK'}, 'resource': patient} if wrapped else patient
    return {
        'hook': 'patient-view',
        'hookInstance': 'd1577c69-dfbe-44ad-ba6d-3e05e953b2ea',
        'fhirServer': 'https://fhir.example.org/r2',
        'user': 'Practitioner/example',
        'context': {'patientId': '1288992'},
        'prefetch': {'requestedPatient': entry},
    }


def medication_prescribe_body(order=None):
    """草案版：context 直接是 resource 列表。"""
    return {
        'hook': 'medication-prescribe',
        'hookInstance': '4bd2e1d0-4bd1-4e8b-b0c6-22f2e5e0f3a1',
        'fhirServer': 'https://fhir.example.org/r2',
        'context': [order if order is not None else MedicationOrderFactory()],
    }


def order_select_body(orders, selections):
    return {
        'hook': 'order-select',
        'hookInstance': '0f3b1a10-7a6d-4d8e-9f5a-2d0b1d1c9e01',
        'context': {
            'userId': 'Practitioner/example',
            'patientId': '1288992',
            'selections': selections,
            'draftOrders': {
                'resourceType': 'Bundle',
                'entry': [{'resource': o} for o in orders],
            },
        },
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def api_client():
    """Django test client for integration tests."""
    return Client()


@pytest.fixture
def patient_view_payload():
    """Minimal valid payload for POST /cds-services/patient-view-example."""
    return patient_view_body(PatientResourceFactory(given='Ana', family='Lee'))


@pytest.fixture
def medication_prescribe_payload():
    """Non-Aspirin draft order for POST /cds-services/medication-prescribe-example."""
    return medication_prescribe_body(MedicationOrderFactory(code='999999'))


@pytest.fixture
def aspirin_prescribe_payload():
    return medication_prescribe_body(
        MedicationOrderFactory(code=ASPIRIN_81_CODE, drug='Aspirin 81 MG Oral Tablet')
    )
