"""
Discovery catalog：两个服务、顺序固定、不可变。
"""
import dataclasses
import pytest

from cdshooks.catalog import SERVICES, ServiceDescriptor, get_service
from cdshooks.exceptions import UnknownServiceError
from cdshooks.serializers import serialize_discovery


class TestServices:

    def test_exactly_two_services_in_order(self):
        assert [s.id for s in SERVICES] == ['patient-view-example', 'medication-prescribe-example']
        assert [s.hook for s in SERVICES] == ['patient-view', 'medication-prescribe']

    def test_patient_view_prefetch_template(self):
        assert dict(SERVICES[0].prefetch) == {'requestedPatient': 'Patient/{{Patient.id}}'}

    def test_medication_prescribe_has_no_prefetch(self):
        assert SERVICES[1].prefetch is None

    def test_descriptor_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            SERVICES[0].title = 'changed'

    def test_prefetch_is_read_only(self):
        with pytest.raises(TypeError):
            SERVICES[0].prefetch['other'] = 'Observation?patient={{Patient.id}}'

    def test_prefetch_copied_from_caller(self):
        template = {'requestedPatient': 'Patient/{{Patient.id}}'}
        service = ServiceDescriptor(hook='patient-view', id='x', title='t', description='d', prefetch=template)
        template['extra'] = 'Encounter/{{Encounter.id}}'
        assert 'extra' not in service.prefetch


class TestGetService:

    def test_known_id(self):
        assert get_service('medication-prescribe-example') is SERVICES[1]

    def test_unknown_id_raises(self):
        with pytest.raises(UnknownServiceError) as exc_info:
            get_service('nope')
        assert exc_info.value.detail['known_services'] == [s.id for s in SERVICES]


class TestSerializeDiscovery:

    def test_prefetch_omitted_when_none(self):
        body = serialize_discovery(SERVICES)
        assert 'prefetch' in body['services'][0]
        assert 'prefetch' not in body['services'][1]

    def test_field_values(self):
        first = serialize_discovery(SERVICES)['services'][0]
        assert first == {
            'hook': 'patient-view',
            'id': 'patient-view-example',
            'title': 'Example patient-view CDS Service',
            'description': 'Displays the name and gender of the patient',
            'prefetch': {'requestedPatient': 'Patient/{{Patient.id}}'},
        }

    def test_stable_across_calls(self):
        assert serialize_discovery(SERVICES) == serialize_discovery(SERVICES)
