"""
Tests for the admin job intake path.
"""
import pytest
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.test import APIClient

from careers.job_intake import create_job_listing
from careers.models import JobListing
from careers.tests.factories import UserFactory


def intake_form(**overrides):
    data = {
        'company_name': 'Acme Analytics',
        'role_title': 'Data Analyst',
        'package_amount': '600000',
        'package_type': 'CTC',
        'domain': 'Analytics',
        'location_type': 'Onsite',
        'location_city': 'Hyderabad',
        'experience_required': 'Fresher',
        'qualification': 'Any graduate',
        'short_description': 'Analyse hiring funnels and build the dashboards our recruiters use.',
        'full_description': (
            'Own the reporting layer for our recruiting team: define metrics, build dashboards, '
            'and partner with engineering to keep the data pipelines healthy.'
        ),
        'application_link': 'https://acme.example.com/careers/data-analyst',
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestCreateJobListing:

    def setup_method(self):
        self.admin = UserFactory(is_staff=True)

    def test_creates_active_listing_with_intake_marker(self, settings):
        settings.JOB_INTAKE_SOURCE_MARKER = 'admin_portal'
        job = create_job_listing(intake_form(), created_by=self.admin)
        assert job.is_active
        assert job.source_api == 'admin_portal'
        assert job.created_by == self.admin
        assert job.posted_date is not None

    def test_missing_application_link_is_rejected(self):
        form = intake_form()
        del form['application_link']
        with pytest.raises(ValidationError) as excinfo:
            create_job_listing(form, created_by=self.admin)
        assert 'application_link' in excinfo.value.detail
        assert JobListing.objects.count() == 0

    def test_remote_clears_city(self):
        job = create_job_listing(intake_form(location_type='Remote', location_city='Hyderabad'))
        assert job.location_city == ''

    @pytest.mark.parametrize('field, value', [
        ('package_amount', '0'),
        ('package_amount', '-10'),
        ('short_description', 'Too short'),
        ('full_description', 'Also too short for a full description.'),
        ('application_link', 'not-a-url'),
        ('location_type', 'Moon'),
        ('company_name', ''),
    ])
    def test_invalid_fields(self, field, value):
        with pytest.raises(ValidationError) as excinfo:
            create_job_listing(intake_form(**{field: value}))
        assert field in excinfo.value.detail
        assert JobListing.objects.count() == 0


@pytest.mark.django_db
class TestAdminJobEndpoint:

    def setup_method(self):
        self.client = APIClient()

    def test_admin_can_post(self):
        admin = UserFactory(is_staff=True)
        self.client.force_authenticate(user=admin)
        response = self.client.post('/api/admin/jobs', intake_form(), format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['source_api'] == 'admin_portal'
        assert JobListing.objects.get(pk=response.data['id']).created_by == admin

    def test_non_admin_is_forbidden(self):
        self.client.force_authenticate(user=UserFactory())
        response = self.client.post('/api/admin/jobs', intake_form(), format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert JobListing.objects.count() == 0

    def test_validation_error_names_field(self):
        self.client.force_authenticate(user=UserFactory(is_staff=True))
        form = intake_form()
        del form['application_link']
        response = self.client.post('/api/admin/jobs', form, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'validation_error'
        assert 'application_link' in response.data['error']['details']
