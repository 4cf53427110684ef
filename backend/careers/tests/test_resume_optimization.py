"""
Tests for the resume optimization gateway. The external function is mocked.
"""
from decimal import Decimal
from unittest import mock
import uuid

import pytest
import requests
from rest_framework import status
from rest_framework.test import APIClient

from careers import resume_optimization
from careers.exceptions import NotFound, OptimizationFailed, ProviderUnavailable
from careers.models import APIUsageLog, ImmutableRowError, OptimizedResume
from careers.tests.factories import JobListingFactory, OptimizedResumeFactory, UserFactory, complete_profile

OPTIMIZER_URL = 'https://functions.example.com/optimize-resume-for-job'


def optimizer_response(status_code=200, body=None):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = body if body is not None else {
        'success': True,
        'resumeContent': {'summary': 'Tailored summary'},
        'pdfUrl': 'https://files.example.com/r.pdf',
        'docxUrl': 'https://files.example.com/r.docx',
        'optimizationScore': 87,
    }
    return response


@pytest.fixture
def optimizer_url(settings):
    settings.RESUME_OPTIMIZER_URL = OPTIMIZER_URL
    settings.RESUME_OPTIMIZER_TIMEOUT = 5
    return OPTIMIZER_URL


@pytest.mark.django_db
class TestOptimizeResumeForJob:

    def setup_method(self):
        self.user = UserFactory()
        self.job = JobListingFactory()

    def test_records_optimized_resume(self, optimizer_url):
        with mock.patch('careers.resume_optimization.requests.post', return_value=optimizer_response()) as post:
            optimized = resume_optimization.optimize_resume_for_job(
                self.user, self.job.id, resume_text='My resume', token='id-token',
            )

        assert optimized.user == self.user
        assert optimized.job == self.job
        assert optimized.resume_content == {'summary': 'Tailored summary'}
        assert optimized.pdf_url == 'https://files.example.com/r.pdf'
        assert optimized.optimization_score == Decimal('87.00')

        args, kwargs = post.call_args
        assert args[0] == OPTIMIZER_URL
        assert kwargs['json'] == {'jobId': str(self.job.id), 'userResumeText': 'My resume'}
        assert kwargs['headers']['Authorization'] == 'Bearer id-token'
        assert kwargs['timeout'] == 5
        assert APIUsageLog.objects.filter(success=True).count() == 1

    def test_profile_text_is_used_when_resume_text_missing(self, optimizer_url):
        complete_profile(user=self.user, full_name='Asha Rao')
        with mock.patch('careers.resume_optimization.requests.post', return_value=optimizer_response()) as post:
            resume_optimization.optimize_resume_for_job(self.user, self.job.id)
        assert post.call_args.kwargs['json']['userResumeText'].startswith('Asha Rao')

    @pytest.mark.parametrize('raw, expected', [(140, Decimal('100.00')), (-5, Decimal('0.00')), (None, None)])
    def test_score_is_clamped(self, optimizer_url, raw, expected):
        body = {'success': True, 'resumeContent': {}, 'optimizationScore': raw}
        with mock.patch('careers.resume_optimization.requests.post', return_value=optimizer_response(body=body)):
            optimized = resume_optimization.optimize_resume_for_job(self.user, self.job.id, resume_text='x')
        assert optimized.optimization_score == expected

    def test_provider_error_message_is_propagated(self, optimizer_url):
        response = optimizer_response(status_code=422, body={'error': 'Resume text too short'})
        with mock.patch('careers.resume_optimization.requests.post', return_value=response):
            with pytest.raises(OptimizationFailed, match='Resume text too short'):
                resume_optimization.optimize_resume_for_job(self.user, self.job.id, resume_text='x')
        assert OptimizedResume.objects.count() == 0

    def test_unsuccessful_body_fails(self, optimizer_url):
        response = optimizer_response(body={'success': False, 'error': 'Model overloaded'})
        with mock.patch('careers.resume_optimization.requests.post', return_value=response):
            with pytest.raises(OptimizationFailed, match='Model overloaded'):
                resume_optimization.optimize_resume_for_job(self.user, self.job.id, resume_text='x')

    def test_timeout_is_provider_unavailable(self, optimizer_url):
        with mock.patch('careers.resume_optimization.requests.post', side_effect=requests.Timeout('slow')):
            with pytest.raises(ProviderUnavailable):
                resume_optimization.optimize_resume_for_job(self.user, self.job.id, resume_text='x')
        usage = APIUsageLog.objects.get()
        assert usage.success is False
        assert usage.error_type == 'Timeout'

    def test_unconfigured_optimizer(self, settings):
        settings.RESUME_OPTIMIZER_URL = ''
        with pytest.raises(ProviderUnavailable):
            resume_optimization.optimize_resume_for_job(self.user, self.job.id, resume_text='x')

    def test_unknown_job(self, optimizer_url):
        with pytest.raises(NotFound):
            resume_optimization.optimize_resume_for_job(self.user, uuid.uuid4(), resume_text='x')


@pytest.mark.django_db
class TestOptimizedResumeReads:

    def test_rows_are_immutable(self):
        optimized = OptimizedResumeFactory()
        optimized.pdf_url = 'https://files.example.com/other.pdf'
        with pytest.raises(ImmutableRowError):
            optimized.save()

    def test_other_users_resume_is_not_found(self):
        optimized = OptimizedResumeFactory()
        with pytest.raises(NotFound):
            resume_optimization.get_optimized_resume(UserFactory(), optimized.id)

    def test_list_filters_by_job(self):
        user = UserFactory()
        first = OptimizedResumeFactory(user=user)
        OptimizedResumeFactory(user=user)
        OptimizedResumeFactory()
        assert list(resume_optimization.list_optimized_resumes(user, job_id=first.job_id)) == [first]
        assert resume_optimization.list_optimized_resumes(user).count() == 2


@pytest.mark.django_db
class TestOptimizeEndpoint:

    def setup_method(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION='Bearer caller-token')

    def test_optimize(self, optimizer_url):
        job = JobListingFactory()
        with mock.patch('careers.resume_optimization.requests.post', return_value=optimizer_response()) as post:
            response = self.client.post(f'/api/jobs/{job.id}/optimize-resume', {'resume_text': 'cv'}, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['job_id'] == str(job.id)
        assert response.data['user_id'] == self.user.username
        assert post.call_args.kwargs['headers']['Authorization'] == 'Bearer caller-token'

        listing = self.client.get('/api/resumes/optimized')
        assert [r['id'] for r in listing.data] == [response.data['id']]
        detail = self.client.get(f"/api/resumes/optimized/{response.data['id']}")
        assert detail.status_code == status.HTTP_200_OK

    def test_optimizer_failure_is_bad_gateway(self, optimizer_url):
        job = JobListingFactory()
        response_mock = optimizer_response(status_code=500, body={'error': 'boom'})
        with mock.patch('careers.resume_optimization.requests.post', return_value=response_mock):
            response = self.client.post(f'/api/jobs/{job.id}/optimize-resume', {}, format='json')
        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['error'] == {
            'code': 'optimization_failed', 'message': 'boom', 'messages': ['boom'],
        }

    def test_list_rejects_malformed_job_id(self):
        response = self.client.get('/api/resumes/optimized', {'job_id': 'not-a-uuid'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'validation_error'
        assert 'job_id' in response.data['error']['details']

    def test_list_filters_by_job_id_param(self):
        mine = OptimizedResumeFactory(user=self.user)
        OptimizedResumeFactory(user=self.user)
        response = self.client.get('/api/resumes/optimized', {'job_id': str(mine.job_id)})
        assert response.status_code == status.HTTP_200_OK
        assert [r['id'] for r in response.data] == [str(mine.id)]
