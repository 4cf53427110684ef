"""
Tests for manual applications and the merged application history.
"""
from datetime import timedelta
import uuid

import pytest
from django.contrib.auth.models import AnonymousUser
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from careers.applications import application_history, submit_manual_application
from careers.exceptions import NotFound, Unauthenticated
from careers.models import AutoApplyLog, ManualApplyLog
from careers.tests.factories import (
    AutoApplyLogFactory, JobListingFactory, ManualApplyLogFactory, OptimizedResumeFactory, UserFactory,
)


@pytest.mark.django_db
class TestManualApplication:

    def setup_method(self):
        self.user = UserFactory()
        self.resume = OptimizedResumeFactory(user=self.user)
        self.job = self.resume.job

    def test_creates_submitted_log(self):
        log = submit_manual_application(self.user, self.job.id, self.resume.id, 'https://jobs.example.com/apply/1')
        assert log.status == ManualApplyLog.STATUS_SUBMITTED
        assert log.redirect_url == 'https://jobs.example.com/apply/1'
        assert log.optimized_resume == self.resume

    def test_redirect_defaults_to_application_link(self):
        log = submit_manual_application(self.user, self.job.id, self.resume.id)
        assert log.redirect_url == self.job.application_link

    def test_identical_calls_create_two_rows(self):
        submit_manual_application(self.user, self.job.id, self.resume.id)
        submit_manual_application(self.user, self.job.id, self.resume.id)
        assert ManualApplyLog.objects.filter(user=self.user, job=self.job).count() == 2

    def test_resume_of_another_user_is_not_found(self):
        other = UserFactory()
        with pytest.raises(NotFound):
            submit_manual_application(other, self.job.id, self.resume.id)
        assert ManualApplyLog.objects.count() == 0

    def test_unknown_job_is_not_found(self):
        with pytest.raises(NotFound):
            submit_manual_application(self.user, uuid.uuid4(), self.resume.id)

    def test_anonymous_user(self):
        with pytest.raises(Unauthenticated):
            submit_manual_application(AnonymousUser(), self.job.id, self.resume.id)


@pytest.mark.django_db
class TestApplicationHistory:

    def setup_method(self):
        self.user = UserFactory()
        now = timezone.now()
        self.manual = ManualApplyLogFactory(user=self.user, application_date=now - timedelta(days=2))
        self.auto_failed = AutoApplyLogFactory(
            user=self.user, status=AutoApplyLog.STATUS_FAILED, application_date=now - timedelta(days=1),
        )
        self.auto_submitted = AutoApplyLogFactory(
            user=self.user, status=AutoApplyLog.STATUS_SUBMITTED, application_date=now,
        )
        ManualApplyLogFactory()

    def test_merged_newest_first(self):
        history = application_history(self.user)
        assert history['applications'] == [self.auto_submitted, self.auto_failed, self.manual]
        assert history['total'] == 3
        assert history['status_counts'] == {'submitted': 2, 'failed': 1}

    def test_filter_by_method(self):
        assert application_history(self.user, method='manual')['applications'] == [self.manual]
        assert application_history(self.user, method='auto')['total'] == 2

    def test_filter_by_status(self):
        history = application_history(self.user, status='submitted')
        assert history['applications'] == [self.auto_submitted, self.manual]

    def test_endpoint(self):
        client = APIClient()
        client.force_authenticate(user=self.user)
        response = client.get('/api/applications/history', {'method': 'auto', 'status': 'failed'})
        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 1
        item = response.data['applications'][0]
        assert item['method'] == 'auto'
        assert item['status'] == 'failed'
        assert item['job']['application_link'] == self.auto_failed.job.application_link

    def test_endpoint_rejects_unknown_method(self):
        client = APIClient()
        client.force_authenticate(user=self.user)
        response = client.get('/api/applications/history', {'method': 'carrier-pigeon'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestManualApplicationEndpoint:

    def test_post(self):
        user = UserFactory()
        resume = OptimizedResumeFactory(user=user)
        client = APIClient()
        client.force_authenticate(user=user)
        response = client.post(
            '/api/applications/manual',
            {'job_id': str(resume.job_id), 'optimized_resume_id': str(resume.id)},
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['method'] == 'manual'
        assert response.data['status'] == 'submitted'
        assert response.data['redirect_url'] == resume.job.application_link

    def test_missing_fields(self):
        client = APIClient()
        client.force_authenticate(user=UserFactory())
        response = client.post('/api/applications/manual', {}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert set(response.data['error']['details']) == {'job_id', 'optimized_resume_id'}

    def test_other_users_job_unknown(self):
        client = APIClient()
        client.force_authenticate(user=UserFactory())
        response = client.post(
            '/api/applications/manual',
            {'job_id': str(JobListingFactory().id), 'optimized_resume_id': str(uuid.uuid4())},
            format='json',
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
