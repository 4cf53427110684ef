"""
Test factories for creating test data.
Uses factory_boy for consistent test data generation.
"""
from decimal import Decimal

import factory
from factory.django import DjangoModelFactory
from django.contrib.auth import get_user_model
from careers.models import (
    CandidateProfile,
    Education,
    WorkExperience,
    SkillCategory,
    Project,
    JobListing,
    OptimizedResume,
    ManualApplyLog,
    AutoApplyLog,
    WalletTransaction,
)

User = get_user_model()


class UserFactory(DjangoModelFactory):
    """Factory for creating test users"""
    class Meta:
        model = User
        django_get_or_create = ('username',)

    username = factory.Sequence(lambda n: f'firebase-uid-{n}')
    email = factory.Sequence(lambda n: f'user{n}@example.com')
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    is_active = True


class CandidateProfileFactory(DjangoModelFactory):
    """Factory for candidate profiles"""
    class Meta:
        model = CandidateProfile

    user = factory.SubFactory(UserFactory)
    full_name = factory.Faker('name')
    email = factory.LazyAttribute(lambda obj: obj.user.email)
    phone = '+91 98765 43210'
    location = 'Bengaluru'
    headline = factory.Faker('job')
    summary = factory.Faker('text', max_nb_chars=200)


class EducationFactory(DjangoModelFactory):
    class Meta:
        model = Education

    candidate = factory.SubFactory(CandidateProfileFactory)
    position = factory.Sequence(lambda n: n)
    institution = 'State University'
    degree = 'B.Tech'
    field_of_study = 'Computer Science'
    start_year = 2016
    end_year = 2020


class WorkExperienceFactory(DjangoModelFactory):
    class Meta:
        model = WorkExperience

    candidate = factory.SubFactory(CandidateProfileFactory)
    position = factory.Sequence(lambda n: n)
    company_name = factory.Faker('company')
    job_title = 'Software Engineer'
    bullets = factory.LazyFunction(lambda: ['Built the billing service'])


class SkillCategoryFactory(DjangoModelFactory):
    class Meta:
        model = SkillCategory

    candidate = factory.SubFactory(CandidateProfileFactory)
    position = factory.Sequence(lambda n: n)
    name = 'Languages'
    skills = factory.LazyFunction(lambda: ['Python', 'SQL'])


class ProjectFactory(DjangoModelFactory):
    class Meta:
        model = Project

    candidate = factory.SubFactory(CandidateProfileFactory)
    position = factory.Sequence(lambda n: n)
    title = 'Portfolio site'
    bullets = factory.LazyFunction(lambda: ['Deployed on a static host'])


def complete_profile(user=None, **kwargs):
    """A profile that passes the auto-apply completeness check."""
    profile = CandidateProfileFactory(user=user or UserFactory(), **kwargs)
    EducationFactory(candidate=profile)
    WorkExperienceFactory(candidate=profile)
    SkillCategoryFactory(candidate=profile)
    return profile


class JobListingFactory(DjangoModelFactory):
    """Factory for catalog job listings"""
    class Meta:
        model = JobListing

    company_name = factory.Faker('company')
    role_title = 'Backend Engineer'
    package_amount = Decimal('1200000.00')
    package_type = 'CTC'
    domain = 'Software'
    location_type = 'Hybrid'
    location_city = 'Pune'
    experience_required = '0-2 years'
    qualification = 'B.Tech / B.E.'
    short_description = 'Build and run the APIs that power our hiring marketplace platform.'
    full_description = (
        'You will design, build and operate the backend services behind our hiring marketplace, '
        'working closely with product and data teams to ship reliable features.'
    )
    application_link = factory.Sequence(lambda n: f'https://careers.example.com/jobs/{n}')
    source_api = 'admin_portal'
    is_active = True


class OptimizedResumeFactory(DjangoModelFactory):
    class Meta:
        model = OptimizedResume

    user = factory.SubFactory(UserFactory)
    job = factory.SubFactory(JobListingFactory)
    resume_content = factory.LazyFunction(lambda: {'summary': 'Backend engineer'})
    pdf_url = factory.Sequence(lambda n: f'https://files.example.com/resumes/{n}.pdf')
    docx_url = factory.Sequence(lambda n: f'https://files.example.com/resumes/{n}.docx')
    optimization_score = Decimal('82.50')


class ManualApplyLogFactory(DjangoModelFactory):
    class Meta:
        model = ManualApplyLog

    user = factory.SubFactory(UserFactory)
    job = factory.SubFactory(JobListingFactory)
    redirect_url = factory.LazyAttribute(lambda obj: obj.job.application_link)


class AutoApplyLogFactory(DjangoModelFactory):
    class Meta:
        model = AutoApplyLog

    user = factory.SubFactory(UserFactory)
    job = factory.SubFactory(JobListingFactory)
    status = AutoApplyLog.STATUS_PENDING


class WalletTransactionFactory(DjangoModelFactory):
    """Factory for ledger rows. Defaults to a completed referral credit."""
    class Meta:
        model = WalletTransaction

    user = factory.SubFactory(UserFactory)
    amount = Decimal('100.00')
    transaction_type = WalletTransaction.TYPE_REFERRAL
    status = WalletTransaction.STATUS_COMPLETED
