# backend/careers/models.py
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone
import uuid


class CandidateProfile(models.Model):
    """Contact details plus the structured resume sections of a user.

    Created empty at first sign-in and only ever rewritten as a whole document
    through ``careers.profile_store.replace_profile``.
    """
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")

    full_name = models.CharField(max_length=200, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=20, blank=True)
    linkedin_url = models.URLField(blank=True, help_text='LinkedIn profile URL')
    github_url = models.URLField(blank=True, help_text='GitHub profile URL')
    location = models.CharField(max_length=160, blank=True)
    headline = models.CharField(max_length=160, blank=True, help_text="Professional title/headline (LinkedIn-style)")
    summary = models.TextField(max_length=1000, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=["user"], name="careers_profile_user_idx")]

    def __str__(self):
        return self.full_name or self.user.get_username()


class Education(models.Model):
    """Educational background entries, ordered by ``position``"""
    candidate = models.ForeignKey(CandidateProfile, on_delete=models.CASCADE, related_name="educations")
    position = models.PositiveSmallIntegerField(default=0)
    institution = models.CharField(max_length=200)
    degree = models.CharField(max_length=200)
    field_of_study = models.CharField(max_length=200, blank=True)
    start_year = models.PositiveSmallIntegerField(null=True, blank=True)
    end_year = models.PositiveSmallIntegerField(null=True, blank=True)
    grade = models.CharField(max_length=40, blank=True, help_text="CGPA, percentage or class")

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.degree} - {self.institution}"


class WorkExperience(models.Model):
    """Career history entries for candidate profiles"""
    candidate = models.ForeignKey(CandidateProfile, on_delete=models.CASCADE, related_name="work_experiences")
    position = models.PositiveSmallIntegerField(default=0)
    company_name = models.CharField(max_length=180)
    job_title = models.CharField(max_length=220)
    location = models.CharField(max_length=160, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    is_current = models.BooleanField(default=False)
    bullets = models.JSONField(default=list, blank=True)  # List of achievement strings

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.job_title} at {self.company_name}"


class SkillCategory(models.Model):
    """A named group of skills. The skill count is always derived from the list."""
    candidate = models.ForeignKey(CandidateProfile, on_delete=models.CASCADE, related_name="skill_categories")
    position = models.PositiveSmallIntegerField(default=0)
    name = models.CharField(max_length=120)
    skills = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ['position', 'id']
        verbose_name_plural = 'skill categories'

    def __str__(self):
        return self.name

    @property
    def count(self):
        return len(self.skills or [])


class Project(models.Model):
    """Projects showcased on the resume"""
    candidate = models.ForeignKey(CandidateProfile, on_delete=models.CASCADE, related_name="projects")
    position = models.PositiveSmallIntegerField(default=0)
    title = models.CharField(max_length=200)
    bullets = models.JSONField(default=list, blank=True)
    github_url = models.URLField(blank=True)
    live_url = models.URLField(blank=True)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return self.title


class Certification(models.Model):
    """Professional certifications and credentials"""
    candidate = models.ForeignKey(CandidateProfile, on_delete=models.CASCADE, related_name="certifications")
    position = models.PositiveSmallIntegerField(default=0)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    issuer = models.CharField(max_length=200, blank=True)
    year = models.PositiveSmallIntegerField(null=True, blank=True)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return self.title


class JobListing(models.Model):
    """A job posted to the catalog by an administrator."""
    PACKAGE_TYPES = [
        ('CTC', 'CTC'),
        ('stipend', 'Stipend'),
        ('hourly', 'Hourly'),
    ]
    LOCATION_TYPES = [
        ('Remote', 'Remote'),
        ('Onsite', 'Onsite'),
        ('Hybrid', 'Hybrid'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company_name = models.CharField(max_length=200)
    company_logo_url = models.URLField(blank=True)
    role_title = models.CharField(max_length=220)
    package_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    package_type = models.CharField(max_length=20, choices=PACKAGE_TYPES, blank=True)
    domain = models.CharField(max_length=120)
    location_type = models.CharField(max_length=20, choices=LOCATION_TYPES)
    location_city = models.CharField(max_length=120, blank=True)
    experience_required = models.CharField(max_length=60)
    qualification = models.CharField(max_length=300)
    short_description = models.TextField()
    full_description = models.TextField()
    application_link = models.URLField(max_length=500)
    posted_date = models.DateTimeField(default=timezone.now)
    source_api = models.CharField(max_length=60, blank=True)
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='posted_jobs'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-posted_date']
        indexes = [
            models.Index(fields=['is_active', '-posted_date'], name='careers_job_active_idx'),
            models.Index(fields=['domain'], name='careers_job_domain_idx'),
        ]

    def __str__(self):
        return f"{self.role_title} at {self.company_name}"


class ImmutableRowError(Exception):
    """Raised when code tries to rewrite an append-only row."""


class OptimizedResume(models.Model):
    """Resume tailored to one job by the optimization service. Never updated."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='optimized_resumes')
    job = models.ForeignKey(JobListing, on_delete=models.CASCADE, related_name='optimized_resumes')
    resume_content = models.JSONField(default=dict, blank=True)
    pdf_url = models.URLField(max_length=500, blank=True)
    docx_url = models.URLField(max_length=500, blank=True)
    optimization_score = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [models.Index(fields=['user', 'job'], name='careers_resume_user_job_idx')]

    def __str__(self):
        return f"Optimized resume {self.id} for {self.job_id}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRowError('Optimized resumes cannot be modified once created.')
        return super().save(*args, **kwargs)


class ManualApplyLog(models.Model):
    """Audit row written when a user applies on the employer's own site."""
    STATUS_SUBMITTED = 'submitted'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='manual_apply_logs')
    job = models.ForeignKey(JobListing, on_delete=models.CASCADE, related_name='manual_apply_logs')
    optimized_resume = models.ForeignKey(
        OptimizedResume, on_delete=models.SET_NULL, null=True, blank=True, related_name='manual_apply_logs'
    )
    application_date = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=20, default=STATUS_SUBMITTED, editable=False)
    redirect_url = models.URLField(max_length=500, blank=True)

    class Meta:
        ordering = ['-application_date']
        indexes = [models.Index(fields=['user', '-application_date'], name='careers_manual_user_idx')]

    def __str__(self):
        return f"Manual application {self.id} ({self.status})"


class AutoApplyLog(models.Model):
    """Audit row for one auto-apply attempt.

    ``pending`` is the only non-terminal status; ``submitted`` and ``failed``
    are never overwritten (see ``finish``).
    """
    STATUS_PENDING = 'pending'
    STATUS_SUBMITTED = 'submitted'
    STATUS_FAILED = 'failed'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_SUBMITTED, 'Submitted'),
        (STATUS_FAILED, 'Failed'),
    ]
    TERMINAL_STATUSES = (STATUS_SUBMITTED, STATUS_FAILED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='auto_apply_logs')
    job = models.ForeignKey(JobListing, on_delete=models.CASCADE, related_name='auto_apply_logs')
    optimized_resume = models.ForeignKey(
        OptimizedResume, on_delete=models.SET_NULL, null=True, blank=True, related_name='auto_apply_logs'
    )
    application_date = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    form_data_snapshot = models.JSONField(default=dict, blank=True)
    screenshot_url = models.URLField(max_length=500, blank=True)
    error_message = models.TextField(blank=True)
    fallback_url = models.URLField(max_length=500, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-application_date']
        indexes = [
            models.Index(fields=['user', '-application_date'], name='careers_auto_user_idx'),
            models.Index(fields=['status', 'application_date'], name='careers_auto_status_idx'),
        ]

    def __str__(self):
        return f"Auto application {self.id} ({self.status})"

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    def finish(self, status, **fields):
        """Move a pending log to a terminal status.

        The update is conditional on the row still being pending, so a
        terminal status written by someone else is never overwritten.
        Returns True when this call performed the transition.
        """
        if status not in self.TERMINAL_STATUSES:
            raise ValueError(f"'{status}' is not a terminal auto-apply status")
        values = {'status': status, 'completed_at': timezone.now(), **fields}
        updated = AutoApplyLog.objects.filter(pk=self.pk, status=self.STATUS_PENDING).update(**values)
        if updated:
            for name, value in values.items():
                setattr(self, name, value)
        return bool(updated)


class WalletTransaction(models.Model):
    """Append-only ledger row. Balances are always derived from these rows."""
    TYPE_REFERRAL = 'referral'
    TYPE_REDEMPTION = 'redemption'
    TYPE_ADJUSTMENT = 'adjustment'
    TYPE_CHOICES = [
        (TYPE_REFERRAL, 'Referral bonus'),
        (TYPE_REDEMPTION, 'Redemption'),
        (TYPE_ADJUSTMENT, 'Adjustment'),
    ]
    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'
    STATUS_FAILED = 'failed'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_FAILED, 'Failed'),
    ]
    REDEMPTION_METHODS = [
        ('upi', 'UPI'),
        ('bank_transfer', 'Bank transfer'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='wallet_transactions')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    transaction_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    redemption_method = models.CharField(max_length=20, choices=REDEMPTION_METHODS, blank=True)
    redemption_details = models.JSONField(default=dict, blank=True)
    source_user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='referral_credits_given'
    )
    description = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='careers_wallet_user_idx'),
            models.Index(fields=['user', 'status'], name='careers_wallet_status_idx'),
        ]

    def __str__(self):
        return f"{self.transaction_type} {self.amount} ({self.status})"


class APIService(models.Model):
    """An external collaborator we make outbound calls to"""
    SERVICE_TYPES = [
        ('resume_optimizer', 'Resume optimization function'),
        ('settlement', 'Redemption settlement'),
        ('auto_apply', 'Auto-apply executor'),
        ('firebase', 'Firebase Auth'),
        ('other', 'Other API Service'),
    ]

    name = models.CharField(max_length=100, unique=True)
    service_type = models.CharField(max_length=50, choices=SERVICE_TYPES)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    last_error_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.get_service_type_display()})"


class APIUsageLog(models.Model):
    """Log of all outbound requests for monitoring"""
    service = models.ForeignKey(APIService, on_delete=models.CASCADE, related_name='usage_logs')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)

    endpoint = models.CharField(max_length=500, help_text='API endpoint called')
    method = models.CharField(max_length=10, default='GET')
    request_at = models.DateTimeField(auto_now_add=True, db_index=True)
    response_time_ms = models.IntegerField(null=True, blank=True, help_text='Response time in milliseconds')
    success = models.BooleanField(default=True)
    error_message = models.TextField(blank=True)
    error_type = models.CharField(max_length=100, blank=True)
    metadata = models.JSONField(default=dict, blank=True, help_text='Additional tracking metadata')

    class Meta:
        ordering = ['-request_at']
        indexes = [
            models.Index(fields=['service', '-request_at'], name='careers_usage_service_idx'),
        ]

    def __str__(self):
        return f"{self.service.name} - {self.endpoint} ({'ok' if self.success else 'error'})"
