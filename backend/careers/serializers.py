"""
Serializers for profiles, job listings, applications and the wallet.
"""
import re

from rest_framework import serializers

from careers.models import (
    CandidateProfile, Education, WorkExperience, SkillCategory, Project, Certification,
    JobListing, OptimizedResume, ManualApplyLog, AutoApplyLog, WalletTransaction,
)

PHONE_RE = re.compile(r'^\+?[0-9\s\-()]{7,20}$')


def _clean_string_list(values):
    """Strip every item and drop the empty ones, keeping order."""
    cleaned = []
    for value in values or []:
        text = (value or '').strip()
        if text:
            cleaned.append(text)
    return cleaned


class OmitEmptyMixin:
    """Leave optional fields that hold '' or None out of the representation.

    Stored documents therefore read back exactly as the normalized draft that
    was written, with absent optional values instead of empty strings.
    """

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {key: value for key, value in data.items() if value not in ('', None)}


class EducationEntrySerializer(OmitEmptyMixin, serializers.ModelSerializer):
    class Meta:
        model = Education
        fields = ['institution', 'degree', 'field_of_study', 'start_year', 'end_year', 'grade']
        extra_kwargs = {
            'institution': {'error_messages': {'blank': 'Institution name is required.'}},
            'degree': {'error_messages': {'blank': 'Degree is required.'}},
        }

    def validate(self, attrs):
        start_year = attrs.get('start_year')
        end_year = attrs.get('end_year')
        if start_year and end_year and start_year > end_year:
            raise serializers.ValidationError({'start_year': 'Start year cannot be after end year.'})
        return attrs


class WorkExperienceEntrySerializer(OmitEmptyMixin, serializers.ModelSerializer):
    bullets = serializers.ListField(child=serializers.CharField(allow_blank=True, trim_whitespace=True))

    class Meta:
        model = WorkExperience
        fields = ['company_name', 'job_title', 'location', 'start_date', 'end_date', 'is_current', 'bullets']
        extra_kwargs = {
            'company_name': {'error_messages': {'blank': 'Company name is required.'}},
            'job_title': {'error_messages': {'blank': 'Job title is required.'}},
        }

    def validate_bullets(self, value):
        bullets = _clean_string_list(value)
        if not bullets:
            raise serializers.ValidationError('Add at least one bullet describing this role.')
        return bullets

    def validate(self, attrs):
        if attrs.get('is_current'):
            # A current role has no end date
            attrs['end_date'] = None
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({'start_date': 'Start date cannot be after end date.'})
        return attrs


class SkillCategorySerializer(OmitEmptyMixin, serializers.ModelSerializer):
    skills = serializers.ListField(child=serializers.CharField(allow_blank=True, trim_whitespace=True))
    count = serializers.IntegerField(read_only=True)

    class Meta:
        model = SkillCategory
        fields = ['name', 'skills', 'count']
        extra_kwargs = {
            'name': {'error_messages': {'blank': 'Skill category name is required.'}},
        }

    def validate_skills(self, value):
        skills = _clean_string_list(value)
        if not skills:
            raise serializers.ValidationError('Add at least one skill to this category.')
        return skills


class ProjectEntrySerializer(OmitEmptyMixin, serializers.ModelSerializer):
    bullets = serializers.ListField(child=serializers.CharField(allow_blank=True, trim_whitespace=True))

    class Meta:
        model = Project
        fields = ['title', 'bullets', 'github_url', 'live_url']
        extra_kwargs = {
            'title': {'error_messages': {'blank': 'Project title is required.'}},
        }

    def validate_bullets(self, value):
        bullets = _clean_string_list(value)
        if not bullets:
            raise serializers.ValidationError('Add at least one bullet describing this project.')
        return bullets


class CertificationEntrySerializer(OmitEmptyMixin, serializers.ModelSerializer):
    class Meta:
        model = Certification
        fields = ['title', 'description', 'issuer', 'year']
        extra_kwargs = {
            'title': {'error_messages': {'blank': 'Certification title is required.'}},
        }


class ProfileDocumentSerializer(OmitEmptyMixin, serializers.ModelSerializer):
    """The whole profile as one document. Writes always replace every list."""
    education = EducationEntrySerializer(many=True, source='educations', required=False)
    experience = WorkExperienceEntrySerializer(many=True, source='work_experiences', required=False)
    skills = SkillCategorySerializer(many=True, source='skill_categories', required=False)
    projects = ProjectEntrySerializer(many=True, required=False)
    certifications = CertificationEntrySerializer(many=True, required=False)

    CHILD_LISTS = (
        ('educations', Education),
        ('work_experiences', WorkExperience),
        ('skill_categories', SkillCategory),
        ('projects', Project),
        ('certifications', Certification),
    )

    class Meta:
        model = CandidateProfile
        fields = [
            'full_name', 'email', 'phone', 'linkedin_url', 'github_url', 'location',
            'headline', 'summary',
            'education', 'experience', 'skills', 'projects', 'certifications',
        ]
        extra_kwargs = {
            'full_name': {'required': True, 'allow_blank': False,
                          'error_messages': {'blank': 'Full name is required.'}},
            'email': {'required': True, 'allow_blank': False,
                      'error_messages': {'blank': 'Email is required.'}},
        }

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # Child lists are part of the document even when empty
        for key in ('education', 'experience', 'skills', 'projects', 'certifications'):
            data.setdefault(key, [])
        return data

    def validate_full_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Full name is required.')
        return value

    def validate_phone(self, value):
        value = (value or '').strip()
        if value and not PHONE_RE.match(value):
            raise serializers.ValidationError('Enter a valid phone number.')
        return value

    def update(self, instance, validated_data):
        """Replace scalar fields and every child list. Callers wrap this in a transaction."""
        children = {attr: validated_data.pop(attr, []) for attr, _model in self.CHILD_LISTS}
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()

        for attr, model in self.CHILD_LISTS:
            model.objects.filter(candidate=instance).delete()
            model.objects.bulk_create([
                model(candidate=instance, position=index, **entry)
                for index, entry in enumerate(children[attr])
            ])
        return instance


class JobListingSerializer(serializers.ModelSerializer):
    class Meta:
        model = JobListing
        fields = [
            'id', 'company_name', 'company_logo_url', 'role_title', 'package_amount', 'package_type',
            'domain', 'location_type', 'location_city', 'experience_required', 'qualification',
            'short_description', 'full_description', 'application_link', 'posted_date',
            'source_api', 'is_active',
        ]
        read_only_fields = fields


class JobListingIntakeSerializer(serializers.ModelSerializer):
    """Validated create path used by the admin job upload form."""

    class Meta:
        model = JobListing
        fields = [
            'company_name', 'company_logo_url', 'role_title', 'package_amount', 'package_type',
            'domain', 'location_type', 'location_city', 'experience_required', 'qualification',
            'short_description', 'full_description', 'application_link', 'is_active',
        ]
        extra_kwargs = {
            'company_name': {'error_messages': {'blank': 'Company name is required.'}},
            'role_title': {'error_messages': {'blank': 'Role title is required.'}},
            'domain': {'error_messages': {'blank': 'Domain is required.'}},
            'experience_required': {'error_messages': {'blank': 'Experience requirement is required.'}},
            'qualification': {'error_messages': {'blank': 'Qualification is required.'}},
            'short_description': {
                'min_length': 50,
                'error_messages': {'min_length': 'Short description must be at least 50 characters.'},
            },
            'full_description': {
                'min_length': 100,
                'error_messages': {'min_length': 'Full description must be at least 100 characters.'},
            },
            'application_link': {'error_messages': {'invalid': 'Must be a valid URL.'}},
            'company_logo_url': {'error_messages': {'invalid': 'Must be a valid URL.'}},
        }

    def validate_package_amount(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError('Package amount must be positive.')
        return value

    def validate(self, attrs):
        if attrs.get('location_type') == 'Remote':
            # City is meaningless for remote roles
            attrs['location_city'] = ''
        return attrs


class OptimizedResumeSerializer(serializers.ModelSerializer):
    job_id = serializers.UUIDField(read_only=True)
    user_id = serializers.CharField(source='user.username', read_only=True)

    class Meta:
        model = OptimizedResume
        fields = [
            'id', 'user_id', 'job_id', 'resume_content', 'pdf_url', 'docx_url',
            'optimization_score', 'created_at',
        ]
        read_only_fields = fields


class OptimizeResumeRequestSerializer(serializers.Serializer):
    resume_text = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)


class ManualApplicationRequestSerializer(serializers.Serializer):
    job_id = serializers.UUIDField()
    optimized_resume_id = serializers.UUIDField()
    redirect_url = serializers.URLField(required=False, allow_blank=True, max_length=500)


class AutoApplyRequestSerializer(serializers.Serializer):
    jobId = serializers.UUIDField(error_messages={'required': 'Missing jobId or optimizedResumeId'})
    optimizedResumeId = serializers.UUIDField(error_messages={'required': 'Missing jobId or optimizedResumeId'})


class JobSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = JobListing
        fields = ['id', 'company_name', 'company_logo_url', 'role_title', 'application_link']
        read_only_fields = fields


class ManualApplyLogSerializer(serializers.ModelSerializer):
    method = serializers.SerializerMethodField()
    job = JobSummarySerializer(read_only=True)

    class Meta:
        model = ManualApplyLog
        fields = ['id', 'method', 'job', 'optimized_resume_id', 'application_date', 'status', 'redirect_url']
        read_only_fields = fields

    def get_method(self, obj):
        return 'manual'


class AutoApplyLogSerializer(serializers.ModelSerializer):
    method = serializers.SerializerMethodField()
    job = JobSummarySerializer(read_only=True)

    class Meta:
        model = AutoApplyLog
        fields = [
            'id', 'method', 'job', 'optimized_resume_id', 'application_date', 'status',
            'form_data_snapshot', 'screenshot_url', 'error_message', 'fallback_url', 'completed_at',
        ]
        read_only_fields = fields

    def get_method(self, obj):
        return 'auto'


class JobFilterSerializer(serializers.Serializer):
    """Query-string filters for the catalog listing."""
    SORT_FIELDS = ['posted_date', 'package_amount', 'company_name', 'role_title']

    domain = serializers.CharField(required=False, allow_blank=True)
    location_type = serializers.ChoiceField(
        choices=[c[0] for c in JobListing.LOCATION_TYPES], required=False, allow_blank=True
    )
    experience_required = serializers.CharField(required=False, allow_blank=True)
    package_min = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    package_max = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    search = serializers.CharField(required=False, allow_blank=True)
    sort_by = serializers.ChoiceField(choices=SORT_FIELDS, required=False, default='posted_date')
    sort_order = serializers.ChoiceField(choices=['asc', 'desc'], required=False, default='desc')
    limit = serializers.IntegerField(required=False, default=20)
    offset = serializers.IntegerField(required=False, default=0)

    def validate(self, attrs):
        package_min = attrs.get('package_min')
        package_max = attrs.get('package_max')
        if package_min is not None and package_max is not None and package_min > package_max:
            raise serializers.ValidationError({'package_min': 'Minimum package cannot exceed maximum package.'})
        return attrs


class WalletTransactionSerializer(serializers.ModelSerializer):
    source_user_id = serializers.SerializerMethodField()

    class Meta:
        model = WalletTransaction
        fields = [
            'id', 'amount', 'transaction_type', 'status', 'redemption_method', 'redemption_details',
            'source_user_id', 'description', 'created_at',
        ]
        read_only_fields = fields

    def get_source_user_id(self, obj):
        return obj.source_user.username if obj.source_user_id else None


class RedemptionRequestSerializer(serializers.Serializer):
    """Parses the request body; business validation happens in careers.wallet."""
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    method = serializers.CharField()
    details = serializers.DictField(required=False, default=dict)


class ProfileDraftEditSerializer(serializers.Serializer):
    draft = serializers.DictField(required=False)
    edits = serializers.ListField(child=serializers.DictField(), allow_empty=True)


class ApplicationHistoryFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[c[0] for c in AutoApplyLog.STATUS_CHOICES], required=False, allow_blank=True
    )
    method = serializers.ChoiceField(choices=['manual', 'auto'], required=False, allow_blank=True)


class OptimizedResumeListQuerySerializer(serializers.Serializer):
    job_id = serializers.UUIDField(required=False)


class TransactionListQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500)


class WalletBalanceSerializer(serializers.Serializer):
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)


class WalletSummarySerializer(WalletBalanceSerializer):
    total_referral_earnings = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_redeemed = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_earnings = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_redemptions = serializers.DecimalField(max_digits=12, decimal_places=2)
    referral_count = serializers.IntegerField()
    minimum_redemption = serializers.DecimalField(max_digits=12, decimal_places=2)
