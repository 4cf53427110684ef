from django.contrib import admin
from .models import (
    # Profile models
    CandidateProfile, Education, WorkExperience, SkillCategory, Project, Certification,
    # Catalog & applications
    JobListing, OptimizedResume, ManualApplyLog, AutoApplyLog,
    # Wallet
    WalletTransaction,
    # Outbound call monitoring
    APIService, APIUsageLog,
)


# Profile models
class EducationInline(admin.TabularInline):
    model = Education
    extra = 0


class WorkExperienceInline(admin.StackedInline):
    model = WorkExperience
    extra = 0


class SkillCategoryInline(admin.TabularInline):
    model = SkillCategory
    extra = 0
    readonly_fields = ['count']


class ProjectInline(admin.StackedInline):
    model = Project
    extra = 0


class CertificationInline(admin.TabularInline):
    model = Certification
    extra = 0


@admin.register(CandidateProfile)
class CandidateProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'full_name', 'headline', 'location', 'updated_at']
    search_fields = ['user__email', 'user__username', 'full_name', 'headline', 'location']
    inlines = [EducationInline, WorkExperienceInline, SkillCategoryInline, ProjectInline, CertificationInline]


# Catalog
@admin.register(JobListing)
class JobListingAdmin(admin.ModelAdmin):
    list_display = ['role_title', 'company_name', 'domain', 'location_type', 'package_amount', 'is_active', 'posted_date']
    list_filter = ['is_active', 'location_type', 'package_type', 'domain']
    search_fields = ['company_name', 'role_title', 'short_description']
    readonly_fields = ['id', 'created_by', 'created_at', 'updated_at']


@admin.register(OptimizedResume)
class OptimizedResumeAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'job', 'optimization_score', 'created_at']
    search_fields = ['user__username', 'job__company_name', 'job__role_title']

    def has_change_permission(self, request, obj=None):
        # Rows are immutable once written
        return False


# Applications
@admin.register(ManualApplyLog)
class ManualApplyLogAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'job', 'status', 'application_date']
    search_fields = ['user__username', 'job__company_name']
    readonly_fields = ['status']


@admin.register(AutoApplyLog)
class AutoApplyLogAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'job', 'status', 'application_date', 'completed_at']
    list_filter = ['status', 'application_date']
    search_fields = ['user__username', 'job__company_name', 'error_message']
    readonly_fields = ['form_data_snapshot', 'status', 'completed_at']


# Wallet
@admin.register(WalletTransaction)
class WalletTransactionAdmin(admin.ModelAdmin):
    list_display = ['user', 'transaction_type', 'amount', 'status', 'redemption_method', 'created_at']
    list_filter = ['transaction_type', 'status', 'redemption_method']
    search_fields = ['user__username', 'user__email', 'description']


# Monitoring
@admin.register(APIService)
class APIServiceAdmin(admin.ModelAdmin):
    list_display = ['name', 'service_type', 'is_active', 'last_error_at']
    list_filter = ['service_type', 'is_active']


@admin.register(APIUsageLog)
class APIUsageLogAdmin(admin.ModelAdmin):
    list_display = ['service', 'endpoint', 'method', 'success', 'response_time_ms', 'request_at']
    list_filter = ['service', 'success']
    search_fields = ['endpoint', 'error_message']
