"""
URL configuration for the careers API.
"""
from django.urls import path
from careers import views

urlpatterns = [
    # Profile
    path('profile', views.profile_document, name='profile'),
    path('profile/draft', views.profile_draft_preview, name='profile-draft'),
    path('profile/auto-apply-status', views.profile_auto_apply_status, name='profile-auto-apply-status'),

    # Job catalog
    path('jobs', views.jobs_list, name='jobs-list'),
    path('jobs/filters', views.job_filter_options, name='job-filter-options'),
    path('jobs/<uuid:job_id>', views.job_detail, name='job-detail'),
    path('jobs/<uuid:job_id>/optimize-resume', views.optimize_resume, name='job-optimize-resume'),
    path('admin/jobs', views.admin_job_create, name='admin-job-create'),

    # Optimized resumes
    path('resumes/optimized', views.optimized_resume_list, name='optimized-resume-list'),
    path('resumes/optimized/<uuid:resume_id>', views.optimized_resume_detail, name='optimized-resume-detail'),

    # Applications
    path('applications/manual', views.manual_application, name='manual-application'),
    path('applications/history', views.application_history, name='application-history'),
    path('auto-apply', views.auto_apply, name='auto-apply'),

    # Wallet
    path('wallet/balance', views.wallet_balance, name='wallet-balance'),
    path('wallet/transactions', views.wallet_transactions, name='wallet-transactions'),
    path('wallet/summary', views.wallet_summary, name='wallet-summary'),
    path('wallet/redeem', views.wallet_redeem, name='wallet-redeem'),
]
