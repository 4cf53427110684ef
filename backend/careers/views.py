"""
API views for profiles, the job catalog, applications and the wallet.

Domain errors raised by the service modules are rendered by
``careers.exceptions.custom_exception_handler``; the auto-apply endpoint keeps
its own flat response shape because clients read ``success`` directly.
"""
import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from careers import applications, job_catalog, profile_store, resume_optimization, wallet
from careers.authentication import bearer_token_from_request
from careers.auto_apply import profile_is_complete, submit_auto_application
from careers.exceptions import get_error_code
from careers.job_intake import create_job_listing
from careers.models import ManualApplyLog
from careers.permissions import IsJobAdmin
from careers.profile_editing import ProfileEditError, apply_edits
from careers.serializers import (
    ApplicationHistoryFilterSerializer,
    AutoApplyLogSerializer,
    AutoApplyRequestSerializer,
    JobFilterSerializer,
    JobListingSerializer,
    ManualApplicationRequestSerializer,
    ManualApplyLogSerializer,
    OptimizedResumeListQuerySerializer,
    OptimizedResumeSerializer,
    OptimizeResumeRequestSerializer,
    ProfileDocumentSerializer,
    ProfileDraftEditSerializer,
    RedemptionRequestSerializer,
    TransactionListQuerySerializer,
    WalletBalanceSerializer,
    WalletSummarySerializer,
    WalletTransactionSerializer,
)

logger = logging.getLogger(__name__)


# ======================
# PROFILE
# ======================

@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def profile_document(request):
    """
    GET: the full profile document of the authenticated user.
    PUT: replace the whole document. Any field error leaves it unchanged.
    """
    if request.method == 'GET':
        return Response(profile_store.get_profile(request.user), status=status.HTTP_200_OK)
    document = profile_store.replace_profile(request.user, request.data)
    return Response(document, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def profile_draft_preview(request):
    """
    Apply editor operations to a draft and validate the result without saving.

    Body: {"draft": {...optional, defaults to the stored profile}, "edits": [...]}
    """
    serializer = ProfileDraftEditSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    draft = serializer.validated_data.get('draft')
    if draft is None:
        draft = profile_store.get_profile(request.user)

    try:
        draft = apply_edits(draft, serializer.validated_data['edits'])
    except ProfileEditError as exc:
        raise ValidationError({'edits': [str(exc)]})

    check = ProfileDocumentSerializer(data=draft)
    is_valid = check.is_valid()
    return Response(
        {'draft': draft, 'is_valid': is_valid, 'errors': {} if is_valid else check.errors},
        status=status.HTTP_200_OK,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_auto_apply_status(request):
    """
    ``is_complete`` is the configured completeness check, the same one
    auto-apply enforces. ``missing`` lists what the built-in requirements flag.
    """
    profile = profile_store.get_or_create_profile(request.user)
    missing = profile_store.missing_auto_apply_requirements(profile)
    is_complete = profile_is_complete(request.user)
    return Response({'is_complete': is_complete, 'missing': missing}, status=status.HTTP_200_OK)


# ======================
# JOB CATALOG
# ======================

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def jobs_list(request):
    """
    Active job listings, filtered and paginated.

    Query params: domain, location_type, experience_required, package_min,
    package_max, search, sort_by, sort_order, limit, offset.
    """
    filters = JobFilterSerializer(data=request.query_params)
    filters.is_valid(raise_exception=True)
    params = dict(filters.validated_data)
    limit = params.pop('limit')
    offset = params.pop('offset')

    page = job_catalog.list_jobs(params, limit=limit, offset=offset)
    return Response(
        {
            'jobs': JobListingSerializer(page['jobs'], many=True).data,
            'total': page['total'],
            'has_more': page['has_more'],
        },
        status=status.HTTP_200_OK,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def job_filter_options(request):
    options = job_catalog.filter_options()
    options['package_ranges'] = {key: float(value) for key, value in options['package_ranges'].items()}
    return Response(options, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def job_detail(request, job_id):
    job = job_catalog.get_job(job_id)
    return Response(JobListingSerializer(job).data, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsJobAdmin])
def admin_job_create(request):
    """Admin job upload form. Returns the stored listing."""
    job = create_job_listing(request.data, created_by=request.user)
    return Response(JobListingSerializer(job).data, status=status.HTTP_201_CREATED)


# ======================
# RESUME OPTIMIZATION
# ======================

@api_view(['POST'])
@permission_classes([IsAuthenticated])
def optimize_resume(request, job_id):
    """
    Tailor the user's resume to a job through the optimization service.

    Body: {"resume_text": "..."} (optional; the stored profile is used otherwise)
    """
    serializer = OptimizeResumeRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    optimized = resume_optimization.optimize_resume_for_job(
        request.user,
        job_id,
        resume_text=serializer.validated_data.get('resume_text'),
        token=bearer_token_from_request(request),
    )
    return Response(OptimizedResumeSerializer(optimized).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def optimized_resume_list(request):
    query = OptimizedResumeListQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    resumes = resume_optimization.list_optimized_resumes(request.user, job_id=query.validated_data.get('job_id'))
    return Response(OptimizedResumeSerializer(resumes, many=True).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def optimized_resume_detail(request, resume_id):
    resume = resume_optimization.get_optimized_resume(request.user, resume_id)
    return Response(OptimizedResumeSerializer(resume).data, status=status.HTTP_200_OK)


# ======================
# APPLICATIONS
# ======================

@api_view(['POST'])
@permission_classes([IsAuthenticated])
def manual_application(request):
    serializer = ManualApplicationRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    log = applications.submit_manual_application(
        request.user,
        data['job_id'],
        data['optimized_resume_id'],
        redirect_url=data.get('redirect_url'),
    )
    return Response(ManualApplyLogSerializer(log).data, status=status.HTTP_201_CREATED)


def _auto_apply_error(message, code, status_code):
    return Response(
        {'success': False, 'message': message, 'status': None, 'error': message, 'code': code},
        status=status_code,
    )


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def auto_apply(request):
    """
    Body: {"jobId": "<uuid>", "optimizedResumeId": "<uuid>"}

    200 when the application was submitted, 400 when the executor reported a
    failure, 500 when the executor itself broke. Both failure bodies carry
    ``fallbackUrl`` so the user can apply manually.
    """
    serializer = AutoApplyRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return _auto_apply_error('Missing jobId or optimizedResumeId', 'validation_error', status.HTTP_400_BAD_REQUEST)

    try:
        result = submit_auto_application(
            request.user,
            serializer.validated_data['jobId'],
            serializer.validated_data['optimizedResumeId'],
        )
    except APIException as exc:
        logger.info('Auto-apply rejected for user %s: %s', request.user.pk, exc.detail)
        return _auto_apply_error(str(exc.detail), get_error_code(exc, exc.status_code), exc.status_code)

    if result.success:
        status_code = status.HTTP_200_OK
    elif result.provider_error:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    return Response(result.as_response(), status=status_code)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def application_history(request):
    """
    Manual and auto applications, newest first.

    Query params: status (pending|submitted|failed), method (manual|auto)
    """
    filters = ApplicationHistoryFilterSerializer(data=request.query_params)
    filters.is_valid(raise_exception=True)
    history = applications.application_history(
        request.user,
        status=filters.validated_data.get('status'),
        method=filters.validated_data.get('method'),
    )
    items = [
        ManualApplyLogSerializer(log).data if isinstance(log, ManualApplyLog) else AutoApplyLogSerializer(log).data
        for log in history['applications']
    ]
    return Response(
        {'applications': items, 'total': history['total'], 'status_counts': history['status_counts']},
        status=status.HTTP_200_OK,
    )


# ======================
# WALLET
# ======================

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def wallet_balance(request):
    balance = wallet.get_balance(request.user)
    return Response(WalletBalanceSerializer({'balance': balance}).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def wallet_transactions(request):
    query = TransactionListQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    history = wallet.list_transactions(request.user, limit=query.validated_data.get('limit'))
    return Response(WalletTransactionSerializer(list(history), many=True).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def wallet_summary(request):
    summary = wallet.wallet_summary(request.user)
    return Response(WalletSummarySerializer(summary).data, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def wallet_redeem(request):
    """
    Body: {"amount": 250, "method": "upi"|"bank_transfer", "details": {...}}

    On success the client should reload the balance; the debit itself is
    recorded by the settlement service.
    """
    serializer = RedemptionRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    result = wallet.request_redemption(request.user, data['amount'], data['method'], data['details'])
    return Response(
        {
            'success': result.success,
            'message': result.message,
            'amount': str(result.amount),
            'method': result.method,
            'refresh_balance': result.refresh_balance,
        },
        status=status.HTTP_200_OK,
    )
