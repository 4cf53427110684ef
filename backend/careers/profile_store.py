"""
Profile Store: read and whole-document replace of candidate profiles, plus the
auto-apply profile snapshot and completeness check.

``build_auto_apply_profile`` and ``is_profile_complete_for_auto_apply`` are the
default implementations of the two collaborators the auto-apply workflow
resolves from settings (``AUTO_APPLY_PROFILE_PROVIDER`` and
``AUTO_APPLY_COMPLETENESS_CHECK``).
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from django.db import DatabaseError, transaction

from careers.exceptions import PersistenceError, Unauthenticated
from careers.models import CandidateProfile
from careers.serializers import ProfileDocumentSerializer

logger = logging.getLogger(__name__)

# Scalar fields that must be filled before auto-apply can fill a form
AUTO_APPLY_REQUIRED_FIELDS = ('full_name', 'email', 'phone', 'location', 'headline')


def _require_user(user):
    if user is None or not getattr(user, 'is_authenticated', False):
        raise Unauthenticated()


def get_or_create_profile(user) -> CandidateProfile:
    _require_user(user)
    profile, created = CandidateProfile.objects.get_or_create(user=user)
    if created:
        logger.info('Created empty profile for user %s', user.pk)
    return profile


def _prefetched(profile: CandidateProfile) -> CandidateProfile:
    return (
        CandidateProfile.objects
        .prefetch_related('educations', 'work_experiences', 'skill_categories', 'projects', 'certifications')
        .select_related('user')
        .get(pk=profile.pk)
    )


def get_profile(user) -> Dict[str, Any]:
    """Return the user's profile document."""
    profile = get_or_create_profile(user)
    return ProfileDocumentSerializer(_prefetched(profile)).data


def replace_profile(user, draft: Dict[str, Any]) -> Dict[str, Any]:
    """Validate ``draft`` as a whole and replace the stored profile with it.

    Raises ``ValidationError`` carrying every field error when the draft is
    invalid; the stored profile is untouched in that case.
    """
    profile = get_or_create_profile(user)
    serializer = ProfileDocumentSerializer(profile, data=draft)
    serializer.is_valid(raise_exception=True)

    try:
        with transaction.atomic():
            serializer.save()
    except DatabaseError as exc:
        logger.exception('Profile replace failed for user %s', user.pk)
        raise PersistenceError() from exc

    logger.info('Replaced profile for user %s', user.pk)
    return ProfileDocumentSerializer(_prefetched(profile)).data


def _format_education(edu) -> Dict[str, Any]:
    return {
        'institution': edu.institution,
        'degree': edu.degree,
        'field_of_study': edu.field_of_study,
        'start_year': edu.start_year,
        'end_year': edu.end_year,
        'grade': edu.grade,
    }


def _format_experience(exp) -> Dict[str, Any]:
    return {
        'company': exp.company_name,
        'title': exp.job_title,
        'location': exp.location,
        'start_date': exp.start_date.isoformat() if exp.start_date else None,
        'end_date': exp.end_date.isoformat() if exp.end_date else None,
        'is_current': exp.is_current,
        'bullets': list(exp.bullets or []),
    }


def build_auto_apply_profile(user) -> List[Dict[str, Any]]:
    """Return the rows used to fill external application forms.

    Mirrors a stored-procedure result: a list with one row per profile, empty
    when the user has no profile yet.
    """
    profile = CandidateProfile.objects.filter(user=user).first()
    if profile is None:
        return []
    profile = _prefetched(profile)
    return [{
        'full_name': profile.full_name,
        'email_address': profile.email or user.email,
        'phone': profile.phone,
        'linkedin_profile_url': profile.linkedin_url,
        'github_profile_url': profile.github_url,
        'resume_headline': profile.headline,
        'current_location': profile.location,
        'education_details': [_format_education(e) for e in profile.educations.all()],
        'experience_details': [_format_experience(e) for e in profile.work_experiences.all()],
        'skills_details': [
            {'category': c.name, 'skills': list(c.skills or []), 'count': c.count}
            for c in profile.skill_categories.all()
        ],
    }]


def missing_auto_apply_requirements(profile: CandidateProfile) -> List[str]:
    """List what keeps ``profile`` from being used for auto-apply."""
    missing = [name for name in AUTO_APPLY_REQUIRED_FIELDS if not (getattr(profile, name) or '').strip()]
    if not profile.educations.exists():
        missing.append('education')
    if not any(category.skills for category in profile.skill_categories.all()):
        missing.append('skills')
    if any(not _has_text(exp.bullets) for exp in profile.work_experiences.all()):
        missing.append('experience_bullets')
    if any(not _has_text(project.bullets) for project in profile.projects.all()):
        missing.append('project_bullets')
    return missing


def _has_text(values) -> bool:
    return any((value or '').strip() for value in values or [])


def is_profile_complete_for_auto_apply(user) -> bool:
    profile = CandidateProfile.objects.filter(user=user).first()
    if profile is None:
        return False
    return not missing_auto_apply_requirements(profile)


def render_profile_as_text(user) -> str:
    """Flatten the profile into plain resume text for the optimizer."""
    profile = _prefetched(get_or_create_profile(user))
    lines = [profile.full_name, profile.headline]
    contact = ' | '.join(filter(None, [profile.email, profile.phone, profile.location,
                                        profile.linkedin_url, profile.github_url]))
    lines.append(contact)
    if profile.summary:
        lines += ['', 'SUMMARY', profile.summary]

    experiences = list(profile.work_experiences.all())
    if experiences:
        lines += ['', 'EXPERIENCE']
        for exp in experiences:
            lines.append(f"{exp.job_title} - {exp.company_name}")
            lines += [f"- {bullet}" for bullet in exp.bullets or []]

    educations = list(profile.educations.all())
    if educations:
        lines += ['', 'EDUCATION']
        for edu in educations:
            years = '-'.join(str(y) for y in (edu.start_year, edu.end_year) if y)
            lines.append(', '.join(filter(None, [edu.degree, edu.field_of_study, edu.institution, years])))

    categories = list(profile.skill_categories.all())
    if categories:
        lines += ['', 'SKILLS']
        lines += [f"{c.name}: {', '.join(c.skills or [])}" for c in categories]

    projects = list(profile.projects.all())
    if projects:
        lines += ['', 'PROJECTS']
        for project in projects:
            lines.append(project.title)
            lines += [f"- {bullet}" for bullet in project.bullets or []]

    certifications = list(profile.certifications.all())
    if certifications:
        lines += ['', 'CERTIFICATIONS']
        for cert in certifications:
            lines.append(' - '.join(filter(None, [cert.title, cert.issuer, str(cert.year or '')])))

    return '\n'.join(line for line in lines if line is not None).strip()
