"""
Django settings for the applyhub project.

Every deploy-specific value is read from the environment with a development
default so the project boots locally without any configuration.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name, default=''):
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(',') if item.strip()]


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'dev-insecure-applyhub-secret-key')
DEBUG = _env_bool('DJANGO_DEBUG', True)
ALLOWED_HOSTS = _env_list('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver')


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'corsheaders',
    'rest_framework',
    'careers.apps.CareersConfig',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'applyhub.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'applyhub.wsgi.application'


# Database: PostgreSQL when POSTGRES_DB is set, SQLite otherwise
if os.environ.get('POSTGRES_DB'):
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.environ.get('POSTGRES_DB'),
            'USER': os.environ.get('POSTGRES_USER', 'postgres'),
            'PASSWORD': os.environ.get('POSTGRES_PASSWORD', ''),
            'HOST': os.environ.get('POSTGRES_HOST', 'localhost'),
            'PORT': os.environ.get('POSTGRES_PORT', '5432'),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.environ.get('DJANGO_TIME_ZONE', 'Asia/Kolkata')
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Django REST Framework
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'careers.authentication.FirebaseAuthentication',
        'rest_framework.authentication.SessionAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'EXCEPTION_HANDLER': 'careers.exceptions.custom_exception_handler',
}

# CORS: the React client calls the API from another origin
CORS_ALLOWED_ORIGINS = _env_list('CORS_ALLOWED_ORIGINS', 'http://localhost:5173,http://localhost:3000')
CORS_ALLOW_HEADERS = [
    'authorization',
    'x-client-info',
    'apikey',
    'content-type',
]

# Firebase Admin SDK credentials (service account JSON path)
FIREBASE_CREDENTIALS = os.environ.get('FIREBASE_CREDENTIALS', '')

# Celery
CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL', 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND', CELERY_BROKER_URL)
CELERY_TASK_ALWAYS_EAGER = _env_bool('CELERY_TASK_ALWAYS_EAGER', False)
CELERY_TIMEZONE = TIME_ZONE


# Resume optimization collaborator
RESUME_OPTIMIZER_URL = os.environ.get('RESUME_OPTIMIZER_URL', '')
RESUME_OPTIMIZER_TIMEOUT = int(os.environ.get('RESUME_OPTIMIZER_TIMEOUT', '60'))

# Redemption settlement collaborator
REDEMPTION_SETTLEMENT_URL = os.environ.get('REDEMPTION_SETTLEMENT_URL', '')
REDEMPTION_SETTLEMENT_TIMEOUT = int(os.environ.get('REDEMPTION_SETTLEMENT_TIMEOUT', '15'))
WALLET_MINIMUM_REDEMPTION = int(os.environ.get('WALLET_MINIMUM_REDEMPTION', '100'))

# Auto-apply
AUTO_APPLY_EXECUTOR = os.environ.get(
    'AUTO_APPLY_EXECUTOR', 'careers.auto_apply.SimulatedAutoApplyExecutor'
)
AUTO_APPLY_PROFILE_PROVIDER = os.environ.get(
    'AUTO_APPLY_PROFILE_PROVIDER', 'careers.profile_store.build_auto_apply_profile'
)
AUTO_APPLY_COMPLETENESS_CHECK = os.environ.get(
    'AUTO_APPLY_COMPLETENESS_CHECK', 'careers.profile_store.is_profile_complete_for_auto_apply'
)
AUTO_APPLY_SIMULATED_SUCCESS_RATE = float(os.environ.get('AUTO_APPLY_SIMULATED_SUCCESS_RATE', '0.7'))
AUTO_APPLY_SCREENSHOT_BASE_URL = os.environ.get(
    'AUTO_APPLY_SCREENSHOT_BASE_URL', 'https://example.com/screenshots'
)
AUTO_APPLY_PENDING_TIMEOUT_MINUTES = int(os.environ.get('AUTO_APPLY_PENDING_TIMEOUT_MINUTES', '30'))

# Admin job intake
JOB_INTAKE_SOURCE_MARKER = os.environ.get('JOB_INTAKE_SOURCE_MARKER', 'admin_portal')


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'careers': {
            'handlers': ['console'],
            'level': os.environ.get('APPLYHUB_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
