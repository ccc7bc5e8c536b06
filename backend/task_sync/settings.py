"""
Django settings for the task_sync project.

Values are read from TASK_SYNC_* environment variables, optionally loaded
from a local .env file first.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env', override=False)

ENV_PREFIX = 'TASK_SYNC'


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(suffix: str, default: str = '') -> str:
    value = os.getenv(_k(suffix))
    return default if value is None else value


def _env_bool(suffix: str, default: bool) -> bool:
    raw = os.getenv(_k(suffix))
    if raw is None:
        return default
    return raw.strip().lower() in {'1', 'true', 'yes', 'y', 'on'}


def _env_list(suffix: str, default: List[str]) -> List[str]:
    raw = os.getenv(_k(suffix))
    if raw is None or raw.strip() == '':
        return list(default)
    return [p.strip() for p in raw.replace(',', ' ').split() if p.strip()]


def _env_path(suffix: str, default: Path) -> Path:
    raw = os.getenv(_k(suffix))
    if raw is None or raw.strip() == '':
        return default
    return Path(raw).expanduser()


# ============================================
# CORE
# ============================================

SECRET_KEY = _env('SECRET_KEY', 'django-insecure-task-sync-dev-key')
DEBUG = _env_bool('DEBUG', True)
ALLOWED_HOSTS = _env_list('ALLOWED_HOSTS', ['localhost', '127.0.0.1', 'testserver'])

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'drf_spectacular',
    'accounts',
    'tasks',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'task_sync.urls'

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

WSGI_APPLICATION = 'task_sync.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': _env_path('DB_PATH', BASE_DIR / 'db.sqlite3'),
    }
}

AUTH_USER_MODEL = 'accounts.User'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
]

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ============================================
# APPLICATION
# ============================================

# Registrations presenting this token receive the admin role.
ADMIN_INVITE_TOKEN = _env('ADMIN_INVITE_TOKEN', '')

# Include the exception text in 500 responses. Leave off in production.
EXPOSE_INTERNAL_ERRORS = _env_bool('EXPOSE_ERRORS', DEBUG)


# ============================================
# REST FRAMEWORK
# ============================================

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework.authentication.BasicAuthentication',
        'rest_framework.authentication.SessionAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'EXCEPTION_HANDLER': 'tasks.handlers.api_exception_handler',
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'Task Sync API',
    'DESCRIPTION': 'Task tracking with checklists, progress and dashboards.',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}


# ============================================
# LOGGING
# ============================================

LOG_LEVEL = _env('LOG_LEVEL', 'INFO').upper()
LOG_FILE = _env('LOG_FILE', '')

_log_handlers = ['console']

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
        },
    },
    'loggers': {
        'tasks': {'handlers': _log_handlers, 'level': LOG_LEVEL, 'propagate': False},
        'accounts': {'handlers': _log_handlers, 'level': LOG_LEVEL, 'propagate': False},
        'django': {'handlers': ['console'], 'level': 'WARNING'},
    },
}

if LOG_FILE:
    LOGGING['handlers']['file'] = {
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': LOG_FILE,
        'maxBytes': 5_000_000,
        'backupCount': 7,
        'encoding': 'utf-8',
        'formatter': 'standard',
    }
    _log_handlers.append('file')
