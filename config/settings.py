"""
==========================================================
DJANGO SETTINGS
==========================================================
Environment-driven settings for the admin backend.

Every value that differs between environments is read with
python-decouple (environment variables or a .env file); product-level
constants live in config/constants instead.
"""

import sys
from pathlib import Path

from decouple import Csv, config

from config.logging_config import get_logging_config
from config.constants.limits import PUSH_TIMEOUT_SECONDS

BASE_DIR = Path(__file__).resolve().parent.parent

# Apps live under apps/ and are imported by their short name (users, jobs, ...)
sys.path.insert(0, str(BASE_DIR / 'apps'))

SECRET_KEY = config('DJANGO_SECRET_KEY', default='django-insecure-dev-only-change-me')
DEBUG = config('DJANGO_DEBUG', default=True, cast=bool)
ALLOWED_HOSTS = config('DJANGO_ALLOWED_HOSTS', default='localhost,127.0.0.1,testserver', cast=Csv())

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    'core',
    'users',
    'jobs',
    'notifications',
    'moderation',
    'support',
    'candidates',
    'messaging',
]

if DEBUG:
    INSTALLED_APPS.append('django_browser_reload')

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'config.middleware.RequestLoggingMiddleware',
]

if DEBUG:
    MIDDLEWARE.append('django_browser_reload.middleware.BrowserReloadMiddleware')

ROOT_URLCONF = 'config.urls'
WSGI_APPLICATION = 'config.wsgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

# --- Database ---
DB_ENGINE = config('DB_ENGINE', default='sqlite3')
if DB_ENGINE == 'postgresql':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': config('DB_NAME', default='jobportal'),
            'USER': config('DB_USER', default='postgres'),
            'PASSWORD': config('DB_PASSWORD', default=''),
            'HOST': config('DB_HOST', default='localhost'),
            'PORT': config('DB_PORT', default='5432'),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
AUTH_USER_MODEL = 'users.User'

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# --- Real-time push (Pusher) ---
# Values stored in core.SystemSettings take precedence over these.
PUSHER_APP_ID = config('PUSHER_APP_ID', default='')
PUSHER_KEY = config('PUSHER_KEY', default='')
PUSHER_SECRET = config('PUSHER_SECRET', default='')
PUSHER_CLUSTER = config('PUSHER_CLUSTER', default='mt1')
PUSHER_TIMEOUT_SECONDS = config('PUSHER_TIMEOUT_SECONDS', default=PUSH_TIMEOUT_SECONDS, cast=int)

# Attempt the push inside the request; when False the outbox worker
# (manage.py deliver_notifications) is the only publisher.
NOTIFICATIONS_PUSH_INLINE = config('NOTIFICATIONS_PUSH_INLINE', default=True, cast=bool)

# Fernet key for secrets stored in the database (derived from SECRET_KEY when empty)
FIELD_ENCRYPTION_KEY = config('FIELD_ENCRYPTION_KEY', default='')

LOGIN_URL = '/auth/login'

LOGGING = get_logging_config(debug=DEBUG)
