"""
Development settings (local SQLite, permissive CORS, browsable API).

Usage:
    DJANGO_SETTINGS_MODULE=hospital_backend.settings_dev python manage.py runserver
"""

from .settings import *  # noqa: F401,F403

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '[::1]', '*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'dev.sqlite3',  # noqa: F405
        'OPTIONS': {
            'timeout': 20,
        },
    },
}

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
        'rest_framework.renderers.BrowsableAPIRenderer',
    ),
}

CORS_ALLOW_ALL_ORIGINS = True

CSRF_TRUSTED_ORIGINS = [
    'http://localhost:3000',
    'http://127.0.0.1:3000',
    'http://localhost:8000',
    'http://127.0.0.1:8000',
]

LOGGING['loggers']['hospital_backend']['level'] = 'DEBUG'  # noqa: F405

EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'
