"""
Settings for the test suite.

Selected through DJANGO_SETTINGS_MODULE in pyproject.toml so the database
engine is fixed before Django configures its connections.
"""
from .settings import *  # noqa: F401,F403

# In-memory SQLite, no database server needed
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
CELERY_TASK_ALWAYS_EAGER = True
