"""Development settings for the rental marketplace.

Debug on, emails printed to the console and Celery tasks run inline unless
a broker is explicitly requested. Do not use these settings in production!
"""

import os

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Use console email backend during development
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

# Run tasks inline so the expiry sweep and notifications work without Redis
CELERY_TASK_ALWAYS_EAGER = os.environ.get('CELERY_TASK_ALWAYS_EAGER', 'true').lower() == 'true'
