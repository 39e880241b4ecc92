"""
Test settings.
"""
from .base import *  # noqa: F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

INVENTORY_DEFAULT_STOCK_LOCATION_ID = None
LOG_LEVEL = 'WARNING'
for _logger in ('apps', 'shared'):
    LOGGING['loggers'][_logger]['level'] = LOG_LEVEL
LOGGING['root']['level'] = LOG_LEVEL
