from .base import *  # pylint:disable=W0614,W0401

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    },
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'default_test_cache',
    },
}

LOGGING['loggers']['tycoon']['level'] = 'WARNING'
