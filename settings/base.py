"""
Base settings for Startup Tycoon.
"""

import os

DEBUG = True

ADMINS = (
    ('admin', 'admin'),
)

MANAGERS = ADMINS

DEFAULT_AUTO_FIELD = "django.db.models.AutoField"
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3', # Add 'postgresql', 'mysql', 'sqlite3' or 'oracle'.
        'NAME': 'tycoondb',                    # Or path to database file if using sqlite3.
        'USER': '',                      # Not used with sqlite3.
        'PASSWORD': '',                  # Not used with sqlite3.
        'HOST': '',                      # Set to empty string for localhost. Not used with sqlite3.
        'PORT': '',                      # Set to empty string for default. Not used with sqlite3.
    }
}

# Local time zone for this installation. Choices can be found here:
# http://en.wikipedia.org/wiki/List_of_tz_zones_by_name
TIME_ZONE = 'America/New_York'

LANGUAGE_CODE = 'en-us'

SITE_ID = 1

USE_I18N = True

# If you set this to False, Django will not use timezone-aware datetimes.
USE_TZ = True

MEDIA_ROOT = ''
MEDIA_URL = ''
STATIC_ROOT = ''
STATIC_URL = '/static/'

# Make this unique, and don't share it with anybody.
SECRET_KEY = os.environ.get('TYCOON_SECRET_KEY', 'c%3b!x=dev-only-secret-key-8m+q2z^v7w@k1p')

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'django.template.context_processors.request',
            ],
            'debug': DEBUG,
        },
    },
]

MIDDLEWARE = (
    'django.middleware.common.CommonMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'simple_history.middleware.HistoryRequestMiddleware',
)

ROOT_URLCONF = 'urls'

INSTALLED_APPS = (
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.sites',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'django.contrib.admin',

    'rest_framework',
    'simple_history',

    # tycoon apps
    'tycoon',
    'tycoon.roster',
    'tycoon.evaluation',
    'tycoon.grading',
)

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'default_loc_mem',
    },
}

BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'rest_framework.authentication.SessionAuthentication',
    ),
    'DEFAULT_THROTTLE_CLASSES': (
        'tycoon.api.throttling.SlidingWindowThrottle',
    ),
    'DEFAULT_THROTTLE_RATES': {
        'api': '100/min',
        'admin_action': '10/min',
    },
    'EXCEPTION_HANDLER': 'tycoon.api.exceptions.tycoon_exception_handler',
}

# Cache holding throttle request histories
TYCOON_THROTTLE_CACHE = 'default'

# Tokens a student may put into one team, and in total per assignment
TYCOON_MAX_TOKENS_PER_TEAM = 50
TYCOON_TOKEN_BUDGET = 100

# (minimum average investment, grade, percentage), checked top to bottom
TYCOON_GRADE_BANDS = (
    (40, 'high', 100),
    (25, 'median', 80),
    (0, 'low', 60),
)

# Interest paid on invested tokens, by performance tier of the team
TYCOON_INTEREST_RATES = {
    'high': 0.20,
    'median': 0.10,
    'low': 0.05,
    'incomplete': 0.0,
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s %(levelname)s %(process)d [%(name)s] %(filename)s:%(lineno)d - %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
        },
    },
    'loggers': {
        'tycoon': {
            'handlers': ['console'],
            'level': os.environ.get('TYCOON_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}

# disable indexing on history_date
SIMPLE_HISTORY_DATE_INDEX = False
