import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'dev-secret-key-change-in-production')
DEBUG = os.getenv('DEBUG', '0') == '1'
ALLOWED_HOSTS = ['*']

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'corsheaders',
    'cdshooks',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'cdshooks.middleware.StaticCorsHeadersMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'config.urls'
WSGI_APPLICATION = 'config.wsgi.application'

# 无状态服务，不需要数据库
DATABASES = {}

# CORS: EHR 的 SMART app 从浏览器直接调用，必须开 CORS
CORS_ALLOW_ALL_ORIGINS = True
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = ['GET', 'POST', 'OPTIONS']
CORS_ALLOW_HEADERS = ['content-type', 'authorization']
CORS_EXPOSE_HEADERS = ['Origin', 'Accept', 'Content-Location', 'Location', 'X-Requested-With']

# REST Framework
REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'cdshooks.authentication.BearerTokenAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'cdshooks.authentication.IsHookClient',
    ],
    'UNAUTHENTICATED_USER': None,
    'EXCEPTION_HANDLER': 'cdshooks.exception_handler.unified_exception_handler',
}

# CDS Hooks
CDS_HOOKS = {
    'REQUIRE_AUTH': os.getenv('CDS_REQUIRE_AUTH', '0') == '1',
    'DEFAULT_CREDENTIAL': 'Bearer open-access',
    'TOKEN_VERIFIER': os.getenv('CDS_TOKEN_VERIFIER', 'cdshooks.authentication.accept_any_token'),
    'PORT': int(os.getenv('PORT', '3000')),
}

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'cdshooks': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
        },
    },
}
