"""
==========================================================
LOGGING CONFIGURATION
==========================================================
Structured logging for the admin backend.

Logs to:
  logs/app.log         : All app-level logs (services, views)
  logs/errors.log      : ERROR and CRITICAL only
  logs/requests.log    : Every HTTP request (middleware)
  logs/security.log    : Auth events, permission denials
  logs/delivery.log    : Real-time push / outbox delivery
  logs/debug.log       : DEBUG-level everything (dev only)
"""

from pathlib import Path

# Base directory for logs
LOG_DIR = Path(__file__).resolve().parent.parent / 'logs'
LOG_DIR.mkdir(exist_ok=True)

APP_LOGGERS = ('apps.users', 'apps.jobs', 'apps.moderation', 'apps.support', 'apps.core', 'apps.api_client')


def _rotating(filename, level='INFO', backups=5, max_mb=5):
    return {
        'level': level,
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': str(LOG_DIR / filename),
        'maxBytes': max_mb * 1024 * 1024,
        'backupCount': backups,
        'formatter': 'verbose',
        'encoding': 'utf-8',
    }


def get_logging_config(debug=True):
    """Return the full LOGGING dict for Django settings."""
    app_level = 'DEBUG' if debug else 'INFO'

    config = {
        'version': 1,
        'disable_existing_loggers': False,

        # --- Formatters ---
        'formatters': {
            'verbose': {
                'format': '{asctime} [{levelname}] {name} | {module}.{funcName}:{lineno} | {message}',
                'style': '{',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
            'simple': {
                'format': '{asctime} [{levelname}] {message}',
                'style': '{',
                'datefmt': '%H:%M:%S',
            },
        },

        # --- Filters ---
        'filters': {
            'require_debug_true': {
                '()': 'django.utils.log.RequireDebugTrue',
            },
        },

        # --- Handlers ---
        'handlers': {
            'console': {
                'level': 'DEBUG' if debug else 'INFO',
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
            },
            'app_file': _rotating('app.log'),
            'error_file': _rotating('errors.log', level='ERROR', backups=10),
            'request_file': _rotating('requests.log', backups=3),
            'security_file': _rotating('security.log'),
            'delivery_file': _rotating('delivery.log'),
            'debug_file': dict(
                _rotating('debug.log', level='DEBUG', backups=2, max_mb=10),
                filters=['require_debug_true'],
            ),
        },

        # --- Loggers ---
        'loggers': {
            'django': {
                'handlers': ['console', 'app_file', 'error_file'],
                'level': 'INFO',
                'propagate': False,
            },
            'django.request': {
                'handlers': ['request_file', 'error_file', 'console'],
                'level': 'INFO',
                'propagate': False,
            },
            'django.security': {
                'handlers': ['security_file', 'error_file', 'console'],
                'level': 'INFO',
                'propagate': False,
            },
            'django.db.backends': {
                'handlers': ['debug_file'],
                'level': 'DEBUG' if debug else 'WARNING',
                'propagate': False,
            },

            # Notification fan-out and outbox delivery
            'apps.notifications': {
                'handlers': ['console', 'app_file', 'delivery_file', 'error_file'],
                'level': app_level,
                'propagate': False,
            },

            # Middleware logger
            'middleware': {
                'handlers': ['console', 'request_file', 'error_file'],
                'level': app_level,
                'propagate': False,
            },

            # Health check / diagnostics
            'diagnostics': {
                'handlers': ['console', 'app_file'],
                'level': 'DEBUG',
                'propagate': False,
            },
        },
    }

    for name in APP_LOGGERS:
        handlers = ['console', 'app_file', 'error_file']
        if name == 'apps.users':
            handlers.insert(2, 'security_file')
        config['loggers'][name] = {
            'handlers': handlers,
            'level': app_level,
            'propagate': False,
        }

    return config
