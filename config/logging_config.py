"""
Logging configuration using Python dictConfig
More flexible than INI format
"""
import copy
import os
import logging.config

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,

    'formatters': {
        'default': {
            'format': '%(message)s',
        },
        'detailed': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'json': {
            'class': 'pythonjsonlogger.jsonlogger.JsonFormatter',
            'format': '%(asctime)s %(name)s %(levelname)s %(message)s'
        }
    },

    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'DEBUG',
            'formatter': 'default',
            'stream': 'ext://sys.stderr'
        },
    },

    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },

    'loggers': {
        'urllib3': {
            'level': 'WARNING',
        },
        'liveness_client': {
            'level': 'INFO',
        }
    }
}


def build_logging_config(level=None, log_format=None, log_file=None):
    """Return a copy of LOGGING_CONFIG adjusted by arguments or LOG_* env vars"""
    level = (level or os.getenv('LOG_LEVEL', 'INFO')).upper()
    log_format = log_format or os.getenv('LOG_FORMAT', 'default')
    log_file = log_file or os.getenv('LOG_FILE')

    config = copy.deepcopy(LOGGING_CONFIG)

    if log_format == 'json':
        config['handlers']['console']['formatter'] = 'json'

    if log_file:
        config['handlers']['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': 'DEBUG',
            'formatter': 'detailed',
            'filename': log_file,
            'maxBytes': 10485760,  # 10MB
            'backupCount': 5,
            'encoding': 'utf-8'
        }
        config['root']['handlers'].append('file')

    config['loggers']['liveness_client']['level'] = level
    return config


def setup_logging(level=None, log_format=None, log_file=None):
    """Setup logging configuration"""
    config = build_logging_config(level, log_format, log_file)

    # Create the log file directory
    log_file = config['handlers'].get('file', {}).get('filename')
    if log_file and os.path.dirname(log_file):
        os.makedirs(os.path.dirname(log_file), exist_ok=True)

    # Apply configuration
    logging.config.dictConfig(config)

    logger = logging.getLogger('liveness_client')
    logger.debug("Logging configured successfully")

    return logger
