import os

APP_DIR = os.path.dirname(os.path.abspath(__file__))
CONFIG_DIR = os.environ.get('UMAMI_CONFIG_DIR', os.path.join(APP_DIR, 'config'))
DB_FILE = os.path.join(CONFIG_DIR, 'umami.db')
CONFIG_FILE = os.path.join(CONFIG_DIR, 'settings.yaml')

UMAMI_DB = 'sqlite:///' + DB_FILE

BUILD_VERSION = '20261019_0900'

DEFAULT_SETTINGS = {
    "app": {
        "env": "development",
    },
    "database": {
        "url": UMAMI_DB,
    },
    "logging": {
        "level": "INFO",
        "format": "console",
        "log_query": False,
    },
}

# Units accepted by date_trunc for the pageview trend
TIME_UNITS = [
    'minute',
    'hour',
    'day',
    'week',
    'month',
    'year',
]

# count() expressions accepted by the pageview trend
COUNT_ALL = '*'
COUNT_SESSIONS = 'distinct session_id'
COUNT_EXPRESSIONS = [
    COUNT_ALL,
    COUNT_SESSIONS,
]

DEFAULT_TIMEZONE = 'utc'
DEFAULT_UNIT = 'day'
