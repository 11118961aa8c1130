"""
Application settings
"""
import os
from pathlib import Path


# Calendar order used for period filtering (January=0 ... December=11)
MONTHS = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
]

# Fixed 10% withholding
TAX_RATE = 0.10

DEFAULT_RATE_PER_HOUR = 500.0

BILL_STATUSES = ('pending', 'approved', 'paid')

# Report header lines
LEDGER_HEADER_LINES = ['DAVV, Indore', 'B.Voc.']
LEDGER_TITLE = 'Visiting Faculty Salary Bill'
PERSONAL_SUMMARY_HEADER_LINES = [
    'DEEN DAYAL UPADHYAY KAUSHAL KENDRA, D.A.V.V., Indore',
    'Summary of Honorarium of Visiting Faculty',
]
PERSONAL_SUMMARY_BANK_LINE = 'State Bank of India'


class Config:
    """Application settings"""

    # Server
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 8080))
    DEBUG = os.getenv('DEBUG', 'false').lower() == 'true'
    TESTING = False
    SECRET_KEY = os.getenv('SECRET_KEY', 'vf-billing-dev-key')

    # Paths
    APP_DIR = Path(__file__).parent
    BASE_DIR = APP_DIR.parent
    DB_PATH = Path(os.getenv('VF_DB_PATH', str(BASE_DIR / 'vf_billing.db')))
    OUTPUT_DIR = Path(os.getenv('VF_OUTPUT_DIR', str(Path.home() / 'Downloads')))

    # Default administrator (always accepted in addition to stored admins)
    ADMIN_ID = 'admin-001'
    ADMIN_NAME = 'Admin'
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', 'admin@billing.com')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'admin123')

    # CORS origins for the local front-end
    CORS_ORIGINS = ["http://localhost:*", "http://127.0.0.1:*"]


class DevelopmentConfig(Config):
    """Development settings"""
    DEBUG = True


class ProductionConfig(Config):
    """Production settings"""
    DEBUG = False


class TestingConfig(Config):
    """Test settings"""
    TESTING = True
    SECRET_KEY = 'testing'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config():
    """Return the settings class for the current environment"""
    env = os.getenv('FLASK_ENV', 'development')
    return config.get(env, config['default'])
