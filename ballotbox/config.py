# ballotbox/config.py

import os


def _csv(value):
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'change-me-in-production')

    # Argon2id cost parameters for stored passwords
    ARGON2_TIME_COST = int(os.environ.get('ARGON2_TIME_COST', '3'))
    ARGON2_MEMORY_COST = int(os.environ.get('ARGON2_MEMORY_COST', '65536'))
    ARGON2_PARALLELISM = int(os.environ.get('ARGON2_PARALLELISM', '4'))

    # Session tokens: bytes of CSPRNG output (hex-encoded), 0 TTL = no expiry
    SESSION_TOKEN_BYTES = int(os.environ.get('SESSION_TOKEN_BYTES', '32'))
    SESSION_TOKEN_TTL_SECONDS = int(os.environ.get('SESSION_TOKEN_TTL_SECONDS', '0'))

    SEED_CANDIDATES = _csv(os.environ.get('SEED_CANDIDATES', 'Alice Johnson,Bob Smith,Charlie Brown'))

    AUDIT_LOG_DIR = os.environ.get('AUDIT_LOG_DIR', 'logs')
    CORS_ALLOW_ORIGIN = os.environ.get('CORS_ALLOW_ORIGIN', '*')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    HOST = os.environ.get('HOST', '127.0.0.1')
    PORT = int(os.environ.get('PORT', '8000'))


class TestingConfig(Config):
    TESTING = True
    ARGON2_TIME_COST = 1
    ARGON2_MEMORY_COST = 8
    ARGON2_PARALLELISM = 1
    AUDIT_LOG_DIR = ''
