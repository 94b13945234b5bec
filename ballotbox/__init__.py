# ballotbox/__init__.py

import logging

from flask import Flask, request

from ballotbox.audit.audit_logger import AuditLogger, NullAuditLogger
from ballotbox.config import Config
from ballotbox.database.memory_storage import MemoryStorage
from ballotbox.errors import register_error_handlers


def create_app(config_class=Config, storage=None) -> Flask:
    """
    Build the Flask app around an explicitly constructed store.

    The store is seeded here, before any request is served, and lives on
    ``app.extensions['ballotbox']`` for the lifetime of the app.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    if storage is None:
        storage = MemoryStorage.from_config(app.config)
    storage.connect()
    if app.config.get('SEED_CANDIDATES'):
        storage.seed_candidates(app.config['SEED_CANDIDATES'])

    audit_dir = app.config.get('AUDIT_LOG_DIR')
    audit = AuditLogger(log_dir=audit_dir) if audit_dir else NullAuditLogger()

    app.extensions['ballotbox'] = {'storage': storage, 'audit': audit}

    register_error_handlers(app)

    from ballotbox.routes import api
    app.register_blueprint(api, url_prefix='/api')

    @app.before_request
    def cors_preflight():
        if request.method == 'OPTIONS':
            return app.make_default_options_response()

    @app.after_request
    def cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = app.config['CORS_ALLOW_ORIGIN']
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization'
        return response

    @app.get('/health')
    def health():
        return {'status': 'ok'}, 200

    logging.getLogger(__name__).info(
        "ballotbox ready with %d candidates", len(storage.list_candidates())
    )
    return app


def shutdown_app(app: Flask) -> None:
    app.extensions['ballotbox']['storage'].close()
