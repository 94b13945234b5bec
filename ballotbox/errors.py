# ballotbox/errors.py

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException

# Error kinds raised by the store. Every failing store operation leaves the
# tables untouched, so callers can keep using the store after any of these.


class ElectionError(Exception):
    code = "ELECTION_ERROR"
    status = 400
    message = "Election error"

    def __init__(self, message=None):
        super().__init__(message or self.message)


class DuplicateUsername(ElectionError):
    code = "DUPLICATE_USERNAME"
    message = "Username already exists"


class InvalidCredentials(ElectionError):
    code = "INVALID_CREDENTIALS"
    status = 401
    message = "Invalid credentials"


class NotFound(ElectionError):
    code = "NOT_FOUND"
    status = 404
    message = "Resource not found"


class InvalidToken(ElectionError):
    code = "INVALID_TOKEN"
    status = 401
    message = "Invalid token"


class UserVanished(ElectionError):
    code = "USER_VANISHED"
    status = 401
    message = "User not found"


class EntropyUnavailable(ElectionError):
    code = "ENTROPY_UNAVAILABLE"
    status = 500
    message = "Secure random source unavailable"


class AlreadyVoted(ElectionError):
    code = "ALREADY_VOTED"
    message = "User has already voted"


class UnknownCandidate(ElectionError):
    code = "UNKNOWN_CANDIDATE"
    message = "Candidate not found"


class ValidationError(ElectionError, ValueError):
    # raised for client input only; any other ValueError is a server fault
    code = "VALIDATION_ERROR"
    message = "Invalid request"


def _payload(code: str, message: str, details=None, status=400):
    return (
        jsonify({
            "success": False,
            "error": {
                "code": code,
                "message": message,
                "details": details or None,
            },
        }),
        status,
    )


def register_error_handlers(app):
    @app.errorhandler(ElectionError)
    def handle_election_error(e: ElectionError):
        if e.status >= 500:
            current_app.logger.error("Store failure: %s", e.code)
        return _payload(e.code, str(e), status=e.status)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return _payload(
            code=e.name.replace(" ", "_").upper(),
            message=e.description or e.name,
            status=e.code or 400,
        )

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        # Don't leak internals
        current_app.logger.exception("Unhandled exception")
        return _payload("INTERNAL_SERVER_ERROR", "An unexpected error occurred", status=500)
