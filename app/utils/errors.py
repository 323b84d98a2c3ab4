from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException


class DomainError(ValueError):
    """Base for business-rule failures raised by the service layer."""
    status_code = 400


class NotFound(DomainError):
    status_code = 404


class Unauthenticated(DomainError):
    status_code = 401


class Forbidden(DomainError):
    status_code = 403


class InvalidState(DomainError):
    status_code = 400


class InvalidArgument(DomainError):
    status_code = 400


class InvalidOperation(DomainError):
    status_code = 400


def json_error(message, code=400):
    return jsonify({"success": False, "message": message}), code


def validation_message(err: ValidationError) -> str:
    first = err.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", "Invalid input")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"{field}: {msg}" if field else msg


def register_error_handlers(app, jwt):
    @app.errorhandler(DomainError)
    def _domain_error(e):
        return json_error(str(e), e.status_code)

    @app.errorhandler(ValidationError)
    def _validation_error(e):
        return json_error(validation_message(e), 400)

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return json_error(e.description, e.code)

    @app.errorhandler(Exception)
    def _unexpected(e):
        from app.extensions import db
        db.session.rollback()
        app.logger.exception(f"[error] Unhandled: {e}")
        return json_error("Server error", 500)

    # token problems all surface as 401 with the common envelope
    @jwt.unauthorized_loader
    def _missing_token(reason):
        return json_error("Access token required", 401)

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        return json_error("Invalid or expired token", 401)

    @jwt.expired_token_loader
    def _expired_token(_header, _payload):
        return json_error("Invalid or expired token", 401)
