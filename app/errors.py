import logging
from flask import Blueprint
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from models import db
from app.utils.responses import error, internal_error_response

errors_bp = Blueprint("errors_bp", __name__)


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    msg = e.description or getattr(e, "name", "HTTP Error")
    return error(msg, status=e.code, code=e.code)


@errors_bp.app_errorhandler(SQLAlchemyError)
def handle_database_error(e):
    db.session.rollback()
    logging.exception("Database error")
    return error(
        "A database error occurred. Please try again later.",
        status=500,
        code=500,
    )


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    logging.exception("Unhandled exception")
    return internal_error_response()
