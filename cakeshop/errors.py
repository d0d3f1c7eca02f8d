"""
Error taxonomy and Flask error handlers.

Every failure a client is allowed to see is a ``ShopError`` subclass carrying
its HTTP status. Anything else is logged with a short error id and answered
with a generic 500 body.
"""
import logging
import traceback
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

import newrelic.agent
from flask import jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException


class ErrorCategory(Enum):
    """Error categories"""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PAYMENT = "payment"
    INTERNAL = "internal"


class ShopError(Exception):
    """Base class for errors that are reported to the client as-is"""

    status_code = 500
    category = ErrorCategory.INTERNAL
    default_message = 'Internal server error'

    def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body = {'error': self.message}
        if self.details is not None:
            body['details'] = self.details
        return body


class ValidationFailed(ShopError):
    status_code = 400
    category = ErrorCategory.VALIDATION
    default_message = 'Invalid input'

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> 'ValidationFailed':
        details = [
            {
                'field': '.'.join(str(part) for part in err['loc']),
                'message': err['msg'],
            }
            for err in exc.errors()
        ]
        return cls(details=details)


class Unauthorized(ShopError):
    status_code = 401
    category = ErrorCategory.AUTHENTICATION
    default_message = 'Unauthorized'


class NotFound(ShopError):
    status_code = 404
    category = ErrorCategory.NOT_FOUND
    default_message = 'Not found'


class Conflict(ShopError):
    status_code = 400
    category = ErrorCategory.CONFLICT
    default_message = 'Resource already exists'


class PaymentUnavailable(ShopError):
    status_code = 503
    category = ErrorCategory.PAYMENT
    default_message = 'Payment processor unavailable'


@dataclass
class ErrorDetail:
    """Server-side record of an unexpected failure"""
    error_id: str
    category: ErrorCategory
    message: str
    exception_type: str
    stack_trace: str
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.utcnow().isoformat())

    @classmethod
    def from_exception(cls, exception: Exception, context: Optional[Dict[str, Any]] = None) -> 'ErrorDetail':
        return cls(
            error_id=str(uuid.uuid4())[:8],
            category=ErrorCategory.INTERNAL,
            message=str(exception),
            exception_type=type(exception).__name__,
            stack_trace=''.join(traceback.format_exception(type(exception), exception, exception.__traceback__)),
            context=context or {},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_id": self.error_id,
            "category": self.category.value,
            "message": self.message,
            "exception_type": self.exception_type,
            "context": self.context,
            "timestamp": self.timestamp,
        }


def create_error_handlers(app):
    """
    Register JSON error handlers on the Flask application

    Args:
        app: Flask application instance
    """

    @app.errorhandler(ShopError)
    def handle_shop_error(error):
        level = logging.WARNING if error.status_code >= 500 else logging.INFO
        app.logger.log(level, f'{error.category.value} error: {error.message}', extra={
            'event_type': 'request_error',
            'status_code': error.status_code,
            'endpoint': request.endpoint,
        })
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(ValidationError)
    def handle_pydantic_error(error):
        return handle_shop_error(ValidationFailed.from_pydantic(error))

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        detail = ErrorDetail.from_exception(error, context={
            'endpoint': request.endpoint,
            'method': request.method,
        })
        app.logger.error(
            f'[{detail.error_id}] Unhandled {detail.exception_type}: {detail.message}\n{detail.stack_trace}',
            extra={'event_type': 'internal_error', 'error_id': detail.error_id},
        )
        newrelic.agent.notice_error(attributes={'error_id': detail.error_id})
        return jsonify({'error': 'Internal server error'}), 500
