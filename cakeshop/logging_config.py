"""
Logging configuration with request context
"""
import logging
import sys
from flask import has_request_context, request
from flask.logging import default_handler


class RequestFormatter(logging.Formatter):
    """Custom formatter that adds request context to logs"""

    def format(self, record):
        if has_request_context():
            record.url = request.url
            record.method = request.method
            record.remote_addr = request.remote_addr
        else:
            record.url = 'N/A'
            record.method = 'N/A'
            record.remote_addr = 'N/A'

        return super().format(record)


def setup_logging(app):
    """
    Setup logging configuration for the Flask app.
    Service modules log under the app logger's namespace and share its handler.
    """
    formatter = RequestFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - '
        '[%(method)s %(url)s] - '
        '[IP: %(remote_addr)s] - '
        '%(message)s'
    )

    app.logger.setLevel(logging.INFO)

    app.logger.removeHandler(default_handler)

    # The logger is shared by every app built in the same process
    if not any(isinstance(h.formatter, RequestFormatter) for h in app.logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        app.logger.addHandler(console_handler)

    # Prevent duplicate logs
    app.logger.propagate = False

    app.logger.info('Application logging configured', extra={
        'event_type': 'app_startup',
        'testing': app.config.get('TESTING', False)
    })

    return app.logger
