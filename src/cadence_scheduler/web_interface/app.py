"""
Main Flask application for the Cadence Scheduler web interface.
This file creates the app and registers the API endpoints.
"""

import logging
import os

from flask import Flask
from flask_cors import CORS

from .scheduler_api import (
    generate_schedule_view,
    export_schedule_view,
    export_report_view,
    quarter_options,
    health_check,
)

logger = logging.getLogger(__name__)


def create_app():
    app = Flask(__name__)

    origins = os.environ.get('CORS_ORIGINS', '*')
    CORS(app, origins=[o.strip() for o in origins.split(',')] if origins != '*' else '*')

    # Register the routes
    app.route('/generate-schedule', methods=['POST'])(generate_schedule_view)
    app.route('/export-schedule', methods=['POST'])(export_schedule_view)
    app.route('/export-report', methods=['POST'])(export_report_view)
    app.route('/quarters', methods=['GET'])(quarter_options)
    app.route('/health', methods=['GET'])(health_check)

    return app


app = create_app()


def serve():
    from waitress import serve as waitress_serve

    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO'))
    # Get port from environment variable (Railway sets this)
    port = int(os.environ.get('PORT', 8080))
    logger.info("Starting Cadence Scheduler API on port %d", port)
    waitress_serve(app, host="0.0.0.0", port=port)


# This is only run when this file is run directly
if __name__ == '__main__':
    serve()
