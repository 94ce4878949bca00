"""
Failing ACA Demo - Deployment Misconfiguration Showcase
Copyright (C) 2024

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

import sys
import traceback
from datetime import datetime, timezone
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import EXPECTED_PORT, DEFAULT_PORT

KNOWN_ISSUES = [
    f'Port Mismatch: App runs on {DEFAULT_PORT}, ACA configured for {EXPECTED_PORT}',
    'Health Check Port Issues: Health checks point to wrong port',
    'Missing Environment Variables: REQUIRED_CONFIG not set',
    'Security Issue: Container runs as root',
]

SAMPLE_DATA = 'Sample data from failing app'


def utc_timestamp():
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T00:00:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def create_app(config):
    """Build the Flask app around an already loaded Config"""
    app = Flask(__name__)
    CORS(app, send_wildcard=True)

    # Health check endpoint - ISSUE: ACA will call this on 8080 but the app runs on 3000
    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'timestamp': utc_timestamp(),
            'config': config.required_config,
            'port': config.port,
            'message': 'Health check endpoint - but ACA will call this on wrong port!'
        })

    @app.route('/')
    def index():
        return jsonify({
            'message': 'Failing ACA Demo App',
            'description': 'This app is designed to fail when deployed to Azure Container Apps',
            'issues': list(KNOWN_ISSUES),
            'config': config.required_config,
            'port': config.port,
            'timestamp': utc_timestamp()
        })

    @app.route('/api/data')
    def api_data():
        return jsonify({
            'data': SAMPLE_DATA,
            'config': config.required_config,
            'port': config.port
        })

    @app.errorhandler(Exception)
    def handle_error(e):
        # Routing errors (404, 405) keep their own response
        if isinstance(e, HTTPException):
            return e
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc()
        return jsonify({
            'error': 'Internal Server Error',
            'message': str(e)
        }), 500

    return app
