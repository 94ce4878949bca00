#!/usr/bin/env python3
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

Local test harness: starts the demo service in-process with the required
configuration set and prints the response of every endpoint.
"""

import os
import sys
import json
import logging
import requests

from app import create_app
from config import load_config, REQUIRED_CONFIG_VAR
from server import ServiceHandle

TEST_CONFIG_VALUE = 'test-config-value'
READY_TIMEOUT = 5.0

ENDPOINTS = [
    ('/', 'Root endpoint (/)'),
    ('/health', 'Health endpoint (/health)'),
    ('/api/data', 'API endpoint (/api/data)'),
]

FAILURE_SUMMARY = [
    '   1. Port mismatch (3000 vs 8080)',
    '   2. Missing REQUIRED_CONFIG in ACA',
    '   3. Health checks on wrong port',
    '   4. Running as root user',
]


def fetch_json(session, url):
    response = session.get(url)
    return response.json()


def main(port=None):
    """Run the local check. `port` overrides the configured port (0 picks a free one)."""
    print("🧪 Testing the failing ACA app locally...\n")

    # Simulate setting the required environment variable
    os.environ[REQUIRED_CONFIG_VAR] = TEST_CONFIG_VALUE
    config = load_config()
    if port is not None:
        config = config._replace(port=port)

    logging.getLogger('werkzeug').setLevel(logging.ERROR)
    server = ServiceHandle(create_app(config), config.host, config.port).start()
    try:
        if not server.wait_ready(READY_TIMEOUT):
            raise RuntimeError(f"server did not become ready on port {server.port}")

        print("\n📡 Testing endpoints...\n")
        with requests.Session() as session:
            for path, label in ENDPOINTS:
                body = fetch_json(session, server.url + path)
                print(f"✅ {label}:")
                print(json.dumps(body, indent=2))
                print('\n' + '=' * 50 + '\n')
    finally:
        server.shutdown()

    print("🎯 App works locally but will fail in Azure Container Apps!")
    print("🚨 Issues that will cause failure:")
    for line in FAILURE_SUMMARY:
        print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
