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

Failing ACA Demo Server
Run this script to start the demo service. It exits with status 1 when
REQUIRED_CONFIG is missing.
"""

import sys
import logging
from app import create_app
from config import load_config, ConfigError, EXPECTED_PORT
from server import ServiceHandle


def print_banner(config):
    print("🚨 FAILING APP STARTED 🚨")
    print(f"Server running on port {config.port}")
    print(f"ISSUE: Azure Container Apps expects port {EXPECTED_PORT}, but app runs on {config.port}")
    print(f"ISSUE: REQUIRED_CONFIG={config.required_config}")
    print("ISSUE: Container will run as root (security problem)")
    print("App will fail when deployed to Azure Container Apps!")
    sys.stdout.flush()


def main(environ=None):
    try:
        config = load_config(environ)
    except ConfigError as e:
        print(f"FATAL ERROR: {e}", file=sys.stderr)
        print("This will cause the application to fail when deployed to Azure Container Apps.",
              file=sys.stderr)
        return 1

    # Disable Flask's default request logging to reduce terminal noise
    logging.getLogger('werkzeug').setLevel(logging.ERROR)

    app = create_app(config)
    server = ServiceHandle(app, config.host, config.port)
    print_banner(config)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\n👋 Server stopped. Goodbye!")
    finally:
        server.shutdown()
    return 0


if __name__ == '__main__':
    sys.exit(main())
