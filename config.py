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

Configuration loading for the demo service.

The environment is read exactly once, here. Everything else receives a
Config instance.
"""

import os
from collections import namedtuple

# ISSUE: App runs on 3000, but ACA expects 8080
DEFAULT_PORT = 3000
EXPECTED_PORT = 8080
HOST = '0.0.0.0'

REQUIRED_CONFIG_VAR = 'REQUIRED_CONFIG'
PORT_VAR = 'PORT'


class ConfigError(Exception):
    """Raised when the environment cannot produce a usable configuration"""


class MissingConfigError(ConfigError):
    """Raised when REQUIRED_CONFIG is unset or empty"""

    def __init__(self, name=REQUIRED_CONFIG_VAR):
        super().__init__(f"{name} environment variable is not set!")
        self.name = name


class Config(namedtuple('Config', ['required_config', 'port', 'host'])):
    __slots__ = ()

    @property
    def port_mismatch(self):
        return self.port != EXPECTED_PORT


def parse_port(value):
    """Parse PORT, falling back to DEFAULT_PORT when it is unset or blank"""
    if value is None or not value.strip():
        return DEFAULT_PORT
    try:
        port = int(value)
    except ValueError:
        raise ConfigError(f"{PORT_VAR} must be an integer, got {value!r}")
    if not 0 <= port <= 65535:
        raise ConfigError(f"{PORT_VAR} out of range: {port}")
    return port


def load_config(environ=None):
    """Build the Config from an environment mapping.

    Raises MissingConfigError when REQUIRED_CONFIG is absent or empty and
    ConfigError for an unusable PORT. Exiting the process is left to the
    caller.
    """
    if environ is None:
        environ = os.environ

    # ISSUE: Missing REQUIRED_CONFIG environment variable will cause app to crash
    required = environ.get(REQUIRED_CONFIG_VAR)
    if not required:
        raise MissingConfigError()

    return Config(
        required_config=required,
        port=parse_port(environ.get(PORT_VAR)),
        host=HOST,
    )
