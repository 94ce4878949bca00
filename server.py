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

HTTP listener with an explicit readiness signal.
"""

from threading import Thread, Event
from werkzeug.serving import make_server


class ServiceHandle:
    """Owns the bound werkzeug server for one Flask app.

    The socket is bound in the constructor, so a port conflict raises here
    rather than inside the serve loop. Requests are handled one at a time.
    """

    def __init__(self, app, host, port):
        self._server = make_server(host, port, app, threaded=False)
        self._thread = None
        self.host = host
        self.ready = Event()

    @property
    def port(self):
        return self._server.server_port

    @property
    def url(self):
        host = '127.0.0.1' if self.host == '0.0.0.0' else self.host
        return f"http://{host}:{self.port}"

    def wait_ready(self, timeout=None):
        return self.ready.wait(timeout)

    def serve_forever(self):
        self.ready.set()
        try:
            self._server.serve_forever()
        finally:
            self.ready.clear()

    def start(self):
        """Serve on a daemon thread and return self"""
        self._thread = Thread(target=self.serve_forever, daemon=True)
        self._thread.start()
        return self

    def shutdown(self):
        if self._thread is not None:
            self._server.shutdown()
            self._thread.join()
            self._thread = None
        self._server.server_close()
