"""
Mock EPP HTTP Endpoint for Testing

A small threaded HTTP server that answers every POST with a canned EPP
response. Status code and response delay are adjustable per test.
"""

import logging
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import List, Optional

logger = logging.getLogger("mock_epp_server")

GREETING_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<epp xmlns="urn:ietf:params:xml:ns:epp-1.0">
  <greeting>
    <svID>Mock EPP Test Server</svID>
    <svDate>2024-01-01T00:00:00Z</svDate>
    <svcMenu>
      <version>1.0</version>
      <lang>en</lang>
      <objURI>urn:ietf:params:xml:ns:domain-1.0</objURI>
    </svcMenu>
  </greeting>
</epp>"""

SUCCESS_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<epp xmlns="urn:ietf:params:xml:ns:epp-1.0">
  <response>
    <result code="1000">
      <msg>Command completed successfully</msg>
    </result>
  </response>
</epp>"""


class _EPPRequestHandler(BaseHTTPRequestHandler):
    server: "MockEPPServer"

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length)
        self.server.requests.append((self.path, body))

        if self.server.delay:
            time.sleep(self.server.delay)

        response = self.server.response_for(body)
        self.send_response(self.server.status)
        self.send_header("Content-Type", "application/epp+xml")
        self.send_header("Content-Length", str(len(response)))
        self.end_headers()
        try:
            if self.server.drip:
                for i in range(len(response)):
                    self.wfile.write(response[i:i + 1])
                    self.wfile.flush()
                    time.sleep(self.server.drip)
            else:
                self.wfile.write(response)
        except OSError:
            # Client gave up (timeout tests)
            pass

    def log_message(self, format, *args):
        logger.debug(format, *args)


class MockEPPServer(ThreadingHTTPServer):
    """
    Threaded mock EPP endpoint bound to an ephemeral localhost port.

    hello commands get GREETING_XML; everything else gets `response`.
    A non-zero `drip` sends the body one byte at a time, `drip` seconds apart.
    """

    daemon_threads = True

    def __init__(self, response: bytes = SUCCESS_RESPONSE, status: int = 200, delay: float = 0.0):
        super().__init__(("127.0.0.1", 0), _EPPRequestHandler)
        self.response = response
        self.status = status
        self.delay = delay
        self.drip = 0.0
        self.requests: List[tuple] = []
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.server_address[1]

    def response_for(self, body: bytes) -> bytes:
        if b"<hello" in body or b":hello" in body:
            return GREETING_XML
        return self.response

    def start(self) -> "MockEPPServer":
        self._thread = threading.Thread(target=self.serve_forever, daemon=True)
        self._thread.start()
        logger.info(f"Mock EPP server listening on 127.0.0.1:{self.port}")
        return self

    def stop(self) -> None:
        self.shutdown()
        self.server_close()
