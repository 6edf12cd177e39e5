"""Read-only HTTP server publishing a generated report as JSON."""

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional

from .releasenote.notes import Report


def make_handler(report: Report, logger: Optional[logging.Logger] = None):
    """Build a request handler class serving ``report``."""
    logger = logger or logging.getLogger(__name__)
    routes = {
        '/ping': json.dumps({'message': 'pong'}).encode('utf-8'),
        '/release': json.dumps(report.to_dict()).encode('utf-8'),
    }

    class ReportHandler(BaseHTTPRequestHandler):
        def do_GET(self):
            body = routes.get(self.path.split('?', 1)[0])
            if body is None:
                self._send(404, json.dumps({'error': 'not found'}).encode('utf-8'))
                return
            self._send(200, body)

        def _send(self, status: int, body: bytes):
            self.send_response(status)
            self.send_header('Content-Type', 'application/json')
            self.send_header('Content-Length', str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args):
            logger.info(f"{self.address_string()} - {format % args}")

    return ReportHandler


def create_server(report: Report, host: str = "0.0.0.0", port: int = 8080,
                  logger: Optional[logging.Logger] = None) -> ThreadingHTTPServer:
    return ThreadingHTTPServer((host, port), make_handler(report, logger))
