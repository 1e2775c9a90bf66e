"""Vercel Serverless Function for adding a match result."""

import json
import os
import sys
from http.server import BaseHTTPRequestHandler
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from bowlstats.match_entry import (  # noqa: E402
    check_password,
    get_admin_password,
    parse_submission,
    update_results_file,
)


class handler(BaseHTTPRequestHandler):  # noqa: N801
    def do_OPTIONS(self):
        """Handle CORS preflight - no auth needed."""
        self.send_response(200)
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, POST, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type, Authorization')
        self.send_header('Access-Control-Max-Age', '86400')
        self.send_header('Content-Length', '0')
        self.end_headers()

    def do_GET(self):
        """Handle GET requests - just for testing."""
        self._send_json(200, {'status': 'Add Match API is running', 'method': 'GET'})

    def do_PUT(self):
        self._method_not_allowed()

    def do_PATCH(self):
        self._method_not_allowed()

    def do_DELETE(self):
        self._method_not_allowed()

    def do_POST(self):
        """Handle a new match result."""
        try:
            content_length = int(self.headers.get('Content-Length', 0))
            body = self.rfile.read(content_length)
            data = json.loads(body.decode()) if body else {}

            expected_password = get_admin_password()
            if not expected_password:
                return self._send_json(500, {'error': 'Server configuration error'})

            password = data.get('password') if isinstance(data, dict) else None
            if not check_password(password, expected_password):
                return self._send_json(401, {'error': 'Invalid admin password'})

            submission, errors = parse_submission(data)
            if submission is None:
                return self._send_json(400, {'error': 'Invalid payload', 'details': errors})

            github_token = os.environ.get('GITHUB_TOKEN')
            if not github_token:
                return self._send_json(500, {'error': 'Server configuration error'})

            success, message = update_results_file(submission, github_token)
            if success:
                return self._send_json(200, {'ok': True, 'message': message})
            return self._send_json(500, {'error': message})

        except json.JSONDecodeError:
            return self._send_json(400, {'error': 'Invalid JSON'})
        except Exception:
            return self._send_json(500, {'error': 'Server error'})

    def _method_not_allowed(self):
        self._send_json(405, {'error': 'Method not allowed'})

    def _send_json(self, status_code: int, data: dict):
        """Send JSON response with CORS headers."""
        self.send_response(status_code)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, POST, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type, Authorization')
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def log_message(self, format, *args):
        """Suppress default logging."""
        pass
