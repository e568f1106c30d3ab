"""
Battlesnake HTTP server.

    GET  /        info handshake
    POST /start   game started (logged only)
    POST /move    {"move": "up" | "down" | "left" | "right"}
    POST /end     game over (logged only)

Usage: food-snake [--host HOST] [--port PORT] [--strategy heuristic|random]
"""

import argparse
import dataclasses
import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from food_snake import snake
from food_snake.config import LOG_LEVELS, Settings
from food_snake.selection import STRATEGIES, get_strategy

logger = logging.getLogger(__name__)

SERVER_ID = "battlesnake/github/food-snake"


class BattlesnakeHandler(BaseHTTPRequestHandler):
    settings: Settings = Settings()

    def do_GET(self):
        if self.path != "/":
            self._send(404, {"error": "not found"})
            return
        self._send(200, snake.info(self.settings))

    def do_POST(self):
        if self.path not in ("/start", "/move", "/end"):
            self._send(404, {"error": "not found"})
            return

        try:
            length = int(self.headers.get("Content-Length", 0))
            body = json.loads(self.rfile.read(length)) if length else {}
        except json.JSONDecodeError as e:
            logger.warning("Rejected %s: invalid JSON (%s)", self.path, e)
            self._send(400, {"error": f"invalid JSON: {e.msg}"})
            return
        except ValueError:
            self._send(400, {"error": "unreadable request body"})
            return

        if self.path == "/move":
            resp = snake.move(body, get_strategy(self.settings.strategy))
        elif self.path == "/start":
            snake.start(body)
            resp = {"ok": True}
        else:
            snake.end(body)
            resp = {"ok": True}
        self._send(200, resp)

    def _send(self, status: int, payload: dict):
        data = json.dumps(payload).encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def version_string(self):
        return SERVER_ID

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


def make_server(settings: Settings) -> ThreadingHTTPServer:
    """Build a thread-per-request server bound to settings.host:port."""
    handler = type("Handler", (BattlesnakeHandler,), {"settings": settings})
    return ThreadingHTTPServer((settings.host, settings.port), handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Food-seeking Battlesnake server")
    parser.add_argument("--host", type=str, default=None, help="Bind address (env HOST, default 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port (env PORT, default 8000)")
    parser.add_argument("--strategy", type=str, default=None, choices=sorted(STRATEGIES),
                        help="Move selection strategy (env BATTLESNAKE_STRATEGY, default heuristic)")
    parser.add_argument("--log-level", type=str.upper, default=None, choices=LOG_LEVELS,
                        help="Log level (env LOG_LEVEL, default INFO)")
    return parser


def load_settings(args: argparse.Namespace, environ=None) -> Settings:
    """Environment first, then any CLI flags that were given."""
    settings = Settings.from_env() if environ is None else Settings.from_env(environ)
    overrides = {
        name: getattr(args, name)
        for name in ("host", "port", "strategy", "log_level")
        if getattr(args, name) is not None
    }
    return dataclasses.replace(settings, **overrides)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(args)
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    server = make_server(settings)
    logger.info("Running Battlesnake at http://%s:%d (strategy: %s)",
                settings.host, server.server_address[1], settings.strategy)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
