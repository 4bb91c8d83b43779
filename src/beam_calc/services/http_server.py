from __future__ import annotations

import argparse
import json
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from beam_calc.services import api
from beam_calc.services.logging_setup import setup_logging
from beam_calc.services.settings import Settings, load_settings

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 64 * 1024


def _json_response(handler: BaseHTTPRequestHandler, status: int, payload: Dict[str, Any]) -> None:
    raw = json.dumps(payload, allow_nan=False).encode("utf-8")
    handler.send_response(status)
    handler.send_header("Content-Type", "application/json; charset=utf-8")
    handler.send_header("Content-Length", str(len(raw)))
    handler.send_header("Access-Control-Allow-Origin", "*")
    handler.end_headers()
    handler.wfile.write(raw)


def _pdf_response(handler: BaseHTTPRequestHandler, data: bytes, filename: str = "beam_report.pdf") -> None:
    handler.send_response(HTTPStatus.OK)
    handler.send_header("Content-Type", "application/pdf")
    handler.send_header("Content-Disposition", f'attachment; filename="{filename}"')
    handler.send_header("Content-Length", str(len(data)))
    handler.send_header("Access-Control-Allow-Origin", "*")
    handler.end_headers()
    handler.wfile.write(data)


class BeamHandler(BaseHTTPRequestHandler):
    server_version = "BeamCalc/0.1"

    # inyectado por make_server()
    settings: Settings = Settings()

    def log_message(self, format: str, *args) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    def _read_json(self) -> Tuple[Optional[Any], Optional[Tuple[int, Dict[str, Any]]]]:
        """Devuelve (datos, None) o (None, (status, cuerpo de error))."""
        try:
            length = int(self.headers.get("Content-Length", "0") or "0")
        except ValueError:
            return None, (400, api.error_body("invalid_request", "Content-Length inválido"))
        if length < 0:
            return None, (400, api.error_body("invalid_request", "Content-Length inválido"))
        if length > MAX_BODY_BYTES:
            return None, (413, api.error_body("payload_too_large", f"Cuerpo demasiado grande (máximo {MAX_BODY_BYTES} bytes)"))

        raw = self.rfile.read(length) if length > 0 else b""
        try:
            return json.loads(raw.decode("utf-8") if raw else "{}"), None
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None, (400, api.error_body("invalid_json", "Invalid JSON body"))

    def do_OPTIONS(self) -> None:
        self.send_response(HTTPStatus.NO_CONTENT)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "POST, GET, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()

    def do_GET(self) -> None:
        path = urlparse(self.path).path
        if path == "/health":
            _json_response(self, 200, {"ok": True})
            return
        _json_response(self, 404, api.error_body("not_found", "Ruta no encontrada"))

    def do_POST(self) -> None:
        path = urlparse(self.path).path
        if path not in ("/beam/calculate", "/beam/report"):
            _json_response(self, 404, api.error_body("not_found", "Ruta no encontrada"))
            return

        data, error = self._read_json()
        if error is not None:
            # sin leer el cuerpo no se puede reusar la conexión
            self.close_connection = True
            _json_response(self, *error)
            return

        if path == "/beam/calculate":
            status, body = api.calculate(data, self.settings)
            _json_response(self, status, body)
            return

        status, out = api.report(data, self.settings)
        if status == 200 and isinstance(out, bytes):
            _pdf_response(self, out)
        else:
            _json_response(self, status, out)


def make_server(host: str, port: int, settings: Settings) -> ThreadingHTTPServer:
    settings.section.check()
    handler = type("ConfiguredBeamHandler", (BeamHandler,), {"settings": settings})
    return ThreadingHTTPServer((host, port), handler)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Servicio de cálculo de vigas (/beam/calculate, /beam/report).")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--settings", default=None, help="Archivo JSON de configuración (sección E, I, S).")
    args = ap.parse_args(argv)

    # InvalidSectionModel / ValueError acá cortan el arranque
    settings = load_settings(args.settings)
    setup_logging(log_dir=settings.log_dir)

    httpd = make_server(args.host, args.port, settings)
    logger.info("Sirviendo en http://%s:%s (sección=%s)", args.host, args.port, settings.section.as_dict())
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Servidor detenido.")
    finally:
        httpd.server_close()
    return 0
