"""
Server bootstrap.

Usage:
    # HTTP on server.http.port
    python -m kiosk_api.server --settings=./settings.json

    # HTTPS on server.https.port with the configured certificate
    python -m kiosk_api.server --settings=./settings.json https
"""

import logging
import sys
from typing import Any

import uvicorn

from kiosk_api.core.config import ConfigStore, get_configuration
from kiosk_api.main import create_app
from kiosk_api.shared.utils import to_boolean

logger = logging.getLogger(__name__)

HOST = "0.0.0.0"


def build_server_options(configuration: ConfigStore) -> dict[str, Any]:
    """Return the uvicorn keyword arguments for the configured protocol.

    Raises:
        ValueError: If HTTPS is on without a certificate and key.
    """
    options: dict[str, Any] = {
        "host": HOST,
        "timeout_keep_alive": int(configuration.get("server.timeout", 24 * 3600)),
        "log_config": None,  # keep the handlers installed by configure_logging
    }

    if not to_boolean(configuration.get("server.isHttps"), default=False):
        options["port"] = int(configuration.get("server.http.port", 8090))
        return options

    ssl = configuration.get("server.https.ssl", {})
    if not ssl.get("cert") or not ssl.get("key"):
        raise ValueError("server.https.ssl.cert and server.https.ssl.key are required for HTTPS")
    options.update(
        port=int(configuration.get("server.https.port", 443)),
        ssl_certfile=ssl["cert"],
        ssl_keyfile=ssl["key"],
    )
    if ssl.get("ca"):
        options["ssl_ca_certs"] = ssl["ca"]
    return options


def main() -> None:
    configuration = get_configuration()
    app = create_app(configuration)
    try:
        options = build_server_options(configuration)
        scheme = "https" if "ssl_certfile" in options else "http"
        logger.info(
            "%s listening at %s://%s:%d",
            configuration.get("server.name"),
            scheme,
            options["host"],
            options["port"],
        )
        uvicorn.run(app, **options)
    except Exception:
        logger.critical("Server failed to start", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
