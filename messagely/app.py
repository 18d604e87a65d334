# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from messagely.container import Container
from messagely.infrastructure.db import init_db
from messagely.shared.config import AppConfig, load_config
from messagely.shared.logging import logger, setup_logging
from messagely.shared.middleware.error_handler import configure_error_handling
from messagely.shared.middleware.request_logger import configure_request_logging

EXTENSION_KEY = "messagely"


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    setup_logging(config.logging.level, config.logging.file)

    container = Container(config)
    init_db(container.engine)

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = container
    debug_mode = config.logging.debug

    configure_request_logging(app, debug_mode=debug_mode)
    container.request_gate.bind(app)
    configure_error_handling(app, debug_mode=debug_mode)

    CORS(app, resources={r"/*": {"origins": config.security.allowed_origins}})

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.messages_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(f"Flask app initialized env={config.app_env}")
    return app


def get_container(app: Flask) -> Container:
    return app.extensions[EXTENSION_KEY]


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True, threaded=True)
