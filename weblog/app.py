from __future__ import annotations

import logging
import re
from os import getenv

from flask import Flask, Response as FlaskResponse, redirect, request

from .config import WeblogConfig
from .dispatch import dispatch
from .repository import ContentRootError, PostRepository

MOBILE_RE = re.compile(r"Android|iPhone|iPad|iPod|webOS|BlackBerry|IEMobile|Opera Mini", re.IGNORECASE)
LOG_FORMAT = "%(asctime)-21s %(levelname)-8s %(name)-12s | %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug or getenv("DEBUG_LOGGING") is not None else logging.INFO
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    weblog_logger = logging.getLogger("weblog")
    weblog_logger.setLevel(level)
    if not any(isinstance(h, logging.StreamHandler) for h in weblog_logger.handlers):
        weblog_logger.addHandler(handler)


def is_mobile_user_agent(user_agent: str) -> bool:
    return bool(MOBILE_RE.search(user_agent or ""))


def create_app(config: WeblogConfig, rng=None) -> Flask:
    """Serve the weblog described by ``config``.

    The base URL of each request is rebuilt from the request scheme and the
    configured domain, so the same app answers on http and https.
    """
    app = Flask(__name__)
    repository = PostRepository(config.weblog_dir)
    logger.info("Serving posts from %s", repository.root)

    def handle(go: str) -> FlaskResponse:
        go = request.args.get("go", go)
        mobile = is_mobile_user_agent(request.headers.get("User-Agent", ""))
        request_config = config.for_request(f"{request.scheme}://{config.domain}", mobile=mobile)
        result = dispatch(go, repository, request_config, rng)
        if result.location is not None:
            return redirect(result.location, code=result.status)
        if result.status != 200:
            logger.info("%s %s", result.status, go or "/")
        return FlaskResponse(result.body, status=result.status, content_type=result.mimetype)

    @app.route("/")
    def index() -> FlaskResponse:
        return handle("")

    @app.route("/<path:go>")
    def page(go: str) -> FlaskResponse:
        return handle(go)

    @app.errorhandler(ContentRootError)
    def content_error(exc: ContentRootError):
        logger.error("Cannot read posts: %s", exc)
        return FlaskResponse("500 Internal Server Error\n", status=500, content_type="text/plain; charset=utf-8")

    return app
