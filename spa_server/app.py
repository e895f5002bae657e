import logging
import os
import stat
from flask import Flask, current_app, request
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from spa_server.resolve.client import client_label
from spa_server.resolve.resolver import resolve
from spa_server.responders.content import serve_file
from spa_server.responders.errors import error_message, internal_error, not_found
from spa_server.responders.fallback import serve_entry

logger = logging.getLogger(__name__)

# Listed so Flask routes them; any other verb reaches dispatch through handle_unrouted
METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def stat_file(file_path):
    """Return the stat result for a regular file, or None for anything else."""
    if file_path is None:
        return None
    try:
        st = os.stat(file_path)
    except (OSError, ValueError):
        # ValueError: embedded null byte
        return None
    return st if stat.S_ISREG(st.st_mode) else None


def dispatch(path=None):
    config = current_app.config["SERVER_CONFIG"]
    client = client_label(request)
    resolution = resolve(request.path, config.root)

    st = stat_file(resolution.file_path)
    if st is not None:
        return serve_file(resolution.path, resolution.file_path, st, client, config.show_error_details)

    if resolution.is_asset:
        logger.info("%s %s %s", client, 404, resolution.path)
        return not_found(resolution.path)

    return serve_entry(config.entry_path, resolution.path, client)


def handle_unrouted(e):
    # Paths the URL map cannot match (e.g. a leading "//") and unlisted
    # methods (PROPFIND, MKCOL, ...) still go through dispatch
    return dispatch()


def handle_exception(e):
    if isinstance(e, HTTPException):
        return e
    config = current_app.config["SERVER_CONFIG"]
    logger.exception("%s %s %s %s", client_label(request), 500, request.path, error_message(e))
    return internal_error(e, config.show_error_details)


def create_app(config):
    app = Flask(__name__, static_folder=None)
    app.config["SERVER_CONFIG"] = config
    app.url_map.merge_slashes = False

    app.add_url_rule("/", view_func=dispatch, methods=METHODS, provide_automatic_options=False)
    app.add_url_rule(
        "/<path:path>",
        endpoint="dispatch_path",
        view_func=dispatch,
        methods=METHODS,
        provide_automatic_options=False,
        strict_slashes=False,
    )

    app.register_error_handler(NotFound, handle_unrouted)
    app.register_error_handler(MethodNotAllowed, handle_unrouted)
    app.register_error_handler(Exception, handle_exception)
    return app
