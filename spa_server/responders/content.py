import logging
import mimetypes
import os
from flask import send_file

from spa_server.responders.errors import error_message, internal_error

logger = logging.getLogger(__name__)

DEFAULT_TYPE = "application/octet-stream"

# The platform registry is stale or missing entries on some systems
mimetypes.add_type("text/javascript", ".js")
mimetypes.add_type("text/javascript", ".mjs")
mimetypes.add_type("application/wasm", ".wasm")
mimetypes.add_type("application/manifest+json", ".webmanifest")
mimetypes.add_type("application/json", ".map")


def guess_type(file_path):
    content_type, _ = mimetypes.guess_type(file_path)
    if content_type is None:
        return DEFAULT_TYPE
    if content_type.startswith("text/"):
        return f"{content_type}; charset=utf-8"
    return content_type


def serve_file(path, file_path, stat, client, show_details=True):
    """
    Serve an existing regular file byte for byte. Werkzeug sets
    Content-Length and Last-Modified, and encodes non-ASCII names in
    Content-Disposition with a filename* parameter.
    """
    try:
        response = send_file(
            file_path,
            as_attachment=False,
            download_name=os.path.basename(file_path),
            conditional=False,
            etag=False,
            last_modified=stat.st_mtime,
        )
    except OSError as e:
        logger.error("%s %s %s %s", client, 500, path, error_message(e))
        return internal_error(e, show_details)

    logger.info("%s %s %s %s b", client, 200, path, response.content_length)

    response.content_type = guess_type(file_path)
    return response
