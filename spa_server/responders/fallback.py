import logging
from flask import Response

from spa_server.responders.errors import HTML_TYPE, error_message, not_found

logger = logging.getLogger(__name__)


def read_entry(entry_path):
    """Read the entry document. Raises OSError when it cannot be read."""
    with open(entry_path, "rb") as f:
        return f.read()


def serve_entry(entry_path, path, client):
    try:
        data = read_entry(entry_path)
    except OSError as e:
        logger.error("Could not read entry file: %s (%s)", entry_path, error_message(e))
        logger.warning("Are you sure it exists?")
        logger.info("%s %s %s", client, 404, path)
        return not_found(path)

    logger.info("%s %s %s %s b", client, 200, path, len(data))

    response = Response(data, status=200, content_type=HTML_TYPE)
    response.headers["Content-Length"] = str(len(data))
    return response
