import traceback
from flask import Response
from markupsafe import escape

HTML_TYPE = "text/html; charset=utf-8"

NOT_FOUND_PAGE = """<h1>Not Found</h1>
<div>The requested path <code>{path}</code> was not found on this server.</div>
"""

INTERNAL_ERROR_PAGE = """<h1>Internal Server Error</h1>
<div><pre><code>{message}</code></pre></div>
{details}"""

DETAILS_BLOCK = "<div><pre><code>{trace}</code></pre></div>\n"


def not_found(path):
    body = NOT_FOUND_PAGE.format(path=escape(path))
    return Response(body, status=404, content_type=HTML_TYPE)


def internal_error(error, show_details=True):
    """
    Verbose 500 page meant for development: the error message, plus the
    traceback when `show_details` is on.
    """
    details = ""
    if show_details:
        trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        details = DETAILS_BLOCK.format(trace=escape(trace))
    body = INTERNAL_ERROR_PAGE.format(message=escape(error_message(error)), details=details)
    return Response(body, status=500, content_type=HTML_TYPE)


def error_message(error):
    # OSError's str() is "[Errno 13] Permission denied: '/path'"; keep strerror only
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error) or type(error).__name__
