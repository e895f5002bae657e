import argparse
import logging
import random
import socket
import sys
from werkzeug.serving import make_server

from spa_server.app import create_app
from spa_server.config.config import ConfigError, load_config
from spa_server.responders.errors import error_message
from spa_server.responders.fallback import read_entry

logger = logging.getLogger(__name__)

LOG_FORMAT = "[spa-server] %(levelname)s %(message)s"
PORT_OVERHEAD = 1000
BACKLOG = 128


class StartupError(Exception):
    pass


class EntryPointMissing(StartupError):
    def __init__(self, entry_path, cause):
        super().__init__(f"Could not read entry file: {entry_path} ({error_message(cause)})")
        self.entry_path = entry_path


class PortUnavailable(StartupError):
    def __init__(self, port, suggestion, cause):
        super().__init__(f"Unable to initialize server on port {port} ({error_message(cause)})")
        self.port = port
        self.suggestion = suggestion


def configure_logging(level="INFO"):
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # One log line per request comes from the dispatcher already
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def suggest_port(port):
    return port + random.randrange(1, PORT_OVERHEAD)


def check_entry_point(config):
    try:
        read_entry(config.entry_path)
    except OSError as e:
        raise EntryPointMissing(config.entry_path, e)


def bind_socket(host, port):
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
        sock.listen(BACKLOG)
    except OSError as e:
        sock.close()
        raise PortUnavailable(port, suggest_port(port), e)
    return sock


def build_server(config):
    """
    Two-phase startup: the entry document must be readable before the port
    is bound. Returns a threaded WSGI server ready for serve_forever().
    """
    check_entry_point(config)
    sock = bind_socket(config.host, config.port)
    try:
        # Werkzeug dups the descriptor, our handle can go
        return make_server(config.host, config.port, create_app(config), threaded=True, fd=sock.fileno())
    finally:
        sock.close()


def run(config):
    server = build_server(config)
    logger.info("Serving %s (entry point %s)", config.root, config.entry_point)
    logger.info("Server can be accessed at the following address:")
    logger.info("  http://127.0.0.1:%s", config.port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    finally:
        server.server_close()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="spa-server",
        description="Serve static files, falling back to an entry document for application routes",
    )
    parser.add_argument("-p", "--port", default=None, help="Port to listen on (env PORT, default 8080)")
    parser.add_argument("-e", "--entry", dest="entry_point", default=None, help="Entry document relative to the root (env ENTRY_POINT, default index.html)")
    parser.add_argument("-d", "--dir", dest="root", default=None, help="Directory to serve (env ROOT, default current directory)")
    parser.add_argument("--host", default=None, help="Bind address (env HOST, default 0.0.0.0)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        config = load_config(vars(args))
    except ConfigError as e:
        configure_logging()
        logger.error("%s", e)
        return 1

    configure_logging(config.log_level)

    try:
        run(config)
    except EntryPointMissing as e:
        logger.error("%s", e)
        logger.error("Are you sure it exists?")
        return 1
    except PortUnavailable as e:
        logger.error("%s", e)
        logger.error("How about a new port? spa-server -p %s -e %s", e.suggestion, config.entry_point)
        return 1
    except OSError as e:
        logger.error("Server error: %s", error_message(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
