import logging
import os
from dataclasses import dataclass, replace
from dotenv import load_dotenv

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_ENTRY_POINT = "index.html"

TRUTHY = ("1", "true", "t", "yes", "y", "on")
FALSY = ("0", "false", "f", "no", "n", "off")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ServerConfig:
    root: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    entry_point: str = DEFAULT_ENTRY_POINT
    show_error_details: bool = True
    log_level: str = "INFO"

    @property
    def entry_path(self):
        return os.path.join(self.root, self.entry_point)


def parse_port(value):
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid port: {value!r}")
    if not 0 < port < 65536:
        raise ConfigError(f"Port out of range: {port}")
    return port


def parse_bool(value, name):
    text = str(value).strip().lower()
    if text in TRUTHY:
        return True
    if text in FALSY:
        return False
    raise ConfigError(f"Invalid value for {name}: {value!r}")


def load_config(overrides=None):
    """
    Build the server configuration from the environment (.env included).
    Non-None values in `overrides` (usually CLI flags) win over the environment.
    """
    load_dotenv()

    config = ServerConfig(
        root=os.getenv("ROOT") or os.getcwd(),
        host=os.getenv("HOST") or DEFAULT_HOST,
        port=parse_port(os.getenv("PORT", DEFAULT_PORT)),
        entry_point=os.getenv("ENTRY_POINT") or DEFAULT_ENTRY_POINT,
        show_error_details=parse_bool(os.getenv("SHOW_ERROR_DETAILS", "1"), "SHOW_ERROR_DETAILS"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )

    if overrides:
        provided = {k: v for k, v in overrides.items() if v is not None}
        if "port" in provided:
            provided["port"] = parse_port(provided["port"])
        config = replace(config, **provided)

    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ConfigError(f"Invalid log level: {config.log_level!r}")

    # Everything downstream assumes an absolute root
    return replace(config, root=os.path.abspath(config.root))
