"""
=============================================================================
MESSAGE MODEL CONFIGURATION
=============================================================================

Defaults applied by MessageFactory when it builds messages, plus the
logging setup.

The value types themselves (Uri, Request, ...) never read configuration or
the environment. Only the factory and configure_logging() do, so a message
built directly always behaves the same way.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Arguments passed in code                                       │
    │      └── MessageConfig(protocol_version="2")                       │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTPMODEL_PROTOCOL_VERSION=2                              │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict


_VERSION_PATTERN = re.compile(r"^\d(\.\d)?$")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("text", "json")


@dataclass
class MessageConfig:
    """
    Configuration for building messages.

    Example:
        config = MessageConfig(scheme_ports={"ws": 80, "wss": 443})
        factory = MessageFactory(config)
        factory.create_uri("wss://chat.example.com:443/").port   # None
    """

    # ─────────────────────────────────────────────────────────────────────
    # MESSAGE DEFAULTS
    # ─────────────────────────────────────────────────────────────────────

    protocol_version: str = "1.1"
    """
    Protocol version stamped on factory-built messages.
    Version number only: "1.0", "1.1", "2".
    """

    scheme_ports: Dict[str, int] = field(default_factory=dict)
    """
    Extra scheme → standard port entries for URIs the factory creates.
    Extends the built-in table (http 80, https 443, ...); can't override it.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "WARNING"
    """
    Level for the "httpmodel" logger. DEBUG shows every rejected value
    and every synthesized Host header.
    """

    log_format: str = "text"
    """
    'text' for humans, 'json' for log aggregators.
    """

    @classmethod
    def from_env(cls) -> "MessageConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTPMODEL_PROTOCOL_VERSION  Default protocol version (default: 1.1)
        HTTPMODEL_SCHEME_PORTS      Extra ports, "ws=80,wss=443" (default: none)
        HTTPMODEL_LOG_LEVEL         Logging level (default: WARNING)
        HTTPMODEL_LOG_FORMAT        "text" or "json" (default: text)

        =====================================================================
        """
        return cls(
            protocol_version=os.getenv("HTTPMODEL_PROTOCOL_VERSION", "1.1"),
            scheme_ports=_parse_scheme_ports(os.getenv("HTTPMODEL_SCHEME_PORTS", "")),
            log_level=os.getenv("HTTPMODEL_LOG_LEVEL", "WARNING").upper(),
            log_format=os.getenv("HTTPMODEL_LOG_FORMAT", "text").lower(),
        )

    @property
    def level(self) -> int:
        """log_level as a logging module constant."""
        return getattr(logging, self.log_level.upper())

    def validate(self) -> None:
        """
        Validate configuration values.

        Called by MessageFactory on construction so a bad setting fails at
        startup rather than on the first message built.
        """
        if not _VERSION_PATTERN.match(self.protocol_version):
            raise ValueError(f"Invalid protocol_version: {self.protocol_version!r}")

        for scheme, port in self.scheme_ports.items():
            if not isinstance(port, int) or not 0 < port < 65536:
                raise ValueError(f"Invalid port for scheme {scheme}: {port}. Must be 1-65535.")

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")

        if self.log_format not in _LOG_FORMATS:
            raise ValueError("log_format must be 'text' or 'json'")


def _parse_scheme_ports(raw: str) -> Dict[str, int]:
    """Parse "ws=80,wss=443" into {"ws": 80, "wss": 443}."""
    ports: Dict[str, int] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        scheme, sep, port = item.partition("=")
        if not sep or not port.strip().isdigit():
            raise ValueError(f"Invalid HTTPMODEL_SCHEME_PORTS entry: {item!r}")
        ports[scheme.strip().lower()] = int(port)
    return ports
