from __future__ import annotations

import os
import re

from pydantic import BaseModel, ConfigDict

DEFAULT_LISTEN = ":9090"

_DURATION_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class SettingsError(ValueError):
    """Raised when startup configuration is missing or malformed."""


class ProxySettings(BaseModel):
    """Startup configuration, built once and passed to whoever needs it."""

    model_config = ConfigDict(frozen=True)

    wavefront_address: str
    wavefront_token: str
    # Seconds the backend clock runs behind the caller's.
    skew: float = 0.0
    host: str = "0.0.0.0"
    port: int = 9090
    # Backend HTTP timeout in seconds; None waits indefinitely.
    timeout: float | None = None


def parse_duration(text: str) -> float:
    """Parse a duration such as ``30s``, ``1h30m`` or ``-250ms`` into seconds.

    A bare ``0`` is accepted without a unit.
    """
    body = text.strip()
    sign = 1.0
    if body and body[0] in "+-":
        sign = -1.0 if body[0] == "-" else 1.0
        body = body[1:]
    if body == "0":
        return 0.0
    if not body:
        raise SettingsError(f"invalid duration {text!r}")

    total = 0.0
    pos = 0
    while pos < len(body):
        match = _DURATION_PART.match(body, pos)
        if match is None:
            raise SettingsError(f"invalid duration {text!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return sign * total


def parse_listen_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``:port``) into its parts; an empty host binds all interfaces."""
    host, sep, port_text = address.rpartition(":")
    if not sep:
        raise SettingsError(f"invalid listen address {address!r}: missing port")
    try:
        port = int(port_text)
    except ValueError:
        raise SettingsError(f"invalid listen address {address!r}: bad port") from None
    if not 0 <= port <= 65535:
        raise SettingsError(f"invalid listen address {address!r}: port out of range")
    return host.strip("[]") or "0.0.0.0", port


def load_settings(
    http: str = DEFAULT_LISTEN,
    skew: str = "0s",
    timeout: float | None = None,
) -> ProxySettings:
    """Build settings from process flags plus ``WAVEFRONT_ADDRESS`` and ``WAVEFRONT_TOKEN``."""
    address = os.getenv("WAVEFRONT_ADDRESS", "")
    token = os.getenv("WAVEFRONT_TOKEN", "")
    if not address:
        raise SettingsError("WAVEFRONT_ADDRESS is not set")
    if not token:
        raise SettingsError("WAVEFRONT_TOKEN is not set")
    host, port = parse_listen_address(http)
    return ProxySettings(
        wavefront_address=address,
        wavefront_token=token,
        skew=parse_duration(skew),
        host=host,
        port=port,
        timeout=timeout,
    )
