# -*- coding: utf-8 -*-
"""Service address handling."""

from __future__ import annotations

from urllib.parse import urlsplit

from .defaults import DEFAULT_PORT

WS_SCHEMES = ("ws", "wss")


def parse_address(address: str, default_port: int = DEFAULT_PORT) -> str:
    """Turn a `host:port` service address into a WebSocket URL.

    Parameters
    ----------
    address : str
        Either `host`, `host:port`, or a full `ws://` / `wss://` URL.
    default_port : int, optional
        Port used when the address carries none, by default DEFAULT_PORT

    Returns
    -------
    str
        The WebSocket URL, e.g. `ws://localhost:41000`

    Raises
    ------
    ValueError
        If the address is empty, has an unsupported scheme or a bad port.
    """
    if not address or not address.strip():
        raise ValueError("Empty service address.")
    address = address.strip()

    if "://" not in address:
        address = "ws://" + address

    parts = urlsplit(address)
    if parts.scheme not in WS_SCHEMES:
        raise ValueError(
            f"Unsupported scheme '{parts.scheme}' in address, use one of {WS_SCHEMES}."
        )
    if not parts.hostname:
        raise ValueError(f"No host in service address '{address}'.")
    try:
        port = parts.port
    except ValueError as e:
        raise ValueError(f"Bad port in service address '{address}'.") from e
    if port is None:
        port = default_port

    host = parts.hostname
    if ":" in host:  # ipv6 literal
        host = f"[{host}]"
    return f"{parts.scheme}://{host}:{port}{parts.path}"
