"""Connectivity probe used to explain vendor page fetch failures."""

import socket


def check_internet(host="8.8.8.8", port=53, timeout=3):
    """
    Tell "machine is offline" apart from "vendor page is unreachable".

    Opens a TCP connection to a well-known public resolver. Only the handshake
    matters; nothing is sent. Networks that block outbound port 53 report
    False here even when a proxy would reach the vendor page.

    Returns:
        bool: True if the connection succeeded
    """
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False
