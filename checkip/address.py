import ipaddress
import logging
import re
from typing import Mapping

logger = logging.getLogger(__name__)

FORWARDED_HEADER = "x-forwarded-for"

# Built once at import and never mutated
PRIVATE_IP_BLOCKS = tuple(
    ipaddress.ip_network(cidr)
    for cidr in (
        "127.0.0.0/8",     # IPv4 loopback
        "10.0.0.0/8",      # RFC1918
        "172.16.0.0/12",   # RFC1918
        "192.168.0.0/16",  # RFC1918
        "169.254.0.0/16",  # RFC3927 link-local
        "::1/128",         # IPv6 loopback
        "fe80::/10",       # IPv6 link-local
        "fc00::/7",        # IPv6 unique local addr
    )
)

LINK_LOCAL_MULTICAST = (
    ipaddress.ip_network("224.0.0.0/24"),
    ipaddress.ip_network("ff02::/16"),
)


def format_peer(host: str | None, port: int | None) -> str:
    """Render a transport peer the way a raw socket address reads: ``ip:port``."""
    if not host:
        return ""
    if port is None:
        return host
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def extract_client_ip(headers: Mapping[str, str], remote_addr: str, host: str = "") -> str:
    logger.info(f"Received request from host: {host}, remoteAddr: {remote_addr}")

    ip = remote_addr
    # x-forwarded-for can contain a list: client, proxy1, proxy2, ...
    xff = headers.get(FORWARDED_HEADER)
    if xff:
        for token in re.split(r"[,\s]+", xff):
            if token:
                ip = token
                break

    logger.debug(f"Client IP is: {ip}")
    return ip


def _is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def get_valid_ip(ip: str) -> str:
    """Return a valid IPv4/IPv6 literal, or ``""`` when ``ip`` can't be one.

    The input is either a bare address or an address with a port in
    ``IPv4:Port`` or ``[IPv6]:Port`` form. The segment left after removing
    the port is returned as-is.
    """
    if _is_ip(ip):
        return ip

    if "]" in ip:
        return ip.split("]")[0].lstrip("[")
    if ip.count(":") == 1:
        return ip.split(":")[0]
    return ""


def is_private_ip(ip: ipaddress.IPv4Address | ipaddress.IPv6Address | str) -> bool:
    if isinstance(ip, str):
        ip = ipaddress.ip_address(ip)
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    if ip.is_loopback or ip.is_link_local:
        return True
    if any(ip in block for block in LINK_LOCAL_MULTICAST if block.version == ip.version):
        return True

    return any(ip in block for block in PRIVATE_IP_BLOCKS if block.version == ip.version)
