import ipaddress
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from checkip import __version__
from checkip.address import extract_client_ip, format_peer, get_valid_ip, is_private_ip
from checkip.config import GEOLOCATION_TIMEOUT
from checkip.geolocation import NA, GeoFault, get_geolocation
from checkip.log import setup_logging
from checkip.render import generate_response, invalid_ip_response

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one outbound client shared by every request
    async with httpx.AsyncClient(timeout=GEOLOCATION_TIMEOUT) as client:
        app.state.http_client = client
        yield


# a single catch-all route serves every path, docs included
app = FastAPI(
    title="Check IP",
    version=__version__,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    lifespan=lifespan,
)


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def _is_private(ip: str) -> bool:
    # the port-stripped segment is not guaranteed to be an address
    try:
        return is_private_ip(ipaddress.ip_address(ip))
    except ValueError:
        return False


async def check_ip(request: Request) -> HTMLResponse:
    peer = request.client
    remote_addr = format_peer(peer.host, peer.port) if peer else ""
    raw_ip = extract_client_ip(request.headers, remote_addr, request.headers.get("host", ""))

    ip = get_valid_ip(raw_ip)
    if not ip:
        # Just return if IP is invalid. Do not fail the request
        logger.warning(f"Invalid IP: {raw_ip}")
        return HTMLResponse(invalid_ip_response(raw_ip))

    timezone, location = NA, NA
    if _is_private(ip):
        logger.info(f"IP {ip} is a private address")
    else:
        timezone, location, error = await get_geolocation(ip, GeoFault.NONE, get_http_client(request))
        if error:
            logger.warning(error)

    res = generate_response(ip, timezone, location)
    logger.info(f"Return response to client: {res}")
    return HTMLResponse(res)


# plain route with no method list: every HTTP method reaches the handler
app.router.add_route("/{path:path}", check_ip)
