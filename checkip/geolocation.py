import enum
import logging
from typing import NamedTuple

import httpx

from checkip.config import GEOLOCATION_TIMEOUT, GEOLOCATION_URL

logger = logging.getLogger(__name__)

NA = "NA"


class GeoFault(enum.Enum):
    """Forces one failure branch of :func:`get_geolocation`. Used by tests."""

    NONE = 0
    GET = 1
    READ = 2
    DECODE = 3
    PROVIDER = 4


class GeoResult(NamedTuple):
    timezone: str = NA
    location: str = NA
    error: str = ""


def _failed(msg: str) -> GeoResult:
    return GeoResult(NA, NA, msg)


def _decode(response: httpx.Response) -> dict:
    data = response.json()
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


async def get_geolocation(
    ip: str,
    fault: GeoFault = GeoFault.NONE,
    client: httpx.AsyncClient | None = None,
) -> GeoResult:
    """Get timezone and location for ``ip`` from the geolocation provider.

    Never raises: any failure along the way yields ``NA`` for both data
    fields and a message naming the stage that failed.
    """
    if client is None:
        async with httpx.AsyncClient(timeout=GEOLOCATION_TIMEOUT) as own_client:
            return await get_geolocation(ip, fault, own_client)

    url = f"{GEOLOCATION_URL}/{ip}/json"
    logger.debug(f"Calling geolocation provider: {url}")

    # InvalidURL is not an HTTPError; the port-stripped segment can produce one
    try:
        response = await client.send(client.build_request("GET", url), stream=True)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        return _failed(f"Failed to call Get: {e}")

    try:
        if fault is GeoFault.GET:
            return _failed("Failed to call Get: injected fault")

        try:
            await response.aread()
        except httpx.HTTPError as e:
            return _failed(f"Failed to read resp body: {e}")
        if fault is GeoFault.READ:
            return _failed("Failed to read resp body: injected fault")
    finally:
        await response.aclose()

    try:
        data = _decode(response)
    except ValueError as e:
        return _failed(f"Failed to unmarshal: {e}")
    if fault is GeoFault.DECODE:
        return _failed("Failed to unmarshal: injected fault")

    if data.get("error") or fault is GeoFault.PROVIDER:
        return _failed(f"Failed to get geolocation: {data.get('reason')}")

    timezone = data.get("timezone") or NA
    location = ", ".join(
        str(data.get(key) or NA) for key in ("city", "region_code", "country_code_iso3")
    )
    return GeoResult(timezone, location)
