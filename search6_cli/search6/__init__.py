import asyncio
import json
import math

import aiohttp

from search6_cli.logger import logger
from search6_cli.search6.exceptions import BodyReadError, DecodeError, TransportError
from search6_cli.search6.http_session import get_session, close_session
from search6_cli.search6.structures import UserRecord, USER_FIELDS, INT64_MIN, INT64_MAX, empty_user

API_URL = "https://search6.valk.sh/api"
CARD_URL = "https://search6.valk.sh/card"

_JSON_TYPE_NAMES = {
    str: "string",
    bool: "bool",
    int: "number",
    float: "number",
    list: "array",
    dict: "object",
    type(None): "null",
}

UTF8_BOM = b"\xef\xbb\xbf"

_FOLDED_FIELDS = {name.casefold(): name for name in USER_FIELDS}


def build_api_url(identifier: int) -> str:
    return f"{API_URL}?id={identifier}"


def build_card_url(identifier: int) -> str:
    return f"{CARD_URL}?id={identifier}"


def _describe(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


async def fetch_user_payload(identifier: int) -> bytes:
    """
    GET the lookup endpoint for ``identifier`` and return the raw body.

    The status code is not checked, whatever the server sends back is handed
    to the decoder. The response is released before returning or raising.
    """
    url = build_api_url(identifier)
    session = get_session()
    logger.debug("GET %s", url)

    try:
        async with session.get(url) as response:
            logger.debug("Lookup %s -> %s", identifier, response.status)
            try:
                return await response.read()
            except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
                logger.info(f"Error reading response body for {identifier}: {_describe(e)}")
                raise BodyReadError(_describe(e)) from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.info(f"HTTP error in fetch_user_payload: {_describe(e)}", exc_info=True)
        raise TransportError(_describe(e)) from e


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON literal {name}")


def _json_type(value) -> str:
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


def _decode_field(name: str, value):
    zero = USER_FIELDS[name]
    if isinstance(zero, str):
        if isinstance(value, str):
            return value
    elif isinstance(zero, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                number = float(value)
            except OverflowError:
                number = math.inf
            if not math.isfinite(number):
                raise DecodeError(f"cannot decode number {value} into field {name!r}: value out of range")
            return number
    elif isinstance(value, int) and not isinstance(value, bool):
        if not INT64_MIN <= value <= INT64_MAX:
            raise DecodeError(f"cannot decode number {value} into field {name!r}: value out of range")
        return value
    raise DecodeError(
        f"cannot decode {_json_type(value)} into field {name!r} of type {type(zero).__name__}"
    )


def decode_user(data: bytes) -> UserRecord:
    """
    Decode a lookup response body into a :class:`UserRecord`.

    Keys match field names exactly, or case-insensitively when no exact field
    exists. Unknown keys are ignored, missing or null keys keep the zero value.
    """
    if data.startswith(UTF8_BOM):
        raise DecodeError("unexpected byte order mark at start of body")
    # invalid UTF-8 inside strings becomes U+FFFD, anywhere else it is a syntax error
    text = data.decode("utf-8", errors="replace")
    try:
        payload = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise DecodeError(_describe(e)) from e

    if not isinstance(payload, dict):
        raise DecodeError(f"cannot decode {_json_type(payload)} into user record")

    user = empty_user()
    for key, value in payload.items():
        name = key if key in USER_FIELDS else _FOLDED_FIELDS.get(key.casefold())
        if name is None or value is None:
            continue
        user[name] = _decode_field(name, value)
    return user


async def lookup_user(identifier: int) -> UserRecord:
    try:
        data = await fetch_user_payload(identifier)
    finally:
        await close_session()
    logger.debug("Lookup %s returned %d bytes", identifier, len(data))
    return decode_user(data)
