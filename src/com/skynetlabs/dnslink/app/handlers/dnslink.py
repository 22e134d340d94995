import base64
import binascii
import logging
from typing import Optional
from aiohttp import web

from com.skynetlabs.dnslink.app.config import (
    HealthGaugeAppKey,
    MetricsClientAppKey,
    ResolverAppKey,
)
from com.skynetlabs.dnslink.resolve.domain import validate_domain
from com.skynetlabs.dnslink.resolve.errors import (
    DnslinkException,
    ErrorKind,
    ResolutionFailure,
)

logger = logging.getLogger(__name__)


def decode_uri(domain_name: str, encoded_uri: Optional[str]) -> Optional[str]:
    """
    Decode the base64 encoded uri segment of a dnslink request.

    Both the standard and the URL-safe base64 alphabets are accepted.

    Raises:
        DnslinkException: invalid_request when the segment is not base64 encoded UTF-8
    """
    if not encoded_uri:
        return None
    normalized = encoded_uri.replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    try:
        return base64.b64decode(normalized, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise DnslinkException.invalid_uri(domain_name) from e


def error_response(error: DnslinkException) -> web.Response:
    # Plain text so that a reflected domain name can never be rendered as HTML.
    return web.Response(
        status=400, text=error.message, content_type="text/plain", charset="utf-8"
    )


async def handle_dnslink(request: web.Request):
    """
    Resolve the dnslink records of the domain in the request path.

    Responds with the JSON resolution result, or with a 400 plain text error
    message when the domain is invalid or its records cannot be resolved.
    """
    resolver = request.app[ResolverAppKey]
    metrics_client = request.app[MetricsClientAppKey]
    health_gauge = request.app[HealthGaugeAppKey]

    domain_name = request.match_info["name"]
    encoded_uri = request.match_info.get("encoded_uri")

    try:
        validate_domain(domain_name)
        uri = decode_uri(domain_name, encoded_uri)
        result = await resolver.resolve(domain_name, uri)
    except DnslinkException as e:
        logger.error(e.message)
        metrics_client.increment("resolve.error", 1, tag_dict={"kind": e.kind.value})
        if e.kind == ErrorKind.resolution and e.reason == ResolutionFailure.other:
            await health_gauge.record_failure()
        return error_response(e)

    return web.json_response(result.to_json())
