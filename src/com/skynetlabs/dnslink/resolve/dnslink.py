"""Dnslink resolution.

Looks up the ``_dnslink.{domain}`` TXT records of a domain and turns the
records following the skynet conventions into a resolution result:

- ``dnslink=/skynet-ns/<skylink>`` names the content served for the domain
- ``skynet-sponsor-key=<key>`` names the sponsor of the domain

A skylink embedded at the start of the client supplied uri is used when the
domain does not configure one itself.
"""

import logging
import re
from typing import Any, Dict, Optional

from pydantic import BaseModel

from com.skynetlabs.dnslink.resolve.errors import DNSLINK_NAMESPACE, DnslinkException
from com.skynetlabs.dnslink.resolve.records import classify_records
from com.skynetlabs.dnslink.resolve.skylink import (
    SKYLINK_MATCHER,
    is_base32_skylink,
    is_base64_skylink,
    normalize_skylink,
)
from com.skynetlabs.dnslink.resolve.txt import TxtLookupCache

logger = logging.getLogger(__name__)

DNSLINK_SKYLINK = re.compile(f"^dnslink=/{DNSLINK_NAMESPACE}/({SKYLINK_MATCHER})")
URI_SKYLINK = re.compile(f"^/(?P<skylink>{SKYLINK_MATCHER})(?P<path>/.*)?")


class ResolutionResult(BaseModel):
    """Resolved dnslink of a domain.

    Unset fields are left out when the result is serialized.
    """

    skylink: Optional[str] = None
    sponsor: Optional[str] = None
    path: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


def lookup_key(domain: str) -> str:
    return f"_dnslink.{domain}"


def _is_skylink(candidate: str) -> bool:
    # A 55 character candidate outside the base32hex alphabet is not cut down
    # to a 46 character base64 prefix.
    return is_base32_skylink(candidate) or is_base64_skylink(candidate)


def report(domain: str, result: ResolutionResult) -> str:
    """Format the log line summarizing a resolution."""
    info = []
    if result.skylink:
        info.append(f"skylink: {result.skylink}")
    if result.sponsor:
        info.append(f"sponsor: {result.sponsor}")
    return f"{domain} => {' | '.join(info)}"


class Resolver:
    """
    Resolves dnslink TXT records of domains.

    The resolver owns its TXT lookup cache, so every resolver instance has
    an independent cache lifecycle.

    Args:
        txt_cache: Cached TXT lookup, a default sized one is created if omitted
    """

    def __init__(self, txt_cache: Optional[TxtLookupCache] = None) -> None:
        self.txt_cache = txt_cache if txt_cache is not None else TxtLookupCache()

    async def resolve(self, domain: str, uri: Optional[str] = None) -> ResolutionResult:
        """Resolve the dnslink records of a domain.

        The domain name is expected to be validated already.

        Args:
            domain: Domain name to look up dnslink records for
            uri: Optional uri passed by the client

        Returns:
            ResolutionResult with skylink, sponsor and path where available

        Raises:
            DnslinkException: On lookup failures and misconfigured records
        """
        lookup = lookup_key(domain)
        records = await self.txt_cache.fetch(lookup)
        classified = classify_records(records)

        uri_match = URI_SKYLINK.match(uri) if uri else None
        if uri_match is not None and not _is_skylink(uri_match.group("skylink")):
            uri_match = None

        # Only a single skylink and a single sponsor key may be tied to a domain.
        if len(classified.skylink_records) > 1:
            raise DnslinkException.multiple_skylinks(lookup)

        if len(classified.sponsor_records) > 1:
            raise DnslinkException.multiple_sponsor_keys(lookup)

        if (
            len(classified.skylink_records) == 0
            and len(classified.sponsor_records) == 0
            and uri_match is None
        ):
            raise DnslinkException.no_dnslinks_found(lookup)

        result = ResolutionResult(path=uri or None)

        if len(classified.skylink_records) == 1:
            skylink_match = DNSLINK_SKYLINK.match(classified.skylink_records[0])
            if skylink_match is None or not _is_skylink(skylink_match.group(1)):
                raise DnslinkException.invalid_skylink(lookup)
            result.skylink = skylink_match.group(1)
        elif uri_match is not None:
            result.skylink = uri_match.group("skylink")
            result.path = uri_match.group("path") or "/"

        if result.skylink is not None:
            result.skylink = normalize_skylink(result.skylink)

        if len(classified.sponsor_records) == 1:
            sponsor_record = classified.sponsor_records[0]
            result.sponsor = sponsor_record[sponsor_record.index("=") + 1 :]

        logger.info(report(domain, result))

        return result
