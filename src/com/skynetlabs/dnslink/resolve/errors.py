"""Error taxonomy for dnslink resolution.

Every failure raised by the resolution engine is a ``DnslinkException``
carrying an ``ErrorKind`` discriminator. Callers match on ``kind`` instead of
on exception subclasses.
"""

from enum import Enum
from typing import Optional

DNSLINK_NAMESPACE = "skynet-ns"
SPONSOR_NAMESPACE = "skynet-sponsor-key"

HINT = f"valid example: dnslink=/{DNSLINK_NAMESPACE}/3ACpC9Umme41zlWUgMQh1fw0sNwgWwyfDDhRQ9Sppz9hjQ"


class ErrorKind(str, Enum):
    """Discriminator for ``DnslinkException``."""

    invalid_request = "invalid_request"
    resolution = "resolution"
    no_dnslinks_found = "no_dnslinks_found"
    multiple_skylinks = "multiple_skylinks"
    invalid_skylink = "invalid_skylink"
    multiple_sponsor_keys = "multiple_sponsor_keys"


class ResolutionFailure(str, Enum):
    """Classification of an upstream DNS failure."""

    not_found = "not_found"
    no_data = "no_data"
    other = "other"


class DnslinkException(Exception):
    """
    Exception raised for any dnslink resolution failure.

    This exception class provides static methods for creating each kind of
    failure with the message that is returned to clients. Messages always
    embed the offending domain or lookup key and are plain text.

    Attributes:
        kind: What went wrong
        message: Human readable description
        reason: Upstream failure classification, only set for ``resolution``
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        reason: Optional[ResolutionFailure] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.reason = reason

    def __repr__(self) -> str:
        return f"DnslinkException(kind={self.kind.value!r}, message={self.message!r})"

    @staticmethod
    def invalid_request(domain_name: str) -> "DnslinkException":
        """The requested domain name is not RFC1035 compliant."""
        return DnslinkException(
            ErrorKind.invalid_request, f"{domain_name} is not a valid domain"
        )

    @staticmethod
    def invalid_uri(domain_name: str) -> "DnslinkException":
        """The encoded uri passed along with the domain could not be decoded."""
        return DnslinkException(
            ErrorKind.invalid_request,
            f"Encoded uri for {domain_name} is not valid base64 encoded text",
        )

    @staticmethod
    def record_not_found(lookup: str) -> "DnslinkException":
        return DnslinkException(
            ErrorKind.resolution,
            f"ENOTFOUND: {lookup} TXT record doesn't exist",
            ResolutionFailure.not_found,
        )

    @staticmethod
    def record_no_data(lookup: str) -> "DnslinkException":
        return DnslinkException(
            ErrorKind.resolution,
            f"ENODATA: {lookup} dns lookup returned no data",
            ResolutionFailure.no_data,
        )

    @staticmethod
    def lookup_failed(lookup: str, description: str) -> "DnslinkException":
        return DnslinkException(
            ErrorKind.resolution,
            f"Failed to fetch {lookup} TXT record: {description}",
            ResolutionFailure.other,
        )

    @staticmethod
    def no_dnslinks_found(lookup: str) -> "DnslinkException":
        return DnslinkException(
            ErrorKind.no_dnslinks_found,
            f"TXT records for {lookup} found but none of them contained valid skynet dnslink - {HINT}",
        )

    @staticmethod
    def multiple_skylinks(lookup: str) -> "DnslinkException":
        return DnslinkException(
            ErrorKind.multiple_skylinks,
            f"Multiple TXT records with valid skynet dnslink found for {lookup}, only one allowed",
        )

    @staticmethod
    def invalid_skylink(lookup: str) -> "DnslinkException":
        return DnslinkException(
            ErrorKind.invalid_skylink,
            f"TXT record with skynet dnslink for {lookup} contains invalid skylink - {HINT}",
        )

    @staticmethod
    def multiple_sponsor_keys(lookup: str) -> "DnslinkException":
        return DnslinkException(
            ErrorKind.multiple_sponsor_keys,
            f"Multiple TXT records with valid sponsor key found for {lookup}, only one allowed",
        )
