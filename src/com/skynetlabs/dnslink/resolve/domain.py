"""RFC1035 host name validation.

Only the syntax of a name is checked. A name like ``weird.domain`` is valid
here and fails later, when its TXT records cannot be resolved.

Under a two letter country code, common second level labels such as the
``co`` of ``co.uk`` belong to the suffix. The label left of them is the
registrable one, so ``my_site.co.uk`` is rejected like ``my_site.com``.
"""

import re

from com.skynetlabs.dnslink.resolve.errors import DnslinkException

MAX_DOMAIN_LENGTH = 253
MAX_LABEL_LENGTH = 63

_valid_chars = re.compile(r"[a-z0-9._-]+")
_tld = re.compile(r"(?:xn--)?(?!\d+$)[a-z0-9]+")
_registrable_label = re.compile(r"[a-z0-9-]+")
_subdomain_label = re.compile(r"[a-z0-9_-]+")
_double_dash = re.compile(r"--(?:--)?")

_COUNTRY_SECOND_LEVEL = frozenset({"ac", "co", "com", "edu", "gov", "net", "org"})


def _valid_label(label: str, registrable: bool) -> bool:
    if not 0 < len(label) <= MAX_LABEL_LENGTH:
        return False
    if label.startswith("-") or label.endswith("-"):
        return False
    if registrable:
        # a double dash is only allowed as part of an IDN "xn--" prefix
        if len(_double_dash.findall(label)) != label.count("xn--"):
            return False
        return _registrable_label.fullmatch(label) is not None
    return _subdomain_label.fullmatch(label) is not None


def is_valid_domain(domain_name: str) -> bool:
    """Check whether a domain name is syntactically valid.

    Args:
        domain_name: Domain name as requested by a client

    Returns:
        True if the name is a valid host name with at least two labels
    """
    if not isinstance(domain_name, str):
        return False

    value = domain_name.lower()
    if value.endswith("."):
        value = value[:-1]

    if len(value) > MAX_DOMAIN_LENGTH or _valid_chars.fullmatch(value) is None:
        return False

    labels = value.split(".")
    if len(labels) < 2:
        return False

    tld = labels.pop()
    if _tld.fullmatch(tld) is None or len(tld) > MAX_LABEL_LENGTH:
        return False

    if len(tld) == 2 and len(labels) > 1 and labels[-1] in _COUNTRY_SECOND_LEVEL:
        labels.pop()

    last = len(labels) - 1
    return all(
        _valid_label(label, registrable=index == last)
        for index, label in enumerate(labels)
    )


def validate_domain(domain_name: str) -> None:
    """Raise ``DnslinkException`` (invalid_request) for an invalid domain name."""
    if not is_valid_domain(domain_name):
        raise DnslinkException.invalid_request(domain_name)
