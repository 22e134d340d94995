"""TXT record classification.

Splits the flattened TXT records of a ``_dnslink.`` lookup into the records
following the skylink convention and those following the sponsor key
convention. Records matching neither are dropped.
"""

import re
from typing import List, Sequence

from pydantic import BaseModel

from com.skynetlabs.dnslink.resolve.errors import DNSLINK_NAMESPACE, SPONSOR_NAMESPACE

DNSLINK_RECORD = re.compile(f"dnslink=/{DNSLINK_NAMESPACE}/.+")
SPONSOR_RECORD = re.compile(f"{SPONSOR_NAMESPACE}=[a-zA-Z0-9]+")


class ClassifiedRecords(BaseModel):
    """TXT records split by convention, in the order they were returned."""

    skylink_records: List[str] = []
    sponsor_records: List[str] = []


def classify_records(records: Sequence[str]) -> ClassifiedRecords:
    """Classify TXT records by dnslink convention.

    Args:
        records: Flattened TXT records for a ``_dnslink.`` lookup key

    Returns:
        ClassifiedRecords preserving the original record order
    """
    return ClassifiedRecords(
        skylink_records=[r for r in records if DNSLINK_RECORD.fullmatch(r)],
        sponsor_records=[r for r in records if SPONSOR_RECORD.fullmatch(r)],
    )
