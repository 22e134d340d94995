"""
Dnslink Resolution

This package resolves the skynet dnslink convention stored in DNS TXT records
under the ``_dnslink.{domain}`` name.

Key Components:
- domain.py: RFC1035 syntax check of requested domain names
- txt.py: TXT lookups through aiodns with a TTL/LRU cache of successful answers
- records.py: Classification of TXT records by convention
- skylink.py: Skylink identifier grammar and base32/base64 conversion
- dnslink.py: Record precedence, uri fallback and result assembly
- errors.py: The DnslinkException error taxonomy
- __main__.py: CLI interface for resolution

The resolution flow follows these steps:
1. Validate the domain name syntax (done by the caller)
2. Fetch the TXT records of ``_dnslink.{domain}``, from cache when fresh
3. Classify the records into skylink and sponsor key records
4. Reject ambiguous or empty configurations
5. Pick the skylink (DNS first, then the client uri) and normalize it to base64
6. Attach the sponsor key and log the outcome
"""
