"""
Dnslink API - Skynet dnslink resolution service

This package resolves the skynet dnslink convention: TXT records under
``_dnslink.{domain}`` that tie a domain to a skylink and, optionally, to a
sponsor key.

Key Components:
- resolve: TXT lookups, record classification, skylink grammar and precedence rules
- app: aiohttp web application exposing the resolver over HTTP
- model: In-process service state such as the upstream health gauge

Resolution Flow:
1. The requested domain name is checked for RFC1035 syntax
2. TXT records of ``_dnslink.{domain}`` are fetched, from cache when fresh
3. Records are classified by convention and checked for ambiguity
4. The skylink comes from DNS, or from the client uri when DNS has none
5. Base32 skylinks are normalized to their base64 form
6. The result is logged and returned as JSON
"""
