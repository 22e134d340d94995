"""
Service State Models

This package holds in-process state shared by the request handlers of the
dnslink API service.

Key Models:
- health.py: Gauge of unexpected upstream DNS failures, backing the readiness endpoint

The resolution result itself is defined next to the resolver in
``com.skynetlabs.dnslink.resolve.dnslink``.
"""
