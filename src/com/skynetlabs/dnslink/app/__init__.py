"""
Dnslink API Application Layer

This package implements the web application layer of the dnslink API service, handling
HTTP requests and responses using the aiohttp framework.

Key Components:
- cli.py: Entry point for running the application
- server.py: Web server configuration and middleware setup
- config.py: Configuration management using Pydantic settings
- handlers/: Request handlers for the dnslink and internal endpoints
- tasks.py: Background task decaying the upstream health gauge
- metrics.py: Metrics client abstraction

The application uses two middleware layers:
- Metrics middleware for request counts and timings
- Sentry middleware for error reporting

It provides the following endpoints:
- GET /dnslink/{name}: resolve the dnslink records of a domain
- GET /dnslink/{name}/{encoded_uri}: same, with a base64 encoded client uri
- GET /internal/alive and /internal/ready: liveness and readiness endpoints

Errors are answered with status 400 and a text/plain body holding the error message.
"""
