"""
Shared building blocks for the license key service.

Domain events, exceptions, value objects and access rules live in
``core.domain``; the event bus, cache adapters, middleware, metrics and
tracing setup are the infrastructure every app reuses.
"""
