"""
Service layer.

Each service wraps one domain's rules around the shared ``Store`` and
raises the exceptions from ``core.errors``.  The HTTP handlers stay
thin: they parse the request, call a service, and return its result.
"""
