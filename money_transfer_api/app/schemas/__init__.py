"""
Pydantic schemas for API payloads.

Request models declare every field optional: required-field checks
live in the services so that a missing field produces the API's own
``{"error": ...}`` message instead of a framework validation error.
Read models double as response filters, e.g. ``UserRead`` never
carries the password hash.
"""
