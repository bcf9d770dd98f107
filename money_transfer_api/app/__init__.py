"""
Application package for the Money Transfer API.

Each domain (users, admin, leave requests, transfers, friends) has a
service module under ``services`` and a router under
``api/v1/endpoints``.  Persistence goes through the store defined in
``core.storage`` so handlers never care which backend is running.
"""
