"""
Endpoint modules for API v1.

Each module defines an ``APIRouter`` for one domain.  They are
aggregated in ``v1/router.py``.
"""
