"""
Top-level package for the Money Transfer API.

The package exposes no public names; the application lives in the
``app`` subpackage and is importable as ``money_transfer_api.app.main``.
"""

__all__ = []
