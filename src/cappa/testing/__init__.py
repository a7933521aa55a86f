"""Test utilities for cappa applications.

    from cappa.testing import TestClient
"""

from cappa.testing.client import TestClient

__all__ = ["TestClient"]
