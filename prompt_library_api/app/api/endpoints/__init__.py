"""
Endpoint modules.

Each module defines an ``APIRouter`` for one domain.  Domain routers
are aggregated in ``api/router.py``.
"""
