"""
Top-level API router.

Aggregates the domain routers under a single router which ``main``
mounts at ``/api``.  When a new domain is added, include its router
here.
"""

from fastapi import APIRouter

from .endpoints import prompts

router = APIRouter()

router.include_router(prompts.router, prefix="/prompts", tags=["prompts"])
