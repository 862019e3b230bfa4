"""
Top-level package for the Prompt Library API.

All functionality lives in submodules under ``app``; this marker lets
them be imported with fully qualified names such as
``prompt_library_api.app.main``.
"""

__all__ = []
