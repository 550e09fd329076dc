"""
ReadPortal - Role-gated reading lesson portal.

Packages:
- schemas: Pydantic models for sessions, lessons and progress slices
- classroom: Runtime components (session, catalog, guard, navigation, views)
- viewer: HTML rendering helpers for the Streamlit shell
- utils: YAML loading and logging setup
"""

__version__ = "0.1.0"
