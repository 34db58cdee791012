"""
Reference Data Module

Static, read-only lookup hierarchy for the registration form:
places, governorates, administrations and schools.
"""

from .router import router

__all__ = ["router"]
