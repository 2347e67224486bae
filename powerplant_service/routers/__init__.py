"""
API routers for power plant service endpoints.
"""

from . import power_plant_router

__all__ = ["power_plant_router"]
