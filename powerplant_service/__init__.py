"""
Power plant records service.

Validated creation of power plant records and paginated, owner-filtered
listing on top of a pluggable repository.
"""

__version__ = "1.0.0"
