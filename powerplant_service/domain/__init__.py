"""
Domain layer - Core business entities and domain logic.

This layer contains the power plant entity and the service exceptions,
independent of any infrastructure or framework concerns.
"""
