"""
Service layer.

``RegistryService`` holds the business rules; handlers stay thin and
only translate between HTTP payloads and service calls.
"""

from .registry_service import RegistryService  # noqa: F401
