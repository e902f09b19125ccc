"""
Service layer for the LightBnB query functions.
"""

from lightbnb.services.error_handler import ErrorHandlerService
from lightbnb.services.rental import RentalService

__all__ = ["ErrorHandlerService", "RentalService"]
