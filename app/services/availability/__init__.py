"""Availability services."""

from app.services.availability.service import AvailabilityService

__all__ = ["AvailabilityService"]
