"""
Service layer for the wedding RSVP service.

This package contains framework-agnostic business logic (spreadsheet import,
validation, invitation codes, persistence) used by the API and the CLI.
"""

__version__ = "1.0.0"
