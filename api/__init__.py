"""
FastAPI application for the wedding RSVP service.

This package contains the public RSVP endpoints and the admin API for
guest invitations, RSVPs and wedding content.
"""

__version__ = "1.0.0"
