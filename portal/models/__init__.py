"""Database models."""
from portal.models.base import Base, init_db
from portal.models.admin import Admin
from portal.models.content import Destination, DestinationPlace, GalleryItem, Program, Testimonial
from portal.models.lead import Lead
from portal.models.site_settings import SiteSettings  # noqa: F401 - for metadata

__all__ = [
    "Base",
    "Admin",
    "Destination",
    "DestinationPlace",
    "GalleryItem",
    "Lead",
    "Program",
    "SiteSettings",
    "Testimonial",
    "init_db",
]
