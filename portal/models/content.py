"""Site content: destinations and their places, programs, testimonials, gallery."""
from __future__ import annotations

import re
from typing import Optional

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portal.models.base import Base


def slugify(value: str) -> str:
    """'Big Ben & Parliament' -> 'big-ben-parliament'."""
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


class Destination(Base):
    """Country or city offered for study tours."""

    __tablename__ = "destinations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    slug: Mapped[str] = mapped_column(String(128), unique=True, nullable=False, index=True)
    overview: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)  # e.g. "7-14 Days"
    language: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    student_exposure: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    academic_visits: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    industry_exposure: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sightseeing: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    places = relationship(
        "DestinationPlace", back_populates="destination", cascade="all, delete-orphan"
    )


class DestinationPlace(Base):
    """Landmark to explore within a destination."""

    __tablename__ = "destination_places"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    destination_id: Mapped[int] = mapped_column(ForeignKey("destinations.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    slug: Mapped[str] = mapped_column(String(128), nullable=False)  # from name if not given
    short_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    culture: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    history: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    gallery_images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    destination: Mapped["Destination"] = relationship("Destination", back_populates="places")


class Program(Base):
    """Study tour program for a student audience."""

    __tablename__ = "programs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(128), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)  # School Students, Engineering & Technology, ...
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Testimonial(Base):
    __tablename__ = "testimonials"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)  # Student, Parent, Principal
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class GalleryItem(Base):
    __tablename__ = "gallery"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
