"""Site content API: destinations, places, programs, testimonials, gallery (public read, admin write)."""
from __future__ import annotations

import logging
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, StringConstraints
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from portal.models import Admin, Destination, DestinationPlace, GalleryItem, Program, Testimonial
from portal.models.base import async_session_factory
from portal.models.content import slugify
from web.auth import require_admin_user

logger = logging.getLogger("edufly.content")

router = APIRouter(prefix="/api", tags=["content"])


NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# --- Pydantic schemas ---


class DestinationCreate(BaseModel):
    name: NonBlank
    slug: Optional[NonBlank] = None  # from name if omitted
    overview: NonBlank
    duration: Optional[str] = None
    language: Optional[str] = None
    student_exposure: Optional[str] = None
    academic_visits: Optional[str] = None
    industry_exposure: Optional[str] = None
    sightseeing: Optional[str] = None
    image_url: Optional[str] = None


class DestinationUpdate(BaseModel):
    name: Optional[NonBlank] = None
    slug: Optional[NonBlank] = None
    overview: Optional[NonBlank] = None
    duration: Optional[str] = None
    language: Optional[str] = None
    student_exposure: Optional[str] = None
    academic_visits: Optional[str] = None
    industry_exposure: Optional[str] = None
    sightseeing: Optional[str] = None
    image_url: Optional[str] = None


class DestinationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    overview: str
    duration: Optional[str]
    language: Optional[str]
    student_exposure: Optional[str]
    academic_visits: Optional[str]
    industry_exposure: Optional[str]
    sightseeing: Optional[str]
    image_url: Optional[str]


class PlaceCreate(BaseModel):
    destination_id: int
    name: NonBlank
    slug: Optional[NonBlank] = None  # from name if omitted
    short_description: Optional[str] = None
    description: Optional[str] = None
    culture: Optional[str] = None
    history: Optional[str] = None
    image_url: NonBlank
    gallery_images: list[str] = []


class PlaceUpdate(BaseModel):
    destination_id: Optional[int] = None
    name: Optional[NonBlank] = None
    slug: Optional[NonBlank] = None
    short_description: Optional[str] = None
    description: Optional[str] = None
    culture: Optional[str] = None
    history: Optional[str] = None
    image_url: Optional[NonBlank] = None
    gallery_images: Optional[list[str]] = None


class PlaceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    destination_id: int
    name: str
    slug: str
    short_description: Optional[str]
    description: Optional[str]
    culture: Optional[str]
    history: Optional[str]
    image_url: str
    gallery_images: list[str]


class ProgramCreate(BaseModel):
    title: NonBlank
    category: NonBlank
    description: Optional[str] = None
    image_url: Optional[str] = None


class ProgramUpdate(BaseModel):
    title: Optional[NonBlank] = None
    category: Optional[NonBlank] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class ProgramResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    category: str
    description: Optional[str]
    image_url: Optional[str]


class TestimonialCreate(BaseModel):
    name: NonBlank
    role: Optional[str] = None  # Student, Parent, Principal
    content: NonBlank
    image_url: Optional[str] = None


class TestimonialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    role: Optional[str]
    content: str
    image_url: Optional[str]


class GalleryItemCreate(BaseModel):
    title: Optional[str] = None
    image_url: NonBlank
    category: Optional[str] = None


class GalleryItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str]
    image_url: str
    category: Optional[str]


# Columns that can't be cleared with an explicit null on update
_REQUIRED = {"name", "slug", "overview", "image_url", "title", "category", "destination_id", "gallery_images"}


def _changes(body: BaseModel) -> dict[str, Any]:
    return {
        k: v
        for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k not in _REQUIRED
    }


# --- Shared CRUD helpers ---


async def _list(model, *where):
    async with async_session_factory() as session:
        result = await session.execute(select(model).where(*where).order_by(model.id))
        return result.scalars().all()


async def _create(model, values: dict[str, Any], label: str):
    async with async_session_factory() as session:
        obj = model(**values)
        session.add(obj)
        try:
            await session.commit()
        except IntegrityError as e:
            logger.info("Rejected %s: %s", label, e.orig)
            raise HTTPException(400, f"Failed to create {label}") from e
        await session.refresh(obj)
    logger.info("Created %s %s", label, obj.id)
    return obj


async def _update(model, obj_id: int, values: dict[str, Any], label: str):
    async with async_session_factory() as session:
        obj = await session.get(model, obj_id)
        if not obj:
            raise HTTPException(404, f"{label.capitalize()} not found")
        for key, value in values.items():
            setattr(obj, key, value)
        try:
            await session.commit()
        except IntegrityError as e:
            logger.info("Rejected %s update: %s", label, e.orig)
            raise HTTPException(400, f"Failed to update {label}") from e
        return obj


async def _delete(model, obj_id: int, label: str) -> dict:
    async with async_session_factory() as session:
        obj = await session.get(model, obj_id)
        if not obj:
            raise HTTPException(404, f"{label.capitalize()} not found")
        if model is Destination:
            await session.execute(delete(DestinationPlace).where(DestinationPlace.destination_id == obj_id))
        await session.delete(obj)
        await session.commit()
    logger.info("Deleted %s %s", label, obj_id)
    return {"message": f"{label.capitalize()} deleted"}


async def _require_destination(destination_id: int, label: str) -> None:
    async with async_session_factory() as session:
        if not await session.get(Destination, destination_id):
            raise HTTPException(400, f"Failed to {label}: destination does not exist")


# --- Public ---


@router.get("/destinations", response_model=list[DestinationResponse])
async def list_destinations():
    return await _list(Destination)


@router.get("/destinations/{slug}", response_model=DestinationResponse)
async def get_destination(slug: str):
    async with async_session_factory() as session:
        result = await session.execute(select(Destination).where(Destination.slug == slug))
        destination = result.scalar_one_or_none()
    if not destination:
        raise HTTPException(404, "Destination not found")
    return destination


@router.get("/destinations/{destination_id}/places", response_model=list[PlaceResponse])
async def list_destination_places(destination_id: str):
    """Places for a destination id (string path param so a bad id is a 400, not a 422)."""
    try:
        dest_id = int(destination_id)
    except ValueError:
        raise HTTPException(400, "Invalid destination ID") from None
    return await _list(DestinationPlace, DestinationPlace.destination_id == dest_id)


@router.get("/destinations/{destination_slug}/places/{place_slug}", response_model=PlaceResponse)
async def get_place(destination_slug: str, place_slug: str):
    """Place detail page lookup by destination and place slug."""
    async with async_session_factory() as session:
        result = await session.execute(
            select(DestinationPlace)
            .join(Destination, DestinationPlace.destination_id == Destination.id)
            .where(Destination.slug == destination_slug, DestinationPlace.slug == place_slug)
            .order_by(DestinationPlace.id)
        )
        place = result.scalars().first()
    if not place:
        raise HTTPException(404, "Place not found")
    return place


@router.get("/programs", response_model=list[ProgramResponse])
async def list_programs():
    return await _list(Program)


@router.get("/testimonials", response_model=list[TestimonialResponse])
async def list_testimonials():
    return await _list(Testimonial)


@router.get("/gallery", response_model=list[GalleryItemResponse])
async def list_gallery():
    return await _list(GalleryItem)


# --- Admin: destinations ---


@router.get("/admin/destinations", response_model=list[DestinationResponse])
async def admin_list_destinations(admin: Admin = Depends(require_admin_user)):
    return await _list(Destination)


@router.post("/admin/destinations", response_model=DestinationResponse, status_code=201)
async def create_destination(body: DestinationCreate, admin: Admin = Depends(require_admin_user)):
    """Create a destination (admin only). Slug must be unique."""
    values = body.model_dump()
    values["slug"] = body.slug or slugify(body.name)
    return await _create(Destination, values, "destination")


@router.put("/admin/destinations/{destination_id}", response_model=DestinationResponse)
async def update_destination(
    destination_id: int, body: DestinationUpdate, admin: Admin = Depends(require_admin_user)
):
    return await _update(Destination, destination_id, _changes(body), "destination")


@router.delete("/admin/destinations/{destination_id}")
async def delete_destination(destination_id: int, admin: Admin = Depends(require_admin_user)):
    """Delete a destination and its places (admin only)."""
    return await _delete(Destination, destination_id, "destination")


# --- Admin: places ---


@router.get("/admin/destinations/{destination_id}/places", response_model=list[PlaceResponse])
async def admin_list_places(destination_id: int, admin: Admin = Depends(require_admin_user)):
    return await _list(DestinationPlace, DestinationPlace.destination_id == destination_id)


@router.post("/admin/places", response_model=PlaceResponse, status_code=201)
async def create_place(body: PlaceCreate, admin: Admin = Depends(require_admin_user)):
    await _require_destination(body.destination_id, "create place")
    values = body.model_dump()
    values["slug"] = body.slug or slugify(body.name)
    return await _create(DestinationPlace, values, "place")


@router.put("/admin/places/{place_id}", response_model=PlaceResponse)
async def update_place(place_id: int, body: PlaceUpdate, admin: Admin = Depends(require_admin_user)):
    values = _changes(body)
    if "destination_id" in values:
        await _require_destination(values["destination_id"], "update place")
    return await _update(DestinationPlace, place_id, values, "place")


@router.delete("/admin/places/{place_id}")
async def delete_place(place_id: int, admin: Admin = Depends(require_admin_user)):
    return await _delete(DestinationPlace, place_id, "place")


# --- Admin: programs ---


@router.get("/admin/programs", response_model=list[ProgramResponse])
async def admin_list_programs(admin: Admin = Depends(require_admin_user)):
    return await _list(Program)


@router.post("/admin/programs", response_model=ProgramResponse, status_code=201)
async def create_program(body: ProgramCreate, admin: Admin = Depends(require_admin_user)):
    return await _create(Program, body.model_dump(), "program")


@router.put("/admin/programs/{program_id}", response_model=ProgramResponse)
async def update_program(program_id: int, body: ProgramUpdate, admin: Admin = Depends(require_admin_user)):
    return await _update(Program, program_id, _changes(body), "program")


@router.delete("/admin/programs/{program_id}")
async def delete_program(program_id: int, admin: Admin = Depends(require_admin_user)):
    return await _delete(Program, program_id, "program")


# --- Admin: gallery ---


@router.get("/admin/gallery", response_model=list[GalleryItemResponse])
async def admin_list_gallery(admin: Admin = Depends(require_admin_user)):
    return await _list(GalleryItem)


@router.post("/admin/gallery", response_model=GalleryItemResponse, status_code=201)
async def create_gallery_item(body: GalleryItemCreate, admin: Admin = Depends(require_admin_user)):
    return await _create(GalleryItem, body.model_dump(), "gallery item")


@router.delete("/admin/gallery/{item_id}")
async def delete_gallery_item(item_id: int, admin: Admin = Depends(require_admin_user)):
    return await _delete(GalleryItem, item_id, "gallery item")


# --- Admin: testimonials ---


@router.get("/admin/testimonials", response_model=list[TestimonialResponse])
async def admin_list_testimonials(admin: Admin = Depends(require_admin_user)):
    return await _list(Testimonial)


@router.post("/admin/testimonials", response_model=TestimonialResponse, status_code=201)
async def create_testimonial(body: TestimonialCreate, admin: Admin = Depends(require_admin_user)):
    return await _create(Testimonial, body.model_dump(), "testimonial")


@router.delete("/admin/testimonials/{testimonial_id}")
async def delete_testimonial(testimonial_id: int, admin: Admin = Depends(require_admin_user)):
    return await _delete(Testimonial, testimonial_id, "testimonial")
