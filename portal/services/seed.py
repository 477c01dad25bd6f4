"""Starter content for a fresh database.

Safe to re-run: each table is only filled while it is empty, and a destination
only gets its starter places while it has none.
"""
from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portal.models import Destination, DestinationPlace, Program, Testimonial
from portal.models.content import slugify

logger = logging.getLogger("edufly.seed")

_IMG = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&q=80"

DESTINATIONS = [
    {
        "name": "UK",
        "slug": "uk",
        "overview": (
            "The United Kingdom offers world-class education with prestigious universities, "
            "rich history, and diverse cultural experiences for international students."
        ),
        "duration": "7-14 Days",
        "language": "English",
        "student_exposure": "Global education, Cross-cultural exchange, Historical learning",
        "academic_visits": "Oxford, Cambridge, Imperial College, British Museum",
        "industry_exposure": "Financial District, Tech Hubs, Creative Industries",
        "sightseeing": "Big Ben, Tower Bridge, Buckingham Palace, Stonehenge",
        "image_url": _IMG.format("1513635269975-59663e0ac1ad"),
    },
    {
        "name": "USA",
        "slug": "usa",
        "overview": (
            "The United States provides unparalleled educational opportunities with world-renowned "
            "universities, cutting-edge research facilities, and diverse campus experiences."
        ),
        "duration": "10-14 Days",
        "language": "English",
        "student_exposure": "Innovation, Research, Multicultural exposure",
        "academic_visits": "MIT, Harvard, Stanford, Silicon Valley companies",
        "industry_exposure": "Tech Giants, Wall Street, Hollywood Studios",
        "sightseeing": "Statue of Liberty, Golden Gate Bridge, Grand Canyon",
        "image_url": _IMG.format("1485738422979-f5c462d49f74"),
    },
    {
        "name": "France",
        "slug": "france",
        "overview": (
            "France combines academic excellence with rich artistic heritage, offering students "
            "exposure to world-class cuisine, fashion, and cultural landmarks."
        ),
        "duration": "7-10 Days",
        "language": "French, English",
        "student_exposure": "Art, Culture, Gastronomy, Fashion",
        "academic_visits": "Sorbonne, INSEAD, Le Cordon Bleu",
        "industry_exposure": "Fashion Houses, Culinary Schools, Art Museums",
        "sightseeing": "Eiffel Tower, Louvre, Palace of Versailles",
        "image_url": _IMG.format("1502602898657-3e91760cbb34"),
    },
    {
        "name": "Singapore",
        "slug": "singapore",
        "overview": (
            "Singapore combines quality STEM experiences with history and culture, arts and "
            "adventure, technology with hospitality, in a safe destination for student groups."
        ),
        "duration": "5-7 Days",
        "language": "English, Mandarin, Malay, Tamil",
        "student_exposure": "STEM experiences, History, Culture, Arts, Adventure, Technology, Hospitality",
        "academic_visits": "Changi International Airport, Singapore Airshow",
        "industry_exposure": "Architecture tours (Zaha Hadid, Art Deco, Brutalist, Colonial styles)",
        "sightseeing": "Sentosa Island, Universal Studios",
        "image_url": _IMG.format("1525625293386-3f8f99389edd"),
    },
]

# Destination slug -> (name, description, image id)
PLACES = {
    "uk": [
        ("Tower of London", "Historic castle and fortress on the north bank of the River Thames.", "1529655683826-aba9b3e77383"),
        ("Big Ben & Parliament", "The iconic clock tower and Houses of Parliament.", "1486299267070-83823f5448dd"),
        ("Oxford University", "One of the world's oldest and most prestigious universities.", "1580137189272-c9379f8864fd"),
    ],
    "usa": [
        ("Statue of Liberty", "The symbol of freedom welcoming visitors to New York Harbor since 1886.", "1503174971373-b1f69850bded"),
        ("Golden Gate Bridge", "San Francisco's Art Deco suspension bridge, an engineering marvel.", "1501594907352-04cda38ebc29"),
    ],
    "france": [
        ("Eiffel Tower", "The iron lattice tower and symbol of Paris.", "1511739001486-6bfe10ce785f"),
        ("Louvre Museum", "The world's largest art museum, home to the Mona Lisa.", "1499856871958-5b9627545d1a"),
    ],
    "singapore": [
        ("Gardens by the Bay", "Nature park with the Supertree Grove and climate-controlled conservatories.", "1506351421178-63b52a2d2562"),
        ("Sentosa Island", "Resort island with Universal Studios, beaches and attractions.", "1565967511849-76a60a516170"),
    ],
}

PROGRAMS = [
    ("School Student Exchange", "School Students", "Cultural and academic exchange programs for school students."),
    ("Engineering & Tech Tours", "Engineering & Technology", "Visits to top engineering firms and tech hubs."),
    ("Medical Internships", "Medicine & Health Sciences", "Observation and learning in world-class hospitals."),
    ("Culinary Arts Workshop", "Hospitality & Culinary", "Hands-on cooking and hospitality management training."),
    ("Architectural Wonders", "Architecture & Design", "Study tours of iconic architectural landmarks."),
    ("Global Business Management", "Management & Business", "Corporate visits and management seminars."),
    ("International Law Seminar", "Law", "Insights into international legal systems and courts."),
    ("Music & Arts Appreciation", "Arts & Music", "Exploration of global art scenes and musical heritage."),
]

TESTIMONIALS = [
    ("Arjun Mehta", "Student", "The trip to Singapore was an eye-opener! Visiting the Airshow was a dream come true."),
    ("Sarah Jenkins", "Parent", "Edufly organized everything perfectly. My daughter had a safe and enriching experience in the UK."),
]


def _places_for(destination: Destination) -> list[DestinationPlace]:
    return [
        DestinationPlace(
            destination_id=destination.id,
            name=name,
            slug=slugify(name),
            description=description,
            image_url=_IMG.format(image),
            gallery_images=[_IMG.format(image)],
        )
        for name, description, image in PLACES.get(destination.slug, [])
    ]


async def _is_empty(session: AsyncSession, model) -> bool:
    return not await session.scalar(select(func.count()).select_from(model))


async def seed_content(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Fill empty content tables with starter data."""
    async with session_factory() as session:
        if await _is_empty(session, Destination):
            session.add_all(Destination(**d) for d in DESTINATIONS)
            await session.flush()
            logger.info("Seeded %d destinations", len(DESTINATIONS))

        destinations = (await session.execute(select(Destination).order_by(Destination.id))).scalars().all()
        for destination in destinations:
            has_places = await session.scalar(
                select(func.count())
                .select_from(DestinationPlace)
                .where(DestinationPlace.destination_id == destination.id)
            )
            if not has_places:
                places = _places_for(destination)
                if places:
                    session.add_all(places)
                    logger.info("Seeded places for %s", destination.name)

        if await _is_empty(session, Program):
            session.add_all(
                Program(title=title, category=category, description=description)
                for title, category, description in PROGRAMS
            )
            logger.info("Seeded %d programs", len(PROGRAMS))

        if await _is_empty(session, Testimonial):
            session.add_all(
                Testimonial(name=name, role=role, content=content) for name, role, content in TESTIMONIALS
            )

        await session.commit()
