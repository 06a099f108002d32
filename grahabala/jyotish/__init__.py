"""Classical Jyotish tables: dignity, relationships and drishti."""

from .aspects import (
    AspectInfo,
    aspect_strength,
    aspects_cast_by,
    aspects_received_by,
    calculate_aspects,
    drishti_virupas,
    planets_aspecting_sign,
)
from .dignity import (
    Dignity,
    Relationship,
    debilitation_sign,
    dignity,
    exaltation_sign,
    moolatrikona_sign,
    own_signs,
    relationship,
    sign_lord,
)

__all__ = [
    "AspectInfo",
    "Dignity",
    "Relationship",
    "aspect_strength",
    "aspects_cast_by",
    "aspects_received_by",
    "calculate_aspects",
    "debilitation_sign",
    "dignity",
    "drishti_virupas",
    "exaltation_sign",
    "moolatrikona_sign",
    "own_signs",
    "planets_aspecting_sign",
    "relationship",
    "sign_lord",
]
