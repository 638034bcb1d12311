"""Turn a raw TheCatAPI image record into the fields the detail page shows."""

from dataclasses import dataclass, field

MAX_TEMPERAMENTS = 3
TEMPERAMENT_SEPARATOR = ", "


class ShapeError(Exception):
    def __init__(self, field_name):
        super().__init__(f"missing or invalid {field_name!r} in cat data")
        self.field = field_name


@dataclass
class CatDetail:
    image_url: str
    name: str = ""
    weight: str = ""
    temperaments: list = field(default_factory=list)
    origin: str = ""

    def as_context(self):
        return {
            "ImageUrl": self.image_url,
            "Name": self.name,
            "Weight": self.weight,
            "Temperaments": self.temperaments,
            "Origin": self.origin,
        }


@dataclass
class DetailError:
    error: str

    def as_context(self):
        return {"Error": self.error}


def capitalize(name):
    first = name[:1].upper()
    if len(first) > 1:
        # no single-codepoint uppercase form ("ß", "ŉ"), left as is
        first = name[:1]
    return first + name[1:].lower()


def split_temperaments(value):
    if not value:
        return []
    return value.split(TEMPERAMENT_SEPARATOR)[:MAX_TEMPERAMENTS]


def _string(mapping, key):
    value = mapping.get(key)
    return value if isinstance(value, str) else ""


def project(image):
    """Build a ``CatDetail`` from one upstream image record.

    Only ``url`` is required. Breed fields come from the first entry of
    ``breeds`` and fall back to empty values when missing or of the wrong
    type.

    Raises:
        ShapeError: ``url`` is absent, not a string, or empty.
    """
    url = image.get("url")
    if not isinstance(url, str) or not url:
        raise ShapeError("url")

    detail = CatDetail(image_url=url)

    breeds = image.get("breeds")
    if not isinstance(breeds, list) or not breeds:
        return detail
    breed = breeds[0]
    if not isinstance(breed, dict):
        return detail

    weight = breed.get("weight")
    detail.name = capitalize(_string(breed, "name"))
    detail.weight = _string(weight, "metric") if isinstance(weight, dict) else ""
    detail.temperaments = split_temperaments(_string(breed, "temperament"))
    detail.origin = _string(breed, "origin")
    return detail
