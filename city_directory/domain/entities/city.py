"""City domain entity - pure business logic."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from city_directory.domain.exceptions import InvalidCityError, MissingFieldError

MAX_CITY_ID_LENGTH = 255


def validate_city_id(city_id: Optional[str]) -> str:
    """Return the city id if it can address a document, raise otherwise."""
    if not city_id or not city_id.strip():
        raise InvalidCityError("City id must not be empty")
    if "/" in city_id:
        raise InvalidCityError(f"City id '{city_id}' must not contain '/'")
    if len(city_id) > MAX_CITY_ID_LENGTH:
        raise InvalidCityError(f"City id must be at most {MAX_CITY_ID_LENGTH} characters")
    return city_id


@dataclass
class CityRecord:
    """City domain entity.

    ``friends`` and ``neighbour`` are None when the stored document never
    had them; an empty ``friends`` list is a different state.
    """
    id: str
    friends: Optional[List[str]] = None
    neighbour: Optional[str] = None
    revision: int = 0

    def require_friends(self) -> List[str]:
        if self.friends is None:
            raise MissingFieldError(self.id, "friends")
        return self.friends

    def require_neighbour(self) -> str:
        if self.neighbour is None:
            raise MissingFieldError(self.id, "neighbour")
        return self.neighbour

    def add_friend(self, friend: str):
        """Append a friend. Duplicates and unknown cities are accepted."""
        self.friends = [*self.require_friends(), friend]

    def remove_friend(self, friend: str):
        """Drop every occurrence of ``friend``."""
        self.friends = [f for f in self.require_friends() if f != friend]

    def to_document(self) -> Dict[str, Any]:
        """Convert to the stored document body (absent fields omitted)."""
        document: Dict[str, Any] = {}
        if self.friends is not None:
            document["friends"] = list(self.friends)
        if self.neighbour is not None:
            document["neighbour"] = self.neighbour
        return document
