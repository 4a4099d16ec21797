"""
Catalog entity model - apps and catalog snapshots.

Values are created only by decoding a catalog response and are never
mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Dict, Any

from common.exceptions import CatalogDecodeError


def _require(data: Dict[str, Any], key: str, types: tuple) -> Any:
    if key not in data:
        raise CatalogDecodeError(f"missing field '{key}'")
    value = data[key]
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool) and bool not in types:
        raise CatalogDecodeError(f"field '{key}' has wrong type bool")
    if not isinstance(value, types):
        raise CatalogDecodeError(
            f"field '{key}' has wrong type {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class App:
    """One catalog entry."""
    id: int
    name: str
    subtitle: str
    description: str
    icon_url: str
    screenshots: Tuple[str, ...]
    rating: float
    reviews: int
    size: str
    version: str
    apk_url: str
    category: str
    featured: bool = False

    @property
    def rating_label(self) -> str:
        return f"{self.rating}"

    @property
    def reviews_label(self) -> str:
        return f"({self.reviews})"

    @property
    def version_label(self) -> str:
        return f"Version {self.version} • {self.size}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation."""
        return {
            "id": self.id,
            "name": self.name,
            "subtitle": self.subtitle,
            "icon": self.icon_url,
            "screenshots": list(self.screenshots),
            "description": self.description,
            "rating": self.rating,
            "reviews": self.reviews,
            "size": self.size,
            "version": self.version,
            "apk_url": self.apk_url,
            "featured": self.featured,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "App":
        """
        Create from a catalog entry.

        Raises:
            CatalogDecodeError: If a field is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise CatalogDecodeError("app entry must be an object")

        screenshots = _require(data, "screenshots", (list,))
        for shot in screenshots:
            if not isinstance(shot, str):
                raise CatalogDecodeError("screenshot references must be strings")

        reviews = _require(data, "reviews", (int,))
        if reviews < 0:
            raise CatalogDecodeError(f"negative review count {reviews}")

        featured = data.get("featured", False)
        if not isinstance(featured, bool):
            raise CatalogDecodeError("field 'featured' has wrong type")

        return cls(
            id=_require(data, "id", (int,)),
            name=_require(data, "name", (str,)),
            subtitle=_require(data, "subtitle", (str,)),
            description=_require(data, "description", (str,)),
            icon_url=_require(data, "icon", (str,)),
            screenshots=tuple(screenshots),
            rating=float(_require(data, "rating", (int, float))),
            reviews=reviews,
            size=_require(data, "size", (str,)),
            version=_require(data, "version", (str,)),
            apk_url=_require(data, "apk_url", (str,)),
            category=_require(data, "category", (str,)),
            featured=featured,
        )


@dataclass(frozen=True)
class CatalogSnapshot:
    """The decoded catalog response."""
    success: bool
    apps: Tuple[App, ...] = field(default_factory=tuple)

    def get(self, app_id: int) -> Optional[App]:
        """Get app by ID."""
        for app in self.apps:
            if app.id == app_id:
                return app
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogSnapshot":
        """
        Create from the decoded response document.

        Raises:
            CatalogDecodeError: If the document does not have the catalog shape.
        """
        if not isinstance(data, dict):
            raise CatalogDecodeError("catalog payload must be an object")

        success = _require(data, "success", (bool,))
        raw_apps = _require(data, "apps", (list,))

        apps = []
        seen = set()
        for index, entry in enumerate(raw_apps):
            try:
                app = App.from_dict(entry)
            except CatalogDecodeError as e:
                raise CatalogDecodeError(f"app at index {index}: {e.details['reason']}")
            if app.id in seen:
                raise CatalogDecodeError(f"duplicate app id {app.id}")
            seen.add(app.id)
            apps.append(app)

        return cls(success=success, apps=tuple(apps))
