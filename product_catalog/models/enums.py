from enum import Enum
from typing import Optional


class SortCriteria(str, Enum):
    NAME = "name"
    CATEGORY = "category"
    PRICE = "price"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SortCriteria":
        if raw is None:
            raise ValueError("Sort criteria is required")
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported sort criteria: {raw}")


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SortOrder":
        """Accepts asc/ascending and desc/descending in any case. Missing means ascending."""
        if raw is None or not raw.strip():
            return cls.ASC
        value = raw.strip().lower()
        if value in ("asc", "ascending"):
            return cls.ASC
        if value in ("desc", "descending"):
            return cls.DESC
        raise ValueError(f"Unsupported sort order: {raw}")
