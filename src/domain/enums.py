from enum import Enum


class SortDirection(str, Enum):
    """Sort direction for paginated queries"""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: "str | SortDirection | None") -> "SortDirection":
        """Anything other than 'desc' (case-insensitive) sorts ascending."""
        if isinstance(value, SortDirection):
            return value
        if value and value.strip().lower() == cls.DESC.value:
            return cls.DESC
        return cls.ASC
