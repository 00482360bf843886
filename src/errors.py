"""Exceptions raised by the family tree core."""


class FamilyTreeError(Exception):
    pass


class NotFoundError(FamilyTreeError, KeyError):
    """An unknown person or relationship id was referenced."""

    def __init__(self, kind: str, item_id: str):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"{kind} not found: {item_id!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidRelationshipError(FamilyTreeError, ValueError):
    pass


class InvalidIdError(FamilyTreeError, ValueError):
    """An id is already in use or cannot be stored."""
