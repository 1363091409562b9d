import enum


class RelationshipType(enum.Enum):
    TO_ONE = "to_one"
    TO_MANY = "to_many"
