"""
Base class for Value Objects.

Value Objects are immutable and compared by their attributes, never by
identity. A GeoPoint at the same coordinates is the same GeoPoint.

Example:
    @dataclass(frozen=True)
    class CountryCode(ValueObject):
        value: str

        def __post_init__(self) -> None:
            if len(self.value) != 3:
                raise ValidationError("Country code must be ISO alpha-3")
"""


class ValueObject:
    """
    Base class for Value Objects in the domain model.

    Subclasses are frozen dataclasses that validate in __post_init__.
    """

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.__dict__.items())))

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"{self.__class__.__name__}({attrs})"

    def to_primitive(self) -> object:
        """
        Convert to a primitive Python type for serialization.

        Single-attribute value objects collapse to that attribute.
        """
        values = list(self.__dict__.values())
        if len(values) == 1:
            return values[0]
        return dict(self.__dict__)
