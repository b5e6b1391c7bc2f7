# samyukta/db/types.py

from sqlalchemy import Enum


def value_enum(enum_cls, name: str) -> Enum:
    """String column that stores the enum's value ("Cloud"), not its name ("CLOUD")."""
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        validate_strings=True,
        values_callable=lambda e: [m.value for m in e],
        length=20,
    )
