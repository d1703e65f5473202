# /sahayak-backend/app/db/base_class.py

from typing import Any
from sqlalchemy.orm import as_declarative, declared_attr


@as_declarative()
class Base:
    """
    Declarative base for every table. Table names default to the pluralized,
    lower-cased class name (Teacher -> teachers); models whose collection name
    differs override `__tablename__`.
    """
    id: Any
    __name__: str

    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"
