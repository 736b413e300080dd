# /promptforge/db/base_class.py

from sqlalchemy.orm import declarative_base, declared_attr


class CustomBase:
    # Tables default to the pluralised, lower-cased class name.
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"


Base = declarative_base(cls=CustomBase)
