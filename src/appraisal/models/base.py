"""Base SQLAlchemy declarative base for all models"""

from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

# Deterministic constraint names so migrations and create_all agree
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))
