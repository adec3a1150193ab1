"""
SQLAlchemy model for the microchip table.
"""
from sqlalchemy import Boolean, Column, Date, Integer, String, false

from .base import Base


class MicrochipModel(Base):
    """SQLAlchemy model for microchip table."""

    __tablename__ = 'microchip'

    id_microchip = Column(Integer, primary_key=True, autoincrement=True)
    codigo = Column(String(25), unique=True, nullable=False)
    fecha_implantacion = Column(Date, nullable=False)
    veterinaria = Column(String(120), nullable=False)
    observaciones = Column(String(255), nullable=True)

    # Soft delete
    eliminado = Column(Boolean, default=False, server_default=false(), nullable=False)
