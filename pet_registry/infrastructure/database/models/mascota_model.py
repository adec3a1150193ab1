"""
SQLAlchemy model for the mascota table.
"""
from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String, false

from .base import Base


class MascotaModel(Base):
    """SQLAlchemy model for mascota table."""

    __tablename__ = 'mascota'

    id_mascota = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(60), nullable=False)
    especie = Column(String(30), nullable=False)
    raza = Column(String(60), nullable=True)
    fecha_nacimiento = Column(Date, nullable=True)
    duenio = Column(String(60), nullable=False)

    # One chip per pet at most; no cascade, chips outlive pets
    id_microchip_fk = Column(
        Integer,
        ForeignKey('microchip.id_microchip'),
        unique=True,
        nullable=True
    )

    # Soft delete
    eliminado = Column(Boolean, default=False, server_default=false(), nullable=False)
