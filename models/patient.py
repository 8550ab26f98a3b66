# models/patient.py

from sqlalchemy import Column, Float, Index, Integer, Text, TIMESTAMP, func
from core.database import Base

GENDERS = ("male", "female", "other", "prefer_not_to_say")


class Patient(Base):
    __tablename__ = "patients"
    __table_args__ = (
        Index("idx_patient_name", "last_name", "first_name"),
        # ids are never reused, even after the highest row disappears
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True)

    # Demographics
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    date_of_birth = Column(Text, nullable=False)  # ISO date, e.g. 1985-04-12
    gender = Column(Text, nullable=False)  # one of GENDERS

    # Contact
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    address = Column(Text, nullable=True)

    # Added after the first release; see core/schema.py
    height_cm = Column(Float, nullable=True)
    weight_kg = Column(Float, nullable=True)
    allergies = Column(Text, nullable=True)
    medical_notes = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.current_timestamp())

    def to_dict(self):
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}

    def __repr__(self):
        return f"<Patient {self.id} - {self.last_name}, {self.first_name}>"
