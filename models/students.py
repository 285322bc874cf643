from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime
from database import Base


class Student(Base):
    __tablename__ = "students"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    registry_no = Column(String(20), unique=True, index=True, nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    phone = Column(String(15), nullable=True)
    date_of_birth = Column(DateTime, nullable=True)
    address = Column(Text, nullable=True)

    # --- ACADEMIC INFO ---
    # Plain class name ("10-A"), matched against classes.name by string
    class_name = Column(String(20), nullable=False, index=True)
    section = Column(String(10), nullable=True)
    admission_date = Column(DateTime, default=datetime.now)

    # --- GUARDIAN INFO ---
    guardian_name = Column(String(100), nullable=True)
    guardian_phone = Column(String(15), nullable=True)

    status = Column(String(20), default="active")  # active, inactive, graduated
