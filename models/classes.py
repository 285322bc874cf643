from sqlalchemy import Column, Integer, String
from database import Base


class SchoolClass(Base):
    __tablename__ = "classes"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(20), unique=True, index=True, nullable=False)  # 9-A, 10-B ...
    standard = Column(Integer, nullable=False)
    section = Column(String(10), nullable=False)
    class_teacher = Column(String(100), nullable=True)
    room = Column(String(20), nullable=True)
    capacity = Column(Integer, default=40)
