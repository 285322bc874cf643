from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime
from database import Base


class Performance(Base):
    __tablename__ = "performance"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, index=True, nullable=False)
    subject = Column(String(50), nullable=False)     # Example: "Maths", "Science"
    exam_type = Column(String(30), nullable=False)   # midterm, final, unit_test, assignment
    academic_year = Column(String(10), nullable=False)
    term = Column(String(20), nullable=False)        # first_term, second_term, annual

    max_marks = Column(Integer, nullable=False)
    obtained_marks = Column(Integer, nullable=False)
    grade = Column(String(5), nullable=True)         # Example: "A+"
    percentage = Column(Numeric(5, 2), nullable=True)

    exam_date = Column(DateTime, nullable=True)
    remarks = Column(Text, nullable=True)
