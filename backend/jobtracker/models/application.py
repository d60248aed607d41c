from sqlalchemy import Boolean, Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from jobtracker.database import Base


class Application(Base):
    __tablename__ = "applications"

    id = Column(Text, primary_key=True)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    position = Column(Text, nullable=False)
    company_name = Column(Text, nullable=False)
    platform = Column(Text)
    job_link = Column(Text)
    contract_type = Column(Text)
    work_model = Column(Text)
    location = Column(Text)
    salary_expectation = Column(Text)
    cv_version = Column(Text)
    notes = Column(Text)
    status = Column(Text, nullable=False, default="APPLIED")
    priority = Column(Text, nullable=False, default="MEDIUM")
    is_bookmarked = Column(Boolean, nullable=False, default=False)
    date_applied = Column(Text, nullable=False)
    last_updated = Column(Text, nullable=False)
    reminder_date = Column(Text)
    is_reminder_sent = Column(Boolean, nullable=False, default=False)

    user = relationship("User", back_populates="applications")
    application_notes = relationship(
        "ApplicationNote", back_populates="application", cascade="all, delete-orphan"
    )
    tags = relationship("Tag", secondary="application_tags", back_populates="applications")
