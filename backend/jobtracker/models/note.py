from sqlalchemy import Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from jobtracker.database import Base


class ApplicationNote(Base):
    __tablename__ = "application_notes"

    id = Column(Text, primary_key=True)
    application_id = Column(Text, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)

    application = relationship("Application", back_populates="application_notes")
