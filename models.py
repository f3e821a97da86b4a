from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey, TypeDecorator
from sqlalchemy.orm import declarative_base, relationship
import json

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class JSONType(TypeDecorator):
    """Custom JSON type that works reliably with SQLite."""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        """Convert Python object to JSON string for storage."""
        if value is None:
            return None
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        """Convert JSON string back to Python object."""
        if value is None:
            return None
        return json.loads(value)


class Resume(Base):
    __tablename__ = "resumes"
    id = Column(Integer, primary_key=True)
    user_id = Column(String, index=True, nullable=True)
    file_name = Column(String, nullable=False)
    extracted_text = Column(Text, nullable=False)
    skills = Column(JSONType, default=list)
    education = Column(JSONType, default=dict)
    experience = Column(JSONType, default=list)
    contact_info = Column(JSONType, default=dict)
    job_level = Column(String, index=True, nullable=True)  # entry / mid / senior / executive
    years_of_experience = Column(Float, nullable=True)
    uploaded_at = Column(DateTime, default=_utcnow, nullable=False)

    analyses = relationship("ResumeAnalysis", back_populates="resume", cascade="all, delete-orphan")


class JobPosting(Base):
    __tablename__ = "job_postings"
    id = Column(Integer, primary_key=True)
    title = Column(String, index=True, nullable=False)
    company = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=False)
    required_skills = Column(JSONType, default=list)
    location = Column(String, nullable=False)
    experience_level = Column(String, nullable=False)
    source = Column(String, nullable=False)  # manual / sample / linkedin / naukri
    url = Column(String, nullable=True)
    posted_at = Column(DateTime, default=_utcnow, nullable=False)


class ResumeAnalysis(Base):
    __tablename__ = "resume_analysis"
    id = Column(Integer, primary_key=True)
    resume_id = Column(Integer, ForeignKey("resumes.id"), index=True, nullable=False)
    job_id = Column(Integer, ForeignKey("job_postings.id"), index=True, nullable=False)
    match_score = Column(Integer, index=True, nullable=False)
    matching_skills = Column(JSONType, default=list)
    missing_skills = Column(JSONType, default=list)
    suggestions = Column(JSONType, default=list)
    strengths_weaknesses = Column(JSONType, default=dict)
    level_match = Column(JSONType, nullable=True)
    analyzed_at = Column(DateTime, default=_utcnow, nullable=False)

    resume = relationship("Resume", back_populates="analyses")
    job = relationship("JobPosting")
