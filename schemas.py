from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

JobLevel = Literal["entry", "mid", "senior", "executive"]


# Education record (parsed structure)
class Education(BaseModel):
    degree: Optional[str] = None
    institution: Optional[str] = None
    graduation_year: Optional[int] = None
    gpa: Optional[float] = None


# Contact details and online profiles
class ContactInfo(BaseModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None


# Work history entry
class ExperienceEntry(BaseModel):
    title: str
    company: str
    duration: str = ""
    description: str = ""


# Attributes derived from a resume's text
class ResumeData(BaseModel):
    skills: List[str] = []
    education: Education = Field(default_factory=Education)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    experience: List[ExperienceEntry] = []
    job_level: Optional[JobLevel] = None
    years_of_experience: Optional[float] = Field(default=None, ge=0)


# Output of the text parser
class ParsedResume(ResumeData):
    skills_categorized: Dict[str, List[str]] = {}


# Stored resume
class ResumeOut(ResumeData):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[str] = None
    file_name: str
    extracted_text: str
    uploaded_at: datetime


class ParseTextRequest(BaseModel):
    text: str


class LinkedInImportRequest(BaseModel):
    url: str
    user_id: Optional[str] = None


class ResumeLevelUpdate(BaseModel):
    job_level: JobLevel
    years_of_experience: Optional[float] = Field(default=None, ge=0)


# Job posting model
class JobIn(BaseModel):
    title: str
    company: str
    description: str
    required_skills: List[str] = []
    location: Optional[str] = None
    experience_level: Optional[JobLevel] = None
    source: str = "manual"
    url: Optional[str] = None


class JobOut(JobIn):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location: str
    experience_level: JobLevel
    posted_at: datetime


# Imported profile (LinkedIn)
class ProfileEducation(BaseModel):
    degree: str
    institution: str
    graduation_year: str = ""


class LinkedInProfile(BaseModel):
    name: str
    headline: str = ""
    location: str = ""
    experience: List[ExperienceEntry] = []
    education: List[ProfileEducation] = []
    skills: List[str] = []


# Matcher intermediate results
class SkillAnalysis(BaseModel):
    matching_skills: List[str]
    nice_to_have_skills: List[str]
    missing_skills: List[str]
    skill_score: int
    essential_skills_match: int
    total_required_skills: int


class LevelMatch(BaseModel):
    resume_level: str
    job_level: str
    is_match: bool
    recommendation: str
    risk_level: Literal["low", "medium", "high"]
    experience_gap: int


class LocationMatch(BaseModel):
    is_match: bool
    type: Literal["unknown", "remote", "exact", "regional", "different"]
    recommendation: str


class StrengthsWeaknesses(BaseModel):
    strengths: List[str] = []
    weaknesses: List[str] = []


# Match result for a (resume, job) pair
class AnalysisResult(BaseModel):
    match_score: int = Field(ge=0, le=100)
    matching_skills: List[str]
    missing_skills: List[str]
    suggestions: List[str]
    strengths_weaknesses: StrengthsWeaknesses
    level_match: LevelMatch


class AnalysisRequest(BaseModel):
    resume_id: int
    job_id: int


class AnalysisOut(AnalysisResult):
    model_config = ConfigDict(from_attributes=True)

    id: int
    resume_id: int
    job_id: int
    analyzed_at: datetime
    job: Optional[JobOut] = None


class RankedJob(BaseModel):
    job: JobOut
    compatibility_score: int
    match_reasons: List[str]
