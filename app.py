from __future__ import annotations
import os, re, uuid
import logging
from typing import List, Optional
from contextlib import asynccontextmanager

import requests
from dotenv import load_dotenv
from fastapi import FastAPI, UploadFile, File, Form, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import create_engine, or_
from sqlalchemy.orm import sessionmaker

from models import Base, Resume, JobPosting, ResumeAnalysis
from schemas import (
    AnalysisOut, AnalysisRequest, JobIn, JobOut, LinkedInImportRequest, ParsedResume,
    ParseTextRequest, RankedJob, ResumeLevelUpdate, ResumeOut,
)
from parsers.extract import ResumeParser, parse_text
from parsers.jd_extract import extract_jd_details
from parsers.linkedin import ProfileImporter, ProfileUrlError, extract_username, get_profile_importer, profile_to_resume
from matching.config import DEFAULT_LEVEL
from matching.matcher import match_resume_to_job, rank_jobs_for_resume

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

IS_HF = os.environ.get("SPACE_ID") is not None
BASE_DIR = os.getenv("BASE_DIR", "/tmp/data" if IS_HF else "data")
engine = None
Session = sessionmaker(autoflush=False, autocommit=False, future=True)

SAMPLE_JOBS = [
    {
        "title": "Frontend Developer",
        "company": "TechCorp",
        "description": "We are looking for a skilled Frontend Developer to join our team.",
        "required_skills": ["React", "JavaScript", "HTML", "CSS", "TypeScript", "Git"],
        "location": "Mumbai",
        "experience_level": "entry",
    },
    {
        "title": "Backend Engineer",
        "company": "DataWorks",
        "description": "Build and scale REST services and data pipelines on AWS.",
        "required_skills": ["Python", "PostgreSQL", "Docker", "AWS", "Redis"],
        "location": "Bangalore",
        "experience_level": "mid",
    },
    {
        "title": "Senior Data Scientist",
        "company": "InsightAI",
        "description": "Lead machine learning projects from research to production.",
        "required_skills": ["Python", "Pandas", "Scikit-learn", "TensorFlow", "Tableau"],
        "location": "Remote",
        "experience_level": "senior",
    },
    {
        "title": "DevOps Engineer",
        "company": "CloudNine",
        "description": "Own CI/CD, infrastructure as code and Kubernetes clusters.",
        "required_skills": ["Kubernetes", "Terraform", "Jenkins", "Linux", "Bash"],
        "location": "Pune",
        "experience_level": "mid",
    },
    {
        "title": "Engineering Manager",
        "company": "FinEdge",
        "description": "Manage a team of engineers building payment platforms.",
        "required_skills": ["Leadership", "Project Management", "Agile", "Java", "Communication"],
        "location": "Hyderabad",
        "experience_level": "executive",
    },
]


def _database_url() -> str:
    return os.getenv("DATABASE_URL") or f"sqlite:///{os.path.join(BASE_DIR, 'app.db')}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the data directories, the engine and the tables on startup."""
    global engine

    os.makedirs(BASE_DIR, exist_ok=True)
    os.makedirs(os.path.join(BASE_DIR, "resumes"), exist_ok=True)

    db_url = _database_url()
    logger.info(f"Using base directory: {BASE_DIR}")
    logger.info(f"Database URL: {db_url}")
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    engine = create_engine(db_url, future=True, connect_args=connect_args)
    Session.configure(bind=engine)

    Base.metadata.create_all(engine)

    yield
    engine.dispose()
    logger.info("Application shutting down.")


app = FastAPI(title="Resume Job Matcher", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _safe_filename(prefix: str, original: str) -> str:
    base = re.sub(r"[^A-Za-z0-9._-]", "_", original)
    unique = uuid.uuid4().hex[:8]
    return f"{prefix}_{unique}_{base}"


def get_importer() -> ProfileImporter:
    return get_profile_importer()


def _get_resume(s, resume_id: int) -> Resume:
    resume = s.get(Resume, resume_id)
    if not resume:
        raise HTTPException(status_code=404, detail=f"Resume {resume_id} not found.")
    return resume


def _get_job(s, job_id: int) -> JobPosting:
    job = s.get(JobPosting, job_id)
    if not job:
        raise HTTPException(status_code=404, detail=f"Job {job_id} not found.")
    return job


def _store_resume(s, parsed: ParsedResume, text: str, file_name: str, user_id: Optional[str]) -> ResumeOut:
    r = Resume(
        user_id=user_id,
        file_name=file_name,
        extracted_text=text,
        skills=parsed.skills,
        education=parsed.education.model_dump(),
        experience=[e.model_dump() for e in parsed.experience],
        contact_info=parsed.contact_info.model_dump(),
        job_level=parsed.job_level,
        years_of_experience=parsed.years_of_experience,
    )
    s.add(r)
    s.commit()
    s.refresh(r)
    return ResumeOut.model_validate(r)


# -------------------------------------------------------------------
# Resumes
# -------------------------------------------------------------------
@app.post("/resumes/parse", response_model=ParsedResume)
def parse_resume_text(body: ParseTextRequest):
    """Extract structured attributes from raw resume text without storing anything."""
    return parse_text(body.text)


@app.post("/resumes/upload", response_model=ResumeOut)
async def upload_resume(resume: UploadFile = File(...), user_id: Optional[str] = Form(None)):
    data = await resume.read()
    file_name = resume.filename or "resume.txt"
    try:
        text, parsed = ResumeParser().parse_upload(file_name, data)
    except ValueError as e:
        logger.error(f"Rejected upload {file_name}: {e}")
        raise HTTPException(status_code=400, detail=f"Failed to extract details: {e}")

    save_path = os.path.join(BASE_DIR, "resumes", _safe_filename("resume", file_name))
    with open(save_path, "wb") as f:
        f.write(data)

    with Session() as s:
        return _store_resume(s, parsed, text, file_name, user_id)


@app.post("/resumes/import/linkedin", response_model=ResumeOut)
def import_linkedin(body: LinkedInImportRequest, importer: ProfileImporter = Depends(get_importer)):
    try:
        profile = importer.import_profile(body.url)
    except ProfileUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except requests.RequestException as e:
        logger.error(f"LinkedIn fetch failed for {body.url}: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to fetch LinkedIn profile: {e}")

    text, parsed = profile_to_resume(profile)
    file_name = f"LinkedIn_Profile_{extract_username(body.url)}.txt"
    with Session() as s:
        return _store_resume(s, parsed, text, file_name, body.user_id)


@app.get("/resumes", response_model=List[ResumeOut])
def list_resumes(user_id: Optional[str] = None):
    with Session() as s:
        q = s.query(Resume)
        if user_id:
            q = q.filter(Resume.user_id == user_id)
        rows = q.order_by(Resume.uploaded_at.desc(), Resume.id.desc()).all()
        return [ResumeOut.model_validate(r) for r in rows]


@app.get("/resumes/{resume_id}", response_model=ResumeOut)
def get_resume(resume_id: int):
    with Session() as s:
        return ResumeOut.model_validate(_get_resume(s, resume_id))


@app.patch("/resumes/{resume_id}/level", response_model=ResumeOut)
def update_resume_level(resume_id: int, body: ResumeLevelUpdate):
    """Explicit seniority correction; the only way a stored resume changes."""
    with Session() as s:
        r = _get_resume(s, resume_id)
        r.job_level = body.job_level
        if "years_of_experience" in body.model_fields_set:
            r.years_of_experience = body.years_of_experience
        s.commit()
        s.refresh(r)
        return ResumeOut.model_validate(r)


@app.delete("/resumes/{resume_id}", response_model=dict)
def delete_resume(resume_id: int):
    with Session() as s:
        r = _get_resume(s, resume_id)
        s.delete(r)
        s.commit()
    return {"deleted": resume_id}


# -------------------------------------------------------------------
# Jobs
# -------------------------------------------------------------------
@app.post("/jobs", response_model=JobOut)
def create_job(job: JobIn):
    """Create a job posting; missing skills/level/location are derived from the description."""
    if not job.description or not job.description.strip():
        raise HTTPException(status_code=400, detail="description cannot be empty.")

    required_skills = job.required_skills
    experience_level = job.experience_level
    location = job.location
    if not required_skills or not experience_level or not location:
        details = extract_jd_details(job.description, job.title)
        required_skills = required_skills or details["required_skills"]
        experience_level = experience_level or details["experience_level"] or DEFAULT_LEVEL
        # Unknown location is stored empty and matches as "unknown"
        location = location or details["location"] or ""

    with Session() as s:
        j = JobPosting(
            title=job.title,
            company=job.company,
            description=job.description,
            required_skills=required_skills,
            location=location,
            experience_level=experience_level,
            source=job.source,
            url=job.url,
        )
        s.add(j)
        s.commit()
        s.refresh(j)
        return JobOut.model_validate(j)


@app.get("/jobs/search", response_model=List[JobOut])
def search_jobs(q: Optional[str] = None, location: Optional[str] = None,
                experience_level: Optional[str] = None, limit: int = 20):
    if limit <= 0:
        raise HTTPException(status_code=400, detail="limit must be > 0")

    with Session() as s:
        query = s.query(JobPosting)
        if q:
            pattern = f"%{q}%"
            query = query.filter(or_(JobPosting.title.ilike(pattern), JobPosting.description.ilike(pattern)))
        if location:
            query = query.filter(JobPosting.location.ilike(f"%{location}%"))
        if experience_level:
            query = query.filter(JobPosting.experience_level == experience_level.lower())
        rows = query.order_by(JobPosting.posted_at.desc(), JobPosting.id.desc()).limit(limit).all()
        return [JobOut.model_validate(j) for j in rows]


@app.get("/jobs/recent", response_model=List[JobOut])
def recent_jobs(limit: int = 10):
    if limit <= 0:
        raise HTTPException(status_code=400, detail="limit must be > 0")
    with Session() as s:
        rows = s.query(JobPosting).order_by(JobPosting.posted_at.desc(), JobPosting.id.desc()).limit(limit).all()
        return [JobOut.model_validate(j) for j in rows]


@app.post("/jobs/seed", response_model=dict)
def seed_jobs():
    with Session() as s:
        for job in SAMPLE_JOBS:
            s.add(JobPosting(**job, source="sample"))
        s.commit()
    logger.info(f"Seeded {len(SAMPLE_JOBS)} sample jobs")
    return {"inserted": len(SAMPLE_JOBS)}


@app.get("/jobs/{job_id}", response_model=JobOut)
def get_job(job_id: int):
    with Session() as s:
        return JobOut.model_validate(_get_job(s, job_id))


# -------------------------------------------------------------------
# Matching
# -------------------------------------------------------------------
@app.get("/resumes/{resume_id}/recommendations", response_model=List[RankedJob])
def recommend_jobs(resume_id: int, limit: int = 20):
    """Rank all job postings for a resume."""
    if limit <= 0:
        raise HTTPException(status_code=400, detail="limit must be > 0")

    with Session() as s:
        resume = ResumeOut.model_validate(_get_resume(s, resume_id))
        jobs = s.query(JobPosting).order_by(JobPosting.posted_at.desc(), JobPosting.id.desc()).all()
        return rank_jobs_for_resume(resume, [JobOut.model_validate(j) for j in jobs], limit=limit)


@app.post("/analysis", response_model=AnalysisOut)
def analyze_resume_for_job(body: AnalysisRequest):
    with Session() as s:
        resume_row = s.get(Resume, body.resume_id)
        job_row = s.get(JobPosting, body.job_id)
        if not resume_row or not job_row:
            raise HTTPException(status_code=404, detail="Resume or job not found")

        result = match_resume_to_job(ResumeOut.model_validate(resume_row), JobOut.model_validate(job_row))

        a = ResumeAnalysis(resume_id=resume_row.id, job_id=job_row.id, **result.model_dump())
        s.add(a)
        s.commit()
        s.refresh(a)
        return AnalysisOut.model_validate(a)


@app.get("/resumes/{resume_id}/analysis", response_model=List[AnalysisOut])
def list_analyses(resume_id: int):
    with Session() as s:
        _get_resume(s, resume_id)
        rows = (
            s.query(ResumeAnalysis)
            .filter(ResumeAnalysis.resume_id == resume_id)
            .order_by(ResumeAnalysis.analyzed_at.desc(), ResumeAnalysis.id.desc())
            .all()
        )
        return [AnalysisOut.model_validate(a) for a in rows]
