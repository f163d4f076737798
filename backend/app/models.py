
from pydantic import BaseModel, ConfigDict, Field, EmailStr, TypeAdapter
from pydantic.alias_generators import to_camel
from typing import List, Optional, Literal
from datetime import datetime, timezone

ExperienceLevel = Literal["junior", "mid", "senior"]
CandidateStatus = Literal["assessment-scheduled", "passed", "failed", "pending"]
AnalysisStatus = Literal["completed", "processing", "failed"]

EMAIL_ADAPTER = TypeAdapter(EmailStr)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base for documents stored in Mongo and returned as JSON with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobRequirements(BaseModel):
    required_skills: List[str] = []
    preferred_skills: List[str] = []
    experience_level: ExperienceLevel = "mid"
    education: List[str] = []
    keywords: List[str] = []


class ResumeData(BaseModel):
    skills: List[str] = []
    experience: str = "3-5 years"
    education: str = "Bachelor's in Computer Science"
    summary: str = ""
    projects: List[str] = []
    certifications: List[str] = []
    location: Optional[str] = None


class ParsedResume(ResumeData):
    name: str
    email: str
    phone: str


class ScoreBreakdown(BaseModel):
    required_skills: float = 0
    preferred_skills: float = 0
    experience: float = 0
    education: float = 0
    projects: float = 0


class ScoreResult(BaseModel):
    score: int = Field(ge=0, le=100)
    good_points: List[str] = []
    bad_points: List[str] = []
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)


class Candidate(CamelModel):
    id: str
    name: str
    email: str
    phone: str
    match_score: int = Field(ge=0, le=100)
    good_points: List[str] = []
    bad_points: List[str] = []
    file_name: str
    experience: str
    skills: List[str] = []
    education: str
    location: str
    summary: str
    status: CandidateStatus


class AnalysisStatistics(CamelModel):
    total_candidates: int = 0
    high_matches: int = 0
    medium_matches: int = 0
    low_matches: int = 0
    average_score: int = 0
    top_score: int = 0


class Analysis(CamelModel):
    id: Optional[str] = Field(default=None, alias="_id")
    user_id: str
    title: str
    job_description: str
    candidates: List[Candidate] = []
    status: AnalysisStatus = "completed"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    statistics: AnalysisStatistics = Field(default_factory=AnalysisStatistics)


class UserPublic(CamelModel):
    id: str = Field(alias="_id")
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class SignupRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class SigninRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class StatusUpdate(BaseModel):
    status: AnalysisStatus
