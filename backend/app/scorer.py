"""Weighted keyword scoring of one resume against one job description.

Terms: required skills (40), preferred skills (20), experience (25),
education (15) and project relevance (20). The raw sum can reach 120, so the
final score is clamped to 0-100.
"""
import math
import re
from typing import List

from app.models import JobRequirements, ResumeData, ScoreBreakdown, ScoreResult

REQUIRED_WEIGHT = 40
PREFERRED_WEIGHT = 20
EXPERIENCE_WEIGHT = 25
EDUCATION_WEIGHT = 15
PROJECT_WEIGHT = 20

UNKNOWN_LEVEL_SCORE = 15
EDUCATION_MISMATCH_SCORE = 5
DEFAULT_YEARS = 3

MAX_GOOD_POINTS = 5
MAX_BAD_POINTS = 4


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def skill_matches(job_skill: str, resume_skills: List[str]) -> bool:
    job_skill = job_skill.lower()
    for skill in resume_skills:
        skill = skill.lower()
        if skill in job_skill or job_skill in skill:
            return True
    return False


def matched_skills(job_skills: List[str], resume_skills: List[str]) -> List[str]:
    return [s for s in job_skills if skill_matches(s, resume_skills)]


def skill_term(job_skills: List[str], resume_skills: List[str], weight: float) -> float:
    # a job that names no skills in this category neither rewards nor penalizes
    if not job_skills:
        return weight / 2
    matched = matched_skills(job_skills, resume_skills)
    return len(matched) / max(len(job_skills), 1) * weight


def parse_years(experience: str) -> int:
    m = re.search(r"\d+", experience or "")
    return int(m.group(0)) if m else DEFAULT_YEARS


def experience_term(level: str, experience: str) -> float:
    years = parse_years(experience)
    if level == "junior":
        return EXPERIENCE_WEIGHT if years <= 2 else max(0, EXPERIENCE_WEIGHT - 5 * (years - 2))
    if level == "mid":
        if 2 <= years <= 7:
            return EXPERIENCE_WEIGHT
        return max(0, EXPERIENCE_WEIGHT - 5 * abs(years - 4))
    if level == "senior":
        return EXPERIENCE_WEIGHT if years >= 5 else max(0, EXPERIENCE_WEIGHT - 5 * (5 - years))
    return UNKNOWN_LEVEL_SCORE


def education_term(required: List[str], education: str) -> float:
    if not required:
        return EDUCATION_WEIGHT
    education = (education or "").lower()
    if any(keyword in education for keyword in required):
        return EDUCATION_WEIGHT
    return EDUCATION_MISMATCH_SCORE


def project_term(projects: List[str], keywords: List[str]) -> float:
    relevant = [p for p in projects if any(k in p.lower() for k in keywords)]
    return len(relevant) / max(len(projects), 1) * PROJECT_WEIGHT


def score_match(requirements: JobRequirements, resume: ResumeData) -> ScoreResult:
    required_hits = matched_skills(requirements.required_skills, resume.skills)
    preferred_hits = matched_skills(requirements.preferred_skills, resume.skills)

    breakdown = ScoreBreakdown(
        required_skills=skill_term(requirements.required_skills, resume.skills, REQUIRED_WEIGHT),
        preferred_skills=skill_term(requirements.preferred_skills, resume.skills, PREFERRED_WEIGHT),
        experience=experience_term(requirements.experience_level, resume.experience),
        education=education_term(requirements.education, resume.education),
        projects=project_term(
            resume.projects,
            requirements.required_skills + requirements.preferred_skills,
        ),
    )
    total = (
        breakdown.required_skills
        + breakdown.preferred_skills
        + breakdown.experience
        + breakdown.education
        + breakdown.projects
    )
    score = min(100, max(0, round_half_up(total)))

    good, bad = [], []
    if required_hits:
        good.append(f"Matches {len(required_hits)} out of {len(requirements.required_skills)} required skills")
    else:
        bad.append("No required skills match found")

    if preferred_hits:
        good.append(f"Has {len(preferred_hits)} preferred skills")

    level = requirements.experience_level
    if breakdown.experience > 15:
        good.append(f"Experience level aligns well with {level} role requirements")
    else:
        bad.append(f"Experience level may not match {level} role requirements")

    if breakdown.education > 10:
        good.append("Education background is relevant")

    if breakdown.projects > 15:
        good.append("Project experience is relevant to the role")
    else:
        bad.append("Limited relevant project experience")

    if resume.certifications:
        good.append("Has relevant certifications")

    return ScoreResult(
        score=score,
        good_points=good[:MAX_GOOD_POINTS],
        bad_points=bad[:MAX_BAD_POINTS],
        breakdown=breakdown,
    )
