import logging
import re

from app.models import JobRequirements
from app.parser import SKILL_CATALOG

logger = logging.getLogger(__name__)


def _word_pattern(indicators):
    return re.compile(r"\b(?:" + "|".join(re.escape(i) for i in indicators) + r")\b")


# Checked in this order; the first level with any indicator present wins.
# Indicators match whole words only.
EXPERIENCE_INDICATORS = [
    ("junior", _word_pattern(
        ["junior", "entry level", "entry-level", "graduate", "intern", "internship", "0-2 years", "1-2 years"]
    )),
    ("mid", _word_pattern(["mid-level", "mid level", "intermediate", "2-4 years", "3-5 years", "3+ years"])),
    ("senior", _word_pattern(
        ["senior", "lead", "principal", "staff", "architect", "5+ years", "7+ years", "10+ years"]
    )),
]
DEFAULT_LEVEL = "mid"

EDUCATION_KEYWORDS = ["bachelor", "master", "phd", "degree", "diploma", "certification"]
CONTEXT_KEYWORDS = ["remote", "hybrid", "onsite", "full-time", "part-time", "contract", "freelance"]


def _is_required(skill: str, jd_lower: str) -> bool:
    return f"required {skill}" in jd_lower or f"must have {skill}" in jd_lower


def detect_experience_level(jd_lower: str) -> str:
    for level, pattern in EXPERIENCE_INDICATORS:
        if pattern.search(jd_lower):
            return level
    return DEFAULT_LEVEL


def analyze_job_description(text: str) -> JobRequirements:
    """Keyword scan of a job description into required/preferred skills, level and tags."""
    jd_lower = (text or "").lower()

    required, preferred = [], []
    for skill in SKILL_CATALOG:
        if skill not in jd_lower:
            continue
        if _is_required(skill, jd_lower):
            required.append(skill)
        else:
            preferred.append(skill)

    requirements = JobRequirements(
        required_skills=required,
        preferred_skills=preferred,
        experience_level=detect_experience_level(jd_lower),
        education=[k for k in EDUCATION_KEYWORDS if k in jd_lower],
        keywords=[k for k in CONTEXT_KEYWORDS if k in jd_lower],
    )
    logger.debug(
        "Job requirements: %d required, %d preferred, level=%s",
        len(required), len(preferred), requirements.experience_level,
    )
    return requirements
