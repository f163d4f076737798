import logging
import random
from typing import Iterable, List, Optional, Tuple

from app.job_analyzer import analyze_job_description
from app.models import AnalysisStatistics, Candidate, JobRequirements, ParsedResume
from app.parser import extract_resume_data
from app.scorer import round_half_up, score_match

logger = logging.getLogger(__name__)

HIGH_MATCH = 80
MEDIUM_MATCH = 60

FIRST_NAMES = ["Sarah", "Michael", "Emily", "David", "Jessica", "Robert", "Ashley", "James", "Amanda", "Daniel"]
LAST_NAMES = ["Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Rodriguez", "Martinez", "Anderson"]
LOCATIONS = ["New York, NY", "San Francisco, CA", "Austin, TX", "Seattle, WA", "Boston, MA", "Chicago, IL"]


def status_for_score(score: int) -> str:
    # labels are kept as-is: the top band is "assessment-scheduled", the middle band "passed"
    if score >= HIGH_MATCH:
        return "assessment-scheduled"
    if score >= MEDIUM_MATCH:
        return "passed"
    return "failed"


def _random_phone(rng: random.Random) -> str:
    return f"+1 ({rng.randint(100, 999)}) {rng.randint(100, 999)}-{rng.randint(1000, 9999)}"


def build_candidate(
    file_name: str,
    index: int,
    job_description: str,
    resume_text: Optional[str] = None,
    rng: Optional[random.Random] = None,
    requirements: Optional[JobRequirements] = None,
) -> Candidate:
    """Extract, score and label one resume.

    ``requirements`` may be passed in when a batch shares one job description.
    """
    rng = rng or random.Random()
    if requirements is None:
        requirements = analyze_job_description(job_description)

    resume = extract_resume_data(resume_text, file_name, index, rng)
    result = score_match(requirements, resume)

    if isinstance(resume, ParsedResume):
        name, email, phone = resume.name, resume.email, resume.phone
    else:
        first = FIRST_NAMES[index % len(FIRST_NAMES)]
        last = LAST_NAMES[index % len(LAST_NAMES)]
        name = f"{first} {last}"
        email = f"{first.lower()}.{last.lower()}@email.com"
        phone = _random_phone(rng)

    return Candidate(
        id=f"candidate-{index}",
        name=name,
        email=email,
        phone=phone,
        match_score=result.score,
        good_points=result.good_points,
        bad_points=result.bad_points,
        file_name=file_name,
        experience=resume.experience,
        skills=resume.skills,
        education=resume.education,
        location=resume.location or LOCATIONS[index % len(LOCATIONS)],
        summary=resume.summary,
        status=status_for_score(result.score),
    )


def rank_candidates(candidates: Iterable[Candidate]) -> List[Candidate]:
    return sorted(candidates, key=lambda c: c.match_score, reverse=True)


def compute_statistics(candidates: List[Candidate]) -> AnalysisStatistics:
    scores = [c.match_score for c in candidates]
    if not scores:
        return AnalysisStatistics()
    return AnalysisStatistics(
        total_candidates=len(scores),
        high_matches=sum(1 for s in scores if s >= HIGH_MATCH),
        medium_matches=sum(1 for s in scores if MEDIUM_MATCH <= s < HIGH_MATCH),
        low_matches=sum(1 for s in scores if s < MEDIUM_MATCH),
        average_score=round_half_up(sum(scores) / len(scores)),
        top_score=max(scores),
    )


def run_pipeline(
    files: List[Tuple[str, str]],
    job_description: str,
    rng: Optional[random.Random] = None,
) -> List[Candidate]:
    """Score every (file_name, text) pair against one job description, best first."""
    requirements = analyze_job_description(job_description)
    candidates = [
        build_candidate(name, i, job_description, text, rng=rng, requirements=requirements)
        for i, (name, text) in enumerate(files)
    ]
    logger.info("Scored %d candidates", len(candidates))
    return rank_candidates(candidates)
