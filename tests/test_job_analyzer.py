"""Tests for app.job_analyzer: keyword extraction from job descriptions."""

import pytest

from app.job_analyzer import analyze_job_description, detect_experience_level


class TestAnalyzeJobDescription:
    def test_splits_required_and_preferred(self, sample_job_description):
        req = analyze_job_description(sample_job_description)
        assert req.required_skills == ["react", "python"]
        assert req.preferred_skills == ["docker"]

    def test_required_and_preferred_are_disjoint(self, sample_job_description):
        req = analyze_job_description(sample_job_description)
        assert not set(req.required_skills) & set(req.preferred_skills)

    def test_education_and_context_keywords(self, sample_job_description):
        req = analyze_job_description(sample_job_description)
        assert req.education == ["bachelor", "degree"]
        assert req.keywords == ["remote", "full-time"]

    def test_experience_level(self, sample_job_description):
        assert analyze_job_description(sample_job_description).experience_level == "senior"

    def test_case_insensitive(self):
        req = analyze_job_description("REQUIRED PYTHON for this Contract position")
        assert req.required_skills == ["python"]
        assert req.keywords == ["contract"]

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_input_yields_sparse_requirements(self, text):
        req = analyze_job_description(text)
        assert req.required_skills == []
        assert req.preferred_skills == []
        assert req.education == []
        assert req.keywords == []
        assert req.experience_level == "mid"


class TestExperienceLevelPriority:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("junior or senior developers welcome", "junior"),
            ("intermediate engineer who may grow into a lead", "mid"),
            ("principal engineer", "senior"),
            ("looking for a developer to help us", "mid"),
        ],
    )
    def test_first_matching_level_wins(self, text: str, expected: str):
        assert detect_experience_level(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "Senior backend engineer for our international fintech team. 5+ years experience, required python.",
            "Lead engineer building internal tools for the platform group. 7+ years experience.",
            "Principal architect, undergraduate degree in computing. 10+ years experience.",
            "Engineer for our internet infrastructure team, 5+ years experience.",
        ],
    )
    def test_indicators_match_whole_words_only(self, text: str):
        assert detect_experience_level(text.lower()) == "senior"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("summer internship for students", "junior"),
            ("entry-level graduate role", "junior"),
            ("staffing agency hiring a developer", "mid"),
            ("leadership workshop for developers", "mid"),
        ],
    )
    def test_whole_word_indicators_still_fire(self, text: str, expected: str):
        assert detect_experience_level(text) == expected
