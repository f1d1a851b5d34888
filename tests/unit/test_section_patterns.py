"""
Unit tests for section header recognition.

Tests the header vocabulary and the stricter actual-section-header rule in
resumefit.contexts.intake.section_patterns.
"""

import pytest

from resumefit.contexts.intake.section_patterns import (
    ResumeSection,
    is_actual_section_header,
    match_section_header,
    section_for_actual_header,
)


@pytest.mark.unit
class TestMatchSectionHeader:
    """Tests for match_section_header."""

    def test_exact_phrase(self):
        assert match_section_header("PROFESSIONAL EXPERIENCE").section is ResumeSection.EXPERIENCE
        assert match_section_header("Summary").section is ResumeSection.SUMMARY

    def test_inline_content_after_colon(self):
        match = match_section_header("Skills: Excel, Word")
        assert match.section is ResumeSection.COMPETENCIES
        assert match.inline == "Excel, Word"

    def test_decorated_header(self):
        assert match_section_header("## Education ##").section is ResumeSection.EDUCATION
        assert match_section_header("**CERTIFICATIONS**").section is ResumeSection.CERTIFICATIONS

    def test_connector_tail(self):
        assert match_section_header("Licenses and Certifications").section is ResumeSection.CERTIFICATIONS
        assert match_section_header("EDUCATION & CREDENTIALS").section is ResumeSection.EDUCATION

    def test_longest_phrase_wins(self):
        """Test "volunteer experience" is not mistaken for the experience header."""
        assert match_section_header("Volunteer Experience").section is ResumeSection.UNCLASSIFIED

    def test_prose_is_not_a_header(self):
        assert match_section_header("Developed new skills in Excel") is None
        assert match_section_header("Skills gained on the job were many") is None
        assert match_section_header("Experience includes data management") is None

    def test_blank_line(self):
        assert match_section_header("   ") is None


@pytest.mark.unit
class TestActualSectionHeader:
    """Tests for the rule that ends the experience region."""

    def test_header_words(self):
        assert is_actual_section_header("EDUCATION")
        assert is_actual_section_header("Skills & Abilities")
        assert is_actual_section_header("Certifications:")
        assert is_actual_section_header("Awards and Honors")

    def test_sentence_mentioning_skills(self):
        assert not is_actual_section_header("Skills gained on the job were many")
        assert not is_actual_section_header("Used my skills daily")

    def test_section_for_actual_header(self):
        assert section_for_actual_header("Education") is ResumeSection.EDUCATION
        assert section_for_actual_header("Skills & Abilities") is ResumeSection.COMPETENCIES
        assert section_for_actual_header("Licenses") is ResumeSection.CERTIFICATIONS
        assert section_for_actual_header("Awards") is ResumeSection.UNCLASSIFIED
