"""
Unit tests for heuristic field extractors.

Tests contact, summary, education, skills and certification extraction in
resumefit.contexts.intake.field_extractors.
"""

from dataclasses import replace

import pytest

from resumefit.contexts.intake.field_extractors import (
    extract_certifications,
    extract_education,
    extract_personal_info,
    extract_skills,
    extract_summary,
    find_phone,
    looks_like_name,
    parse_education_line,
    split_skill_line,
)
from resumefit.contexts.intake.normalizer import normalize_resume_text
from resumefit.contexts.intake.segmenter import segment_resume
from resumefit.contexts.templating.resume_data_structure import EducationEntry, PersonalInfo


def _segment(text):
    return segment_resume(normalize_resume_text(text))


@pytest.fixture
def sample(sample_resume_text):
    return _segment(sample_resume_text)


@pytest.mark.unit
class TestPersonalInfo:
    """Tests for contact extraction."""

    def test_sample_contact(self, sample):
        assert extract_personal_info(sample) == PersonalInfo(
            name="Jane Doe",
            email="jane.doe@example.com",
            phone="(206) 555-0142",
            location="Seattle, WA",
            linkedin="linkedin.com/in/janedoe",
        )

    def test_phone_formats(self):
        assert find_phone("call +1 555 123 4567") == "+1 555 123 4567"
        assert find_phone("555.123.4567") == "555.123.4567"
        assert find_phone("5551234567") == "5551234567"
        assert find_phone("no number here") is None

    def test_name_rules(self):
        assert looks_like_name("Jane Doe")
        assert looks_like_name("Mary-Ann O'Neil")
        assert not looks_like_name("jane@example.com")
        assert not looks_like_name("Jane Doe 555-123-4567")
        assert not looks_like_name("Seattle, WA")
        assert not looks_like_name("Jane")

    def test_phone_falls_back_to_whole_document(self):
        segmented = _segment("Jane Doe\n\nSUMMARY\nReach me at 206-555-0199 anytime.")
        info = extract_personal_info(segmented)

        assert info.phone == "206-555-0199"
        assert info.email is None


@pytest.mark.unit
def test_extract_summary(sample):
    """Test summary lines are joined into one paragraph."""
    assert extract_summary(sample).startswith("Dependable office professional")
    assert extract_summary(_segment("Jane Doe")) == ""


@pytest.mark.unit
class TestEducation:
    """Tests for education extraction and certificate routing."""

    def test_sample_education(self, sample, tables):
        result = extract_education(sample, tables)

        assert result.entries == (
            EducationEntry(degree="Associate of Arts", school="Seattle Central College", year="2014"),
        )
        assert result.routed_certifications == ("Certificate in Medical Billing",)

    def test_pipe_record_with_range(self, tables):
        entry = parse_education_line(
            "Bachelor of Science | University of Washington | Seattle, WA | 2010 - 2014", tables
        )
        assert entry == EducationEntry(
            degree="Bachelor of Science",
            school="University of Washington",
            location="Seattle, WA",
            year="2010 - 2014",
        )

    def test_split_record_is_merged(self, tables):
        segmented = _segment("EDUCATION\nBachelor of Arts in English\nState University\n2012")
        result = extract_education(segmented, tables)

        assert result.entries == (
            EducationEntry(degree="Bachelor of Arts in English", school="State University", year="2012"),
        )

    def test_professional_certification_routed(self, tables):
        segmented = _segment("EDUCATION\nHigh School Diploma, Lincoln High School\nCertified Scrum Master")
        result = extract_education(segmented, tables)

        assert len(result.entries) == 1
        assert result.routed_certifications == ("Certified Scrum Master",)

    def test_fallback_without_header(self, tables):
        segmented = _segment("Jane Doe\nB.A. in History, Portland State University, 2015")
        result = extract_education(segmented, tables)

        assert result.entries == (
            EducationEntry(degree="B.A. in History", school="Portland State University", year="2015"),
        )

    def test_no_fallback_when_header_present(self, tables):
        segmented = _segment("Jane Doe\nB.A. in History\n\nEDUCATION\nSome coursework")
        assert extract_education(segmented, tables).entries == ()


@pytest.mark.unit
class TestSkills:
    """Tests for skills extraction."""

    def test_sample_skills(self, sample, tables):
        assert extract_skills(sample, tables) == (
            "Data Entry",
            "Microsoft Excel",
            "Customer Service",
            "Scheduling",
            "Filing",
            "Cash Handling",
        )

    def test_split_skill_line(self):
        assert split_skill_line("Software: Excel, Word | Outlook") == ["Excel", "Word", "Outlook"]
        assert split_skill_line("• Typing; 10-Key; Bilingual") == ["Typing", "10-Key", "Bilingual"]

    def test_duplicates_removed(self, tables):
        segmented = _segment("SKILLS\nExcel, excel, Word")
        assert extract_skills(segmented, tables) == ("Excel", "Word")

    def test_keyword_fallback(self, tables):
        segmented = _segment(
            "Jane Doe\n\nEXPERIENCE\nAcme Store\t2019 - 2022\nCashier\n"
            "• Operated the cash register and handled customer service"
        )
        assert extract_skills(segmented, tables) == ("Customer Service", "Cash Handling")

    def test_fallback_is_capped(self, tables):
        segmented = _segment("Customer service, data entry, Excel, filing and scheduling")
        capped = replace(tables, max_fallback_skills=2)

        assert len(extract_skills(segmented, capped)) == 2


@pytest.mark.unit
class TestCertifications:
    """Tests for certification extraction."""

    def test_sample_certifications(self, sample, tables):
        routed = extract_education(sample, tables).routed_certifications
        assert extract_certifications(sample, tables, routed) == (
            "Certified Medical Administrative Assistant (CMAA)",
            "Certificate in Medical Billing",
        )

    def test_fabricated_never_extracted(self, tables):
        segmented = _segment(
            "CERTIFICATIONS\nCustomer Service Excellence Certificate\nData Entry Professional Certificate"
        )
        assert extract_certifications(segmented, tables) == ()

    def test_memberships_excluded(self, tables):
        segmented = _segment("CERTIFICATIONS\nForklift Certification\nIBEW Union Member")
        assert extract_certifications(segmented, tables) == ("Forklift Certification",)

    def test_fallback_scan(self, tables):
        segmented = _segment("Jane Doe\nLicensed Forklift Operator\n\nEXPERIENCE\nAcme\t2019 - 2020\nDriver")
        assert extract_certifications(segmented, tables) == ("Licensed Forklift Operator",)
