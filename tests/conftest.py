"""Shared fixtures for resumefit tests."""

import pytest

from resumefit.contexts.intake.job_posting import JobPosting
from resumefit.utils.keyword_tables import default_keyword_tables

SAMPLE_RESUME = """Jane Doe
Seattle, WA
jane.doe@example.com | (206) 555-0142
linkedin.com/in/janedoe

PROFESSIONAL SUMMARY
Dependable office professional with five years of experience supporting busy teams.

SKILLS
Data Entry, Microsoft Excel, Customer Service
Scheduling | Filing | Cash Handling

PROFESSIONAL EXPERIENCE
Harbor Medical Clinic, Seattle, WA\t2021 -- Present
Front Desk Receptionist
• Greeted patients and booked appointments for six providers
• Keyed insurance information into the clinic database

Fresh Market, Tacoma, WA 2018 - 2021
Cashier
• Operated cash registers and balanced drawers at close
• Helped shoppers locate products across the store

Evergreen Service Center | Seattle, WA | 2016 - 2018
• Answered client calls about billing questions

First National Bank\t2014 - 2016

EDUCATION
Associate of Arts, Seattle Central College, 2014
Certificate in Medical Billing

CERTIFICATIONS
Certified Medical Administrative Assistant (CMAA)
Member, Teamsters Union Local 117
Microsoft Office Specialist (MOS) - Excel
"""


@pytest.fixture
def tables():
    return default_keyword_tables()


@pytest.fixture
def sample_resume_text():
    return SAMPLE_RESUME


@pytest.fixture
def data_entry_job():
    return JobPosting(
        title="Data Entry Clerk",
        company="Acme Health Services",
        location="Seattle, WA",
        description=(
            "Seeking a detail-oriented clerk for data entry, filing, and scheduling. "
            "Customer service experience and Microsoft Office required."
        ),
    )


@pytest.fixture
def retail_job():
    return JobPosting(
        title="Retail Sales Associate",
        company="Downtown Outlet Store",
        description="Cash handling, visual merchandising and customer service on the sales floor.",
    )
