"""
resumefit - heuristic resume structuring and job-relevance tailoring

Turns a free-form resume into structured fields and re-emphasizes the most
relevant experience for a given job posting, without inventing content.

Architecture:
- Intake Context: Resume text segmentation and field extraction, job postings
- Targeting Context: Job categorization, relevance scoring, tailoring
- Templating Context: Resume data model, defaults, plain-text rendering
"""

__version__ = "0.1.0"
