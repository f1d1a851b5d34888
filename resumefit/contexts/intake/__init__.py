"""
Intake Context

Responsibilities:
- Loads raw resume text from files (text, markdown, PDF)
- Segments free-form resume text into labeled sections
- Extracts structured fields (contact, experience, education, skills, certifications)
- Builds JobPosting inputs from dicts and markdown job notes

Owns: Resume parsing heuristics and the parse outcome (Parsed | Fallback)
Never: Scores relevance, tailors content, or renders text
"""
