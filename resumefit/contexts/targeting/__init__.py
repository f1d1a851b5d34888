"""
Targeting Context

Responsibilities:
- Categorizes jobs and experience entries into fixed job-domain categories
- Scores relevance of each experience entry against a job
- Selects and reorders experience, competencies and certifications for a job
- Rebuilds the summary for the job without inventing content

Owns: Categorization, relevance scoring, tailoring pipeline
Never: Parses raw resume text or renders output
"""
