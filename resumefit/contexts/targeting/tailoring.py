"""
Tailoring engine.

Tailors a base ResumeDocument for one JobPosting in a fixed pipeline:

1. Extract the job keyword set
2. Score and rank every experience entry; keep the top 4
3. Rewrite kept achievements toward the job's vocabulary (synonym swaps
   only); entries without achievements get placeholder lines that restate
   the role
4. Move competencies that overlap a job keyword to the front (stable
   partition) and cap at 12
5. Prefix the summary with the job title and append at most 3 experience-area
   phrases
6. Select certifications from the parsed, non-fabricated list

Every step builds new values with dataclasses.replace(); the base document is
never mutated, so concurrent tailoring against one base resume shares no
mutable state. Re-tailoring a tailored resume for the same job is close to a
no-op: the summary and competency list never grow past their caps.

TailoringEngine.tailor() never raises. A malformed job or an internal
failure yields the untailored base resume with applied=False and the reason
attached.
"""

import re
from dataclasses import dataclass, replace
from typing import Any, FrozenSet, List, Optional, Sequence, Tuple

from resumefit.contexts.intake.exceptions import InvalidJobPostingError
from resumefit.contexts.intake.experience_parser import fallback_achievement
from resumefit.contexts.intake.job_posting import JobPosting
from resumefit.contexts.targeting.categorizer import DEFAULT_CATEGORY, JobCategorizer
from resumefit.contexts.targeting.job_keywords import extract_job_keywords, sorted_keywords
from resumefit.contexts.targeting.logger import _log_debug, _log_info, _log_warning
from resumefit.contexts.targeting.relevance import RelevanceScorer, ScoredExperience
from resumefit.contexts.templating.resume_data_structure import ExperienceEntry, ResumeDocument
from resumefit.utils.keyword_tables import KeywordTables, default_keyword_tables
from resumefit.utils.text_processing import contains_term

MAX_EXPERIENCE_ENTRIES = 4
MAX_COMPETENCIES = 12
NO_KEYWORDS_ATS_SCORE = 50

SUMMARY_TITLE_SEPARATOR = " | "
SUMMARY_AREAS_LEAD = "Experience includes"

# Certification words too generic to signal relevance on their own
GENERIC_CERTIFICATION_WORDS = {
    "and",
    "the",
    "for",
    "certified",
    "certification",
    "certificate",
    "license",
    "licensed",
    "professional",
    "specialist",
    "level",
    "course",
    "training",
}

OBJECTIVE_TEMPLATES = (
    (
        ("customer service", "customer support"),
        "Dedicated customer service professional seeking a {title} position{at_company} "
        "where I can use my communication skills and commitment to customer satisfaction.",
    ),
    (
        ("data entry", "administrative"),
        "Detail-oriented professional seeking a {title} role{at_company} where I can "
        "contribute my organizational skills and accuracy in data management.",
    ),
    (
        ("retail", "sales"),
        "Enthusiastic retail professional seeking a {title} position{at_company} where I can "
        "contribute to sales goals and provide excellent customer experiences.",
    ),
)
GENERIC_OBJECTIVE = (
    "Motivated professional seeking a {title} position{at_company} where I can "
    "contribute my skills and grow within the organization."
)


@dataclass(frozen=True)
class KeywordMatch:
    """Whether a job keyword appears in the tailored resume, and how often."""

    keyword: str
    matched: bool
    count: int


@dataclass(frozen=True)
class TailoringResult:
    """
    Tailored resume plus the report of how it was tailored.

    Attributes:
        document: Tailored resume (the base resume if tailoring was not applied)
        applied: False when tailoring failed and the base resume was returned
        failure_reason: Why tailoring was not applied
        job: The job tailored for (None if the job input was unusable)
        job_category: Category of the job
        job_keywords: Job keyword set
        ranking: Every experience entry with its transient score, best first
        notes: What was emphasized
        ats_score: Percentage of job keywords present in the tailored resume
        keyword_matches: Per-keyword match report
    """

    document: ResumeDocument
    applied: bool = True
    failure_reason: Optional[str] = None
    job: Optional[JobPosting] = None
    job_category: str = DEFAULT_CATEGORY
    job_keywords: FrozenSet[str] = frozenset()
    ranking: Tuple[ScoredExperience, ...] = ()
    notes: Tuple[str, ...] = ()
    ats_score: int = 0
    keyword_matches: Tuple[KeywordMatch, ...] = ()


# =============================================================================
# PIPELINE STEPS
# =============================================================================


def _match_case(replacement: str, original: str) -> str:
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def rewrite_achievement(
    achievement: str, job_keywords: FrozenSet[str], tables: KeywordTables
) -> str:
    """
    Swap wording toward the job's vocabulary.

    A rewrite applies only when its trigger keyword is in the job keyword set.
    Rewrites replace synonyms; they never add words with new meaning, and a
    rewritten achievement is left unchanged by a second pass.

    Example:
        "Helped clients with returns" -> "Helped customers with returns"
        (when the job asks for "customer service")
    """
    for when, pattern, replacement in tables.vocabulary_rewrites:
        if when.lower() not in job_keywords:
            continue
        achievement = re.sub(
            pattern,
            lambda match: _match_case(replacement, match.group(0)),
            achievement,
            flags=re.IGNORECASE,
        )
    return achievement


def placeholder_achievements(
    entry: ExperienceEntry, category: str, tables: KeywordTables
) -> Tuple[str, ...]:
    """Lines that only restate the role, for entries with no achievements."""
    area = tables.category_areas.get(category) or tables.category_areas.get(DEFAULT_CATEGORY, "")
    lines = [fallback_achievement(entry.title, entry.company, tables)]
    if area:
        lines.append(tables.placeholder_achievement.format(area=area))
    return tuple(lines)


def competency_overlaps(competency: str, job_keywords: FrozenSet[str]) -> bool:
    """
    A competency overlaps the job when it contains a job keyword, or a job
    keyword contains the competency's first word.
    """
    words = competency.lower().split()
    first_word = words[0] if words else ""
    for keyword in job_keywords:
        if contains_term(competency, keyword):
            return True
        if len(first_word) >= 3 and contains_term(keyword, first_word):
            return True
    return False


def reorder_competencies(
    competencies: Sequence[str], job_keywords: FrozenSet[str], limit: int = MAX_COMPETENCIES
) -> Tuple[str, ...]:
    """
    Stable partition: overlapping competencies first, then the rest, capped.

    Relative order inside both groups is preserved.
    """
    relevant = [c for c in competencies if competency_overlaps(c, job_keywords)]
    remaining = [c for c in competencies if not competency_overlaps(c, job_keywords)]
    return tuple((relevant + remaining)[:limit])


def _areas_suffix_pattern(tables: KeywordTables) -> re.Pattern:
    phrases = "|".join(re.escape(phrase) for _, phrase in tables.experience_areas) or r"(?!)"
    return re.compile(
        rf"\s*{SUMMARY_AREAS_LEAD} (?:{phrases})(?:, (?:{phrases}))*\.$", re.IGNORECASE
    )


def experience_area_phrases(
    job_keywords: FrozenSet[str], existing_text: str, tables: KeywordTables
) -> List[str]:
    """
    Experience-area phrases implied by the job keywords.

    At most one phrase per area, never more than max_summary_phrases, and
    never a phrase the text already contains.
    """
    phrases: List[str] = []
    lowered = existing_text.lower()
    for trigger, phrase in tables.experience_areas:
        if len(phrases) >= tables.max_summary_phrases:
            break
        if phrase in phrases or phrase.lower() in lowered:
            continue
        if any(trigger in keyword for keyword in job_keywords):
            phrases.append(phrase)
    return phrases


def rebuild_summary(
    summary: str, job_title: str, job_keywords: FrozenSet[str], tables: KeywordTables
) -> str:
    """
    Prefix the summary with the job title and append experience-area phrases.

    A title prefix or appended phrase sentence left by an earlier tailoring
    for the same job is removed first, so re-tailoring does not grow the
    summary.

    Example:
        "Dedicated professional." + "Data Entry Clerk"
        -> "Data Entry Clerk | Dedicated professional. Experience includes data management and analysis."
    """
    title = " ".join(job_title.split())
    body = summary.strip()

    body = _areas_suffix_pattern(tables).sub("", body).strip()
    prefix = f"{title}{SUMMARY_TITLE_SEPARATOR}"
    if title and body.lower() == title.lower():
        body = ""
    elif title and body.lower().startswith(prefix.lower()):
        body = body[len(prefix) :].strip()

    rebuilt = f"{title}{SUMMARY_TITLE_SEPARATOR}{body}" if body else title
    phrases = experience_area_phrases(job_keywords, body, tables)
    if phrases:
        rebuilt += f" {SUMMARY_AREAS_LEAD} {', '.join(phrases)}."
    return rebuilt


def _significant_words(text: str) -> List[str]:
    words = re.findall(r"[A-Za-z][A-Za-z+#]{2,}", text)
    return [w for w in words if w.lower() not in GENERIC_CERTIFICATION_WORDS]


def select_relevant_certifications(
    certifications: Sequence[str],
    job: JobPosting,
    tables: Optional[KeywordTables] = None,
    job_keywords: Optional[FrozenSet[str]] = None,
) -> Tuple[str, ...]:
    """
    Choose certifications to show for a job.

    Fabricated entries are always dropped. Of the rest, those relevant to the
    job (a job keyword in the certification, or a significant certification
    word in the job text) are kept; if none are relevant, all are kept.
    Certifications are only ever selected, never created.
    """
    tables = tables or default_keyword_tables()
    if job_keywords is None:
        job_keywords = extract_job_keywords(job, tables)

    clean = [cert for cert in certifications if not tables.is_fabricated_certification(cert)]
    job_text = f"{job.title} {job.description}"
    relevant = [
        cert
        for cert in clean
        if any(contains_term(cert, keyword) for keyword in job_keywords)
        or any(contains_term(job_text, word) for word in _significant_words(cert))
    ]
    return tuple(relevant or clean)


def tailor_objective(job: JobPosting, tables: Optional[KeywordTables] = None) -> str:
    """
    One-sentence objective for a job, chosen by the job title.

    Example:
        >>> tailor_objective(JobPosting(title="Retail Associate", company="Fresh Market"))
        'Enthusiastic retail professional seeking a Retail Associate position at Fresh Market where I can contribute to sales goals and provide excellent customer experiences.'
    """
    at_company = f" at {job.company}" if job.company else ""
    for triggers, template in OBJECTIVE_TEMPLATES:
        if any(contains_term(job.title, trigger) for trigger in triggers):
            return template.format(title=job.title, at_company=at_company)
    return GENERIC_OBJECTIVE.format(title=job.title, at_company=at_company)


# =============================================================================
# REPORTING
# =============================================================================


def document_text(document: ResumeDocument) -> str:
    """Every text field of a document as one lowercase string."""
    parts = [
        document.professional_summary,
        *document.core_competencies,
        *document.certifications,
    ]
    for entry in document.experience:
        parts.extend([entry.title, entry.company, entry.location, entry.duration, *entry.achievements])
    for education in document.education:
        parts.extend([education.degree, education.school, education.location, education.year])
    return "\n".join(parts).lower()


def keyword_report(
    document: ResumeDocument, job_keywords: FrozenSet[str]
) -> Tuple[int, Tuple[KeywordMatch, ...]]:
    """
    ATS score and per-keyword matches for a tailored document.

    The score is the percentage of job keywords present in the document,
    or 50 when the job yields no keywords.
    """
    text = document_text(document)
    matches = tuple(
        KeywordMatch(keyword=keyword, matched=text.count(keyword) > 0, count=text.count(keyword))
        for keyword in sorted_keywords(job_keywords)
    )
    if not matches:
        return NO_KEYWORDS_ATS_SCORE, matches
    matched = sum(1 for match in matches if match.matched)
    return round(100 * matched / len(matches)), matches


def tailoring_notes(
    job: JobPosting, job_keywords: FrozenSet[str], kept: int, total: int
) -> Tuple[str, ...]:
    notes = [f"Tailored for {job.title}" + (f" at {job.company}" if job.company else "")]
    job_text = job.combined_text
    if contains_term(job_text, "customer service"):
        notes.append("Emphasized customer service experience and communication skills")
    if contains_term(job_text, "data entry"):
        notes.append("Highlighted data entry accuracy and administrative skills")
    if contains_term(job_text, "retail"):
        notes.append("Focused on retail experience and sales capabilities")
    notes.append(f"Kept the {kept} most relevant of {total} experience entries")
    notes.append("Reordered competencies by job relevance")
    notes.append(f"Matched {len(job_keywords)} job keywords")
    return tuple(notes)


# =============================================================================
# ENGINE
# =============================================================================


class TailoringEngine:
    """
    Orchestrates the tailoring pipeline.

    Usage:
        engine = TailoringEngine()
        result = engine.tailor(resume, job)
        if not result.applied:
            print(result.failure_reason)
    """

    def __init__(
        self,
        tables: Optional[KeywordTables] = None,
        max_entries: int = MAX_EXPERIENCE_ENTRIES,
        max_competencies: int = MAX_COMPETENCIES,
    ):
        self.tables = tables or default_keyword_tables()
        self.categorizer = JobCategorizer(self.tables)
        self.scorer = RelevanceScorer(self.tables, self.categorizer)
        self.max_entries = max_entries
        self.max_competencies = max_competencies

    def tailor(self, resume: ResumeDocument, job: Any) -> TailoringResult:
        """
        Tailor a resume for a job. Never raises.

        Args:
            resume: Base resume (not modified)
            job: JobPosting, or a dict accepted by JobPosting.from_dict()

        Returns:
            TailoringResult; on failure the base resume with applied=False
        """
        posting = job if isinstance(job, JobPosting) else None
        try:
            posting = self._coerce_job(job)
            return self._tailor(resume, posting)
        except Exception as e:
            reason = f"{type(e).__name__}: {e}"
            _log_warning(f"Tailoring failed, using base resume: {reason}")
            return TailoringResult(
                document=resume,
                applied=False,
                failure_reason=reason,
                job=posting,
                notes=("Used base resume due to tailoring error",),
            )

    @staticmethod
    def _coerce_job(job: Any) -> JobPosting:
        if isinstance(job, JobPosting):
            if not job.title.strip():
                raise InvalidJobPostingError("Job posting has no title")
            return job
        if isinstance(job, dict):
            return JobPosting.from_dict(job)
        raise InvalidJobPostingError(f"Expected a JobPosting, got {type(job).__name__}")

    def _tailor(self, resume: ResumeDocument, job: JobPosting) -> TailoringResult:
        job_keywords = extract_job_keywords(job, self.tables)
        job_category = self.categorizer.categorize_job(job)
        _log_debug(f"Job '{job.title}' categorized as {job_category} with {len(job_keywords)} keywords")

        ranking = self.scorer.rank(resume.experience, job, job_keywords)
        kept = ranking[: self.max_entries]
        experience = tuple(self.tailor_entry(scored.entry, job_keywords) for scored in kept)

        tailored = replace(
            resume,
            professional_summary=rebuild_summary(
                resume.professional_summary, job.title, job_keywords, self.tables
            ),
            core_competencies=reorder_competencies(
                resume.core_competencies, job_keywords, self.max_competencies
            ),
            experience=experience,
            certifications=select_relevant_certifications(
                resume.certifications, job, self.tables, job_keywords
            ),
        )

        ats_score, matches = keyword_report(tailored, job_keywords)
        _log_info(
            f"Tailored for '{job.title}': kept {len(kept)}/{len(ranking)} entries, "
            f"ATS score {ats_score}%"
        )
        return TailoringResult(
            document=tailored,
            applied=True,
            job=job,
            job_category=job_category,
            job_keywords=job_keywords,
            ranking=tuple(ranking),
            notes=tailoring_notes(job, job_keywords, len(kept), len(ranking)),
            ats_score=ats_score,
            keyword_matches=matches,
        )

    def tailor_entry(self, entry: ExperienceEntry, job_keywords: FrozenSet[str]) -> ExperienceEntry:
        """Rewrite an entry's achievements toward the job, or add placeholders if it has none."""
        if not entry.achievements:
            category = self.categorizer.categorize_entry(entry)
            return replace(entry, achievements=placeholder_achievements(entry, category, self.tables))
        return replace(
            entry,
            achievements=tuple(
                rewrite_achievement(achievement, job_keywords, self.tables)
                for achievement in entry.achievements
            ),
        )


def tailor_for_job(
    resume: ResumeDocument, job: Any, tables: Optional[KeywordTables] = None
) -> ResumeDocument:
    """
    Tailor a resume for a job and return only the document.

    Deterministic for identical inputs and tables. Returns the base resume
    unchanged if tailoring fails.
    """
    return TailoringEngine(tables).tailor(resume, job).document
