"""
Resume Document Structure

Defines the structured representation of resume content for resumefit.
This structure is the interface between the Intake, Targeting and Templating
contexts.

Intake owns:
- Building ResumeDocument instances from raw resume text

Targeting produces new ResumeDocument instances tailored to a job.

All classes are frozen: tailoring never mutates a document, it builds a new
one with dataclasses.replace(), so concurrent tailoring requests against the
same base resume never share mutable state.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from omegaconf import OmegaConf

from resumefit.contexts.templating.exceptions import InvalidResumeStructureError


@dataclass(frozen=True)
class PersonalInfo:
    """
    Contact details from the top of a resume.

    Every field is optional. Callers merge with defaults rather than assume
    presence.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None

    def merged_with(self, defaults: "PersonalInfo") -> "PersonalInfo":
        """Fill unset fields from defaults."""
        return PersonalInfo(
            **{
                f.name: getattr(self, f.name) or getattr(defaults, f.name)
                for f in fields(PersonalInfo)
            }
        )

    def missing_fields(self) -> Tuple[str, ...]:
        """Names of fields that are unset."""
        return tuple(f.name for f in fields(PersonalInfo) if not getattr(self, f.name))


@dataclass(frozen=True)
class ExperienceEntry:
    """
    Single job held by the candidate.

    Attributes:
        title: Job title (or a company-derived default when none was found)
        company: Employer name
        location: Free-text location, may be empty
        duration: Date text exactly as written (e.g., "2019 -- Present")
        achievements: Bullet or paragraph items, never empty once parsed
    """

    title: str
    company: str
    location: str = ""
    duration: str = ""
    achievements: Tuple[str, ...] = ()

    @property
    def combined_text(self) -> str:
        """Title, company and achievements as one lowercase string for keyword matching."""
        return " ".join([self.title, self.company, *self.achievements]).lower()


@dataclass(frozen=True)
class EducationEntry:
    """Single education record."""

    degree: str = ""
    school: str = ""
    location: str = ""
    year: str = ""


@dataclass(frozen=True)
class ResumeDocument:
    """
    Structured representation of a complete resume.

    Attributes:
        personal_info: Contact details
        professional_summary: Summary paragraph (may be synthesized)
        core_competencies: Ordered skills; order sets ATS display priority
        experience: Entries in source order until tailored, then by relevance
        education: Education records
        certifications: Certifications, never including denylisted entries
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    professional_summary: str = ""
    core_competencies: Tuple[str, ...] = ()
    experience: Tuple[ExperienceEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    certifications: Tuple[str, ...] = ()

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain dicts and lists (suitable for YAML/JSON)."""
        data = asdict(self)
        data["core_competencies"] = list(self.core_competencies)
        data["certifications"] = list(self.certifications)
        data["experience"] = [
            {**entry, "achievements": list(entry["achievements"])} for entry in data["experience"]
        ]
        data["education"] = list(data["education"])
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeDocument":
        """
        Build a ResumeDocument from plain dicts and lists.

        Unknown keys are ignored. Missing keys take empty values.

        Raises:
            InvalidResumeStructureError: If a section has the wrong shape
        """
        if not isinstance(data, dict):
            raise InvalidResumeStructureError(
                f"Resume data must be a mapping, got {type(data).__name__}"
            )

        try:
            personal = data.get("personal_info") or {}
            experience = tuple(
                ExperienceEntry(
                    title=str(entry.get("title") or ""),
                    company=str(entry.get("company") or ""),
                    location=str(entry.get("location") or ""),
                    duration=str(entry.get("duration") or ""),
                    achievements=tuple(str(item) for item in entry.get("achievements") or []),
                )
                for entry in data.get("experience") or []
            )
            education = tuple(
                EducationEntry(
                    degree=str(entry.get("degree") or ""),
                    school=str(entry.get("school") or ""),
                    location=str(entry.get("location") or ""),
                    year=str(entry.get("year") or ""),
                )
                for entry in data.get("education") or []
            )
            return cls(
                personal_info=PersonalInfo(
                    **{f.name: personal.get(f.name) for f in fields(PersonalInfo)}
                ),
                professional_summary=str(data.get("professional_summary") or ""),
                core_competencies=tuple(str(item) for item in data.get("core_competencies") or []),
                experience=experience,
                education=education,
                certifications=tuple(str(item) for item in data.get("certifications") or []),
            )
        except (AttributeError, TypeError) as e:
            raise InvalidResumeStructureError(f"Invalid resume structure: {e}") from e

    # =========================================================================
    # CACHED PARSES
    # =========================================================================

    def to_yaml(self, yaml_path: Path) -> Path:
        """
        Save the document as YAML so a base resume only has to be parsed once.

        Returns:
            Path the YAML was written to
        """
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)
        OmegaConf.save(OmegaConf.create({"resume": self.to_dict()}), yaml_path)
        return yaml_path

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "ResumeDocument":
        """
        Load a document previously saved with to_yaml().

        Raises:
            FileNotFoundError: If yaml_path does not exist
            InvalidResumeStructureError: If the YAML lacks a 'resume' key
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"YAML file not found: {yaml_path}")

        yaml_dict = OmegaConf.to_container(OmegaConf.load(yaml_path), resolve=True)
        if not isinstance(yaml_dict, dict) or "resume" not in yaml_dict:
            raise InvalidResumeStructureError(
                f"Invalid YAML structure: missing 'resume' key in {yaml_path}"
            )
        return cls.from_dict(yaml_dict["resume"])

    # =========================================================================
    # DEFAULTS
    # =========================================================================

    def missing_fields(self) -> Tuple[str, ...]:
        """Top-level fields that are empty (certifications are allowed to be empty)."""
        missing = []
        if not self.professional_summary:
            missing.append("professional_summary")
        if not self.core_competencies:
            missing.append("core_competencies")
        if not self.experience:
            missing.append("experience")
        if not self.education:
            missing.append("education")
        return tuple(missing)

    def backfilled_from(self, defaults: "ResumeDocument") -> "ResumeDocument":
        """
        Fill every empty field from a default template.

        Certifications are never backfilled: a resume without certifications
        keeps none.
        """
        return replace(
            self,
            personal_info=self.personal_info.merged_with(defaults.personal_info),
            professional_summary=self.professional_summary or defaults.professional_summary,
            core_competencies=self.core_competencies or defaults.core_competencies,
            experience=self.experience or defaults.experience,
            education=self.education or defaults.education,
        )
