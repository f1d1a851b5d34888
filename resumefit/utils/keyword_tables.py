"""
Versioned keyword tables.

A single YAML file holds every keyword list the parser and the targeting
context consult (categories, transferable skills, denylists, ...). Loading it
into a frozen KeywordTables instance and passing that instance around keeps
behavior differences explicit configuration instead of divergent code paths.

Usage:
    from resumefit.utils.keyword_tables import default_keyword_tables, load_keyword_tables

    tables = default_keyword_tables()
    custom = load_keyword_tables(Path("my_tables.yaml"))
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

PACKAGED_TABLES_PATH = Path(__file__).resolve().parent.parent / "config" / "keyword_tables.yaml"

REQUIRED_KEYS = (
    "version",
    "categories",
    "related_groups",
    "title_keywords",
    "transferable_skills",
    "industry_buckets",
    "keyword_bank",
    "common_keywords",
)


def _as_tuple(values) -> Tuple[str, ...]:
    return tuple(str(value) for value in (values or []))


def _as_groups(mapping) -> Dict[str, Tuple[str, ...]]:
    return {str(name): _as_tuple(values) for name, values in (mapping or {}).items()}


@dataclass(frozen=True)
class KeywordTables:
    """
    Immutable keyword configuration shared by parser and scorer.

    Mapping attributes preserve the YAML order, which matters for
    `categories` (priority order) and `experience_areas` (append order).
    """

    version: int
    categories: Dict[str, Tuple[str, ...]]
    related_groups: Dict[str, Tuple[str, ...]]
    title_keywords: Tuple[str, ...]
    transferable_skills: Dict[str, Tuple[str, ...]]
    industry_buckets: Dict[str, Tuple[str, ...]]
    keyword_bank: Dict[str, Tuple[str, ...]]
    common_keywords: Tuple[str, ...]
    experience_areas: Tuple[Tuple[str, str], ...] = ()
    max_summary_phrases: int = 3
    vocabulary_rewrites: Tuple[Tuple[str, str, str], ...] = ()
    default_titles: Tuple[Tuple[str, str], ...] = ()
    generic_title: str = "Professional"
    fallback_achievement: str = "Served as {title} at {company}."
    fallback_achievement_no_company: str = "Served as {title}."
    placeholder_achievement: str = "Role focused on {area}."
    category_areas: Dict[str, str] = field(default_factory=dict)
    skill_keywords: Tuple[str, ...] = ()
    skill_phrases: Dict[str, str] = field(default_factory=dict)
    max_fallback_skills: int = 25
    education_keywords: Tuple[str, ...] = ()
    degree_keywords: Tuple[str, ...] = ()
    school_keywords: Tuple[str, ...] = ()
    professional_certification_phrases: Tuple[str, ...] = ()
    certificate_markers: Tuple[str, ...] = ()
    membership_markers: Tuple[str, ...] = ()
    fabricated_certifications: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "KeywordTables":
        """
        Build tables from a plain dict (as produced by OmegaConf.to_container).

        Raises:
            ValueError: If a required table is missing
        """
        missing = [key for key in REQUIRED_KEYS if key not in data]
        if missing:
            raise ValueError(f"Keyword tables missing required keys: {', '.join(missing)}")

        return cls(
            version=int(data["version"]),
            categories=_as_groups(data["categories"]),
            related_groups=_as_groups(data["related_groups"]),
            title_keywords=_as_tuple(data["title_keywords"]),
            transferable_skills=_as_groups(data["transferable_skills"]),
            industry_buckets=_as_groups(data["industry_buckets"]),
            keyword_bank=_as_groups(data["keyword_bank"]),
            common_keywords=_as_tuple(data["common_keywords"]),
            experience_areas=tuple(
                (str(item["trigger"]), str(item["phrase"]))
                for item in data.get("experience_areas", [])
            ),
            max_summary_phrases=int(data.get("max_summary_phrases", 3)),
            vocabulary_rewrites=tuple(
                (str(item["when"]), str(item["pattern"]), str(item["replacement"]))
                for item in data.get("vocabulary_rewrites", [])
            ),
            default_titles=tuple(
                (str(item["keyword"]), str(item["title"])) for item in data.get("default_titles", [])
            ),
            generic_title=str(data.get("generic_title", "Professional")),
            fallback_achievement=str(
                data.get("fallback_achievement", "Served as {title} at {company}.")
            ),
            fallback_achievement_no_company=str(
                data.get("fallback_achievement_no_company", "Served as {title}.")
            ),
            placeholder_achievement=str(
                data.get("placeholder_achievement", "Role focused on {area}.")
            ),
            category_areas={
                str(key): str(value) for key, value in (data.get("category_areas") or {}).items()
            },
            skill_keywords=_as_tuple(data.get("skill_keywords")),
            skill_phrases={
                str(key): str(value) for key, value in (data.get("skill_phrases") or {}).items()
            },
            max_fallback_skills=int(data.get("max_fallback_skills", 25)),
            education_keywords=_as_tuple(data.get("education_keywords")),
            degree_keywords=_as_tuple(data.get("degree_keywords")),
            school_keywords=_as_tuple(data.get("school_keywords")),
            professional_certification_phrases=_as_tuple(
                data.get("professional_certification_phrases")
            ),
            certificate_markers=_as_tuple(data.get("certificate_markers")),
            membership_markers=_as_tuple(data.get("membership_markers")),
            fabricated_certifications=_as_tuple(data.get("fabricated_certifications")),
        )

    @property
    def category_names(self) -> List[str]:
        """Category labels in priority order."""
        return list(self.categories)

    def all_bank_keywords(self) -> List[str]:
        """Every keyword-bank entry, in table order, without duplicates."""
        seen = []
        for keywords in self.keyword_bank.values():
            for keyword in keywords:
                if keyword not in seen:
                    seen.append(keyword)
        return seen

    def is_fabricated_certification(self, text: str) -> bool:
        """Check text against the fabricated-certification denylist (case-insensitive)."""
        normalized = " ".join(text.lower().split())
        for denied in self.fabricated_certifications:
            denied_normalized = " ".join(denied.lower().split())
            if denied_normalized and denied_normalized in normalized:
                return True
        return False


def load_keyword_tables(path: Optional[Path] = None) -> KeywordTables:
    """
    Load keyword tables from YAML.

    Args:
        path: YAML file to load. Defaults to RESUMEFIT_KEYWORD_TABLES from the
              environment, then to the packaged table.

    Returns:
        KeywordTables instance

    Raises:
        FileNotFoundError: If the YAML file doesn't exist
        ValueError: If a required table is missing
    """
    if path is None:
        env_path = os.getenv("RESUMEFIT_KEYWORD_TABLES")
        path = Path(env_path) if env_path else PACKAGED_TABLES_PATH

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Keyword tables not found at {path}")

    config = OmegaConf.load(path)
    return KeywordTables.from_dict(OmegaConf.to_container(config, resolve=True))


@lru_cache(maxsize=1)
def default_keyword_tables() -> KeywordTables:
    """Load (once) the tables used when no explicit tables are passed."""
    return load_keyword_tables()
