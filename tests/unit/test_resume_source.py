"""Unit tests for resume source loading and cached parses."""

import pytest

from resumefit.contexts.intake.exceptions import (
    ResumeExtractionError,
    ResumeNotFoundError,
    ResumeSourceError,
)
from resumefit.contexts.intake.resume_source import load_base_resume, load_resume_text
from resumefit.contexts.templating.resume_data_structure import ResumeDocument


@pytest.mark.unit
class TestLoadResumeText:
    """Tests for load_resume_text error reporting."""

    def test_text_file(self, tmp_path, sample_resume_text):
        path = tmp_path / "resume.txt"
        path.write_text(sample_resume_text, encoding="utf-8")

        assert load_resume_text(path) == sample_resume_text

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResumeNotFoundError) as exc_info:
            load_resume_text(tmp_path / "missing.txt")
        assert exc_info.value.path == tmp_path / "missing.txt"

    def test_unsupported_type(self, tmp_path):
        path = tmp_path / "resume.docx"
        path.write_bytes(b"PK\x03\x04")

        with pytest.raises(ResumeExtractionError, match="Unsupported"):
            load_resume_text(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "resume.txt"
        path.write_text("  \n", encoding="utf-8")

        with pytest.raises(ResumeExtractionError, match="No text"):
            load_resume_text(path)

    def test_unreadable_pdf(self, tmp_path):
        path = tmp_path / "resume.pdf"
        path.write_bytes(b"this is not a pdf")

        with pytest.raises(ResumeExtractionError):
            load_resume_text(path)

    def test_errors_share_base_class(self):
        assert issubclass(ResumeNotFoundError, ResumeSourceError)
        assert issubclass(ResumeExtractionError, ResumeSourceError)


@pytest.mark.unit
class TestLoadBaseResume:
    """Tests for parse-once caching."""

    def test_cache_written_and_reused(self, tmp_path, sample_resume_text):
        source = tmp_path / "resume.txt"
        source.write_text(sample_resume_text, encoding="utf-8")
        cache = tmp_path / "base_resume.yaml"

        first = load_base_resume(source, cache_path=cache)
        assert cache.exists()

        # A changed source is ignored while the cache exists
        source.write_text("Someone Else\nsomeone@example.com", encoding="utf-8")
        second = load_base_resume(source, cache_path=cache)

        assert second == first
        assert second.personal_info.name == "Jane Doe"

    def test_yaml_source(self, tmp_path, sample_resume_text):
        source = tmp_path / "resume.txt"
        source.write_text(sample_resume_text, encoding="utf-8")
        document = load_base_resume(source)
        cached = document.to_yaml(tmp_path / "cached.yaml")

        assert load_base_resume(cached) == document

    def test_missing_yaml_source(self, tmp_path):
        with pytest.raises(ResumeNotFoundError):
            load_base_resume(tmp_path / "cached.yaml")

    def test_returns_document(self, tmp_path):
        source = tmp_path / "resume.md"
        source.write_text("Jane Doe\njane@example.com", encoding="utf-8")

        assert isinstance(load_base_resume(source), ResumeDocument)
