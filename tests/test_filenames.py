"""Tests for download filename derivation."""

from __future__ import annotations

from cv_studio.utils.filenames import derive_filename, slugify


class TestSlugify:
    def test_collapses_and_trims(self) -> None:
        assert slugify("  Hello,   World!! ") == "hello-world"
        assert slugify("---") == ""


class TestDeriveFilename:
    def test_title_with_id(self) -> None:
        assert derive_filename("pdf", title="My Resume!!", resource_id=42) == "my-resume-42.pdf"

    def test_fallback_when_everything_blank(self) -> None:
        assert derive_filename("pdf", title="") == "resume.pdf"
        assert derive_filename("png", title="   ", organization="!!!") == "resume.png"

    def test_organization_when_no_title(self) -> None:
        assert derive_filename("docx", organization="Acme Corp.") == "acme-corp.docx"

    def test_free_text_truncated_to_thirty_characters(self) -> None:
        text = "Senior backend engineer for payments and ledgers"
        name = derive_filename("pdf", free_text=text)
        assert name == "senior-backend-engineer-for-pa.pdf"

    def test_custom_fallback(self) -> None:
        filename = derive_filename("pdf", fallback="cover letter", resource_id=7)
        assert filename == "cover-letter-7.pdf"

    def test_extension_normalized(self) -> None:
        assert derive_filename(".PDF", title="cv") == "cv.pdf"
