"""Tests for resume and JD parsers."""

import pytest

from resume_roast.parsers.jd_parser import load_jd_file, parse_jd
from resume_roast.parsers.resume_parser import clean_resume_text, parse_resume


class TestJDParser:
    def test_parse_jd_cleans_whitespace(self):
        text = "  Hello   World  \n\n\n\nLine 2  "
        result = parse_jd(text)
        assert "   " not in result
        assert "\n\n\n" not in result

    def test_parse_jd_strips_lines(self):
        text = "  line 1  \n  line 2  "
        result = parse_jd(text)
        for line in result.splitlines():
            assert line == line.strip()

    def test_parse_jd_normalizes_line_endings(self):
        result = parse_jd("Role:\r\nPython\u00a0developer")
        assert result == "Role:\nPython developer"

    def test_load_jd_file(self, tmp_path):
        jd_file = tmp_path / "test.txt"
        jd_file.write_text("Backend Engineer\n\nRequirements: Python", encoding="utf-8")
        result = load_jd_file(str(jd_file))
        assert "Backend Engineer" in result
        assert "Python" in result


class TestResumeParser:
    def test_parse_txt_file(self, tmp_path):
        txt_file = tmp_path / "resume.txt"
        txt_file.write_text("Jane Doe\nExperience: ...", encoding="utf-8")
        result = parse_resume(str(txt_file))
        assert "Jane Doe" in result

    def test_parse_md_file(self, tmp_path):
        md_file = tmp_path / "resume.md"
        md_file.write_text("# Jane Doe\n\n• Built APIs", encoding="utf-8")
        result = parse_resume(md_file)
        assert result == "# Jane Doe\n\n- Built APIs"

    def test_unsupported_format(self, tmp_path):
        bad_file = tmp_path / "resume.xyz"
        bad_file.write_text("test")
        with pytest.raises(ValueError, match="Unsupported"):
            parse_resume(str(bad_file))

    def test_file_too_large(self, tmp_path):
        big = tmp_path / "resume.txt"
        big.write_bytes(b"a" * (10 * 1024 * 1024 + 1))
        with pytest.raises(ValueError, match="10MB"):
            parse_resume(big)

    def test_parse_docx_file(self, tmp_path):
        from docx import Document

        doc = Document()
        doc.add_paragraph("Jane Doe")
        doc.add_paragraph("")
        doc.add_paragraph("Backend Engineer at Acme Corp")
        path = tmp_path / "resume.docx"
        doc.save(str(path))

        result = parse_resume(path)
        assert result == "Jane Doe\nBackend Engineer at Acme Corp"

    def test_parse_pdf_file(self, tmp_path):
        import fitz

        path = tmp_path / "resume.pdf"
        with fitz.open() as doc:
            page = doc.new_page()
            page.insert_text((72, 72), "Jane Doe Python Engineer")
            doc.save(str(path))

        assert "Jane Doe Python Engineer" in parse_resume(path)


class TestCleanResumeText:
    def test_removes_emoji_icons(self):
        text = "\U0001f4e7 jane@example.com | \U0001f4de 555-0100"
        result = clean_resume_text(text)
        assert "\U0001f4e7" not in result
        assert "jane@example.com" in result

    def test_normalizes_whitespace(self):
        result = clean_resume_text("Python    Java   \n\n\n\nDocker")
        assert result == "Python Java\n\nDocker"

    def test_normalizes_bullets(self):
        text = "● First\n• Second\n  ▪ Nested"
        result = clean_resume_text(text)
        assert result.splitlines() == ["- First", "- Second", "  - Nested"]

    def test_removes_unicode_artifacts(self):
        text = "\ufeffJane\u200b Doe\u00ad"
        assert clean_resume_text(text) == "Jane Doe"

    def test_preserves_content(self):
        text = "Backend Engineer, Acme Corp (2021 - Present)\n- Cut latency by 40%"
        assert clean_resume_text(text) == text
