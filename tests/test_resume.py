import io

import pytest
from PyPDF2 import PdfWriter

from mockinvi.resume import read_file, read_pdf, resume_context


def test_read_txt(tmp_path):
    path = tmp_path / "resume.txt"
    path.write_text("Jane Doe\nPython developer", encoding="utf-8")
    assert read_file(str(path)) == "Jane Doe\nPython developer"


def test_unsupported_extension(tmp_path):
    path = tmp_path / "resume.docx"
    path.write_bytes(b"")
    with pytest.raises(ValueError, match="Unsupported file type"):
        read_file(str(path))


def test_read_blank_pdf():
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buf = io.BytesIO()
    writer.write(buf)
    buf.seek(0)
    assert read_pdf(buf).strip() == ""


def test_resume_context():
    text = "Jane   Doe\n\n" + "x" * 2000
    context = resume_context(text)
    assert context.startswith("Jane Doe x")
    assert len(context) == 1000
    assert resume_context(None) == ""
