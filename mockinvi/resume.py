import os
from typing import BinaryIO, Union

from PyPDF2 import PdfReader

from .rubrics import CONTEXT_LIMIT


def read_file(file_path: str) -> str:
    ext = os.path.splitext(file_path)[1].lower()
    if ext == '.pdf':
        return read_pdf(file_path)
    elif ext == '.txt':
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    else:
        raise ValueError("Unsupported file type. Use .txt or .pdf")


def read_pdf(source: Union[str, BinaryIO]) -> str:
    """Extract text from a PDF path or an open binary file."""
    if isinstance(source, str):
        with open(source, 'rb') as f:
            return read_pdf(f)
    reader = PdfReader(source)
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def resume_context(text: str, limit: int = CONTEXT_LIMIT) -> str:
    """Collapse whitespace and cap the resume text used as evaluation context."""
    return " ".join((text or "").split())[:limit]
