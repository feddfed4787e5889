"""Resume text extraction."""

from pathlib import Path
from typing import BinaryIO, Callable, Dict, Union

from docx import Document
from pypdf import PdfReader

from .errors import ResumeParseError, ResumeReadError
from .logging_config import get_logger

logger = get_logger("resume")


def _read_pdf(handle: BinaryIO) -> str:
    reader = PdfReader(handle)
    parts = []
    for page in reader.pages:
        text = page.extract_text()
        if text:
            parts.append(text)
    return "\n\n".join(parts)


def _read_docx(handle: BinaryIO) -> str:
    doc = Document(handle)
    lines = [p.text for p in doc.paragraphs if p.text.strip()]

    # Resumes are often laid out in tables
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                for para in cell.paragraphs:
                    cell_text = para.text.strip()
                    if cell_text:
                        lines.append(cell_text)

    return "\n".join(lines)


def _read_text(handle: BinaryIO) -> str:
    return handle.read().decode("utf-8")


READERS: Dict[str, Callable[[BinaryIO], str]] = {
    ".pdf": _read_pdf,
    ".docx": _read_docx,
    ".txt": _read_text,
    ".md": _read_text,
}


class ResumeExtractor:
    """Extract plain text from the candidate's resume.

    The document is re-read on every call and the file handle is scoped to
    that call, so one extractor can be shared between concurrent requests.
    """

    def __init__(self, path: Union[str, Path]):
        """Initialize the extractor.

        Args:
            path: Location of the resume (.pdf, .docx, .txt or .md)
        """
        self.path = Path(path)

    def extract(self) -> str:
        """Read the resume and return its text.

        Returns:
            Extracted resume text

        Raises:
            ResumeReadError: If the file cannot be opened
            ResumeParseError: If the contents cannot be turned into text
        """
        try:
            handle = self.path.open("rb")
        except OSError as e:
            raise ResumeReadError(f"Could not open resume at {self.path}: {e}") from e

        with handle:
            reader = READERS.get(self.path.suffix.lower())
            if reader is None:
                raise ResumeParseError(f"Unsupported resume format: {self.path.suffix or '<none>'}")

            try:
                text = reader(handle)
            except Exception as e:
                raise ResumeParseError(f"Could not parse resume at {self.path}: {e}") from e

        text = text.strip()
        if not text:
            raise ResumeParseError(f"Resume at {self.path} contains no extractable text")

        logger.debug("Extracted %d characters from %s", len(text), self.path.name)
        return text
