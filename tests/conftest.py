"""Shared fixtures for pipeline tests."""

from types import SimpleNamespace

import pytest
from pypdf import PdfWriter
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

RESUME_LINE = "5 years Node.js, led API migration"


class FakeOpenAI:
    """Minimal fake OpenAI client exposing ``responses.create``."""

    class _Responses:
        def __init__(self, output_text, error):
            self.output_text = output_text
            self.error = error
            self.calls = []

        def create(self, **kwargs):
            self.calls.append(kwargs)
            if self.error is not None:
                raise self.error
            return SimpleNamespace(output_text=self.output_text)

    def __init__(self, output_text="Dear Hiring Manager,\n\nHello.\n\nAll the Best,\nTest User", error=None):
        self.responses = self._Responses(output_text, error)

    @property
    def calls(self):
        return self.responses.calls


@pytest.fixture
def resume_pdf(tmp_path):
    """Create a one-page PDF resume containing RESUME_LINE."""
    path = tmp_path / "resume.pdf"
    pdf = canvas.Canvas(str(path), pagesize=letter)
    pdf.drawString(72, 720, RESUME_LINE)
    pdf.save()
    return path


@pytest.fixture
def blank_pdf(tmp_path):
    """Create a PDF with a single empty page."""
    path = tmp_path / "blank.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    with open(path, "wb") as f:
        writer.write(f)
    return path


@pytest.fixture
def fake_client():
    return FakeOpenAI()
