"""Pytest configuration and fixtures."""

import pytest

from docstyle.models import PageRuns, TextRun


def make_run(text, font="Helvetica", size=11.0, x=72.0, y=700.0, **kwargs):
    """Build a TextRun with an explicit glyph height."""
    return TextRun(text=text, font_name=font, height=size, x=x, y=y, **kwargs)


def make_page(runs, page_number=1, height=792.0):
    return PageRuns(page_number=page_number, height=height, runs=tuple(runs))


@pytest.fixture
def simple_pages():
    """Two pages of mixed body and heading runs."""
    return [
        make_page(
            [
                make_run("Project Proposal", font="ABCDEF+Inter-Bold", size=24.0, x=72.0, y=740.0),
                make_run("We deliver quality, on time.", font="Inter-Regular", size=11.0, x=72.0, y=700.0),
                make_run("Scope: design; build.", font="Inter-Regular", size=11.0, x=90.0, y=680.0),
            ]
        ),
        make_page(
            [
                make_run("• First item", font="Inter-Regular", size=11.0, x=80.0, y=720.0),
                make_run("Summary", font="Inter-Bold", size=16.0, x=72.0, y=760.0),
            ],
            page_number=2,
        ),
    ]


@pytest.fixture
def pdf_dir(tmp_path):
    """Create a temporary directory for sample PDFs."""
    pdf_dir = tmp_path / "pdfs"
    pdf_dir.mkdir()
    return pdf_dir
