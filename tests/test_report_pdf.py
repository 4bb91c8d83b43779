import os
import tempfile
from datetime import datetime

from beam_calc.engine.pipeline import analyze, moment_profile
from beam_calc.sections.section_model import SectionModel
from beam_calc.services.report_pdf import ReportHeader, build_report_pdf, export_report_pdf
from beam_calc.view.renderer_vm import render_diagrams_png


def test_export_report_pdf_creates_file():
    section = SectionModel()
    res = analyze(5.0, 10.0, "simply_supported", section=section)
    prof = moment_profile(res.spec, 21)

    with tempfile.TemporaryDirectory() as td:
        out = os.path.join(td, "beam_report.pdf")
        header = ReportHeader(titulo="Test Memoria", fecha=datetime(2000, 1, 1))

        export_report_pdf(out, res, prof, section=section, header=header)
        assert os.path.exists(out)
        assert os.path.getsize(out) > 0


def test_build_report_pdf_returns_pdf_bytes_for_cantilever():
    section = SectionModel()
    res = analyze(3.0, 2500.0, "cantilever", section=section)
    data = build_report_pdf(res, moment_profile(res.spec, 11), section=section)

    assert data.startswith(b"%PDF")


def test_render_diagrams_png_with_and_without_section():
    res = analyze(4.0, 100.0, "cantilever", section=SectionModel())
    prof = moment_profile(res.spec, 31)

    with tempfile.TemporaryDirectory() as td:
        p1 = render_diagrams_png(prof, os.path.join(td, "vm.png"))
        p2 = render_diagrams_png(prof, os.path.join(td, "vmv.png"), section=SectionModel())
        for p in (p1, p2):
            with open(p, "rb") as f:
                assert f.read(8) == b"\x89PNG\r\n\x1a\n"


def test_render_handles_zero_load():
    res = analyze(2.0, 0.0, "simply_supported", section=SectionModel())
    with tempfile.TemporaryDirectory() as td:
        path = render_diagrams_png(moment_profile(res.spec, 5), os.path.join(td, "zero.png"), section=SectionModel())
        assert os.path.getsize(path) > 0
