"""Tests for report assembly and pagination."""

from __future__ import annotations

from datetime import date

import pytest

from pulseguard.domains.health.domain_logic.models import SaltIntake, StressLevel
from pulseguard.domains.health.domain_logic.report import (
    DISCLAIMER,
    REPORT_TITLE,
    HealthReport,
    ReportSection,
    build_report,
    render_report_pages,
)

REPORT_DATE = date(2026, 10, 19)
SECTION_TITLES = ["PATIENT DATA", "BLOOD PRESSURE ANALYSIS", "HEALTH METRICS", "RECOMMENDATIONS"]


class TestBuildReport:
    def test_sections(self, healthy_record, zero_rng):
        report = build_report(healthy_record, REPORT_DATE, rng=zero_rng)
        assert report.title == REPORT_TITLE
        assert report.generated_on == REPORT_DATE
        assert [s.title for s in report.sections] == SECTION_TITLES

    def test_patient_lines(self, healthy_record, zero_rng):
        patient = build_report(healthy_record, REPORT_DATE, rng=zero_rng).sections[0]
        assert patient.lines == [
            "Age: 30 | Gender: Male | Height: 175cm | Weight: 70kg",
            "BMI: 22 (Normal) | Heart Rate: 68 bpm",
        ]

    def test_blood_pressure_lines(self, healthy_record, zero_rng):
        bp = build_report(healthy_record, REPORT_DATE, rng=zero_rng).sections[1]
        assert bp.lines == [
            "BP: 110/70 mmHg - Normal",
            "Risk Score: 0/100 | Stability: 100% | Readiness: 100%",
            "Patterns: No concerning patterns detected",
        ]

    def test_metrics_lines(self, healthy_record, zero_rng):
        metrics = build_report(healthy_record, REPORT_DATE, rng=zero_rng).sections[2]
        assert metrics.lines[0] == "Body Fat: 17.1% | Ideal Weight: 70.5kg"
        assert metrics.lines[2] == "Daily Water: 2.3L | Sodium Limit: 2300mg"
        assert metrics.lines[5] == "Physical Activity: Yes | Family History: No"
        assert metrics.lines[-1] == "Blood Group (offspring): AB, A, B, O"

    def test_recommendations_follow_insights(self, make_record, zero_rng):
        record = make_record(stress_level=StressLevel.HIGH, salt_intake=SaltIntake.HIGH)
        recs = build_report(record, REPORT_DATE, rng=zero_rng).sections[3]
        assert recs.lines == [
            "Stress: Practice relaxation techniques like meditation or deep breathing.",
            "Diet: Reduce sodium intake to less than 2,300mg per day.",
            "Hydration: Drink at least 2.3L of water daily.",
        ]


class TestRenderPages:
    def test_fits_on_one_page(self, healthy_record, zero_rng):
        pages = render_report_pages(build_report(healthy_record, REPORT_DATE, rng=zero_rng))
        assert len(pages) == 1
        lines = pages[0].split("\n")
        assert lines[0] == REPORT_TITLE
        assert lines[1] == "Generated: 2026-10-19"
        assert lines[-1] == DISCLAIMER
        for title in SECTION_TITLES:
            assert title in lines

    def test_small_pages_respect_height(self, healthy_record, zero_rng):
        report = build_report(healthy_record, REPORT_DATE, rng=zero_rng)
        for height in (2, 3, 5, 8):
            pages = render_report_pages(report, lines_per_page=height)
            assert len(pages) > 1
            for page in pages:
                lines = page.split("\n")
                assert 1 <= len(lines) <= height
                assert lines[0] != ""

    def test_section_title_never_ends_a_page(self, healthy_record, zero_rng):
        report = build_report(healthy_record, REPORT_DATE, rng=zero_rng)
        for height in range(2, 12):
            pages = render_report_pages(report, lines_per_page=height)
            for page in pages[:-1]:
                assert page.split("\n")[-1] not in SECTION_TITLES

    def test_no_content_lost(self, healthy_record, zero_rng):
        report = build_report(healthy_record, REPORT_DATE, rng=zero_rng)
        single = [line for line in render_report_pages(report, 200)[0].split("\n") if line]
        paged = [
            line
            for page in render_report_pages(report, lines_per_page=4)
            for line in page.split("\n")
            if line
        ]
        assert paged == single

    def test_rejects_tiny_pages(self, healthy_record, zero_rng):
        report = build_report(healthy_record, REPORT_DATE, rng=zero_rng)
        with pytest.raises(ValueError, match="at least 2"):
            render_report_pages(report, lines_per_page=1)

    def test_empty_section(self):
        report = HealthReport("Title", REPORT_DATE, [ReportSection("EMPTY")])
        assert render_report_pages(report) == [
            "Title\nGenerated: 2026-10-19\n\nEMPTY\n\n" + DISCLAIMER
        ]
