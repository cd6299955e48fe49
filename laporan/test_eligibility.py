"""
Tests for the next-quarter calculator and the report prefill.
"""
import uuid
from datetime import date
from types import SimpleNamespace

import pytest

from laporan.services.eligibility import (
    calculate_prefill_data,
    compute_next_quarter,
    format_display_period,
    get_next_allowed_quarter,
    last_report_of,
)

TODAY = date(2025, 4, 1)
ENROLLED = date(2025, 1, 15)


def make_reports(count):
    return [
        SimpleNamespace(
            quarter=quarter,
            end_date=date(2025, 1, 1 + quarter),
            jumlah_ternak_saat_ini=quarter,
        )
        for quarter in range(1, count + 1)
    ]


class TestComputeNextQuarter:

    def test_first_quarter(self):
        result = compute_next_quarter(ENROLLED, [], today=TODAY)

        assert result['quarter_number'] == 1
        assert result['can_create'] is True
        assert result['existing_reports'] == []
        assert result['quarter_info'] == {
            'quarter': 1,
            'year': 2025,
            'start_date': ENROLLED,
            'end_date': TODAY,
            'display_period': 'Triwulan 1 2025',
        }

    def test_period_starts_today_without_enrollment_date(self):
        result = compute_next_quarter(None, [], today=TODAY)

        assert result['quarter_info']['start_date'] == TODAY

    def test_period_starts_at_previous_report_end(self):
        reports = make_reports(2)

        result = compute_next_quarter(ENROLLED, reports, today=TODAY)

        assert result['quarter_number'] == 3
        assert result['quarter_info']['start_date'] == reports[-1].end_date

    def test_eighth_quarter_is_still_allowed(self):
        result = compute_next_quarter(ENROLLED, make_reports(7), today=TODAY)

        assert result['quarter_number'] == 8
        assert result['can_create'] is True

    def test_cycle_complete_after_eight_reports(self):
        result = compute_next_quarter(ENROLLED, make_reports(8), today=TODAY)

        assert result['quarter_number'] is None
        assert result['quarter_info'] is None
        assert result['can_create'] is False
        assert len(result['existing_reports']) == 8

    def test_existing_reports_are_ordered_by_quarter(self):
        reports = list(reversed(make_reports(3)))

        result = compute_next_quarter(ENROLLED, reports, today=TODAY)

        assert [report.quarter for report in result['existing_reports']] == [1, 2, 3]


class TestPrefill:

    def test_prefill_from_previous_report(self):
        next_quarter = compute_next_quarter(
            ENROLLED,
            [SimpleNamespace(quarter=1, end_date=TODAY, jumlah_ternak_saat_ini=6)],
            today=TODAY
        )

        prefill = calculate_prefill_data(last_report_of(next_quarter), jumlah_ternak_awal=10)

        assert prefill == {'jumlah_awal': 6, 'jumlah_saat_ini': 6}

    def test_prefill_from_participant_without_reports(self):
        next_quarter = compute_next_quarter(ENROLLED, [], today=TODAY)

        prefill = calculate_prefill_data(last_report_of(next_quarter), jumlah_ternak_awal=10)

        assert prefill == {'jumlah_awal': 10, 'jumlah_saat_ini': 10}

    def test_prefill_defaults_to_zero(self):
        assert calculate_prefill_data(None) == {'jumlah_awal': 0, 'jumlah_saat_ini': 0}


def test_display_period():
    assert format_display_period(3, 2025) == 'Triwulan 3 2025'


@pytest.mark.django_db
class TestGetNextAllowedQuarter:

    def test_unknown_participant(self):
        assert get_next_allowed_quarter(uuid.uuid4(), today=TODAY) is None

    def test_registered_participant(self, peternak):
        result = get_next_allowed_quarter(peternak['id'], today=TODAY)

        assert result['quarter_number'] == 1
        assert result['quarter_info']['start_date'] == ENROLLED
