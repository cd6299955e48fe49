"""
Report Eligibility Calculator

Determines which quarter (triwulan) a participant may report next and the
values a new report starts from.

Rules:
- next quarter = number of existing reports + 1
- a program cycle has at most MAX_QUARTER (8) quarters; once they are all
  reported no new report can be created
- the nominal period of the new quarter runs from the enrollment date (or the
  end of the previous report's period) to today; the real window is treated
  as pass-through metadata
- a new report starts from the previous report's current count, or from the
  participant's initial count when there is no previous report
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone

from laporan.models import LaporanTriwulan, MAX_QUARTER
from peternak.models import Peternak

logger = logging.getLogger(__name__)


def format_display_period(quarter, year):
    """Display label of a quarter, e.g. 'Triwulan 3 2025'."""
    return f"Triwulan {quarter} {year}"


def build_quarter_info(quarter, year, start_date, end_date):
    return {
        'quarter': quarter,
        'year': year,
        'start_date': start_date,
        'end_date': end_date,
        'display_period': format_display_period(quarter, year),
    }


def compute_next_quarter(enrollment_date, existing_reports, today=None):
    """
    Compute the next allowed quarter from an enrollment date and reports.

    Args:
        enrollment_date: Participant's enrollment date (may be None)
        existing_reports: Reports of the participant (objects with
            ``quarter``, ``end_date`` and ``jumlah_ternak_saat_ini``)
        today: Reference date, defaults to the local date

    Returns:
        dict with:
            - quarter_number: Next quarter, or None when the cycle is complete
            - quarter_info: Period metadata of that quarter, or None
            - can_create: Whether a new report may be created
            - existing_reports: The reports ordered by quarter
    """
    today = today or timezone.localdate()
    existing_reports = sorted(existing_reports, key=lambda report: report.quarter)
    quarter_number = len(existing_reports) + 1

    if quarter_number > MAX_QUARTER:
        return {
            'quarter_number': None,
            'quarter_info': None,
            'can_create': False,
            'existing_reports': existing_reports,
        }

    start_date = enrollment_date or today
    if existing_reports and existing_reports[-1].end_date:
        start_date = existing_reports[-1].end_date

    return {
        'quarter_number': quarter_number,
        'quarter_info': build_quarter_info(quarter_number, today.year, start_date, today),
        'can_create': True,
        'existing_reports': existing_reports,
    }


def get_next_allowed_quarter(peternak_id, today=None):
    """
    Next allowed quarter of a stored participant.

    Returns:
        dict as compute_next_quarter, or None if the participant does not exist
    """
    try:
        peternak = Peternak.objects.get(id=peternak_id)
    except (Peternak.DoesNotExist, DjangoValidationError):
        logger.warning(f"Next quarter requested for unknown peternak {peternak_id}")
        return None

    reports = LaporanTriwulan.objects.filter(peternak=peternak).order_by('quarter')
    return compute_next_quarter(peternak.tanggal_daftar, reports, today=today)


def last_report_of(next_quarter):
    """Latest existing report from a get_next_allowed_quarter result."""
    if not next_quarter or not next_quarter['existing_reports']:
        return None
    return next_quarter['existing_reports'][-1]


def calculate_prefill_data(last_report, jumlah_ternak_awal=0):
    """
    Starting values of a new report.

    Args:
        last_report: Previous report of the participant, or None
        jumlah_ternak_awal: Participant's initial count, used without a
            previous report

    Returns:
        dict: {'jumlah_awal': int, 'jumlah_saat_ini': int}
    """
    if last_report is not None:
        jumlah_awal = last_report.jumlah_ternak_saat_ini or 0
    else:
        jumlah_awal = jumlah_ternak_awal or 0

    # Not yet adjusted by births, deaths or sales of the new period
    return {
        'jumlah_awal': jumlah_awal,
        'jumlah_saat_ini': jumlah_awal,
    }
