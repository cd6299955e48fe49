"""
Laporan Triwulan Form Logic

Validation, derivation and payload assembly for the quarterly report form.

The form is modelled as an explicit state record (LaporanFormState) moved
through pure transition functions:

    loading -> ineligible                       (terminal)
    loading -> editable -> submitting -> success
                              |
                              +-> failure -> editable (error under 'submit')

All counts arrive as decimal strings, the way an operator types them.
The current count is derived, never entered:

    jumlah_saat_ini = max(0, jumlah_awal + jumlah_lahir - jumlah_mati - jumlah_dijual)

The form never writes to the database. A successful submit leaves the
assembled payload on the state; the caller decides whether to create a new
report or update the one being edited.
"""

import copy
import logging
from datetime import date

from django.utils import timezone

from .eligibility import calculate_prefill_data, format_display_period, last_report_of

logger = logging.getLogger(__name__)


COUNT_FIELDS = ['jumlah_awal', 'jumlah_lahir', 'jumlah_mati', 'jumlah_dijual']
TEXT_FIELDS = ['kendala', 'solusi', 'keterangan']
EDITABLE_FIELDS = COUNT_FIELDS + TEXT_FIELDS + ['tanggal_laporan']

# Error keys that are not attached to a single field
LOGIC_ERROR = 'logika'
SUBMIT_ERROR = 'submit'

REQUIRED_MESSAGES = {
    'jumlah_awal': 'Jumlah awal harus diisi',
    'jumlah_lahir': 'Jumlah lahir harus diisi (minimal 0)',
    'jumlah_mati': 'Jumlah mati harus diisi (minimal 0)',
    'jumlah_dijual': 'Jumlah dijual harus diisi (minimal 0)',
}

INVALID_MESSAGES = {
    'jumlah_awal': 'Jumlah awal harus berupa angka positif',
    'jumlah_lahir': 'Jumlah lahir harus berupa angka positif atau 0',
    'jumlah_mati': 'Jumlah mati harus berupa angka positif atau 0',
    'jumlah_dijual': 'Jumlah dijual harus berupa angka positif atau 0',
}

LOGIC_MESSAGE = 'Total kambing yang mati dan dijual tidak boleh melebihi jumlah awal'
DATE_REQUIRED_MESSAGE = 'Tanggal laporan harus diisi'
DATE_INVALID_MESSAGE = 'Tanggal laporan harus berformat YYYY-MM-DD'
DATE_FUTURE_MESSAGE = 'Tanggal laporan tidak boleh di masa depan'

# (persisted report field, form field); edit mode accepts either name
REPORT_TO_FORM_FIELDS = [
    ('jumlah_ternak_awal', 'jumlah_awal'),
    ('jumlah_lahir', 'jumlah_lahir'),
    ('jumlah_kematian', 'jumlah_mati'),
    ('jumlah_terjual', 'jumlah_dijual'),
    ('jumlah_ternak_saat_ini', 'jumlah_saat_ini'),
    ('kendala', 'kendala'),
    ('solusi', 'solusi'),
    ('catatan', 'keterangan'),
    ('tanggal_laporan', 'tanggal_laporan'),
]


class FormPhase:
    LOADING = 'loading'
    INELIGIBLE = 'ineligible'
    EDITABLE = 'editable'
    SUBMITTING = 'submitting'
    SUCCESS = 'success'


# =============================================================================
# PARSING & DERIVATION
# =============================================================================

def _to_text(value):
    if value is None:
        return ''
    return str(value)


def parse_count(value):
    """Parse a count; None unless it is a plain string of ASCII digits."""
    text = _to_text(value).strip()
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


def count_or_zero(value):
    """Integer value of a count, non-parseable input counts as 0."""
    number = parse_count(value)
    return 0 if number is None else number


def parse_report_date(value):
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(_to_text(value).strip())
    except ValueError:
        return None


def calculate_current_count(awal, lahir, mati, dijual):
    """Livestock balance, floored at 0."""
    return max(0, awal + lahir - mati - dijual)


def derive_current_count(form_data):
    """
    Recompute ``jumlah_saat_ini`` from the four count fields.

    Left untouched while ``jumlah_awal`` is still blank.
    """
    if not _to_text(form_data.get('jumlah_awal')).strip():
        return _to_text(form_data.get('jumlah_saat_ini'))

    current = calculate_current_count(*(count_or_zero(form_data.get(field)) for field in COUNT_FIELDS))
    return str(current)


def empty_form_data(today=None):
    today = today or timezone.localdate()
    form_data = {field: '' for field in EDITABLE_FIELDS}
    form_data['jumlah_saat_ini'] = ''
    form_data['tanggal_laporan'] = today.isoformat()
    return form_data


def form_data_from_report(report, today=None):
    """Load a stored report (mapping) into form fields."""
    form_data = empty_form_data(today)
    for report_field, form_field in REPORT_TO_FORM_FIELDS:
        value = report.get(report_field)
        if value is None:
            value = report.get(form_field)
        if value is not None:
            form_data[form_field] = _to_text(value)
    return form_data


# =============================================================================
# VALIDATION
# =============================================================================

def validate_form(form_data, today=None):
    """
    Validate every rule of the form together.

    Returns:
        dict: field -> message, empty when the form is valid. The combined
        deaths/sales rule is reported under LOGIC_ERROR.
    """
    today = today or timezone.localdate()
    errors = {}

    for field in COUNT_FIELDS:
        value = _to_text(form_data.get(field)).strip()
        if not value:
            errors[field] = REQUIRED_MESSAGES[field]
        elif parse_count(value) is None:
            errors[field] = INVALID_MESSAGES[field]

    awal = count_or_zero(form_data.get('jumlah_awal'))
    mati = count_or_zero(form_data.get('jumlah_mati'))
    dijual = count_or_zero(form_data.get('jumlah_dijual'))
    if mati + dijual > awal:
        errors[LOGIC_ERROR] = LOGIC_MESSAGE

    tanggal = _to_text(form_data.get('tanggal_laporan')).strip()
    if not tanggal:
        errors['tanggal_laporan'] = DATE_REQUIRED_MESSAGE
    else:
        report_date = parse_report_date(tanggal)
        if report_date is None:
            errors['tanggal_laporan'] = DATE_INVALID_MESSAGE
        elif report_date > today:
            errors['tanggal_laporan'] = DATE_FUTURE_MESSAGE

    return errors


# =============================================================================
# PAYLOAD
# =============================================================================

def build_payload(form_data, peternak_id, next_quarter=None, peternak=None,
                  laporan_id=None, today=None):
    """
    Assemble the report payload handed to the report store.

    Args:
        form_data: Validated form fields
        peternak_id: Owning participant
        next_quarter: Eligibility result ({quarter_number, quarter_info, ...})
        peternak: Participant record, source of target_pengembalian
        laporan_id: Id of the report being edited, None when creating
        today: Reference date for the defaults

    Returns:
        dict: Payload with integer counts
    """
    today = today or timezone.localdate()
    next_quarter = next_quarter or {}
    quarter_info = next_quarter.get('quarter_info') or {}
    peternak = peternak or {}

    quarter = next_quarter.get('quarter_number') or quarter_info.get('quarter') or 1
    year = quarter_info.get('year') or today.year

    payload = {
        'peternak_id': str(peternak_id),
        'quarter': quarter,
        'year': year,
        'start_date': quarter_info.get('start_date') or today,
        'end_date': quarter_info.get('end_date') or today,
        'display_period': quarter_info.get('display_period') or format_display_period(quarter, year),
        'jumlah_ternak_awal': count_or_zero(form_data.get('jumlah_awal')),
        'jumlah_ternak_saat_ini': count_or_zero(form_data.get('jumlah_saat_ini')),
        'target_pengembalian': peternak.get('target_pengembalian') or 0,
        'jumlah_kematian': count_or_zero(form_data.get('jumlah_mati')),
        'jumlah_lahir': count_or_zero(form_data.get('jumlah_lahir')),
        'jumlah_terjual': count_or_zero(form_data.get('jumlah_dijual')),
        'catatan': form_data.get('keterangan') or '',
        'kendala': form_data.get('kendala') or '',
        'solusi': form_data.get('solusi') or '',
        'tanggal_laporan': form_data.get('tanggal_laporan'),
    }

    if laporan_id:
        payload = {'id': str(laporan_id), **payload}
    return payload


# =============================================================================
# STATE MACHINE
# =============================================================================

class LaporanFormState:
    """
    Snapshot of the report form.

    Transition functions never mutate a state; they return a new one.

    Attributes:
        phase: One of FormPhase
        form_data: Field name -> string value
        errors: Field name (or LOGIC_ERROR / SUBMIT_ERROR) -> message
        peternak_id: Owning participant
        peternak: Participant record (mapping)
        next_quarter: Eligibility result, or the edited report's quarter
        prefill: Values the form was prefilled with, when creating
        laporan_id: Report being edited, None when creating
        result: Payload of the last successful submit, then the saved record
    """

    def __init__(self, phase, form_data, peternak_id=None, peternak=None,
                 next_quarter=None, prefill=None, laporan_id=None,
                 errors=None, result=None):
        self.phase = phase
        self.form_data = form_data
        self.errors = errors or {}
        self.peternak_id = peternak_id
        self.peternak = peternak
        self.next_quarter = next_quarter
        self.prefill = prefill
        self.laporan_id = laporan_id
        self.result = result

    @property
    def is_editing(self):
        return self.laporan_id is not None

    @property
    def quarter_number(self):
        if not self.next_quarter:
            return None
        return self.next_quarter.get('quarter_number')

    def evolve(self, **changes):
        state = copy.copy(self)
        state.form_data = dict(self.form_data)
        state.errors = dict(self.errors)
        for name, value in changes.items():
            setattr(state, name, value)
        return state

    def __repr__(self):
        return f"<LaporanFormState {self.phase} peternak={self.peternak_id} laporan={self.laporan_id}>"


def loading_state(peternak_id, today=None):
    """Initial state while the quarter info is loaded."""
    return LaporanFormState(FormPhase.LOADING, empty_form_data(today), peternak_id=peternak_id)


def start_create(state, peternak, next_quarter, today=None):
    """
    Leave loading for a new report.

    Goes to INELIGIBLE when the participant is unknown (next_quarter is None)
    or its program cycle is complete; otherwise prefills the counts from the
    previous report and becomes EDITABLE.
    """
    if not next_quarter or not next_quarter.get('can_create'):
        logger.info(f"Peternak {state.peternak_id} cannot create another report")
        return state.evolve(phase=FormPhase.INELIGIBLE, peternak=peternak, next_quarter=next_quarter)

    peternak = peternak or {}
    prefill = calculate_prefill_data(
        last_report_of(next_quarter),
        peternak.get('jumlah_ternak_awal') or 0
    )

    form_data = empty_form_data(today)
    form_data['jumlah_awal'] = str(prefill['jumlah_awal'])
    form_data['jumlah_saat_ini'] = str(prefill['jumlah_awal'])

    return state.evolve(
        phase=FormPhase.EDITABLE,
        form_data=form_data,
        peternak=peternak,
        next_quarter=next_quarter,
        prefill=prefill,
    )


def start_edit(state, report, peternak=None, today=None):
    """Leave loading for an existing report (mapping of a stored report)."""
    next_quarter = {
        'quarter_number': report.get('quarter'),
        'quarter_info': {
            'quarter': report.get('quarter'),
            'year': report.get('year'),
            'start_date': report.get('start_date'),
            'end_date': report.get('end_date'),
            'display_period': report.get('display_period'),
        },
        'can_create': True,
    }
    return state.evolve(
        phase=FormPhase.EDITABLE,
        form_data=form_data_from_report(report, today),
        peternak=peternak,
        next_quarter=next_quarter,
        laporan_id=report.get('id'),
    )


def is_field_locked(state, name):
    """The initial count of a new report is prefilled and read-only."""
    return name == 'jumlah_awal' and state.prefill is not None and not state.is_editing


def change_field(state, name, value):
    """
    Set one editable field.

    Clears that field's error and the combined logic error, and re-derives
    the current count when a count changed. Locked fields and changes outside
    the EDITABLE phase are ignored.
    """
    if state.phase != FormPhase.EDITABLE or name not in EDITABLE_FIELDS:
        return state
    if is_field_locked(state, name):
        return state

    new_state = state.evolve()
    new_state.form_data[name] = _to_text(value)
    new_state.errors.pop(name, None)
    new_state.errors.pop(LOGIC_ERROR, None)

    if name in COUNT_FIELDS:
        new_state.form_data['jumlah_saat_ini'] = derive_current_count(new_state.form_data)
    return new_state


def apply_changes(state, data):
    """change_field for every editable field present in ``data``."""
    for name in EDITABLE_FIELDS:
        if name in data:
            state = change_field(state, name, data[name])
    return state


def submit(state, today=None):
    """
    Validate and assemble the payload.

    A submit while another one is in flight is ignored. With validation
    errors the form stays EDITABLE; otherwise it moves to SUBMITTING with the
    payload in ``result``.
    """
    if state.phase != FormPhase.EDITABLE:
        return state

    errors = validate_form(state.form_data, today=today)
    if errors:
        logger.info(f"Report form for peternak {state.peternak_id} has errors: {', '.join(errors)}")
        return state.evolve(errors=errors)

    payload = build_payload(
        state.form_data,
        state.peternak_id,
        next_quarter=state.next_quarter,
        peternak=state.peternak,
        laporan_id=state.laporan_id,
        today=today,
    )
    return state.evolve(phase=FormPhase.SUBMITTING, errors={}, result=payload)


def submit_succeeded(state, saved):
    if state.phase != FormPhase.SUBMITTING:
        return state
    return state.evolve(phase=FormPhase.SUCCESS, result=saved)


def submit_failed(state, message):
    """Surface a persistence failure and hand the form back for retry."""
    if state.phase != FormPhase.SUBMITTING:
        return state
    return state.evolve(phase=FormPhase.EDITABLE, errors={SUBMIT_ERROR: message}, result=None)
