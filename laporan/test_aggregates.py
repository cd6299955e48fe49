"""
Tests for per-participant report aggregates.
"""
from types import SimpleNamespace

from laporan.services.aggregates import (
    count_reports_by_peternak,
    group_reports_by_peternak,
    latest_report_by_peternak,
    summarize_reports,
)


def report(peternak_id, quarter, saat_ini=0, lahir=0, mati=0, dijual=0):
    return SimpleNamespace(
        peternak_id=peternak_id,
        quarter=quarter,
        jumlah_ternak_saat_ini=saat_ini,
        jumlah_lahir=lahir,
        jumlah_kematian=mati,
        jumlah_terjual=dijual,
    )


REPORTS = [
    report('a', 2, saat_ini=9, lahir=3, mati=1, dijual=1),
    report('b', 1, saat_ini=5, lahir=0, mati=0, dijual=0),
    report('a', 1, saat_ini=8, lahir=2, mati=1, dijual=3),
]


def test_group_reports_by_peternak():
    groups = group_reports_by_peternak(REPORTS)

    assert set(groups) == {'a', 'b'}
    assert [r.quarter for r in groups['a']] == [1, 2]


def test_count_reports_by_peternak():
    assert count_reports_by_peternak(REPORTS) == {'a': 2, 'b': 1}


def test_latest_report_by_peternak():
    latest = latest_report_by_peternak(REPORTS)

    assert latest['a'].quarter == 2
    assert latest['b'].quarter == 1


def test_summarize_reports():
    summary = summarize_reports(REPORTS)

    assert summary['a'] == {
        'jumlah_laporan': 2,
        'triwulan_terakhir': 2,
        'jumlah_ternak_saat_ini': 9,
        'total_lahir': 5,
        'total_kematian': 2,
        'total_terjual': 4,
    }
    assert summary['b']['jumlah_laporan'] == 1


def test_summary_counts_match_latest_reports():
    summary = summarize_reports(iter(REPORTS))
    latest = latest_report_by_peternak(REPORTS)

    for peternak_id, values in summary.items():
        assert values['triwulan_terakhir'] == latest[peternak_id].quarter


def test_empty_collection():
    assert summarize_reports([]) == {}
