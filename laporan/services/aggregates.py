"""
Report Aggregates

Per-participant figures derived from one canonical collection of reports.
Every function is a plain fold over the reports it is given, so counts and
"latest report" views can never disagree with each other.
"""

from collections import defaultdict


def group_reports_by_peternak(reports):
    """Group reports by participant id, each group ordered by quarter."""
    groups = defaultdict(list)
    for report in reports:
        groups[str(report.peternak_id)].append(report)

    for group in groups.values():
        group.sort(key=lambda report: report.quarter)
    return dict(groups)


def count_reports_by_peternak(reports):
    """Number of reports per participant id."""
    counts = defaultdict(int)
    for report in reports:
        counts[str(report.peternak_id)] += 1
    return dict(counts)


def latest_report_by_peternak(reports):
    """Report with the highest quarter per participant id."""
    latest = {}
    for report in reports:
        key = str(report.peternak_id)
        if key not in latest or report.quarter > latest[key].quarter:
            latest[key] = report
    return latest


def summarize_reports(reports):
    """
    Summary per participant.

    Returns:
        dict: peternak_id -> {
            'jumlah_laporan': number of reports,
            'triwulan_terakhir': latest quarter,
            'jumlah_ternak_saat_ini': current count of the latest report,
            'total_lahir', 'total_kematian', 'total_terjual': sums over all reports
        }
    """
    reports = list(reports)
    counts = count_reports_by_peternak(reports)
    latest_reports = latest_report_by_peternak(reports)

    summary = {}
    for peternak_id, group in group_reports_by_peternak(reports).items():
        latest = latest_reports[peternak_id]
        summary[peternak_id] = {
            'jumlah_laporan': counts[peternak_id],
            'triwulan_terakhir': latest.quarter,
            'jumlah_ternak_saat_ini': latest.jumlah_ternak_saat_ini,
            'total_lahir': sum(report.jumlah_lahir for report in group),
            'total_kematian': sum(report.jumlah_kematian for report in group),
            'total_terjual': sum(report.jumlah_terjual for report in group),
        }
    return summary
