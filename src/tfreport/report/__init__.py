"""Environment report files."""

from tfreport.report.loader import load_report, report_from_dict

__all__ = ["load_report", "report_from_dict"]
