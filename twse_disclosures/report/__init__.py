"""
Report assembly and persistence.
"""

from twse_disclosures.report.assembler import assemble_document, render_fragment
from twse_disclosures.report.writer import report_filename, save_report

__all__ = [
    "render_fragment",
    "assemble_document",
    "report_filename",
    "save_report",
]
