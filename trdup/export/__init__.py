"""Output formatters (JSON, text)."""

from trdup.export.json_out import export_json, group_to_dict, result_to_dict
from trdup.export.text_report import text_report
