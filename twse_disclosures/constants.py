"""
Constants for the TWSE MOPS disclosure report.

Endpoints, fixed query templates, and report markers live here so the
sources, parsers, and assembler agree on them.
"""

# MOPS endpoints
LISTING_URL = "https://mops.twse.com.tw/mops/web/ezsearch_query"
DETAIL_BASE_URL = "https://mops.twse.com.tw/mops/web/ajax_t05st01"

# Request defaults (seconds)
LISTING_TIMEOUT = 30
DETAIL_TIMEOUT = 15
DEFAULT_MAX_WORKERS = 8

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=UTF-8"

# Bulk listing query. SDATE/EDATE are filled in per run.
LISTING_DEFAULT_PARAMS = {
    "RADIO_CM": 1,
    "step": "00",
    "TYPEK": "sii",
    "CO_MARKET": 17,
    "CO_ID": "",
    "PRO_ITEM": "",
    "SUBJECT": "自結",
    "SDATE": "",
    "EDATE": "",
    "lang": "TW",
    "AN": "",
}

# Detail page query. Parameters from the record's hyperlink override these.
DETAIL_DEFAULT_PARAMS = {
    "encodeURIComponent": "1",
    "firstin": "true",
    "b_date": "",
    "e_date": "",
    "TYPEK": "sii",
    "type": "",
    "MEETING_STEP": "",
    "MODEL": "",
    "ITEM": "",
    "e_month": "all",
    "step": "2",
    "off": "1",
}

# Canonical record keys (after field normalization)
COMPANY_ID_KEY = "companyId"
HYPERLINK_KEY = "hyperlink"

# Detail page structural marker
DETAIL_TABLE_SELECTOR = "table.hasBorder"

# Report rendering
NO_DATA_MARKER = "無資料"
FRAGMENT_SEPARATOR = "<br/><br/><br/>"
REPORT_TITLE = "TWSE Historical Data"

# Output naming
REPORT_TIMEZONE = "Asia/Taipei"
REPORT_FILENAME_PREFIX = "twse_historical_data"
REPORT_FILE_EXTENSION = ".xls"
