"""
Report assembly.

Each stock id becomes one fragment; fragments are joined in input order
and wrapped in a fixed HTML shell.
"""

from collections.abc import Iterable

from twse_disclosures.constants import FRAGMENT_SEPARATOR, NO_DATA_MARKER, REPORT_TITLE
from twse_disclosures.domain.models import ResolutionResult

DOCUMENT_SHELL = """
<!DOCTYPE html>
<html lang="zh-TW">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{ font-family: Arial, sans-serif; }}
        table {{ border-collapse: collapse; width: 100%; margin-bottom: 20px; }}
        th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
        th {{ background-color: #f2f2f2; }}
        h1 {{ color: #333; font-size: 24px; margin-top: 30px; }}
    </style>
</head>
<body>
    {content}
</body>
</html>
"""


def stock_heading(stock_id: str) -> str:
    return f"<p>stock id: {stock_id}</p>"


def no_data_fragment(stock_id: str) -> str:
    return f"{stock_heading(stock_id)}<div>{stock_id} {NO_DATA_MARKER}</div>"


def render_fragment(result: ResolutionResult) -> str:
    """Render one stock id's section of the report."""
    if result.has_detail:
        return f"{stock_heading(result.stock_id)}{result.detail_fragment}"
    return no_data_fragment(result.stock_id)


def join_fragments(fragments: Iterable[str]) -> str:
    return FRAGMENT_SEPARATOR.join(fragments)


def wrap_document(content: str) -> str:
    """Wrap joined fragments in the document shell."""
    return DOCUMENT_SHELL.format(title=REPORT_TITLE, content=content)


def assemble_document(results: Iterable[ResolutionResult]) -> str:
    """
    Build the report document.

    Args:
        results: One result per stock id, already in input order

    Returns:
        Complete HTML document
    """
    return wrap_document(join_fragments(render_fragment(r) for r in results))
