from __future__ import annotations

import html
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .layout import Cell, ComparisonView, Row, Table

LOGGER = logging.getLogger(__name__)

DEFAULT_TITLE = "fedramp controls comparison"

STYLE = """
        body { font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; margin: 20px; color: #333; background-color: #f4f6f7; }
        .tabs { display: flex; flex-wrap: wrap; }
        .tabs .input { position: absolute; opacity: 0; }
        .tabs .label { padding: 10px 20px; cursor: pointer; background: #e2e6ea; font-weight: bold; margin-right: 2px; }
        .tabs .input:checked + .label { background: #2c3e50; color: white; }
        .tabs .panel { display: none; width: 100%; order: 99; }
        .tabs .input:checked + .label + .panel { display: block; }
        table { width: 100%; border-collapse: collapse; background: white; }
        th, td { padding: 6px 8px; text-align: left; vertical-align: top; border: 1px solid #ddd; }
        th { background-color: #34495e; color: white; position: sticky; top: 0; }
        tr.shared td { border-top: 2px solid #95a5a6; }
        tr.parameters td { background-color: #fdfbe9; }
"""


def _cell_html(cell: Cell) -> str:
    tag = "th" if cell.header else "td"
    attrs = ""
    if cell.rowspan is not None:
        attrs += f' rowspan="{cell.rowspan}"'
    if cell.css_class:
        attrs += f' class="{html.escape(cell.css_class)}"'
    text = html.escape(cell.text).replace("\n", "<br>")
    return f"<{tag}{attrs}>{text}</{tag}>"


def _row_html(row: Row) -> str:
    attrs = f' class="{html.escape(row.css_class)}"' if row.css_class else ""
    return f"<tr{attrs}>{''.join(_cell_html(cell) for cell in row.cells)}</tr>"


def render_table(table: Table) -> str:
    body = "\n".join(_row_html(row) for row in table.rows)
    return f"<table>\n<thead>{_row_html(table.header)}</thead>\n<tbody>\n{body}\n</tbody>\n</table>"


def _tab_html(view: ComparisonView, checked: bool) -> str:
    name = html.escape(view.name)
    checked_attr = ' checked="checked"' if checked else ""
    return (
        f'<input name="tabs" type="radio" id="{name}"{checked_attr} class="input"/>\n'
        f'<label for="{name}" class="label">{html.escape(view.title)}</label>\n'
        f'<div class="panel">\n{render_table(view.table())}\n</div>'
    )


def render_html(
    views: Sequence[ComparisonView],
    *,
    title: str = DEFAULT_TITLE,
    stylesheet: Optional[str] = None,
) -> str:
    """Render one tab per view; the first tab is selected."""

    tabs: List[str] = [_tab_html(view, checked=(index == 0)) for index, view in enumerate(views)]
    link = f'\n    <link rel="stylesheet" href="{html.escape(stylesheet)}">' if stylesheet else ""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(title)}</title>
    <style>{STYLE}    </style>{link}
</head>
<body>
<div class="tabs">
{chr(10).join(tabs)}
</div>
</body>
</html>
"""


def write_html_report(
    views: Sequence[ComparisonView],
    output_path: Path,
    *,
    title: str = DEFAULT_TITLE,
    stylesheet: Optional[str] = None,
) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(render_html(views, title=title, stylesheet=stylesheet))
    LOGGER.info("HTML report written to %s", output_path)
    return output_path
