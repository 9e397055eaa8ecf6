"""Structure report for workbooks that fail to parse."""

import re
from typing import Any, Optional

from openpyxl.workbook.workbook import Workbook

from .config import get_config
from .names import normalize_name
from .schemas import ParserConfig

CUP_TITLE_PATTERN = re.compile(r'кубок|cup')


def analyze_workbook_structure(
    workbook: Workbook,
    file_name: str = '',
    config: Optional[ParserConfig] = None,
) -> dict[str, Any]:
    """
    Describe every sheet of a workbook and suggest fixes.

    Sheet titles are matched loosely here (substring, not equality) so the
    report can point at sheets that are almost right.

    Returns:
        Dict with file_name, total_sheets, sheets (name, row_count,
        column_count, is_empty, first_row_sample), registration_sheet_found,
        cup_sheets_found and recommendations
    """
    config = config or get_config()
    registration_names = [normalize_name(n) for n in config.registration_sheet_names]

    analysis: dict[str, Any] = {
        'file_name': file_name,
        'total_sheets': len(workbook.worksheets),
        'sheets': [],
        'registration_sheet_found': False,
        'cup_sheets_found': [],
        'recommendations': [],
    }

    for sheet in workbook.worksheets:
        rows = [
            row for row in sheet.iter_rows(values_only=True)
            if any(value is not None for value in row)
        ]
        first_row = list(rows[0]) if rows else None
        while first_row and first_row[-1] is None:
            first_row.pop()

        analysis['sheets'].append({
            'name': sheet.title,
            'row_count': len(rows),
            'column_count': sheet.max_column if rows else 0,
            'is_empty': not rows,
            'first_row_sample': first_row,
        })

        title = normalize_name(sheet.title)
        if any(name in title for name in registration_names):
            analysis['registration_sheet_found'] = True
        if CUP_TITLE_PATTERN.search(title):
            analysis['cup_sheets_found'].append(sheet.title)

    if not analysis['registration_sheet_found']:
        analysis['recommendations'].append(
            f'Registration sheet not found. Name a sheet "{config.registration_sheet_names[0]}" '
            f'or rename the existing one.'
        )
    if not analysis['cup_sheets_found']:
        analysis['recommendations'].append(
            'No cup sheets found. Add sheets named "Кубок А" and "Кубок Б" with the brackets.'
        )

    return analysis
