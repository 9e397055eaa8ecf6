"""Importing a tournament workbook from a public Google Sheets document."""

import logging
import re

import requests
from openpyxl.workbook.workbook import Workbook

from .excel_parser import load_workbook

logger = logging.getLogger('rfp.google_sheets')

SHEET_ID_PATTERN = re.compile(r'/spreadsheets/d/([a-zA-Z0-9_-]+)')
EXPORT_URL = 'https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=xlsx'
REQUEST_TIMEOUT = 30


def extract_sheet_id(url: str) -> str:
    """
    Document id from a Google Sheets URL.

    Supported forms:
        https://docs.google.com/spreadsheets/d/SHEET_ID/edit#gid=0
        https://docs.google.com/spreadsheets/d/SHEET_ID/edit
        https://docs.google.com/spreadsheets/d/SHEET_ID

    Raises:
        ValueError: The URL is not a Google Sheets document link
    """
    match = SHEET_ID_PATTERN.search(url or '')
    if match is None:
        raise ValueError(
            f'Invalid Google Sheets URL: {url}. '
            f'Expected https://docs.google.com/spreadsheets/d/SHEET_ID/...'
        )
    return match.group(1)


def validate_google_sheets_url(url: str) -> bool:
    try:
        extract_sheet_id(url)
    except ValueError:
        return False
    return True


def fetch_workbook(url: str, timeout: int = REQUEST_TIMEOUT) -> Workbook:
    """
    Download a document as .xlsx and open it.

    The document must be readable by anyone with the link.

    Raises:
        ValueError: Invalid URL
        requests.HTTPError: The document could not be downloaded
    """
    sheet_id = extract_sheet_id(url)
    export_url = EXPORT_URL.format(sheet_id=sheet_id)

    logger.info(f'Downloading Google Sheets document {sheet_id}')
    response = requests.get(export_url, allow_redirects=True, timeout=timeout)
    response.raise_for_status()

    logger.debug(f'Downloaded {len(response.content)} bytes')
    return load_workbook(response.content)
