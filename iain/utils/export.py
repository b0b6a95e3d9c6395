"""
Utility functions for exporting data to CSV format.
Used by staff to download the applicant table.
"""

import csv
import io
from datetime import datetime
from typing import Any, Dict, List


def export_accounts_to_csv(accounts: List[Dict[str, Any]]) -> str:
    """
    Export applicant profile documents to CSV.

    Args:
        accounts: raw documents from the accounts collection

    Returns:
        CSV string ready to be downloaded
    """

    output = io.StringIO()

    fieldnames = [
        'UID',
        'First Name',
        'Last Name',
        'Email',
        'Phone',
        'Birth Date',
        'Gender',
        'Status',
        'Street',
        'City',
        'ZIP',
        'Country',
        'Created At',
    ]

    writer = csv.DictWriter(output, fieldnames=fieldnames)
    writer.writeheader()

    for account in accounts:
        address = account.get('address') or {}
        created_at = account.get('created_at')
        writer.writerow({
            'UID': account.get('uid') or account.get('_id', ''),
            'First Name': account.get('first_name') or '',
            'Last Name': account.get('last_name') or '',
            'Email': account.get('email') or '',
            'Phone': account.get('phone') or '',
            'Birth Date': account.get('birth_date') or '',
            'Gender': account.get('gender') or '',
            'Status': account.get('status') or '',
            'Street': address.get('street') or '',
            'City': address.get('city') or '',
            'ZIP': address.get('zip') or '',
            'Country': address.get('country') or '',
            'Created At': created_at.strftime('%Y-%m-%d %H:%M:%S') if isinstance(created_at, datetime) else '',
        })

    csv_string = output.getvalue()
    output.close()

    return csv_string


def generate_filename(prefix: str = "export") -> str:
    """Generate a timestamped CSV filename."""
    timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}.csv"
