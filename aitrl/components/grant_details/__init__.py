"""
Grant Detail Extraction

Structured extraction of grant metadata from free-form documents.
"""

from .core import (
    GRANT_FIELDS,
    GrantDetailField,
    GrantDetails
)

from .evaluators import (
    make_grant_detector,
    make_grant_request_builder,
    parse_amount,
    GrantFieldValidator
)

from .pipeline import (
    get_grant_details_runnable,
    extract_grant_details,
    aextract_grant_details,
    extract_grant_summary
)

__all__ = [
    'GRANT_FIELDS',
    'GrantDetailField',
    'GrantDetails',
    'make_grant_detector',
    'make_grant_request_builder',
    'parse_amount',
    'GrantFieldValidator',
    'get_grant_details_runnable',
    'extract_grant_details',
    'aextract_grant_details',
    'extract_grant_summary'
]
