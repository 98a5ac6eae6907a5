"""API package - Record schemas and factory helpers."""

from .schemas import EntityRecord, FilterRequest, parse_entities
from .dependencies import get_settings, get_org_chart_service, get_controller

__all__ = [
    'EntityRecord',
    'FilterRequest',
    'parse_entities',
    'get_settings',
    'get_org_chart_service',
    'get_controller',
]
