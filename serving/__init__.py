"""Serving package - Chart state and rebuild pipeline."""

from .org_chart_service import OrgChartService

__all__ = ['OrgChartService']
