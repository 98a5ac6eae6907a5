"""
Factory helpers wiring settings, chart service and controller together.
"""
from typing import Callable, List, Optional

from config.settings import Settings, settings as default_settings
from core.models import Entity
from interaction.controller import OrgChartController
from interaction.scheduler import AsyncioScheduler, Scheduler
from serving.org_chart_service import OrgChartService


def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return default_settings


def get_org_chart_service(
    entities: Optional[List[Entity]] = None,
    settings: Optional[Settings] = None
) -> OrgChartService:
    """
    Build a chart service over a caller-owned entity list.

    Args:
        entities: Entity list (mutated in place by edits)
        settings: Settings (defaults to the global instance)

    Returns:
        OrgChartService with its forest already built
    """
    settings = settings or get_settings()
    return OrgChartService(entities, **settings.get_builder_config())


def get_controller(
    chart: OrgChartService,
    scheduler: Optional[Scheduler] = None,
    settings: Optional[Settings] = None,
    scroll_handler: Optional[Callable[[str], None]] = None
) -> OrgChartController:
    """
    Build an interaction controller for a chart.

    Args:
        chart: Chart service
        scheduler: Timer backend (defaults to the running asyncio loop)
        settings: Settings (defaults to the global instance)
        scroll_handler: Rendering callback for scroll_to_user

    Returns:
        OrgChartController configured from settings
    """
    settings = settings or get_settings()
    if scheduler is None:
        scheduler = AsyncioScheduler()
    return OrgChartController(
        chart,
        scheduler,
        scroll_handler=scroll_handler,
        **settings.get_interaction_config()
    )
