"""Dependency container wiring for the application."""

import logging
from dataclasses import dataclass

from supabase import create_client

from tracker_metrics.adapters.supabase_batch_repository import SupabaseBatchRepository
from tracker_metrics.adapters.supabase_fasting_session_repository import (
    SupabaseFastingSessionRepository,
)
from tracker_metrics.adapters.supabase_transport_unit_repository import (
    SupabaseTransportUnitRepository,
)
from tracker_metrics.app_logging import configure_logging
from tracker_metrics.config import Settings, resolve_timezone
from tracker_metrics.services.fermentation import BrewingService
from tracker_metrics.services.fleet import FleetReportService
from tracker_metrics.services.history import FastingHistoryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    brewing_service: BrewingService
    fasting_history_service: FastingHistoryService
    fleet_report_service: FleetReportService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    timezone = resolve_timezone(resolved_settings.timezone)
    configure_logging(logging.DEBUG if resolved_settings.debug else logging.INFO)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    batch_repository = SupabaseBatchRepository(supabase_client)
    session_repository = SupabaseFastingSessionRepository(supabase_client)
    unit_repository = SupabaseTransportUnitRepository(supabase_client)
    return AppContainer(
        settings=resolved_settings,
        brewing_service=BrewingService(
            batch_repository, debug=resolved_settings.debug
        ),
        fasting_history_service=FastingHistoryService(
            session_repository,
            timezone_name=timezone.key,
            debug=resolved_settings.debug,
        ),
        fleet_report_service=FleetReportService(
            unit_repository, debug=resolved_settings.debug
        ),
    )
