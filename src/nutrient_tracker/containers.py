"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrient_tracker.adapters.openai_vision_client import OpenAIVisionClient
from nutrient_tracker.adapters.supabase_image_storage import SupabaseImageStorage
from nutrient_tracker.adapters.supabase_intake_repository import (
    SupabaseIntakeRepository,
)
from nutrient_tracker.config import Settings
from nutrient_tracker.domain.nutrients import DEFAULT_CATALOG, NutrientCatalog
from nutrient_tracker.services.capture import CaptureService
from nutrient_tracker.services.estimation import EstimationService
from nutrient_tracker.services.intake import IntakeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: NutrientCatalog
    estimation_service: EstimationService
    capture_service: CaptureService
    intake_service: IntakeService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    repository = SupabaseIntakeRepository(
        supabase_client, table_name=resolved_settings.meals_table
    )
    storage = SupabaseImageStorage(
        supabase_client, bucket=resolved_settings.storage_bucket
    )
    openai_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
    estimation_service = EstimationService(
        client=openai_client,
        model=resolved_settings.openai_model,
        max_tokens=resolved_settings.openai_max_tokens,
        catalog=DEFAULT_CATALOG,
    )
    capture_service = CaptureService(
        estimation_service=estimation_service,
        storage=storage,
        repository=repository,
    )
    intake_service = IntakeService(
        repository=repository,
        storage=storage,
        catalog=DEFAULT_CATALOG,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        catalog=DEFAULT_CATALOG,
        estimation_service=estimation_service,
        capture_service=capture_service,
        intake_service=intake_service,
        close_resources=close_resources,
    )
