from datetime import datetime

from cmv_app.catalog import EntityCatalog, create_catalog
from cmv_app.config import settings
from cmv_app.services.advisory import AdvisoryService
from cmv_app.services.inventory_audit import InventoryAudit
from cmv_app.utils.timezone import get_local_now

# Process-wide state: one catalog and one audit session per process
catalog = create_catalog(seed=settings.SEED_DEMO_DATA)
inventory_audit = InventoryAudit(catalog)
advisory_service = AdvisoryService(
    api_key=settings.GEMINI_API_KEY,
    model_name=settings.GEMINI_MODEL,
    request_timeout=settings.GEMINI_REQUEST_TIMEOUT,
    currency=settings.CURRENCY_SYMBOL,
)


def get_catalog() -> EntityCatalog:
    return catalog


def get_inventory_audit() -> InventoryAudit:
    return inventory_audit


def get_advisory_service() -> AdvisoryService:
    return advisory_service


def get_now() -> datetime:
    """Current time; override in tests for deterministic results"""
    return get_local_now()
