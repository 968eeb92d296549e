"""Health check endpoints."""

from fastapi import APIRouter, Depends

from .....composition.container import get_document_store
from .....core.ports.document_store_port import DocumentStorePort
from ..models import HealthResponse

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic liveness check."""
    return HealthResponse(status="healthy", version=API_VERSION, vault="not_checked")


@router.get("/ready", response_model=HealthResponse)
def readiness_check(store: DocumentStorePort = Depends(get_document_store)) -> HealthResponse:
    """Readiness probe: checks the vault can be listed."""
    try:
        vault_status = f"connected ({len(store.list_all())} notes)"
    except Exception as e:
        vault_status = f"error: {e}"

    return HealthResponse(status="ready", version=API_VERSION, vault=vault_status)
