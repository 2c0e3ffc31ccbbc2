from fastapi import APIRouter, Depends

from TIV.api.dependencies import get_config
from packages.tiv_core.config import TIVConfig
from packages.tiv_core.dto import utc_now

router = APIRouter()


@router.get("/health")
async def health_check(config: TIVConfig = Depends(get_config)):
    """
    Server Liveness Probe.
    Returns status, version, and current timestamp.
    """
    return {
        "status": "ok",
        "version": config.VERSION,
        "timestamp": utc_now().isoformat()
    }
