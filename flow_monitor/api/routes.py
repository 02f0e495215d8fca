"""
API route definitions for flow-monitor.
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..core.parsing import parse_int
from ..monitoring_service import MonitoringService, RegistrationRequest
from .schemas import RegistrationResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Singleton instance of MonitoringService (created once, reused for all requests)
_monitoring_service_instance = None


def get_monitoring_service() -> MonitoringService:
    """Dependency function to get the singleton MonitoringService instance."""
    global _monitoring_service_instance
    if _monitoring_service_instance is None:
        _monitoring_service_instance = MonitoringService()
    return _monitoring_service_instance


def set_monitoring_service(service: MonitoringService) -> None:
    """Install the MonitoringService built by the entry point."""
    global _monitoring_service_instance
    _monitoring_service_instance = service


def _parse_port(value: str) -> int:
    try:
        return parse_int(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric scrapePort {value!r}, using 0")
        return 0


def registration_request(
    service_name: str = Query("", alias="serviceName", description="Service to scrape"),
    scrape_port: str = Query("0", alias="scrapePort", description="Port to scrape"),
    alert_name: str = Query("", alias="alertName", description="Alert name"),
    alert_if: str = Query("", alias="alertIf", description="Alert condition"),
    alert_from: str = Query("", alias="alertFrom", description="Alert source"),
) -> RegistrationRequest:
    """Build a RegistrationRequest from query parameters."""
    return RegistrationRequest(
        service_name=service_name,
        scrape_port=_parse_port(scrape_port),
        alert_name=alert_name,
        alert_if=alert_if,
        alert_from=alert_from,
    )


# -------------------- Registration Endpoint --------------------

@router.api_route("/v1/docker-flow-monitor", methods=["GET", "POST"],
                  response_model=RegistrationResponse,
                  summary="Register a scrape target and/or an alert")
def register(
    request: RegistrationRequest = Depends(registration_request),
    monitoring_service: MonitoringService = Depends(get_monitoring_service)
):
    """
    Register a scrape target and/or an alert, then rewrite prometheus.yml and
    reload Prometheus.

    **Query Parameters (all optional):**
    - `serviceName`, `scrapePort`: scrape target, discovered as `tasks.<serviceName>`
    - `alertName`, `alertIf`, `alertFrom`: alert rule; the name is lowercased and
      stripped of characters outside `[a-z0-9-]`

    A request without parameters still rewrites the config and reloads Prometheus.

    **Returns:**
    - `status` (`OK`/`NOK`) plus the registered target and rule

    The HTTP status is the one Prometheus answered the reload with, or 500 when
    the config could not be written or Prometheus could not be reached.
    """
    result = monitoring_service.handle(request)
    body = RegistrationResponse.from_result(result)
    return JSONResponse(content=body.model_dump(), status_code=result.status_code)
