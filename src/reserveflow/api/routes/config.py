from __future__ import annotations

from fastapi import APIRouter

from reserveflow.api.tracing import current_trace_context
from reserveflow.api.wiring import config_loader
from reserveflow.application.dto.requests import SaveConfigRequest
from reserveflow.application.dto.responses import ConfigResponse
from reserveflow.application.use_cases.config import GetConfig, SaveConfig
from reserveflow.infrastructure.db.repositories.config_repo import SqlAlchemyConfigRepository
from reserveflow.infrastructure.messaging.redis_publisher import RedisEventPublisher

router = APIRouter(tags=["config"])


def _get_config_use_case() -> GetConfig:
    return GetConfig(loader=config_loader())


def _save_config_use_case() -> SaveConfig:
    return SaveConfig(
        repository=SqlAlchemyConfigRepository(),
        loader=config_loader(),
        publisher=RedisEventPublisher(),
    )


@router.get("/v1/config", response_model=ConfigResponse)
def get_config() -> ConfigResponse:
    return _get_config_use_case().execute()


@router.put("/v1/config", response_model=ConfigResponse)
def save_config(request: SaveConfigRequest) -> ConfigResponse:
    return _save_config_use_case().execute(
        request_dto=request,
        trace_ctx=current_trace_context(),
    )
