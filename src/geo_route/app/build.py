# geo_route/app/build.py
from collections.abc import Mapping

from geo_route.app.session import GraphSession
from geo_route.config.models import SessionModel
from geo_route.domain.routing.hooks import NoopHooks
from geo_route.io.query_logging import QueryLogging  # JSON logs


def build(cfg: SessionModel | Mapping | None = None, *, use_logging: bool = True) -> GraphSession:
    # 0) Validate config
    if cfg is None:
        model = SessionModel()
    else:
        model = cfg if isinstance(cfg, SessionModel) else SessionModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        QueryLogging(
            session=model.name,
            level=model.log.level,
            debug=model.log.debug,
            json_format=model.log.json_format,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Session owns a fresh store
    return GraphSession(config=model, hooks=hooks)
