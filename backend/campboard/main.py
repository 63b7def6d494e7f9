# backend/campboard/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campboard import config
from campboard.db import healthcheck
from campboard.routers.auth import router as auth_router
from campboard.routers.bunks import router as bunks_router
from campboard.routers.campers import router as campers_router
from campboard.routers.staff import router as staff_router
from campboard.routers.missions import router as missions_router
from campboard.routers.sessions import router as sessions_router
from campboard.routers.ranks import router as ranks_router
from campboard.routers.settings import router as settings_router
from campboard.routers.weekly_points import router as weekly_points_router
from campboard.routers.submissions import router as submissions_router
from campboard.routers.reports import router as reports_router
from campboard.routers.data_io import router as data_io_router


def build_app() -> FastAPI:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Camp Board API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.FRONTEND_ORIGIN],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    @app.get("/health")
    def health():
        return healthcheck()

    app.include_router(auth_router)
    app.include_router(bunks_router)
    app.include_router(campers_router)
    app.include_router(staff_router)
    app.include_router(missions_router)
    app.include_router(sessions_router)
    app.include_router(ranks_router)
    app.include_router(settings_router)
    app.include_router(weekly_points_router)
    app.include_router(submissions_router)
    app.include_router(reports_router)
    app.include_router(data_io_router)

    return app


app = build_app()
