# src/chirper/api/dependencies.py
"""
FastAPI dependencies shared by the routers.
"""

import os

from fastapi import Request
from fastapi.templating import Jinja2Templates

from ..core.container import Container
from ..core.ports import NotificationsRepository, UserStore
from ..domains.chirps.services import ChirpService

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

templates = Jinja2Templates(directory=TEMPLATES_DIR)


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_chirp_service(request: Request) -> ChirpService:
    return get_container(request).chirp_service()


def get_user_store(request: Request) -> UserStore:
    return get_container(request).user_store()


def get_notifications_repository(request: Request) -> NotificationsRepository:
    return get_container(request).notifications_repository()
