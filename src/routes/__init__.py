# src/routes/__init__.py
from .auth import router as auth_router
from .patients import router as patients_router
from .ip_screening import router as ip_screening_router
from .op_screening import router as op_screening_router
from .follow_ups import router as follow_ups_router

__all__ = [
    "auth_router",
    "patients_router",
    "ip_screening_router",
    "op_screening_router",
    "follow_ups_router",
]
