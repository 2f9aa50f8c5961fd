"""
Central router that aggregates the main service route modules.
"""

from fastapi import APIRouter

from explorewithme.main_service.routes import (
    admin_categories, admin_comments, admin_compilations, admin_events, admin_users,
    private_comments, private_events, private_requests,
    public_categories, public_comments, public_compilations, public_events,
)

api_router = APIRouter()
api_router.include_router(admin_users.router)
api_router.include_router(admin_categories.router)
api_router.include_router(admin_events.router)
api_router.include_router(admin_compilations.router)
api_router.include_router(admin_comments.router)
api_router.include_router(private_events.router)
api_router.include_router(private_requests.router)
api_router.include_router(private_comments.router)
api_router.include_router(public_events.router)
api_router.include_router(public_categories.router)
api_router.include_router(public_compilations.router)
api_router.include_router(public_comments.router)
