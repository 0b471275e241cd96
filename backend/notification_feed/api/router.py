from fastapi import APIRouter

from notification_feed.api.routes import health, notifications, subscribers, widgets

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])  # GET /
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])  # activity feed + stats
api_router.include_router(subscribers.router, prefix="/subscribers", tags=["subscribers"])  # POST /, GET /{subscriber_id}
api_router.include_router(widgets.router, prefix="/widgets", tags=["widgets"])  # in-app feed for one subscriber
