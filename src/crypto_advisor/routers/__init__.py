"""API routers.

Includes routes for:
- /auth - signup and login
- /onboarding - investor preferences
- /dashboard - personalised prices, news, insight and meme
- /feedback - votes on dashboard items
- /user - current identity
"""
from crypto_advisor.routers.auth import router as auth_router
from crypto_advisor.routers.dashboard import router as dashboard_router
from crypto_advisor.routers.feedback import router as feedback_router
from crypto_advisor.routers.onboarding import router as onboarding_router
from crypto_advisor.routers.users import router as users_router

__all__ = [
    "auth_router",
    "onboarding_router",
    "dashboard_router",
    "feedback_router",
    "users_router",
]
