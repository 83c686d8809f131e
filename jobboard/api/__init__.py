"""
API module - FastAPI routers and endpoint definitions.

- jobboard.api.routes: main router combining auth, student, company, job and admin routes
- jobboard.api.dependencies: profile loaders and pagination parameters

Usage:
    from jobboard.api.routes import api_router
    app.include_router(api_router, prefix="/api")
"""
