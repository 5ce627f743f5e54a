from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from settings.config import settings
from core.context import AppContext
from core.middleware import ExceptionHandlerMiddleware
from db.db_operation import create_indexes
from utils.logger import get_logger
from routes import auth, user_routes, menu_routes, review_routes, cart_routes, booking_routes, payment_routes, admin_routes

logger = get_logger("main")

def create_app(context: AppContext | None = None) -> FastAPI:
    """
    Build the API. Tests pass a ready context; otherwise it is built from settings at startup.
    """
    app = FastAPI(title=settings.PROJECT_NAME, version="1.0.0")
    if context is not None:
        app.state.context = context

    @app.get("/")
    async def health_check():
        logger.info("Health check is successful")
        return {
            "status": "ok",
            "app": settings.PROJECT_NAME,
            "message": "Bistro boss is sitting"
        }

    @app.on_event("startup")
    async def startup_event():
        if getattr(app.state, "context", None) is None:
            app.state.context = AppContext.from_settings(settings)
            await app.state.context.mongo.connect()
        await create_indexes(app.state.context.mongo)

    @app.on_event("shutdown")
    async def shutdown_event():
        ctx = getattr(app.state, "context", None)
        if ctx is not None:
            ctx.mongo.client.close()

    app.add_middleware(ExceptionHandlerMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(auth.router)
    app.include_router(user_routes.router)
    app.include_router(menu_routes.router)
    app.include_router(review_routes.router)
    app.include_router(cart_routes.router)
    app.include_router(booking_routes.router)
    app.include_router(payment_routes.router)
    app.include_router(admin_routes.router)
    return app

app = create_app()
