from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contract_reminders.config import get_settings
from contract_reminders.infrastructure.database import engine, initialize_database
from contract_reminders.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializa o banco de dados ao subir e libera os recursos ao encerrar."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Cria e configura a aplicação principal do FastAPI."""

    settings = get_settings()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    # Toast trackers live as long as the process, one per user.
    app.state.toast_trackers = {}

    # Autoriza requisições vindas do cliente web.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.app_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
