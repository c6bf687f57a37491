"""
Quiz Engine Server

FastAPI app expondo o motor de pontuação:
- Validação de questões (autoria)
- Início de sessão com embaralhamento
- Correção e pontuação
- Ranking e estatísticas
"""

from fastapi import FastAPI

from quiz_engine import __version__
from quiz_engine.config import configure_logging
from quiz_engine.router import register_exception_handlers, router


def create_app() -> FastAPI:
    """Cria a aplicação FastAPI com o router do quiz."""
    configure_logging()

    app = FastAPI(
        title="Quiz Engine",
        description="Motor de validação, pontuação e ranking de quizzes",
        version=__version__,
    )
    app.include_router(router)
    register_exception_handlers(app)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
