# engine/app_factory.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from engine.routes import router

def _unique_op_id(route: APIRoute) -> str:
    method = next(iter(route.methods or {"GET"})).lower()
    tag = (route.tags[0] if route.tags else "default").lower().replace(" ", "_")
    name = (route.name or route.endpoint.__name__).lower().replace(" ", "_")
    path = route.path_format.strip("/").replace("/", "_").replace("{", "").replace("}", "")
    return f"{tag}__{name}__{method}__{path}"

def create_app() -> FastAPI:
    app = FastAPI(
        title="Schema Codegen Engine",
        version="0.1.0",
        generate_unique_id_function=_unique_op_id,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # tighten in prod
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    return app
