"""FastAPI application exposing client commands with undo and redo."""

import json
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from sse_starlette.sse import EventSourceResponse

from models.client import Client
from models.command import AddClientCommand, BaseCommand, EditClientCommand, RemoveClientCommand
from core.command_manager import CommandManager
from core.journal import CommandJournal
from core.repository import ClientRepository, InMemoryClientRepository

HOST = "0.0.0.0"
PORT = 8000
LOG_LEVEL = "info"

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ClientPayload(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)


class EditPayload(BaseModel):
    field: str
    value: Any = None


def _command_result(command: Optional[BaseCommand]) -> Dict[str, Any]:
    return {"command": command.to_dict() if command is not None else None}


def create_app(repository: Optional[ClientRepository] = None,
               manager: Optional[CommandManager] = None) -> FastAPI:
    """
    Build the application around an explicit repository and command manager.

    Args:
        repository: Client storage, an empty in-memory repository by default
        manager: Command invoker, a new one with its own journal by default
    """
    repository = repository if repository is not None else InMemoryClientRepository()
    if manager is None:
        manager = CommandManager(journal=CommandJournal())
    elif manager.journal is None:
        manager.journal = CommandJournal()
    journal = manager.journal

    app = FastAPI(title="Client Commands API", version="1.0.0")
    app.state.repository = repository
    app.state.manager = manager

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify exact origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        """Root endpoint returning API information."""
        return {
            "message": "Client Commands API",
            "version": "1.0.0",
            "endpoints": {
                "clients": "/clients",
                "undo": "/undo",
                "redo": "/redo",
                "history": "/history",
                "logs": "/logs"
            }
        }

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "clients": len(repository.get_all()),
            "history_size": len(manager.history)
        }

    @app.get("/clients")
    async def list_clients():
        return {str(key): client.to_dict() for key, client in repository.get_all().items()}

    @app.get("/clients/{client_id}")
    async def get_client(client_id: int):
        client = repository.get_client(client_id)
        if client is None:
            raise HTTPException(status_code=404, detail=f"Client {client_id} not found")
        return client.to_dict()

    @app.post("/clients", status_code=201)
    async def add_client(payload: ClientPayload):
        client = Client.from_dict(payload.model_dump())
        command = AddClientCommand(repository, client)
        if not manager.invoke(command):
            raise HTTPException(status_code=409, detail=f"Client {client.id} already exists")
        return _command_result(command)

    @app.patch("/clients/{client_id}")
    async def edit_client(client_id: int, payload: EditPayload):
        command = EditClientCommand(repository, client_id, payload.field, payload.value)
        if not manager.invoke(command):
            raise HTTPException(status_code=409, detail=f"Cannot edit {payload.field!r} of client {client_id}")
        return _command_result(command)

    @app.delete("/clients/{client_id}")
    async def remove_client(client_id: int):
        command = RemoveClientCommand(repository, client_id)
        if not manager.invoke(command):
            raise HTTPException(status_code=409, detail=f"Client {client_id} not found")
        return _command_result(command)

    @app.post("/undo")
    async def undo():
        return _command_result(manager.undo())

    @app.post("/redo")
    async def redo():
        return _command_result(manager.redo())

    @app.get("/history")
    async def history():
        return {
            "history": [command.to_dict() for command in manager.history],
            "redo": [command.to_dict() for command in manager.redo_stack]
        }

    @app.get("/logs")
    async def logs():
        async def event_generator():
            async for event in journal.stream():
                yield {"event": event["type"], "data": json.dumps(event)}

        return EventSourceResponse(event_generator())

    logger.info(f"Application created with {type(repository).__name__}")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=HOST,
        port=PORT,
        reload=True,
        log_level=LOG_LEVEL
    )
