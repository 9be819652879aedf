"""FastAPI application exposing the contact CRUD API."""

from __future__ import annotations

import logging
import os
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from backend.db import get_session, init_db
from backend.errors import NotFoundError, StoreUnavailable, ValidationError
from backend.store import ContactStore

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

app = FastAPI(title="Contacts API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup() -> None:
    init_db()


@app.exception_handler(ValidationError)
def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logging.warning("rejected contact on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content=exc.payload)


@app.exception_handler(RequestValidationError)
def _bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"name": "ValidationError", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(NotFoundError)
def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=exc.payload)


@app.exception_handler(StoreUnavailable)
def _store_unavailable(request: Request, exc: StoreUnavailable) -> JSONResponse:
    return JSONResponse(status_code=500, content=exc.payload)


def get_store(db: Session = Depends(get_session)) -> ContactStore:
    return ContactStore(db)


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


class ContactIn(BaseModel):
    # optional here so the store reports missing fields as a 400
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    message: str | None = None


class ContactOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str
    message: str | None = None
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


@app.post("/api/contacts", response_model=ContactOut, status_code=201)
def create_contact(contact: ContactIn, store: ContactStore = Depends(get_store)):
    return store.insert(contact.model_dump())


@app.get("/api/contacts", response_model=list[ContactOut])
def list_contacts(store: ContactStore = Depends(get_store)):
    return store.list_all()


@app.get("/api/contacts/{contact_id}", response_model=ContactOut)
def get_contact(contact_id: str, store: ContactStore = Depends(get_store)):
    return store.get(contact_id)


@app.put("/api/contacts/{contact_id}", response_model=ContactOut | None)
def update_contact(
    contact_id: str,
    contact: ContactIn,
    store: ContactStore = Depends(get_store),
):
    return store.update_by_id(contact_id, contact.model_dump())


@app.delete("/api/contacts/{contact_id}")
def delete_contact(contact_id: str, store: ContactStore = Depends(get_store)) -> dict[str, str]:
    store.delete_by_id(contact_id)
    return {"message": "Contact deleted successfully"}


def run() -> None:
    import uvicorn

    logging.basicConfig(
        level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    logging.info("Server running on port %s", PORT)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
