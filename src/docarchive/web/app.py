"""FastAPI application serving the archive listing, thumbnails and files."""

from __future__ import annotations

import asyncio
import logging
import secrets
from datetime import datetime
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse, Response
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel

from docarchive import __version__
from docarchive.config import AppConfig
from docarchive.errors import (
    ArchiveError,
    ArchiveScanError,
    InvalidDocumentIdError,
    RenderError,
    UnknownDocumentError,
)
from docarchive.index.indexer import ArchiveIndex
from docarchive.models import CategoryInfo, DocumentRecord

LOGGER = logging.getLogger(__name__)

_UINT64_MAX = 2**64 - 1

_STATUS_CODES = {
    InvalidDocumentIdError: 400,
    UnknownDocumentError: 404,
    ArchiveScanError: 500,
    RenderError: 500,
}

security = HTTPBasic()


class DocumentPayload(BaseModel):
    id: int
    name: str
    size: int
    timestamp: datetime
    created: datetime
    pages: int
    content: str

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "DocumentPayload":
        return cls(
            id=record.id,
            name=record.name,
            size=record.size,
            timestamp=record.file_date,
            created=record.created,
            pages=record.pages,
            content=record.content,
        )


class CategoryPayload(BaseModel):
    name: str
    elements: int

    @classmethod
    def from_info(cls, info: CategoryInfo) -> "CategoryPayload":
        return cls(name=info.name, elements=info.elements)


def parse_doc_id(raw_id: str) -> int:
    """Parse a decimal unsigned 64-bit document id."""
    if not raw_id.isascii() or not raw_id.isdigit():
        raise InvalidDocumentIdError(raw_id)
    doc_id = int(raw_id)
    if doc_id > _UINT64_MAX:
        raise InvalidDocumentIdError(raw_id)
    return doc_id


def _require_credentials(
    request: Request, credentials: HTTPBasicCredentials = Depends(security)
) -> str:
    config: AppConfig = request.app.state.config
    username_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"), config.username.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"), config.password.encode("utf-8")
    )
    if not (username_ok and password_ok):
        raise HTTPException(
            status_code=401,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


def _get_index(request: Request) -> ArchiveIndex:
    return request.app.state.index


async def _archive_error_handler(request: Request, exc: ArchiveError) -> PlainTextResponse:
    status_code = _STATUS_CODES.get(type(exc), 500)
    return PlainTextResponse(exc.message, status_code=status_code)


def create_app(config: AppConfig, index: ArchiveIndex | None = None) -> FastAPI:
    """Build the web application around a single shared ``ArchiveIndex``."""
    if index is None:
        index = ArchiveIndex(config.resolve_archive_root(), thumbnail_dpi=config.thumbnail_dpi)

    app = FastAPI(
        title="DocArchive",
        version=__version__,
        dependencies=[Depends(_require_credentials)],
    )
    app.state.config = config
    app.state.index = index
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ArchiveError, _archive_error_handler)

    @app.get("/alldocs/", response_model=List[DocumentPayload])
    async def all_documents(archive: ArchiveIndex = Depends(_get_index)) -> List[DocumentPayload]:
        records = await asyncio.to_thread(archive.list_all_documents)
        LOGGER.info("Output %d documents", len(records))
        return [DocumentPayload.from_record(record) for record in records]

    @app.get("/categories/", response_model=List[CategoryPayload])
    async def categories(archive: ArchiveIndex = Depends(_get_index)) -> List[CategoryPayload]:
        infos = await asyncio.to_thread(archive.list_categories)
        return [CategoryPayload.from_info(info) for info in infos]

    @app.get("/thumbnail/{doc_id}")
    async def thumbnail(doc_id: str, archive: ArchiveIndex = Depends(_get_index)) -> Response:
        data = await asyncio.to_thread(archive.thumbnail, parse_doc_id(doc_id))
        return Response(content=data, media_type="image/jpeg")

    @app.get("/doc/{doc_id}")
    async def document(doc_id: str, archive: ArchiveIndex = Depends(_get_index)) -> FileResponse:
        path = archive.document_path(parse_doc_id(doc_id))
        return FileResponse(path, media_type="application/pdf", filename=path.name)

    return app
