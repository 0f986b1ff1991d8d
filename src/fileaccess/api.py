"""FastAPI application exposing home storage and temp artifact endpoints."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import PurePath
from typing import AsyncIterator

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .config import get_settings
from .errors import ErrorKind, FileAccessError
from .service import FileAccessService
from .storage.files import FileHandle
from .storage.temp import TempAllocator

_STATUS_BY_KIND = {
    ErrorKind.CONFIGURATION_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.INSUFFICIENT_RIGHTS: status.HTTP_403_FORBIDDEN,
    ErrorKind.PATH_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.DIRECTORY_CREATION_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.TEMP_DIRECTORY_CREATION_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    service = FileAccessService(temp_allocator=TempAllocator(settings.temp_dir))
    service.set_configuration_service(settings)
    app.state.file_access = service
    try:
        yield
    finally:
        service.unset_configuration_service(settings)


app = FastAPI(title="File Access Service", version="0.1.0", lifespan=lifespan)


class HealthResponse(BaseModel):
    status: str
    configured: bool


class PathResponse(BaseModel):
    path: str


class FileHandleResponse(BaseModel):
    path: str
    exists: bool
    readable: bool
    writable: bool
    status: str

    @classmethod
    def from_handle(cls, handle: FileHandle) -> "FileHandleResponse":
        return cls(
            path=str(handle.path),
            exists=handle.exists,
            readable=handle.readable,
            writable=handle.writable,
            status=handle.status.value,
        )


class DirectoryRequest(BaseModel):
    segments: list[str] = Field(..., min_length=1, description="Directory path segments, joined in order.")


async def get_file_access(request: Request) -> FileAccessService:
    return request.app.state.file_access


def _check_relative(*parts: str) -> None:
    for part in parts:
        if not part.strip():
            raise HTTPException(status_code=400, detail="Names must not be empty.")
        candidate = PurePath(part)
        if candidate.is_absolute() or ".." in candidate.parts:
            raise HTTPException(status_code=400, detail=f"Invalid name: {part!r}")


@app.exception_handler(FileAccessError)
async def file_access_error_handler(request: Request, exc: FileAccessError) -> JSONResponse:
    return JSONResponse(
        status_code=_STATUS_BY_KIND[exc.kind],
        content={"kind": exc.kind.value, "detail": str(exc)},
    )


@app.get("/healthz", response_model=HealthResponse)
async def healthcheck(service: FileAccessService = Depends(get_file_access)):
    return HealthResponse(status="ok", configured=service.configured)


@app.post("/temp/files", response_model=PathResponse, status_code=status.HTTP_201_CREATED)
async def create_temp_file(service: FileAccessService = Depends(get_file_access)):
    return PathResponse(path=str(service.get_temporary_file()))


@app.post("/temp/directories", response_model=PathResponse, status_code=status.HTTP_201_CREATED)
async def create_temp_directory(service: FileAccessService = Depends(get_file_access)):
    return PathResponse(path=str(service.get_temporary_directory()))


@app.get("/private/files/{name}", response_model=FileHandleResponse)
async def get_private_file(name: str, service: FileAccessService = Depends(get_file_access)):
    _check_relative(name)
    return FileHandleResponse.from_handle(service.get_private_persistent_file(name))


@app.post("/private/directories", response_model=PathResponse)
async def get_private_directory(
    payload: DirectoryRequest,
    service: FileAccessService = Depends(get_file_access),
):
    _check_relative(*payload.segments)
    return PathResponse(path=str(service.get_private_persistent_directory(payload.segments)))
