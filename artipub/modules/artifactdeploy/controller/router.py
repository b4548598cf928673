"""Agent endpoint that executes publish requests against the local workspace."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from artipub.modules.artifactdeploy.domain import PublishRequest, PublishResult
from artipub.modules.artifactdeploy.integration import LocalDispatcher
from artipub.modules.artifactdeploy.util.exceptions import (
    ArtifactUploadError,
    InvalidPublishConfiguration,
    PublishError,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/artifactdeploy", tags=["artifact-deploy"])


def get_dispatcher(request: Request) -> LocalDispatcher:
    container = getattr(request.app.state, "container", None)
    if not container or not getattr(container, "local_dispatcher", None):
        raise HTTPException(status_code=500, detail="Artifact deploy service not initialized.")
    return container.local_dispatcher


@router.post("/execute", response_model=PublishResult)
def execute(payload: PublishRequest, dispatcher: LocalDispatcher = Depends(get_dispatcher)) -> PublishResult:
    try:
        artifacts = dispatcher.dispatch(payload)
    except InvalidPublishConfiguration as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ArtifactUploadError as exc:
        log.warning("Publish of %s failed: %s", payload.workspace, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except PublishError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return PublishResult(artifacts=artifacts)
