"""Remote store backed by the Ardoq REST v2 API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from ardoq_adapter.domain.model import VersionPrecondition
from ardoq_adapter.domain.ports import (
    ComponentMatch,
    ComponentsFound,
    Created,
    ExistingReference,
    NotFound,
    ReferenceFound,
    SearchFailed,
    WriteAccepted,
    WriteRejected,
)

from .schema import (
    BatchCreateRequest,
    BatchRequest,
    BatchUpdateRequest,
    ComponentCreateRequest,
    ComponentPayload,
    ComponentSearchResponse,
    ReferenceBatchOperations,
    ReferenceBodyRequest,
    ReferenceCustomFields,
    ReferenceSearchResponse,
    ReferenceVersionPatch,
    dump_request,
)

if TYPE_CHECKING:
    from ardoq_adapter.adapters.http_resilience import ResilientClient
    from ardoq_adapter.config.ardoq import ArdoqConfig
    from ardoq_adapter.domain.model import Relationship, Workspace
    from ardoq_adapter.domain.ports import (
        ComponentCreateOutcome,
        ComponentSearchOutcome,
        ReferenceSearchOutcome,
        WriteOutcome,
    )
    from ardoq_adapter.domain.reconciliation import ReferenceBatch, ReferenceBody

log = getLogger(__name__)

COMPONENTS_PATH = "/api/v2/components"
REFERENCES_PATH = "/api/v2/references"
BATCH_PATH = "/api/v2/batch"

_VERSION_CONFLICT_STATUSES = frozenset({httpx.codes.CONFLICT, httpx.codes.PRECONDITION_FAILED})


class ArdoqRemoteStore:
    """``RemoteStore`` over an open ``ResilientClient``.

    Remote failures never raise from here: HTTP errors, transport errors and
    malformed payloads come back as ``SearchFailed`` or ``WriteRejected``. Only a
    successful search with no values is ``NotFound``; a 404 is ``SearchFailed``.
    """

    def __init__(self, client: ResilientClient, config: ArdoqConfig) -> None:
        self._client = client
        self._config = config

    async def search_component(self, workspace: Workspace, name: str) -> ComponentSearchOutcome:
        params = {"rootWorkspace": self._config.workspace_id(workspace), "name": name}
        log.debug("Calling GET %s name:%s workspace:%s", COMPONENTS_PATH, name, workspace)
        try:
            response = await self._client.get(COMPONENTS_PATH, params=params)
        except httpx.HTTPError as exc:
            return _search_transport_failure("component", exc)

        if response.status_code != httpx.codes.OK:
            return _search_status_failure("component", response)
        try:
            payload = ComponentSearchResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            return SearchFailed(reason=f"malformed component search payload: {exc}")

        if not payload.values:
            return NotFound()
        return ComponentsFound(
            matches=tuple(ComponentMatch(id=value.id, name=value.name) for value in payload.values)
        )

    async def create_component(
        self, workspace: Workspace, name: str, type_id: str
    ) -> ComponentCreateOutcome:
        request = ComponentCreateRequest(
            root_workspace=self._config.workspace_id(workspace),
            name=name,
            type_id=type_id,
        )
        try:
            response = await self._client.post(COMPONENTS_PATH, json=dump_request(request))
        except httpx.HTTPError as exc:
            return _write_transport_failure(f"create component {name!r}", exc)

        if response.status_code != httpx.codes.CREATED:
            return _write_status_failure(f"create component {name!r}", response)
        try:
            created = ComponentPayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            return WriteRejected(
                reason=f"create acknowledged without a component id: {exc}",
                status_code=response.status_code,
            )
        return Created(id=created.id)

    async def search_reference(self, source_id: str, target_id: str) -> ReferenceSearchOutcome:
        log.debug("Calling GET %s source:%s target:%s", REFERENCES_PATH, source_id, target_id)
        try:
            response = await self._client.get(
                REFERENCES_PATH, params={"source": source_id, "target": target_id}
            )
        except httpx.HTTPError as exc:
            return _search_transport_failure("reference", exc)

        if response.status_code != httpx.codes.OK:
            return _search_status_failure("reference", response)
        try:
            payload = ReferenceSearchResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            return SearchFailed(reason=f"malformed reference search payload: {exc}")

        if not payload.values:
            return NotFound()
        first = payload.values[0]
        return ReferenceFound(reference=ExistingReference(id=first.id, version=first.version))

    async def create_reference(
        self,
        source_id: str,
        target_id: str,
        relationship: Relationship,
        version: str | None = None,
    ) -> WriteOutcome:
        request = self._reference_body(
            source=source_id, target=target_id, relationship=relationship, version=version
        )
        action = f"create reference {source_id} -> {target_id}"
        try:
            response = await self._client.post(REFERENCES_PATH, json=dump_request(request))
        except httpx.HTTPError as exc:
            return _write_transport_failure(action, exc)
        if not response.is_success:
            return _write_status_failure(action, response)
        return WriteAccepted()

    async def update_reference_version(
        self,
        reference_id: str,
        version: str,
        precondition: VersionPrecondition = VersionPrecondition.LATEST,
    ) -> WriteOutcome:
        request = ReferenceVersionPatch(custom_fields=ReferenceCustomFields(version=version))
        action = f"update reference {reference_id}"
        try:
            response = await self._client.patch(
                f"{REFERENCES_PATH}/{reference_id}",
                params={"ifVersionMatch": precondition.value},
                json=dump_request(request),
            )
        except httpx.HTTPError as exc:
            return _write_transport_failure(action, exc)
        if not response.is_success:
            return _write_status_failure(action, response)
        return WriteAccepted()

    async def submit_batch(self, batch: ReferenceBatch) -> WriteOutcome:
        request = BatchRequest(
            references=ReferenceBatchOperations(
                create=[
                    BatchCreateRequest(body=self._reference_body_from(operation.body))
                    for operation in batch.creates
                ],
                update=[
                    BatchUpdateRequest(
                        id=operation.id,
                        if_version_match=operation.if_version_match.value,
                        body=self._reference_body_from(operation.body),
                    )
                    for operation in batch.updates
                ],
            )
        )
        action = f"submit batch of {len(batch)} reference operation(s)"
        try:
            response = await self._client.post(BATCH_PATH, json=dump_request(request))
        except httpx.HTTPError as exc:
            return _write_transport_failure(action, exc)
        if not response.is_success:
            return _write_status_failure(action, response)
        return WriteAccepted()

    def _reference_body_from(self, body: ReferenceBody) -> ReferenceBodyRequest:
        return self._reference_body(
            source=body.source, target=body.target, relationship=body.type, version=body.version
        )

    def _reference_body(
        self,
        *,
        source: str,
        target: str,
        relationship: Relationship,
        version: str | None,
    ) -> ReferenceBodyRequest:
        return ReferenceBodyRequest(
            source=source,
            target=target,
            type=self._config.reference_type(relationship),
            custom_fields=ReferenceCustomFields(version=version) if version else None,
        )


def _search_transport_failure(kind: str, exc: httpx.HTTPError) -> SearchFailed:
    log.error("Ardoq %s search failed: %s", kind, exc)
    return SearchFailed(reason=f"{type(exc).__name__}: {exc}")


def _search_status_failure(kind: str, response: httpx.Response) -> SearchFailed:
    log.error("Ardoq %s search returned HTTP %s", kind, response.status_code)
    return SearchFailed(
        reason=f"unexpected HTTP {response.status_code}",
        status_code=response.status_code,
    )


def _write_transport_failure(action: str, exc: httpx.HTTPError) -> WriteRejected:
    log.error("Unable to %s: %s", action, exc)
    return WriteRejected(reason=f"{type(exc).__name__}: {exc}")


def _write_status_failure(action: str, response: httpx.Response) -> WriteRejected:
    log.error("Unable to %s: HTTP %s", action, response.status_code)
    return WriteRejected(
        reason=f"unexpected HTTP {response.status_code}",
        status_code=response.status_code,
        version_conflict=response.status_code in _VERSION_CONFLICT_STATUSES,
    )

