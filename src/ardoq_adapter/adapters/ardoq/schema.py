"""Ardoq REST v2 payload schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ArdoqBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ReferenceCustomFields(ArdoqBaseModel):
    version: str | None = None


class ComponentPayload(ArdoqBaseModel):
    id: str = Field(alias="_id")
    name: str | None = None
    root_workspace: str | None = Field(default=None, alias="rootWorkspace")
    type_id: str | None = Field(default=None, alias="typeId")


class ReferencePayload(ArdoqBaseModel):
    id: str = Field(alias="_id")
    source: str | None = None
    target: str | None = None
    type: int | None = None
    custom_fields: ReferenceCustomFields | None = Field(default=None, alias="customFields")

    @property
    def version(self) -> str | None:
        return self.custom_fields.version if self.custom_fields else None


class ComponentSearchResponse(ArdoqBaseModel):
    values: list[ComponentPayload] = Field(default_factory=list["ComponentPayload"])


class ReferenceSearchResponse(ArdoqBaseModel):
    values: list[ReferencePayload] = Field(default_factory=list["ReferencePayload"])


class ComponentCreateRequest(ArdoqBaseModel):
    root_workspace: str = Field(serialization_alias="rootWorkspace")
    name: str
    type_id: str = Field(serialization_alias="typeId")


class ReferenceBodyRequest(ArdoqBaseModel):
    source: str
    target: str
    type: int
    custom_fields: ReferenceCustomFields | None = Field(
        default=None, serialization_alias="customFields"
    )


class ReferenceVersionPatch(ArdoqBaseModel):
    custom_fields: ReferenceCustomFields = Field(serialization_alias="customFields")


class BatchCreateRequest(ArdoqBaseModel):
    body: ReferenceBodyRequest


class BatchUpdateRequest(ArdoqBaseModel):
    id: str
    if_version_match: str = Field(serialization_alias="ifVersionMatch")
    body: ReferenceBodyRequest


class ReferenceBatchOperations(ArdoqBaseModel):
    create: list[BatchCreateRequest] = Field(default_factory=list["BatchCreateRequest"])
    update: list[BatchUpdateRequest] = Field(default_factory=list["BatchUpdateRequest"])


class BatchRequest(ArdoqBaseModel):
    references: ReferenceBatchOperations


def dump_request(model: BaseModel) -> dict[str, object]:
    return model.model_dump(by_alias=True, exclude_none=True)
