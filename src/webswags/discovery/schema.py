"""Canonical OpenAPI 3.x and Swagger 2.0 documents.

These models type only the top level of each document: the version marker,
the info block and the shape of each section container. Everything below a
section is kept as plain JSON data, and unknown keys (``x-`` extensions and
the like) are preserved as extras. This is structural checking, not schema
validation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

JsonObject = dict[str, Any]


class _Document(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class DocContact(_Document):
    name: str = ""
    url: str = ""
    email: str = ""

    @field_validator("name", "url", "email", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return "" if value is None else value


class DocLicense(_Document):
    name: str = ""
    url: str = ""

    @field_validator("name", "url", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return "" if value is None else value


class DocInfo(_Document):
    title: str = ""
    version: str = ""
    description: str = ""
    terms_of_service: str = Field("", alias="termsOfService")
    contact: DocContact | None = None
    license: DocLicense | None = None

    @field_validator("title", "version", "description", "terms_of_service", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return "" if value is None else value


class OpenAPI3Document(_Document):
    """A full OpenAPI 3.0 / 3.1 document."""

    openapi: str
    info: DocInfo | None = None
    servers: list[JsonObject] | None = None
    paths: JsonObject | None = None
    components: JsonObject | None = None
    security: list[JsonObject] | None = None
    tags: list[JsonObject] | None = None
    external_docs: JsonObject | None = Field(None, alias="externalDocs")
    # 3.1 additions
    json_schema_dialect: str | None = Field(None, alias="jsonSchemaDialect")
    webhooks: JsonObject | None = None


class Swagger2Document(_Document):
    """A full Swagger 2.0 document."""

    swagger: str
    info: DocInfo | None = None
    host: str | None = None
    base_path: str | None = Field(None, alias="basePath")
    schemes: list[str] | None = None
    consumes: list[str] | None = None
    produces: list[str] | None = None
    paths: JsonObject | None = None
    definitions: JsonObject | None = None
    parameters: JsonObject | None = None
    responses: JsonObject | None = None
    security_definitions: JsonObject | None = Field(None, alias="securityDefinitions")
    security: list[JsonObject] | None = None
    tags: list[JsonObject] | None = None
    external_docs: JsonObject | None = Field(None, alias="externalDocs")


def dump_document(doc: OpenAPI3Document | Swagger2Document) -> JsonObject:
    """Re-serialize a canonical document to its JSON form."""
    return doc.model_dump(mode="json", by_alias=True, exclude_none=True)
