"""Unified data models for discovered API specifications.

Both supported schema families (OpenAPI 3.x and Swagger 2.0) are projected
into these models, so the web layer never needs to know which one a file
was written in.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .schema import OpenAPI3Document, Swagger2Document

OPENAPI3 = "openapi3"
SWAGGER2 = "swagger2"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Contact(_Frozen):
    name: str = ""
    url: str = ""
    email: str = ""


class License(_Frozen):
    name: str = ""
    url: str = ""


class Info(_Frozen):
    """The info block every spec carries, with all strings trimmed."""

    title: str = ""
    version: str = ""
    description: str = ""
    terms_of_service: str = Field("", alias="termsOfService")
    contact: Contact | None = None
    license: License | None = None


class OpenAPI3View(_Frozen):
    """Top-level OpenAPI 3.x / 3.1 sections, carried as opaque JSON data."""

    kind: Literal["openapi3"] = OPENAPI3
    openapi: str
    info: Info
    servers: Any = None
    paths: Any = None
    components: Any = None
    security: Any = None
    tags: Any = None
    external_docs: Any = Field(None, alias="externalDocs")
    json_schema_dialect: str | None = Field(None, alias="jsonSchemaDialect")
    webhooks: Any = None

    @property
    def marker(self) -> str:
        return self.openapi


class Swagger2View(_Frozen):
    """Top-level Swagger 2.0 sections, carried as opaque JSON data."""

    kind: Literal["swagger2"] = SWAGGER2
    swagger: str
    info: Info
    host: str | None = None
    base_path: str | None = Field(None, alias="basePath")
    schemes: list[str] | None = None
    consumes: list[str] | None = None
    produces: list[str] | None = None
    paths: Any = None
    definitions: Any = None
    parameters: Any = None
    responses: Any = None
    security_definitions: Any = Field(None, alias="securityDefinitions")
    security: Any = None
    tags: Any = None
    external_docs: Any = Field(None, alias="externalDocs")

    @property
    def marker(self) -> str:
        return self.swagger


SpecView = Annotated[Union[OpenAPI3View, Swagger2View], Field(discriminator="kind")]


class SpecDocument(_Frozen):
    """One discovered spec file.

    ``view`` holds exactly one of the two version-specific projections, and
    ``canonical`` the full parsed document it was projected from.
    """

    path: str
    file_name: str = Field(alias="fileName")
    format: Literal["yaml", "json"]
    raw: bytes = Field(repr=False, exclude=True)
    view: SpecView
    name: str
    service: str
    canonical: OpenAPI3Document | Swagger2Document = Field(repr=False, exclude=True)

    @property
    def schema_kind(self) -> str:
        return self.view.kind

    @property
    def is_openapi3(self) -> bool:
        return self.view.kind == OPENAPI3

    @property
    def is_swagger2(self) -> bool:
        return self.view.kind == SWAGGER2

    @property
    def version_string(self) -> str:
        return self.view.marker

    @property
    def openapi_version(self) -> str | None:
        return self.view.openapi if self.is_openapi3 else None

    @property
    def swagger_version(self) -> str | None:
        return self.view.swagger if self.is_swagger2 else None

    @property
    def info(self) -> Info:
        return self.view.info

    @property
    def title(self) -> str:
        return self.info.title

    @property
    def version(self) -> str:
        return self.info.version

    @property
    def description(self) -> str:
        return self.info.description

    def summary(self) -> dict[str, Any]:
        """JSON-ready listing record with the view's sections inlined."""
        data = self.view.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"kind"})
        data.update(
            {
                "name": self.name,
                "title": self.title,
                "version": self.version,
                "description": self.description,
                "path": self.path,
                "service": self.service,
                "format": self.format,
                "fileName": self.file_name,
            }
        )
        if self.is_openapi3:
            data["openapiVersion"] = self.openapi_version
        else:
            data["swaggerVersion"] = self.swagger_version
        return data
