"""Normalized data models for a parsed API description.

The snapshot builder converts the raw Swagger document into these models;
the diff engine, impact graph and generators only ever see this shape.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field

from . import types
from .naming import parse_owners

logger = logging.getLogger(__name__)


class Property(BaseModel):
    """A single field of a type definition."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: str | None = None  # integer / number / string / boolean / array / object
    enum: list | None = None
    items: dict | None = None  # {type, $ref}
    ref: str | None = Field(default=None, alias="$ref")
    description: str | None = None
    required: bool = False

    @property
    def final_type(self) -> str:
        return types.field_type(self.type, self.enum, self.items, self.ref)

    @property
    def initial_value(self) -> str:
        return types.field_initial_value(self.type, self.ref)

    def dep(self, owner: str | None = None) -> str:
        """Definition this field depends on; references to ``owner`` itself are ignored."""
        return types.field_dep(self.ref, self.items, owner)


class Parameter(BaseModel):
    """A single endpoint parameter (query, body, path, header or formData)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    location: str | None = Field(default=None, alias="in")
    description: str | None = None
    required: bool = False
    type: str | None = None
    items: dict | None = None
    schema_: dict | None = Field(default=None, alias="schema")

    @property
    def final_type(self) -> str:
        return types.parameter_type(self.type, self.items, self.schema_)


class Schema(BaseModel):
    """Response shape of an endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    type: str | None = None
    items: dict | None = None
    ref: str | None = Field(default=None, alias="$ref")

    @property
    def final_type(self) -> str:
        return types.field_type(self.type, None, self.items, self.ref)

    @property
    def initial_value(self) -> str:
        if self.ref:
            return types.field_initial_value(self.type, self.ref, namespaced=True)
        if self.type == types.ARRAY:
            return "[]"
        return ""

    @property
    def dep(self) -> str:
        return types.field_dep(self.ref, self.items)


class Interface(BaseModel):
    """A single API endpoint with its derived name and types."""

    model_config = ConfigDict(populate_by_name=True)

    method: str  # get / post / put / delete / patch
    path: str
    name: str = ""
    summary: str = ""
    description: str = ""
    tags: list[str] = []
    consumes: list[str] = []
    operation_id: str | None = Field(default=None, alias="operationId")
    parameters: list[Parameter] = []
    response: Schema = Field(default_factory=Schema)
    same_path: str = ""

    @property
    def body_params(self) -> str:
        return types.body_params(self.parameters)

    @property
    def params_type(self) -> str:
        return types.params_type(self.parameters)

    @property
    def response_type(self) -> str:
        return self.response.final_type

    @property
    def initial_value(self) -> str:
        return self.response.initial_value or "undefined"

    @property
    def dep(self) -> str:
        return self.response.dep


class Mod(BaseModel):
    """A group of endpoints sharing one tag."""

    name: str
    description: str = ""
    interfaces: list[Interface] = []
    fe_owners: list[str] = []
    be_owners: list[str] = []

    def refresh_owners(self) -> None:
        owners = parse_owners(self.description)
        self.fe_owners = owners.fe_owners
        self.be_owners = owners.be_owners


class Definition(BaseModel):
    """A named, reusable data shape.

    Only the durable identity lives here. Dependents and impacted modules
    are relative to a whole snapshot and are kept in an ``ImpactGraph``.
    """

    name: str
    description: str | None = None
    properties: list[Property] = []

    @property
    def deps(self) -> list[str]:
        """Distinct names of the definitions this one depends on, in field order."""
        names = []
        for prop in self.properties:
            dep = prop.dep(self.name)
            if dep and dep not in names:
                names.append(dep)
        return names


class Snapshot(BaseModel):
    """Modules and definitions of one API description at one point in time."""

    mods: list[Mod] = []
    definitions: list[Definition] = []

    def find_mod(self, name: str) -> Mod | None:
        return next((mod for mod in self.mods if mod.name == name), None)

    def find_definition(self, name: str) -> Definition | None:
        return next((d for d in self.definitions if d.name == name), None)

    def update_mod(self, mod: Mod) -> None:
        """Replace the module with the same name, or append it."""
        for index, existing in enumerate(self.mods):
            if existing.name == mod.name:
                logger.info("Module %s (%s) exists, updating it", mod.name, mod.description)
                self.mods[index] = mod
                return

        logger.info("Module %s (%s) does not exist, creating it", mod.name, mod.description)
        self.mods.append(mod)

    def update_definition(self, definition: Definition) -> None:
        """Replace the definition with the same name, or append it."""
        for index, existing in enumerate(self.definitions):
            if existing.name == definition.name:
                logger.info("Definition %s exists, updating it", definition.name)
                self.definitions[index] = definition
                return

        logger.info("Definition %s does not exist, creating it", definition.name)
        self.definitions.append(definition)
