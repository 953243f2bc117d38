"""Shared fixtures for the openapi_wit test suite."""

import copy
from typing import Any

import pytest

from openapi_wit.codegen.core.config import GeneratorConfig
from openapi_wit.codegen.wit.generator import WitGenerator
from openapi_wit.codegen.wit.naming import create_wit_sanitizer
from openapi_wit.codegen.wit.types import WitTypeTranslator

_PET_REF = {"$ref": "#/components/schemas/Pet"}

PETSTORE: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {
        "title": "Petstore",
        "version": "1.0.0",
        "description": "A sample pet store.",
    },
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "summary": "List all pets",
                "parameters": [
                    {"name": "limit", "in": "query", "schema": {"type": "integer"}},
                    {
                        "name": "sort",
                        "in": "query",
                        "schema": {"type": "string", "enum": ["asc", "desc"]},
                    },
                ],
                "responses": {
                    "200": {
                        "description": "A list of pets",
                        "content": {
                            "application/json": {
                                "schema": {"type": "array", "items": _PET_REF}
                            }
                        },
                    }
                },
            },
            "post": {
                "operationId": "createPet",
                "requestBody": {
                    "required": True,
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/NewPet"}
                        }
                    },
                },
                "responses": {
                    "201": {
                        "description": "Created",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/PetResponse"}
                            }
                        },
                    }
                },
            },
        },
        "/pets/{petId}": {
            "parameters": [
                {
                    "name": "petId",
                    "in": "path",
                    "required": True,
                    "schema": {"type": "string", "format": "uuid"},
                }
            ],
            "delete": {
                "operationId": "deletePet",
                "responses": {"204": {"description": "Deleted"}},
            },
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "required": ["id", "name"],
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string"},
                    "tag": {"type": "string", "nullable": True},
                    "status": {"$ref": "#/components/schemas/Status"},
                },
            },
            "NewPet": {
                "allOf": [
                    {"type": "object", "properties": {"name": {"type": "string"}}},
                    {"type": "object", "properties": {"tag": {"type": "string"}}},
                ]
            },
            "Status": {"type": "string", "enum": ["available", "pending", "sold"]},
            "Tags": {"type": "object", "additionalProperties": {"type": "integer"}},
            "Animal": {
                "oneOf": [_PET_REF, {"$ref": "#/components/schemas/NewPet"}],
            },
            "PetResponse": {
                "type": "object",
                "properties": {"data": _PET_REF},
            },
        }
    },
}

DEGRADED: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Degraded", "version": "0.1.0"},
    "paths": {},
    "components": {
        "schemas": {
            "Loose": {
                "anyOf": [{"type": "string"}, {"type": "integer"}],
            },
            "Merged": {
                "allOf": [
                    {"type": "object", "properties": {"id": {"type": "integer"}}},
                    {"type": "object", "properties": {"id": {"type": "string"}}},
                ]
            },
            "Letters": {"type": "string", "enum": ["A", "a b", "A"]},
            "list": {
                "type": "object",
                "properties": {"size": {"type": "integer"}},
            },
        }
    },
}


@pytest.fixture
def petstore() -> dict[str, Any]:
    """A small petstore description covering every schema shape."""
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def degraded() -> dict[str, Any]:
    """A description whose schemas only translate with degradations."""
    return copy.deepcopy(DEGRADED)


@pytest.fixture
def sanitizer():
    return create_wit_sanitizer()


@pytest.fixture
def translator() -> WitTypeTranslator:
    return WitTypeTranslator()


@pytest.fixture
def generator() -> WitGenerator:
    return WitGenerator(GeneratorConfig())
