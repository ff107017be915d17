"""Pytest fixtures shared across all test modules.

Provides a small hello-world OpenAPI document and a richer one that uses
``$ref`` components, nested objects and arrays.
"""

from __future__ import annotations

import copy
from typing import Any, Dict

import pytest

HELLO_PATH = "/generation-api/hello-world"

_HELLO_WORLD: Dict[str, Any] = {
    "openapi": "3.1.0",
    "info": {
        "title": "Hello World",
        "version": "1.0.0",
        "description": (
            "Respond with Hello to the name input in a language other than English. "
            "Always use a random language."
        ),
    },
    "paths": {
        HELLO_PATH: {
            "post": {
                "responses": {
                    "200": {
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "properties": {"text": {"type": "string"}},
                                }
                            }
                        }
                    }
                },
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {
                                "type": "object",
                                "properties": {
                                    "text": {
                                        "type": "string",
                                        "title": "User Name",
                                        "description": "The name of the user to be greeted.",
                                    }
                                },
                            }
                        }
                    },
                    "required": True,
                },
            }
        }
    },
    "components": {
        "securitySchemes": {
            "BearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
        }
    },
}

_PROFILE: Dict[str, Any] = {
    "openapi": "3.1.0",
    "info": {"title": "Profiles", "version": "1.0.0"},
    "paths": {
        "/profiles": {
            "post": {
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/ProfileRequest"}
                        }
                    }
                },
                "responses": {
                    "200": {
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Profile"}
                            }
                        }
                    }
                },
            },
            "get": {
                "responses": {"404": {"description": "never found"}},
            },
        }
    },
    "components": {
        "schemas": {
            "ProfileRequest": {
                "type": "object",
                "required": ["name"],
                "properties": {"name": {"type": "string"}},
            },
            "Address": {
                "type": "object",
                "properties": {
                    "city": {"type": "string"},
                    "zip": {"type": ["string", "null"]},
                },
            },
            "Profile": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "age": {"type": "integer"},
                    "score": {"type": "number"},
                    "active": {"type": "boolean"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                    "address": {"$ref": "#/components/schemas/Address"},
                    "extra": {},
                },
            },
        }
    },
}


@pytest.fixture()
def hello_world_spec() -> Dict[str, Any]:
    return copy.deepcopy(_HELLO_WORLD)


@pytest.fixture()
def profile_spec() -> Dict[str, Any]:
    return copy.deepcopy(_PROFILE)
