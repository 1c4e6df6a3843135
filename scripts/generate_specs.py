#!/usr/bin/env python3
"""
Generate JSON Schemas, YAML variants, and OpenAPI from Pydantic models.

Outputs under src/specs/:
 - schemas/*.json (and *.yaml)
 - openapi.yaml and openapi.json
 - queries.yaml (named queries served by POST /api/query)
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import yaml


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
SPECS = SRC / "specs"
SCHEMAS_DIR = SPECS / "schemas"

sys.path.insert(0, str(ROOT))

from src.specs.models import SCHEMA_MODELS  # noqa: E402
from src.specs.queries_registry import QUERIES, QueryDef  # noqa: E402

# Public GET routes and the named query each one serves
PUBLIC_ROUTES = {
    "/featured": "getFeaturedContent",
    "/events/upcoming": "getUpcomingEvents",
    "/events/past": "getPastEvents",
    "/posts/recent": "getRecentPosts",
    "/music/featured": "getFeaturedMusic",
    "/music": "getMusicCatalog",
    "/videos": "getVideos",
    "/social-links": "getSocialLinks",
    "/profile": "getProfile",
}


def write_json_yaml(obj: dict, json_path: Path) -> None:
    json_path.parent.mkdir(parents=True, exist_ok=True)
    with json_path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
    yaml_path = json_path.with_suffix(".yaml")
    with yaml_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def write_yaml(obj: dict, yaml_path: Path) -> None:
    yaml_path.parent.mkdir(parents=True, exist_ok=True)
    with yaml_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def generate_model_schemas() -> None:
    for filename, model in SCHEMA_MODELS.items():
        schema = model.model_json_schema()
        write_json_yaml(schema, SCHEMAS_DIR / filename)


def _ref(name: str) -> dict:
    return {"$ref": f"#/components/schemas/{name}"}


def _json_content(name: str) -> dict:
    return {"application/json": {"schema": _ref(name)}}


def build_openapi() -> dict:
    defs = {d.name: d for d in QUERIES}
    schemas = {model.__name__: model.model_json_schema() for model in SCHEMA_MODELS.values()}
    error = {"description": "Error", "content": _json_content("ErrorResponse")}

    paths: dict = {}
    for route, query_name in PUBLIC_ROUTES.items():
        d = defs[query_name]
        parameters = [
            {"in": "query", "name": field, "schema": {"type": "integer", "minimum": 0}, "required": False}
            for field in d.input_model.model_fields
        ]
        paths[route] = {
            "get": {
                "summary": d.description,
                "operationId": query_name,
                "parameters": parameters,
                "responses": {
                    "200": {"description": "OK", "content": _json_content(d.output_model.__name__)},
                    "400": error,
                    "503": error,
                },
            }
        }

    paths["/query"] = {
        "post": {
            "summary": "Run a named query",
            "operationId": "query",
            "requestBody": {"required": True, "content": _json_content("QueryRequest")},
            "responses": {
                "200": {"description": "Query result or errors", "content": _json_content("QueryResponse")},
                "400": error,
            },
        }
    }
    paths["/contact"] = {
        "post": {
            "summary": "Submit a contact message",
            "operationId": "submitContact",
            "requestBody": {"required": True, "content": _json_content("ContactForm")},
            "responses": {
                "201": {"description": "Stored", "content": _json_content("MutationResponse")},
                "400": error,
                "503": error,
            },
        }
    }

    spec = {
        "openapi": "3.0.3",
        "info": {
            "title": "Portfolio Content API",
            "version": "0.1.0",
            "description": "Public HTTP endpoints exposed by the portfolio Azure Functions app.",
        },
        "servers": [
            {"url": "http://localhost:7071/api", "description": "Local Functions host"}
        ],
        "paths": paths,
        "components": {"schemas": schemas},
    }
    return spec


def generate_openapi() -> None:
    spec = build_openapi()
    write_json_yaml(spec, SPECS / "openapi.json")


def generate_queries_yaml() -> None:
    # Build a reverse map from model -> schema filename
    reverse = {model: filename for filename, model in SCHEMA_MODELS.items()}
    queries: list[dict] = []
    for q in QUERIES:
        assert isinstance(q, QueryDef)
        in_fname = reverse.get(q.input_model)
        out_fname = reverse.get(q.output_model)
        if not in_fname or not out_fname:
            raise KeyError(
                f"Schema filename not found for query {q.name}: "
                f"input={q.input_model.__name__}, output={q.output_model.__name__}"
            )
        queries.append(
            {
                "name": q.name,
                "description": q.description,
                "input": {"$ref": f"./schemas/{in_fname}"},
                "output": {"$ref": f"./schemas/{out_fname}"},
            }
        )

    doc = {"kind": "named-queries", "version": "0.1.0", "queries": queries}
    write_yaml(doc, SPECS / "queries.yaml")


def main() -> None:
    generate_model_schemas()
    generate_openapi()
    generate_queries_yaml()
    print("Specs generated under src/specs/")


if __name__ == "__main__":
    main()
