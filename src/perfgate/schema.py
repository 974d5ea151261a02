"""Generate JSON Schema for the assert config format."""

from __future__ import annotations

import json
from pathlib import Path

from perfgate.config import AssertConfig


def generate_json_schema() -> dict:
    schema = AssertConfig.model_json_schema(by_alias=True)
    # assertMatrix nests AssertConfig, so the top level is a $ref
    ref = schema.pop("$ref", None)
    if ref is not None:
        schema = {**schema["$defs"][ref.removeprefix("#/$defs/")], **schema}
    return schema


def write_json_schema(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    schema = generate_json_schema()
    path.write_text(json.dumps(schema, indent=2) + "\n")
