# barbershop/shaping.py

import asyncio
import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError

from .context import CallerContext
from .errors import InvalidInput
from .schemas import FieldSelection, NoArgs


@dataclass
class FieldSpec:
    # resolve(parent, args, ctx) may be sync or async; type_name results are
    # shaped again with the nested selection
    resolve: Callable
    args: type[BaseModel] = NoArgs
    type_name: Optional[str] = None
    default: bool = False


def attribute(name: str) -> Callable:
    def resolve(parent, _args, _ctx):
        value = getattr(parent, name)
        return value.value if isinstance(value, Enum) else value

    return resolve


def parse_arguments(model: type[BaseModel], arguments: dict[str, Any]) -> BaseModel:
    try:
        return model.model_validate(arguments)
    except ValidationError as exc:
        raise InvalidInput(exc.errors(include_url=False, include_context=False, include_input=False))


async def resolve_field(
    ctx: CallerContext,
    types: dict[str, dict[str, FieldSpec]],
    spec: FieldSpec,
    parent: Any,
    item: FieldSelection,
) -> Any:
    args = parse_arguments(spec.args, item.arguments)
    result = spec.resolve(parent, args, ctx)
    if inspect.isawaitable(result):
        result = await result
    if spec.type_name:
        return await shape(ctx, types, spec.type_name, result, item.selection)
    return result


async def shape(
    ctx: CallerContext,
    types: dict[str, dict[str, FieldSpec]],
    type_name: str,
    value: Any,
    selection: list[FieldSelection],
) -> Any:
    # render value as plain data, resolving only the selected fields
    if value is None:
        return None
    if isinstance(value, list):
        return list(await asyncio.gather(*(shape(ctx, types, type_name, item, selection) for item in value)))

    fields = types[type_name]
    if not selection:
        selection = [FieldSelection(name=name) for name, spec in fields.items() if spec.default]

    pending = []
    for item in selection:
        spec = fields.get(item.name)
        if spec is None:
            raise InvalidInput(f"Unknown field {type_name}.{item.name}")
        pending.append(resolve_field(ctx, types, spec, value, item))

    results = await asyncio.gather(*pending)
    return {item.name: result for item, result in zip(selection, results)}
