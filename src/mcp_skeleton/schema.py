"""Helpers for building tool input schemas.

The ``create_*`` builders produce the simplified JSON-Schema fragments used
in tool descriptors. ``schema_from_signature`` derives the same shape from a
function's type annotations and Google-style docstring.
"""

import inspect
import typing
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Union, get_args, get_origin, get_type_hints


def create_input_schema(
    properties: Optional[Dict[str, Dict[str, Any]]] = None,
    required: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    """Create an object input schema.

    ``properties`` is always a JSON object, ``{}`` when no properties are
    declared, so that JSON-Schema consumers never see an array there.

    Args:
        properties: Mapping from property name to property schema
        required: Names of required properties, in order

    Returns:
        Input schema dictionary
    """
    return {
        "type": "object",
        "properties": dict(properties) if properties else {},
        "required": list(required) if required else [],
    }


def create_property(type: str, description: Optional[str] = None, default: Any = None) -> Dict[str, Any]:
    """Create a property definition of the given JSON type."""
    prop: Dict[str, Any] = {"type": type}
    if description is not None:
        prop["description"] = description
    if default is not None:
        prop["default"] = default
    return prop


def create_enum_property(
    values: Sequence[str], description: Optional[str] = None, default: Optional[str] = None
) -> Dict[str, Any]:
    """Create a string property restricted to ``values``."""
    prop: Dict[str, Any] = {"type": "string", "enum": list(values)}
    if description is not None:
        prop["description"] = description
    if default is not None:
        prop["default"] = default
    return prop


def create_array_property(
    items: Optional[Dict[str, Any]] = None, description: Optional[str] = None
) -> Dict[str, Any]:
    """Create an array property, optionally typing its items."""
    prop: Dict[str, Any] = {"type": "array"}
    if items:
        prop["items"] = items
    if description is not None:
        prop["description"] = description
    return prop


def python_type_to_json_schema(type_hint: Any) -> Dict[str, Any]:
    """Convert a Python type hint to a property schema.

    Args:
        type_hint: The Python type annotation

    Returns:
        Property schema dictionary
    """
    if type_hint is str:
        return {"type": "string"}
    elif type_hint is bool:
        return {"type": "boolean"}
    elif type_hint is int:
        return {"type": "integer"}
    elif type_hint is float:
        return {"type": "number"}

    origin = get_origin(type_hint)
    args = get_args(type_hint)

    # Optional[T] maps to T; optionality is expressed through ``required``
    if origin is Union:
        non_none_args = [arg for arg in args if arg is not type(None)]
        if len(non_none_args) == 1:
            return python_type_to_json_schema(non_none_args[0])
        return {"type": "string"}

    if type_hint is list or origin is list:
        if args:
            return create_array_property(python_type_to_json_schema(args[0]))
        return create_array_property()

    if type_hint is dict or origin is dict:
        return {"type": "object"}

    if origin is typing.Literal:
        return create_enum_property([str(arg) for arg in args])

    if inspect.isclass(type_hint) and issubclass(type_hint, Enum):
        return create_enum_property([str(item.value) for item in type_hint])

    # Unknown annotations are passed as strings
    return {"type": "string"}


def parse_docstring_params(docstring: Optional[str]) -> Dict[str, str]:
    """Parse parameter descriptions from the ``Args:`` section of a docstring.

    Args:
        docstring: The function's docstring

    Returns:
        Dictionary mapping parameter names to descriptions
    """
    if not docstring:
        return {}

    params: Dict[str, str] = {}
    current_param: Optional[str] = None
    current_desc: List[str] = []
    in_params_section = False
    section_indent = 0
    param_indent = 0

    for raw_line in inspect.cleandoc(docstring).split("\n"):
        line = raw_line.strip()
        indent = len(raw_line) - len(raw_line.lstrip())

        if line in ("Args:", "Arguments:", "Parameters:", "Params:"):
            in_params_section = True
            section_indent = indent
            continue

        if not in_params_section or not line:
            continue

        if indent <= section_indent:
            # Another section started
            in_params_section = False
            continue

        if current_param is not None and indent > param_indent:
            current_desc.append(line)
            continue

        if ":" in line:
            if current_param is not None:
                params[current_param] = " ".join(current_desc).strip()
            name_part, desc_part = line.split(":", 1)
            # "name (type): description"
            current_param = name_part.split("(")[0].strip()
            current_desc = [desc_part.strip()] if desc_part.strip() else []
            param_indent = indent

    if current_param is not None:
        params[current_param] = " ".join(current_desc).strip()

    return {name: desc for name, desc in params.items() if desc}


def schema_from_signature(func: Callable[..., Any]) -> Dict[str, Any]:
    """Build an input schema from a function's parameters.

    Parameters without a default (and not annotated ``Optional``) are
    required. Descriptions come from the docstring's ``Args:`` section.

    Args:
        func: The function to describe

    Returns:
        Input schema dictionary
    """
    signature = inspect.signature(func)
    try:
        hints = get_type_hints(func)
    except (NameError, TypeError):
        hints = {}
    descriptions = parse_docstring_params(func.__doc__)

    properties: Dict[str, Dict[str, Any]] = {}
    required: List[str] = []

    for param_name, param in signature.parameters.items():
        if param_name == "self" or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue

        annotation = hints.get(param_name, param.annotation)
        if annotation is inspect.Parameter.empty:
            prop: Dict[str, Any] = {"type": "string"}
        else:
            prop = python_type_to_json_schema(annotation)

        if param_name in descriptions:
            prop["description"] = descriptions[param_name]
        if param.default is not inspect.Parameter.empty and param.default is not None:
            default = param.default.value if isinstance(param.default, Enum) else param.default
            prop["default"] = default

        properties[param_name] = prop

        if param.default is inspect.Parameter.empty:
            is_optional = get_origin(annotation) is Union and type(None) in get_args(annotation)
            if not is_optional:
                required.append(param_name)

    return create_input_schema(properties, required)
