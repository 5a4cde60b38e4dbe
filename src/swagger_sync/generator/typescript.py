"""TypeScript output for a snapshot: definition classes, the ``api.d.ts``
namespace file and per-module endpoint files.
"""

from swagger_sync.generator.template import TemplateRenderer
from swagger_sync.parser.base import Definition, Snapshot
from swagger_sync.parser.types import DEFS_NAMESPACE


def _indent(text: str, prefix: str = "  ") -> str:
    return "\n".join(prefix + line if line else line for line in text.split("\n"))


def _doc(description: str | None) -> list[str]:
    return [f"/** {description} */"] if description else []


def definition_class(definition: Definition) -> str:
    """Declaration class used inside ``declare namespace defs``."""
    lines = []
    for prop in definition.properties:
        lines.extend(_doc(prop.description))
        optional = "" if prop.required else "?"
        lines.append(f"{prop.name}{optional}: {prop.final_type};")
    return "class {} {{\n{}\n}}".format(definition.name, _indent("\n".join(lines)))


def definition_value_class(definition: Definition) -> str:
    """Module exporting a class whose fields carry their initial values."""
    imports = [f"import {dep} from './{dep}';" for dep in definition.deps]

    lines = []
    for prop in definition.properties:
        initial_value = prop.initial_value
        if initial_value == f"new {definition.name}()":
            initial_value = f"{{}} as {definition.name}"
        if not initial_value:
            continue
        lines.extend(_doc(prop.description))
        lines.append(f"{prop.name} = {initial_value};")

    body = "export default class {} {{\n{}\n}}\n".format(definition.name, _indent("\n".join(lines)))
    if imports:
        return "\n".join(imports) + "\n\n" + body
    return body


def definitions_index(names: list[str]) -> str:
    imports = "\n".join(f"import {name} from './{name}';" for name in names)
    return f"{imports}\n\nexport {{ {', '.join(names)} }};\n"


def namespace_file(snapshot: Snapshot, renderer: TemplateRenderer) -> str:
    """Render ``api.d.ts`` with every definition and endpoint declaration."""
    defs = "\n\n".join(f"export {definition_class(d)}" for d in snapshot.definitions)

    mods = []
    for mod in snapshot.mods:
        same_path = mod.interfaces[0].same_path if mod.interfaces else ""
        inters = []
        for inter in mod.interfaces:
            inters.append(
                f"/**\n * {inter.summary}\n * {inter.path}\n */\n"
                f"export namespace {inter.name} {{\n{_indent(renderer.header(inter))}\n}}"
            )
        body = _indent("\n".join(inters))
        mods.append(
            f"/**\n * {mod.description}\n * {same_path}\n */\n"
            f"export namespace {mod.name} {{\n{body}\n}}"
        )

    api = _indent("\n".join(mods))
    return (
        f"declare namespace {DEFS_NAMESPACE} {{\n{_indent(defs)}\n}}\n\n"
        f"{renderer.common_header()}\n\n"
        f"declare namespace API {{\n{api}\n}}\n"
    )


def render_snapshot(snapshot: Snapshot, renderer: TemplateRenderer) -> dict[str, str]:
    """Render every output file of a snapshot.

    Returns a dict of {relative_path: content}.
    """
    files = {}

    for definition in snapshot.definitions:
        files[f"definitions/{definition.name}.ts"] = definition_value_class(definition)
    files["definitions/index.ts"] = definitions_index([d.name for d in snapshot.definitions])

    files["api.d.ts"] = namespace_file(snapshot, renderer)

    for mod in snapshot.mods:
        for inter in mod.interfaces:
            files[f"{mod.name}/{inter.name}.ts"] = renderer.implement(inter)
        names = [inter.name for inter in mod.interfaces]
        imports = "\n".join(f"import * as {name} from './{name}';" for name in names)
        files[f"{mod.name}/index.ts"] = f"{imports}\n\nexport {{ {', '.join(names)} }};\n"

    imports = "\n".join(f"import * as {mod.name} from './{mod.name}';" for mod in snapshot.mods)
    exported = ", ".join(mod.name for mod in snapshot.mods)
    files["index.ts"] = f"{imports}\n\n(window as any).API = {{ {exported} }};\n"

    return files
