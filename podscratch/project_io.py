import os
from typing import Any, Dict, List, Optional

from .config import Options
from .constants import DEFAULT_FPS, RESOURCE_SPRITE
from .environment import Environment
from .errors import AssemblyError, ConfigError, ProjectError
from .pod import ScratchPod
from .resources import Resource, Sprite
from .script import ScriptBuilder
from .utils import load_json_file, write_json_file


# Key marking a script argument that is itself a reporter, e.g.
# ["go_xy", 0, {"block": ["random_from_to", -100, 100]}]
NESTED_BLOCK_KEY = "block"


def _require_list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ProjectError(f"Invalid project: {where} must be a list", detail=f"got {type(value).__name__}")
    return value


def _require_dict(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ProjectError(f"Invalid project: {where} must be an object", detail=f"got {type(value).__name__}")
    return value


def _entry_name(entry: Any, where: str) -> str:
    entry = _require_dict(entry, where)
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ProjectError(f"Invalid project: {where} needs a 'name'")
    return name


def load_variables(scope: Any, entries: Any, where: str) -> None:
    for entry in _require_list(entries, f"{where} variables"):
        name = _entry_name(entry, f"{where} variable")
        variable = scope.create_variable(name, entry.get("value", 0))
        variable.shown = bool(entry.get("shown", False))


def load_lists(scope: Any, entries: Any, where: str) -> None:
    for entry in _require_list(entries, f"{where} lists"):
        name = _entry_name(entry, f"{where} list")
        list_variable = scope.create_list_variable(name, _require_list(entry.get("value"), f"list '{name}' value"))
        list_variable.shown = bool(entry.get("shown", False))


def append_entry(builder: ScriptBuilder, entry: Any) -> None:
    """Append one ``[kind, arguments...]`` entry; nested reporters recurse."""
    if not isinstance(entry, list) or not entry or not isinstance(entry[0], str):
        raise ProjectError("Script entries must be lists starting with a block kind", detail=repr(entry))
    builder.append(entry[0])
    for argument in entry[1:]:
        if isinstance(argument, dict) and NESTED_BLOCK_KEY in argument:
            append_entry(builder, argument[NESTED_BLOCK_KEY])
        else:
            builder.c(argument)


def load_scripts(resource: Resource, scripts: Any) -> None:
    for script_index, entries in enumerate(_require_list(scripts, f"'{resource.name}' scripts")):
        builder = resource.new_script()
        for entry_index, entry in enumerate(_require_list(entries, f"'{resource.name}' script {script_index}")):
            try:
                append_entry(builder, entry)
            except ProjectError:
                raise
            except AssemblyError as e:
                raise ProjectError(
                    f"Invalid script for '{resource.name}'",
                    detail=f"script {script_index} entry {entry_index}: {e}",
                ) from e


def load_sprite(pod: ScratchPod, data: Any) -> Sprite:
    name = _entry_name(data, "sprite")
    sprite = pod.new_sprite(name)
    for costume in _require_list(data.get("costumes"), f"sprite '{name}' costumes"):
        sprite.load_costume(str(costume))
    for sound in _require_list(data.get("sounds"), f"sprite '{name}' sounds"):
        sprite.load_sound(str(sound))
    sprite.go_xy(float(data.get("x", 0)), float(data.get("y", 0)))
    sprite.set_direction(float(data.get("direction", 90)))
    sprite.set_shown(bool(data.get("shown", True)))
    load_variables(sprite, data.get("variables"), f"sprite '{name}'")
    load_lists(sprite, data.get("lists"), f"sprite '{name}'")
    return sprite


def build_project(data: Any, env: Optional[Environment] = None) -> Environment:
    """Populate the scratch pod of ``env`` (a new one if not given) from project data.

    Every sprite and the stage are created before any script is appended, so
    scripts can refer to variables declared further down the file.
    """
    data = _require_dict(data, "project")
    if env is None:
        try:
            env = Environment(Options(fps=data.get("fps", DEFAULT_FPS), pod={"scratch": {"seed": data.get("seed")}}))
        except ConfigError as e:
            raise ProjectError("Invalid project settings", detail=str(e)) from e
    pod = env.pod("scratch")

    try:
        load_variables(pod, data.get("variables"), "project")
        load_lists(pod, data.get("lists"), "project")

        sprites = [load_sprite(pod, entry) for entry in _require_list(data.get("sprites"), "sprites")]

        stage = pod.get_stage()
        stage_data = _require_dict(data.get("stage", {}), "stage")
        for backdrop in _require_list(stage_data.get("backdrops"), "stage backdrops"):
            if str(backdrop) not in stage.backdrops:
                stage.load_backdrop(str(backdrop))
        for sound in _require_list(stage_data.get("sounds"), "stage sounds"):
            stage.load_sound(str(sound))
        if stage_data.get("backdrop"):
            stage.switch_backdrop(str(stage_data["backdrop"]))
    except ProjectError:
        raise
    except (AssemblyError, ValueError, TypeError) as e:
        raise ProjectError("Invalid project", detail=str(e)) from e

    sprite_entries = _require_list(data.get("sprites"), "sprites")
    for sprite, entry in zip(sprites, sprite_entries):
        load_scripts(sprite, entry.get("scripts"))
    load_scripts(stage, stage_data.get("scripts"))
    return env


def load_project(path: str, env: Optional[Environment] = None) -> Environment:
    """Load the project at ``path``; returns the environment holding its scratch pod."""
    if not os.path.isfile(path):
        raise ProjectError(f"Project not found: {path}")
    try:
        data = load_json_file(path, None)
    except ValueError as e:
        raise ProjectError(f"Could not parse project file: {path}", detail=str(e)) from e
    return build_project(data, env)


def dump_state(pod: ScratchPod) -> Dict[str, Any]:
    """Snapshot of what a renderer would need: sprite poses and variable values."""
    sprites = []
    for name, sprite in pod.get_resources_by_type(RESOURCE_SPRITE).items():
        sprites.append({
            "name": name,
            "x": sprite.x,
            "y": sprite.y,
            "direction": sprite.direction,
            "shown": sprite.shown,
            "costume": sprite.current_costume,
            "variables": {v.name: v.value for v in sprite.variables.values()},
            "lists": {lst.name: list(lst.items) for lst in sprite.list_variables.values()},
        })
    return {
        "running": pod.running,
        "backdrop": pod.get_stage().current_backdrop,
        "variables": {v.name: v.value for v in pod.variables.values()},
        "lists": {lst.name: list(lst.items) for lst in pod.list_variables.values()},
        "sprites": sprites,
    }


def save_state(path: str, pod: ScratchPod) -> None:
    write_json_file(path, dump_state(pod))
