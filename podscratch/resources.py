"""Resources scripts are attached to, and the variables they hold.

These are headless models: a sprite knows where it is and which costume it
wears, but drawing it is left to whoever reads that state.
"""

import math
from collections import deque
from typing import TYPE_CHECKING, Any, Deque, Dict, List, Optional

from .constants import PLAYED_SOUNDS_LIMIT, RESOURCE_SPRITE, RESOURCE_STAGE
from .errors import AssemblyError, UnknownAssetError, UnknownVariableError
from .script import Script, ScriptBuilder

if TYPE_CHECKING:
    from .pod import Pod


# ============================================================================
# Variables
# ============================================================================

class Variable:
    """A named value, either pod-wide or local to one sprite."""

    def __init__(self, name: str, value: Any = 0, owner: Optional[str] = None) -> None:
        self.name = name
        self.value = value
        self.owner = owner
        self.shown = False
        self.x = 0
        self.y = 0

    def __repr__(self) -> str:
        return f"<Variable {self.name}={self.value!r}>"


class ListVariable:
    """A named list. Indexes taken by the methods below are 0-based."""

    def __init__(self, name: str, items: Optional[List[Any]] = None, owner: Optional[str] = None) -> None:
        self.name = name
        self.items: List[Any] = list(items or [])
        self.owner = owner
        self.shown = False
        self.x = 0
        self.y = 0

    def add(self, value: Any) -> None:
        self.items.append(value)

    def delete_all(self) -> None:
        self.items.clear()

    def delete_at(self, index: int) -> None:
        if 0 <= index < len(self.items):
            del self.items[index]

    def insert_at(self, value: Any, index: int) -> None:
        if 0 <= index <= len(self.items):
            self.items.insert(index, value)

    def replace_at(self, value: Any, index: int) -> None:
        if 0 <= index < len(self.items):
            self.items[index] = value

    def get_at(self, index: int) -> Any:
        if 0 <= index < len(self.items):
            return self.items[index]
        return ""

    def length(self) -> int:
        return len(self.items)

    def contains(self, value: Any) -> bool:
        return value in self.items

    def __repr__(self) -> str:
        return f"<ListVariable {self.name}={self.items!r}>"


class VariableScope:
    """Named variables and lists, shared by pods (global) and sprites (local)."""

    scope_label = "All Sprites"

    def _init_variables(self, owner: Optional[str] = None) -> None:
        self._owner = owner
        self.variables: Dict[str, Variable] = {}
        self.list_variables: Dict[str, ListVariable] = {}

    def create_variable(self, name: str, value: Any = 0) -> Variable:
        if name in self.variables:
            raise AssemblyError(f"{self.scope_label} already has a variable called '{name}'")
        variable = Variable(name, value, self._owner)
        self.variables[name] = variable
        return variable

    def create_list_variable(self, name: str, items: Optional[List[Any]] = None) -> ListVariable:
        if name in self.list_variables:
            raise AssemblyError(f"{self.scope_label} already has a list variable called '{name}'")
        list_variable = ListVariable(name, items, self._owner)
        self.list_variables[name] = list_variable
        return list_variable

    def has_variable(self, name: str) -> bool:
        return name in self.variables

    def has_list_variable(self, name: str) -> bool:
        return name in self.list_variables

    def _variable(self, name: str) -> Variable:
        if name not in self.variables:
            raise UnknownVariableError(f"{self.scope_label} does not have a variable called '{name}'")
        return self.variables[name]

    def get_variable(self, name: str) -> Any:
        return self._variable(name).value

    def set_variable(self, name: str, value: Any) -> None:
        self._variable(name).value = value

    def get_list_variable(self, name: str) -> ListVariable:
        if name not in self.list_variables:
            raise UnknownVariableError(f"{self.scope_label} does not have a list variable called '{name}'")
        return self.list_variables[name]

    def show_variable(self, name: str, shown: bool = True, x: Optional[int] = None, y: Optional[int] = None) -> None:
        variable = self._variable(name)
        if x is not None:
            variable.x = x
        if y is not None:
            variable.y = y
        variable.shown = shown

    def show_list_variable(self, name: str, shown: bool = True, x: Optional[int] = None, y: Optional[int] = None) -> None:
        list_variable = self.get_list_variable(name)
        if x is not None:
            list_variable.x = x
        if y is not None:
            list_variable.y = y
        list_variable.shown = shown


# ============================================================================
# Resources
# ============================================================================

class Resource(VariableScope):
    """A named subject that scripts are attached to."""

    def __init__(self, pod: "Pod", name: str, resource_type: str) -> None:
        self.pod = pod
        self.name = name
        self.resource_type = resource_type
        self.scripts: List[Script] = []
        self._init_variables(owner=name)

    @property
    def scope_label(self) -> str:  # type: ignore[override]
        return f"{self.resource_type.capitalize()} '{self.name}'"

    def new_script(self) -> ScriptBuilder:
        script = Script(self, len(self.scripts))
        self.scripts.append(script)
        return ScriptBuilder(script)

    def reset_scripts(self) -> None:
        for script in self.scripts:
            script.reset()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class SoundMixin:
    """Sound bookkeeping. Playback itself happens elsewhere."""

    def _init_sounds(self) -> None:
        self.sounds: Dict[str, str] = {}
        self.played_sounds: Deque[str] = deque(maxlen=PLAYED_SOUNDS_LIMIT)
        self.playing: Optional[str] = None

    def load_sound(self, name: str, src: str = ""):
        self.sounds[name] = src
        return self

    def play_sound(self, name: str):
        if name not in self.sounds:
            raise UnknownAssetError(f"'{self.name}' does not have a sound called '{name}'")
        self.playing = name
        self.played_sounds.append(name)
        return self

    def stop_all_sounds(self):
        self.playing = None
        return self


class Sprite(SoundMixin, Resource):
    """An actor with a position, a heading and a costume."""

    def __init__(self, pod: "Pod", name: str) -> None:
        super().__init__(pod, name, RESOURCE_SPRITE)
        self._init_sounds()
        self.x = 0.0
        self.y = 0.0
        # Scratch directions: 0 is up, 90 is right, -90 is left, 180 is down
        self.direction = 90.0
        self.shown = True
        self.costumes: Dict[str, Dict[str, Any]] = {}
        self.current_costume: Optional[str] = None
        # 0 until the sprite is clicked; compared by "when_sprite_clicked"
        self.last_click_time = 0.0

    def load_costume(self, name: str, src: str = "", scale: float = 1.0) -> "Sprite":
        if name in self.costumes:
            raise AssemblyError(f"Sprite '{self.name}' already has a costume called '{name}'")
        self.costumes[name] = {"src": src, "scale": scale}
        if self.current_costume is None:
            self.current_costume = name
        return self

    def set_costume(self, name: str) -> "Sprite":
        if name not in self.costumes:
            raise UnknownAssetError(f"Sprite '{self.name}' does not have a costume called '{name}'")
        self.current_costume = name
        return self

    def set_shown(self, shown: bool) -> "Sprite":
        self.shown = shown
        return self

    def hide(self) -> "Sprite":
        return self.set_shown(False)

    def show(self) -> "Sprite":
        return self.set_shown(True)

    def move_steps(self, steps: float) -> "Sprite":
        rad = math.radians(self.direction)
        self.x += steps * math.sin(rad)
        self.y += steps * math.cos(rad)
        return self

    def translate(self, dx: float, dy: float) -> "Sprite":
        self.x += dx
        self.y += dy
        return self

    def set_direction(self, degrees: float) -> "Sprite":
        self.direction = degrees
        return self

    def go_xy(self, x: float, y: float) -> "Sprite":
        self.x = x
        self.y = y
        return self

    def click(self) -> "Sprite":
        self.last_click_time = self.pod.clock.now()
        return self


class Stage(SoundMixin, Resource):
    """The backdrop every sprite plays on."""

    def __init__(self, pod: "Pod", name: str) -> None:
        super().__init__(pod, name, RESOURCE_STAGE)
        self._init_sounds()
        self.backdrops: Dict[str, str] = {}
        self.current_backdrop: Optional[str] = None

    def load_backdrop(self, name: str, src: str = "") -> "Stage":
        if name in self.backdrops:
            raise AssemblyError(f"Stage already has a backdrop called '{name}'")
        self.backdrops[name] = src
        return self

    def switch_backdrop(self, name: str) -> "Stage":
        if name not in self.backdrops:
            raise UnknownAssetError(f"Stage does not contain a backdrop with name '{name}'")
        self.current_backdrop = name
        return self
