"""Tests for pods, resources, variables and the environment."""

import json

import pytest

from podscratch.config import Options, load_options
from podscratch.constants import DEFAULT_FPS, PLAYED_SOUNDS_LIMIT
from podscratch.environment import POD_CLASSES, Environment, register_pod_class
from podscratch.errors import (
    AssemblyError,
    ConfigError,
    DuplicateResourceError,
    UnknownAssetError,
    UnknownPodError,
    UnknownResourceError,
    UnknownResourceTypeError,
    UnknownVariableError,
)
from podscratch.pod import ScratchPod
from podscratch.resources import ListVariable

from conftest import FakeClock, RecordingPod, click_flag, tick_n


# ── Resources ──────────────────────────────────────────


class TestResources:

    def test_stage_is_created_with_pod(self, pod):
        stage = pod.get_stage()
        assert stage.name == "stage"
        assert pod.get_resource_by_name("stage") is stage
        assert stage.current_backdrop == "backdrop1"

    def test_new_sprite(self, pod):
        sprite = pod.new_sprite("cat")
        assert pod.sprite("cat") is sprite
        assert (sprite.x, sprite.y, sprite.direction, sprite.shown) == (0, 0, 90, True)

    def test_duplicate_name(self, pod):
        pod.new_sprite("cat")
        with pytest.raises(DuplicateResourceError):
            pod.new_sprite("cat")

    def test_unknown_resource_type(self, pod):
        with pytest.raises(UnknownResourceTypeError):
            pod.new_resource("button", "ok")
        with pytest.raises(UnknownResourceTypeError):
            pod.get_resources_by_type("button")

    def test_resources_by_type(self, pod):
        pod.new_sprite("cat")
        pod.new_sprite("dog")
        assert sorted(pod.get_resources_by_type("sprite")) == ["cat", "dog"]
        assert list(pod.get_resources_by_type("stage")) == ["stage"]
        assert len(pod.get_all_resources()) == 3

    def test_delete_resource(self, pod):
        pod.new_sprite("cat")
        pod.delete_resource_by_name("cat")
        assert pod.get_resource_by_name("cat") is None
        with pytest.raises(UnknownResourceError):
            pod.delete_resource_by_name("cat")

    def test_unknown_sprite(self, pod):
        with pytest.raises(UnknownResourceError, match="No sprite with the name 'ghost' found."):
            pod.sprite("ghost")
        with pytest.raises(UnknownResourceError):
            pod.sprite("stage")

    def test_scripts_tick_in_creation_order(self, pod, clock):
        first = pod.new_sprite("first")
        second = pod.new_sprite("second")
        second.new_script().append("when_green_flag_clicked").append("record", "second")
        first.new_script().append("when_green_flag_clicked").append("record", "first 0")
        first.new_script().append("when_green_flag_clicked").append("record", "first 1")
        click_flag(pod, clock)
        pod.tick()
        assert pod.records == ["first 0", "first 1", "second"]


class TestSprite:

    def test_move_steps_follows_direction(self, sprite):
        sprite.move_steps(10)
        assert sprite.x == pytest.approx(10)
        assert sprite.y == pytest.approx(0)
        sprite.set_direction(0).move_steps(5)
        assert sprite.y == pytest.approx(5)
        sprite.set_direction(180).move_steps(5)
        assert sprite.y == pytest.approx(0)

    def test_costumes(self, sprite):
        sprite.load_costume("a").load_costume("b")
        assert sprite.current_costume == "a"
        sprite.set_costume("b")
        assert sprite.current_costume == "b"
        with pytest.raises(UnknownAssetError):
            sprite.set_costume("z")
        with pytest.raises(AssemblyError):
            sprite.load_costume("a")

    def test_sounds(self, sprite):
        sprite.load_sound("meow")
        sprite.play_sound("meow")
        assert sprite.playing == "meow"
        assert list(sprite.played_sounds) == ["meow"]
        sprite.stop_all_sounds()
        assert sprite.playing is None
        with pytest.raises(UnknownAssetError):
            sprite.play_sound("bark")

    def test_sound_log_keeps_only_recent_plays(self, pod, clock, sprite):
        sprite.load_sound("meow").load_sound("purr")
        builder = sprite.new_script().append("when_green_flag_clicked")
        builder.append("repeat", PLAYED_SOUNDS_LIMIT * 3).begin().append("play_sound", "meow").end()
        builder.append("play_sound", "purr")
        click_flag(pod, clock)
        tick_n(pod, PLAYED_SOUNDS_LIMIT * 3 + 5)
        assert len(sprite.played_sounds) == PLAYED_SOUNDS_LIMIT
        assert sprite.played_sounds[-1] == "purr"
        assert sprite.playing == "purr"

    def test_click_records_time(self, sprite, clock):
        clock.advance(3)
        sprite.click()
        assert sprite.last_click_time == clock.now()

    def test_backdrops(self, pod):
        stage = pod.get_stage()
        stage.load_backdrop("night").switch_backdrop("night")
        assert stage.current_backdrop == "night"
        with pytest.raises(UnknownAssetError):
            stage.switch_backdrop("day")


# ── Variables ──────────────────────────────────────────


class TestVariables:

    def test_global_variable(self, pod):
        pod.create_variable("score", 5)
        assert pod.has_variable("score")
        assert pod.get_variable("score") == 5
        pod.set_variable("score", 6)
        assert pod.get_variable("score") == 6

    def test_default_value_is_zero(self, pod):
        pod.create_variable("score")
        assert pod.get_variable("score") == 0

    def test_duplicate_variable(self, pod):
        pod.create_variable("score")
        with pytest.raises(AssemblyError, match="All Sprites already has a variable called 'score'"):
            pod.create_variable("score")

    def test_unknown_variable(self, pod):
        with pytest.raises(UnknownVariableError):
            pod.get_variable("nothing")
        with pytest.raises(UnknownVariableError):
            pod.get_list_variable("nothing")

    def test_sprite_variable_shadows_global(self, pod, clock, sprite):
        pod.create_variable("n", 1)
        sprite.create_variable("n", 10)
        other = pod.new_sprite("dog")
        sprite.new_script().append("when_green_flag_clicked").append("change_by", "n", 1)
        other.new_script().append("when_green_flag_clicked").append("change_by", "n", 100)
        click_flag(pod, clock)
        pod.tick()
        assert sprite.get_variable("n") == 11
        assert pod.get_variable("n") == 101

    def test_sprite_variable_error_names_sprite(self, sprite):
        sprite.create_variable("hp")
        with pytest.raises(AssemblyError, match="Sprite 'cat' already has a variable called 'hp'"):
            sprite.create_variable("hp")

    def test_show_variable(self, pod):
        variable = pod.create_variable("score")
        pod.show_variable("score", True, x=5, y=6)
        assert (variable.shown, variable.x, variable.y) == (True, 5, 6)
        pod.show_variable("score", False)
        assert variable.shown is False


class TestListVariable:

    def test_operations(self):
        items = ListVariable("places", ["a", "b"])
        items.add("c")
        items.insert_at("start", 0)
        items.replace_at("B", 2)
        assert items.items == ["start", "a", "B", "c"]
        assert items.get_at(1) == "a"
        assert items.length() == 4
        assert items.contains("c")
        items.delete_at(0)
        assert items.items == ["a", "B", "c"]
        items.delete_all()
        assert items.length() == 0

    def test_out_of_range(self):
        items = ListVariable("places", ["a"])
        assert items.get_at(1) == ""
        assert items.get_at(-1) == ""
        items.delete_at(5)
        items.replace_at("x", 5)
        items.insert_at("x", 5)
        assert items.items == ["a"]

    def test_items_are_copied(self):
        source = ["a"]
        items = ListVariable("places", source)
        items.add("b")
        assert source == ["a"]


# ── Pod controls ──────────────────────────────────────────


class TestPodControls:

    def test_stop_resets_and_silences(self, pod, clock, sprite):
        sprite.load_sound("meow")
        script = (
            sprite.new_script()
            .append("when_green_flag_clicked")
            .append("play_sound", "meow")
            .append("wait", 10)
            .script
        )
        click_flag(pod, clock)
        pod.tick()
        assert sprite.playing == "meow"
        assert pod.running is True
        pod.stop()
        assert sprite.playing is None
        assert script.ip == 0
        assert pod.green_flag_time == 0
        assert pod.running is False

    def test_running_is_false_once_scripts_finish(self, pod, clock, sprite):
        sprite.new_script().append("when_green_flag_clicked").append("change_x", 1)
        click_flag(pod, clock)
        assert pod.running is True
        tick_n(pod, 3)
        assert pod.running is False

    def test_broadcast_keyed_by_text(self, pod, clock):
        pod.broadcast(5)
        assert pod.last_broadcast_time("5") == clock.now()
        assert pod.last_broadcast_time("6") is None

    def test_seeded_random_is_repeatable(self, clock):
        first = ScratchPod(options={"seed": 3}, clock=clock)
        second = ScratchPod(options={"seed": 3}, clock=clock)
        assert first.random.random() == second.random.random()


# ── Environment ──────────────────────────────────────────


class FakeTimer:
    def __init__(self):
        self.time = 0.0
        self.sleeps = []

    def __call__(self):
        return self.time

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.time += seconds


class TestEnvironment:

    def test_pod_is_created_once(self, clock):
        env = Environment(clock=clock)
        pod = env.pod("scratch")
        assert isinstance(pod, ScratchPod)
        assert env.pod("scratch") is pod
        assert env.pods() == [pod]
        assert pod.clock is clock

    def test_unknown_pod(self):
        with pytest.raises(UnknownPodError, match="Unknown pod 'canvas'"):
            Environment().pod("canvas")

    def test_register_pod_class(self, clock):
        if "recording" not in POD_CLASSES:
            register_pod_class("recording", RecordingPod)
        with pytest.raises(AssemblyError):
            register_pod_class("recording", RecordingPod)
        env = Environment({"pod": {"recording": {"seed": 2}}}, clock=clock)
        pod = env.pod("recording")
        assert isinstance(pod, RecordingPod)
        assert pod.options == {"seed": 2}

    def test_tick_and_reset_reach_every_pod(self, clock):
        env = Environment(clock=clock)
        pod = env.pod("scratch")
        pod.create_variable("n", 0)
        sprite = pod.new_sprite("cat")
        script = (
            sprite.new_script()
            .append("when_green_flag_clicked")
            .append("change_by", "n", 1)
            .append("wait", 5)
            .script
        )
        env.tick()
        clock.advance(1)
        pod.click_green_flag()
        env.tick()
        assert pod.get_variable("n") == 1
        assert script.ip != 0
        env.reset_all_scripts()
        assert script.ip == 0

    def test_run_counts_frames(self):
        timer = FakeTimer()
        env = Environment({"fps": 10}, sleep=timer.sleep, timer=timer)
        assert env.run(ticks=5) == 5
        assert timer.sleeps == pytest.approx([0.1] * 5)

    def test_run_for_duration(self):
        timer = FakeTimer()
        env = Environment(sleep=timer.sleep, timer=timer)
        assert env.run(duration=0.5, fps=20) == 10
        assert env.run(ticks=3, duration=10) == 3

    def test_run_rejects_bad_fps(self):
        with pytest.raises(ConfigError):
            Environment().run(ticks=1, fps=0)

    def test_collect_diagnostics(self, clock):
        env = Environment(clock=clock)
        pod = env.pod("scratch")
        pod.new_sprite("cat").new_script().append("hide")
        env.tick()
        diagnostics = env.collect_diagnostics()
        assert diagnostics.has_warnings()
        assert not diagnostics.has_errors()
        assert diagnostics.summary() == "1 warning"


# ── Configuration ──────────────────────────────────────────


class TestOptions:

    def test_defaults(self):
        options = Options()
        assert options.fps == DEFAULT_FPS
        assert options.pod_options("scratch") == {}

    @pytest.mark.parametrize("fps", [0, -5, "fast", True, float("inf")])
    def test_bad_fps(self, fps):
        with pytest.raises(ConfigError):
            Options(fps=fps)

    def test_load_options(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"fps": 30, "pod": {"scratch": {"seed": 4}}}))
        options = load_options(str(path))
        assert options.fps == 30
        assert options.pod_options("scratch") == {"seed": 4}

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_options(str(tmp_path / "none.json")) == Options()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"fsp": 30}))
        with pytest.raises(ConfigError, match="Unknown option"):
            load_options(str(path))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text("{fps: 30")
        with pytest.raises(ConfigError, match="Could not parse"):
            load_options(str(path))
