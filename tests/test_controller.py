"""Tests for CounterController decision logic."""

from countup.config import CounterConfig
from countup.controller import CounterController, CounterState
from countup.easing import DEFAULT_EASING
from countup.engine import CountUp
from countup.registry import SessionRegistry, get_session_registry


class RecordingEngine(CountUp):
    """CountUp that remembers how it was built and how often it ticked."""

    instances = []

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.kwargs = kwargs
        self.ticks = 0
        RecordingEngine.instances.append(self)

    def tick(self, now=None):
        self.ticks += 1
        return super().tick(now)


def _controller(config, registry, clock):
    RecordingEngine.instances = []
    return CounterController(
        config, registry=registry, engine_factory=RecordingEngine, clock=clock,
    )


def _run_to_end(controller, clock, step=0.1, limit=100):
    values = [controller.evaluate()]
    for _ in range(limit):
        if controller.is_settled:
            break
        clock.advance(step)
        values.append(controller.evaluate())
    return values


def test_first_mount_animates_and_commits(clock):
    registry = SessionRegistry()
    config = CounterConfig(name="x", start=0, end=100, duration=2, persist=True)
    controller = _controller(config, registry, clock)

    values = _run_to_end(controller, clock)

    assert values[0] == 0
    assert values == sorted(values)
    assert len(set(values)) > 2
    assert values[-1] == 100
    assert controller.state is CounterState.SETTLED
    assert registry.get("x") == 100


def test_engine_built_with_out_cubic(clock):
    registry = SessionRegistry()
    controller = _controller(CounterConfig(name="x", end=10, duration=3), registry, clock)
    controller.mount()
    kwargs = RecordingEngine.instances[0].kwargs
    assert kwargs["easing"] == DEFAULT_EASING == "out_cubic"
    assert kwargs["start"] == 0
    assert kwargs["end"] == 10
    assert kwargs["duration"] == 3
    assert kwargs["is_counting"] is True


def test_remount_after_settle_short_circuits(clock):
    registry = SessionRegistry()
    config = CounterConfig(name="x", start=0, end=100, duration=2)
    first = _controller(config, registry, clock)
    _run_to_end(first, clock)
    first.unmount()

    second = _controller(config, registry, clock)
    assert second.evaluate() == 100
    assert second.evaluate() == 100
    assert second.state is CounterState.SETTLED
    engine = RecordingEngine.instances[0]
    assert engine.ticks == 0
    assert engine.kwargs["is_counting"] is False


def test_start_equal_to_end_returns_end_without_counting(clock):
    registry = SessionRegistry()
    controller = _controller(CounterConfig(name="y", start=5, end=5), registry, clock)

    assert controller.evaluate() == 5
    assert controller.state is CounterState.IDLE_AT_START
    assert RecordingEngine.instances[0].ticks == 0
    assert registry.get("y") is None


def test_start_equal_to_end_wins_without_persistence(clock):
    registry = SessionRegistry()
    registry.set("y", 1)
    config = CounterConfig(name="y", start=5, end=5, persist=False)
    controller = _controller(config, registry, clock)

    assert controller.evaluate() == 5
    assert controller.state is CounterState.IDLE_AT_START
    assert RecordingEngine.instances[0].ticks == 0
    assert registry.get("y") == 1


def test_settled_record_checked_after_start_equals_end(clock):
    """A prior record equal to end resolves through the start == end check first."""
    registry = SessionRegistry()
    registry.set("x", 100)
    controller = _controller(CounterConfig(name="x", start=0, end=100), registry, clock)

    assert controller.effective_start() == 100
    assert controller.evaluate() == 100
    assert controller.state is CounterState.SETTLED
    assert RecordingEngine.instances[0].ticks == 0


def test_no_persist_never_reads_or_writes_registry(clock):
    registry = SessionRegistry()
    config = CounterConfig(name="z", start=0, end=50, duration=1, persist=False)

    first = _controller(config, registry, clock)
    assert _run_to_end(first, clock)[-1] == 50
    assert registry.get("z") is None

    registry.set("z", 50)
    second = _controller(config, registry, clock)
    assert second.evaluate() == 0
    assert second.state is CounterState.ANIMATING
    assert RecordingEngine.instances[0].kwargs["start"] == 0


def test_prior_value_becomes_start_for_new_end(clock):
    registry = SessionRegistry()
    registry.set("x", 100)
    controller = _controller(CounterConfig(name="x", start=0, end=150, duration=2), registry, clock)

    values = _run_to_end(controller, clock)

    assert values[0] == 100
    assert values[-1] == 150
    assert RecordingEngine.instances[0].kwargs["start"] == 100
    assert registry.get("x") == 150


def test_prior_zero_is_a_real_record(clock):
    registry = SessionRegistry()
    registry.set("x", 0)
    controller = _controller(CounterConfig(name="x", start=10, end=0), registry, clock)
    assert controller.evaluate() == 0
    assert controller.state is CounterState.SETTLED


def test_evaluate_after_settle_is_idempotent(clock):
    registry = SessionRegistry()
    controller = _controller(CounterConfig(name="x", end=100, duration=2), registry, clock)
    _run_to_end(controller, clock)
    engine = RecordingEngine.instances[0]
    ticks = engine.ticks

    for _ in range(5):
        clock.advance(1)
        assert controller.evaluate() == 100

    assert engine.ticks == ticks
    assert controller.state is CounterState.SETTLED


def test_commit_fires_once(clock):
    commits = []

    class CountingRegistry(SessionRegistry):
        def set(self, key, value):
            commits.append((key, value))
            super().set(key, value)

    registry = CountingRegistry()
    controller = _controller(CounterConfig(name="x", end=10, duration=1), registry, clock)
    _run_to_end(controller, clock)
    controller.skip()
    for _ in range(3):
        controller.evaluate()

    assert commits == [("x", 10)]


def test_unmount_mid_animation_stops_commits(clock):
    registry = SessionRegistry()
    controller = _controller(CounterConfig(name="x", end=100, duration=2), registry, clock)
    controller.evaluate()
    clock.advance(1)
    midway = controller.evaluate()
    engine = controller.engine
    controller.unmount()

    clock.advance(5)
    assert engine.tick() == midway
    assert engine.is_stopped
    assert registry.get("x") is None
    assert not controller.is_mounted


def test_evaluate_after_unmount_remounts_and_settles(clock):
    registry = SessionRegistry()
    controller = _controller(CounterConfig(name="x", end=100, duration=2), registry, clock)
    controller.evaluate()
    clock.advance(1)
    controller.evaluate()
    old_engine = controller.engine
    controller.unmount()

    assert controller.evaluate() == 0
    assert controller.is_mounted
    assert controller.engine is not old_engine
    assert controller.state is CounterState.ANIMATING

    values = _run_to_end(controller, clock)
    assert values[-1] == 100
    assert controller.is_settled
    assert registry.get("x") == 100


def test_unmounted_duplicate_does_not_disturb_sibling(clock):
    registry = SessionRegistry()
    config = CounterConfig(name="x", end=100, duration=2)
    a = _controller(config, registry, clock)
    b = _controller(config, registry, clock)
    a.evaluate()
    b.evaluate()
    a.unmount()

    assert _run_to_end(b, clock)[-1] == 100
    assert registry.get("x") == 100


def test_duplicate_instances_converge_to_one_record(clock):
    registry = SessionRegistry()
    config = CounterConfig(name="shared", end=30, duration=1)
    a = _controller(config, registry, clock)
    b = _controller(config, registry, clock)
    a.evaluate()
    b.evaluate()

    clock.advance(1)
    b.evaluate()
    a.evaluate()

    assert a.state is CounterState.SETTLED
    assert b.state is CounterState.SETTLED
    assert registry.snapshot() == {"shared": 30}


def test_sibling_commit_settles_running_instance(clock):
    registry = SessionRegistry()
    config = CounterConfig(name="x", end=100, duration=2)
    slow = _controller(config, registry, clock)
    slow.evaluate()
    clock.advance(0.5)
    assert slow.evaluate() < 100

    registry.set("x", 100)
    assert slow.evaluate() == 100
    assert slow.state is CounterState.SETTLED


def test_distinct_names_do_not_interfere(clock):
    registry = SessionRegistry()
    a = _controller(CounterConfig(name="a", end=10, duration=1), registry, clock)
    _run_to_end(a, clock)

    b = _controller(CounterConfig(name="b", end=10, duration=1), registry, clock)
    assert b.evaluate() == 0
    assert b.state is CounterState.ANIMATING


def test_skip_commits_end_value(clock):
    registry = SessionRegistry()
    controller = _controller(CounterConfig(name="x", end=100, duration=2), registry, clock)
    assert controller.skip() == 100
    assert controller.state is CounterState.SETTLED
    assert registry.get("x") == 100


def test_context_manager_mounts_and_unmounts(clock):
    registry = SessionRegistry()
    with _controller(CounterConfig(name="x", end=5), registry, clock) as controller:
        assert controller.is_mounted
    assert not controller.is_mounted
    assert RecordingEngine.instances[0].is_stopped


def test_defaults_to_session_registry():
    controller = CounterController(CounterConfig(name="x", end=3, duration=0))
    assert controller.registry is get_session_registry()
    assert controller.evaluate() == 3
    assert get_session_registry().get("x") == 3
