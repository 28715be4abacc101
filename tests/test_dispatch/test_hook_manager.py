import pytest

from commandment.context import ExecutionContext
from commandment.debug import log_after, log_before, log_error, log_success, register_debug_hooks
from commandment.hook_manager import HookManager, HookType


@pytest.fixture
def context():
    return ExecutionContext(name="app build", action="build")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("before", HookType.BEFORE),
        ("success", HookType.ON_SUCCESS),
        ("ON_ERROR", HookType.ON_ERROR),
        ("error", HookType.ON_ERROR),
        (" teardown ", HookType.ON_TEARDOWN),
        (HookType.AFTER, HookType.AFTER),
    ],
)
def test_hook_type_aliases(value, expected):
    assert HookType(value) is expected


@pytest.mark.parametrize("value", ["during", 3])
def test_invalid_hook_type(value):
    with pytest.raises(ValueError):
        HookType(value)


def test_register_rejects_non_callable():
    with pytest.raises(TypeError):
        HookManager().register("before", "not a hook")


def test_register_get_and_clear():
    hooks = HookManager()
    hooks.register("before", print)
    hooks.register(HookType.AFTER, print)
    assert hooks.get(HookType.BEFORE) == [print]
    hooks.clear(HookType.BEFORE)
    assert hooks.get("before") == []
    assert hooks.get("after") == [print]
    hooks.clear()
    assert hooks.get("after") == []


@pytest.mark.asyncio
async def test_sync_and_async_hooks_run_in_order(context):
    calls = []

    async def second(ctx):
        calls.append("second")

    hooks = HookManager()
    hooks.register("before", lambda ctx: calls.append("first"))
    hooks.register("before", second)
    await hooks.trigger(HookType.BEFORE, context)
    assert calls == ["first", "second"]


@pytest.mark.asyncio
async def test_failing_hook_is_skipped(context):
    calls = []

    def broken(ctx):
        raise RuntimeError("hook failed")

    hooks = HookManager()
    hooks.register("before", broken)
    hooks.register("before", lambda ctx: calls.append("ran"))
    await hooks.trigger(HookType.BEFORE, context)
    assert calls == ["ran"]


@pytest.mark.asyncio
async def test_failing_error_hook_reraises_original(context):
    def broken(ctx):
        raise RuntimeError("hook failed")

    original = ValueError("action failed")
    context.exception = original
    hooks = HookManager()
    hooks.register("error", broken)
    with pytest.raises(ValueError) as excinfo:
        await hooks.trigger(HookType.ON_ERROR, context)
    assert excinfo.value is original
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_trigger_sync_runs_async_hooks(context):
    calls = []

    async def second(ctx):
        calls.append("second")

    def broken(ctx):
        raise RuntimeError("hook failed")

    hooks = HookManager()
    hooks.register("after", lambda ctx: calls.append("first"))
    hooks.register("after", broken)
    hooks.register("after", second)
    hooks.trigger_sync(HookType.AFTER, context)
    assert calls == ["first", "second"]


def test_debug_hooks_registered():
    hooks = HookManager()
    register_debug_hooks(hooks)
    assert hooks.get("before") == [log_before]
    assert hooks.get("after") == [log_after]
    assert hooks.get("success") == [log_success]
    assert hooks.get("error") == [log_error]


def test_str_lists_hooks():
    hooks = HookManager()
    hooks.register("before", log_before)
    text = str(hooks)
    assert "before: log_before" in text
    assert "on_error: -" in text


def test_context_status(context):
    assert context.status == "OK"
    context.extra["cancelled"] = True
    assert context.status == "CANCELLED"
    assert context.as_dict()["status"] == "CANCELLED"
    context.extra.clear()
    context.exception = RuntimeError("x")
    assert context.status == "ERROR"
    assert not context.success
