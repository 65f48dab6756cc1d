from __future__ import annotations

from pledge import Promise


class _ForeignThenable:
    def __init__(self) -> None:
        self.subscribers: list[tuple] = []

    def then(self, on_resolve=None, on_reject=None, on_progress=None):
        self.subscribers.append((on_resolve, on_reject, on_progress))
        return self

    def succeed(self, value) -> None:
        for on_resolve, _, _ in self.subscribers:
            on_resolve(value)


def test_exception_in_resolve_callback_rejects_continuation():
    promise = Promise()

    def explode(_):
        raise RuntimeError("boom")

    chained = promise.then(explode)
    promise.resolve()

    assert isinstance(chained.error, RuntimeError)
    assert str(chained.error) == "boom"


def test_exception_in_reject_callback_rejects_continuation():
    promise = Promise()

    def explode(_):
        raise KeyError("again")

    chained = promise.then(None, explode)
    promise.reject("first")

    assert isinstance(chained.error, KeyError)


def test_returned_value_resolves_continuation():
    promise = Promise()
    chained = promise.then(lambda _: 42)
    promise.resolve()
    assert chained.value == 42


def test_returned_none_resolves_continuation_without_value():
    promise = Promise()
    chained = promise.then(lambda _: None)
    promise.resolve("ignored")
    assert chained.is_resolved
    assert chained.value is None


def test_returned_promise_is_adopted_not_wrapped():
    promise = Promise()
    inner = Promise()
    chained = promise.then(lambda _: inner)
    progress: list[object] = []
    chained.then(None, None, progress.append)

    promise.resolve()
    assert chained.is_pending

    inner.progress(0.5)
    inner.resolve(7)

    assert progress == [0.5]
    assert chained.value == 7


def test_returned_rejecting_promise_rejects_continuation():
    promise = Promise()
    inner = Promise()
    chained = promise.then(lambda _: inner)
    promise.resolve()
    inner.reject("inner failed")
    assert chained.error == "inner failed"


def test_returned_deferred_promise_is_adopted(turns):
    promise = Promise()
    chained = promise.then(lambda _: Promise.resolved(7))
    promise.resolve()
    assert chained.is_pending

    turns.run_until_idle()

    assert chained.value == 7


def test_returned_foreign_thenable_is_adopted():
    promise = Promise()
    foreign = _ForeignThenable()
    chained = promise.then(lambda _: foreign)
    promise.resolve()

    foreign.succeed("from foreign")

    assert chained.value == "from foreign"


def test_reject_without_handler_passes_through_chain():
    promise = Promise()
    end = promise.then(lambda value: value).then(lambda value: value).then(lambda value: value)
    promise.reject("X")
    assert end.error == "X"


def test_late_reject_without_handler_passes_through():
    promise = Promise()
    promise.reject("X")
    chained = promise.then(lambda value: value)
    assert chained.error == "X"


def test_resolve_without_handler_passes_through():
    promise = Promise()
    end = promise.then(None, lambda error: "recovered").then(lambda value: value + 1)
    promise.resolve(1)
    assert end.value == 2


def test_reject_handler_recovers_chain():
    promise = Promise()
    chained = promise.then(None, lambda error: f"recovered from {error}")
    promise.reject("E")
    assert chained.value == "recovered from E"


def test_always_runs_once_on_resolve_and_returns_self():
    promise = Promise()
    calls: list[str] = []

    returned = promise.always(lambda: calls.append("always") or "ignored")
    observed = returned.then(lambda value: value)
    promise.resolve("original")
    promise.resolve("again")

    assert returned is promise
    assert calls == ["always"]
    assert observed.value == "original"


def test_always_runs_once_on_reject_and_keeps_rejection():
    promise = Promise()
    calls: list[str] = []

    returned = promise.always(lambda: calls.append("always"))
    observed = returned.then(lambda value: value)
    promise.reject("E")

    assert calls == ["always"]
    assert observed.error == "E"


def test_always_action_exception_does_not_affect_promise():
    promise = Promise()

    def explode():
        raise RuntimeError("cleanup failed")

    promise.always(explode)
    observed = promise.then(lambda value: value)
    promise.resolve("kept")

    assert observed.value == "kept"


def test_thenable_argument_becomes_the_continuation():
    promise = Promise()
    target = Promise()

    returned = promise.then(target)
    promise.resolve("forwarded")

    assert returned is target
    assert target.value == "forwarded"


def test_thenable_argument_receives_rejection():
    promise = Promise()
    target = Promise()
    promise.then(target)
    promise.reject("E")
    assert target.error == "E"


def test_thenable_argument_after_completion_is_replayed():
    promise = Promise()
    promise.resolve(1)
    target = Promise()
    promise.then(target)
    assert target.value == 1


def test_foreign_thenable_argument_is_adapted():
    promise = Promise()
    foreign = _ForeignThenable()

    returned = promise.then(foreign)
    promise.resolve("ours")

    assert isinstance(returned, Promise)
    assert returned.value == "ours"
